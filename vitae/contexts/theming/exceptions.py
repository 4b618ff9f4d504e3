"""Custom exceptions for the theming context."""

from typing import Any, Iterable, Optional


class UnknownThemeError(ValueError):
    """
    Exception raised for a theme id outside the catalog.

    The UI only offers catalog ids, so this indicates a programming error
    rather than bad user input.

    Attributes:
        theme_id: The id that was requested
    """

    def __init__(self, theme_id: str, available: Iterable[str] = ()):
        self.theme_id = theme_id
        available = list(available)
        message = f"Theme '{theme_id}' not found."
        if available:
            message += f" Available themes: {available}"
        super().__init__(message)


class CustomizationValidationError(ValueError):
    """
    Exception raised when a customization update is rejected before any state change.

    Attributes:
        message: Error description
        record: Settings record the update targeted (e.g. "layout", "sections")
        key: Offending key, if the error concerns a single key
        value: Offending value, if any
    """

    def __init__(
        self,
        message: str,
        record: Optional[str] = None,
        key: Optional[str] = None,
        value: Any = None,
    ):
        self.message = message
        self.record = record
        self.key = key
        self.value = value

        parts = [message]
        if record and key:
            parts.append(f"Setting: {record}.{key}")
        elif record:
            parts.append(f"Record: {record}")
        super().__init__("\n".join(parts))
