"""Custom exceptions for the content context."""

from pathlib import Path
from typing import Optional


class ContentServiceError(Exception):
    """
    Exception raised when the content service cannot produce a résumé.

    Attributes:
        message: User-facing error description
        operation: Service operation that failed ("generate", "rewrite", "tailor")
        original_error: Underlying provider or parsing error, if any
    """

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.operation = operation
        self.original_error = original_error
        super().__init__(message)


class TextExtractionError(Exception):
    """
    Exception raised when no usable text can be extracted from an uploaded file.

    Attributes:
        message: User-facing error description
        source_path: File the extraction was attempted on
    """

    def __init__(self, message: str, source_path: Optional[Path] = None):
        self.message = message
        self.source_path = source_path

        parts = [message]
        if source_path:
            parts.append(f"File: {source_path}")
        super().__init__("\n".join(parts))
