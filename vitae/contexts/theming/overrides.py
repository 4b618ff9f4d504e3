"""
Override Flags

Records, per settings leaf, whether the user has explicitly set a value. A set
flag makes the customization value win over the active theme's value during
style resolution. Flags only ever go from False to True as a side effect of an
update; the only way back to False is a full reset.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, Mapping

from vitae.contexts.theming.customization_data_structure import (
    ENUMERATED_SETTINGS,
    SETTINGS_RECORDS,
    record_keys,
)
from vitae.contexts.theming.exceptions import CustomizationValidationError


def _cleared(record_name: str) -> Dict[str, bool]:
    return {key: False for key in record_keys(record_name)}


def _same_kind(default: Any, value: Any) -> bool:
    """True if value has the same kind (bool, number, string) as the setting's default."""
    if isinstance(default, bool):
        return isinstance(value, bool)
    if isinstance(default, (int, float)):
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    return isinstance(value, type(default))


def validate_partial(record_name: str, partial: Mapping[str, Any]) -> None:
    """
    Reject a partial update that names unknown keys or out-of-range enumerated values.

    Raises:
        CustomizationValidationError: On the first offending key
    """
    known = record_keys(record_name)
    defaults = SETTINGS_RECORDS[record_name]()
    for key, value in partial.items():
        if key not in known:
            raise CustomizationValidationError(
                f"Unknown {record_name} setting '{key}'. Valid settings: {list(known)}",
                record=record_name,
                key=key,
            )
        if not _same_kind(getattr(defaults, key), value):
            raise CustomizationValidationError(
                f"Invalid value {value!r} of type {type(value).__name__}",
                record=record_name,
                key=key,
                value=value,
            )
        allowed = ENUMERATED_SETTINGS.get((record_name, key))
        if allowed is not None and value not in allowed:
            raise CustomizationValidationError(
                f"Invalid value {value!r}. Must be one of: {list(allowed)}",
                record=record_name,
                key=key,
                value=value,
            )


def changed_keys(old_record: Any, partial: Mapping[str, Any]) -> FrozenSet[str]:
    """
    Keys of a settings record that a partial update overrides.

    Presence in the partial is what counts: re-submitting a key with the value
    it already holds still marks it as set by the user.

    Args:
        old_record: The settings record before the update (e.g. a LayoutSettings)
        partial: Mapping of keys to new values

    Raises:
        CustomizationValidationError: If partial names a key old_record does not have
    """
    unknown = [key for key in partial if not hasattr(old_record, key)]
    if unknown:
        raise CustomizationValidationError(
            f"Unknown setting(s) {unknown} for {type(old_record).__name__}", key=unknown[0]
        )
    return frozenset(partial)


@dataclass
class OverrideFlags:
    """Boolean mirror of the five Customization settings records."""

    typography: Dict[str, bool] = field(default_factory=lambda: _cleared("typography"))
    layout: Dict[str, bool] = field(default_factory=lambda: _cleared("layout"))
    colors: Dict[str, bool] = field(default_factory=lambda: _cleared("colors"))
    header: Dict[str, bool] = field(default_factory=lambda: _cleared("header"))
    skills: Dict[str, bool] = field(default_factory=lambda: _cleared("skills"))

    def is_overridden(self, record_name: str, key: str) -> bool:
        return getattr(self, record_name)[key]

    def with_overrides(self, record_name: str, keys: Iterable[str]) -> "OverrideFlags":
        """Copy of these flags with the given keys of one record set to True."""
        data = self.to_dict()
        for key in keys:
            if key not in data[record_name]:
                raise CustomizationValidationError(
                    f"Unknown {record_name} setting '{key}'", record=record_name, key=key
                )
            data[record_name][key] = True
        return OverrideFlags(**data)

    def overridden(self) -> Dict[str, list]:
        """Record name -> keys currently overridden (records with none are omitted)."""
        result = {}
        for record_name in SETTINGS_RECORDS:
            keys = [k for k, v in getattr(self, record_name).items() if v]
            if keys:
                result[record_name] = keys
        return result

    def to_dict(self) -> Dict[str, Dict[str, bool]]:
        return {name: dict(getattr(self, name)) for name in SETTINGS_RECORDS}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OverrideFlags":
        """
        Merge stored flags over all-False flags, record by record.

        Unknown records and keys are dropped; a record that is not a mapping is
        ignored. Keys missing from storage (settings added later) stay False.
        """
        merged = {}
        for record_name in SETTINGS_RECORDS:
            flags = _cleared(record_name)
            stored = data.get(record_name)
            if isinstance(stored, Mapping):
                for key, value in stored.items():
                    if key in flags:
                        flags[key] = bool(value)
            merged[record_name] = flags
        return cls(**merged)
