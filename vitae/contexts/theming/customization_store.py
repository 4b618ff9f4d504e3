"""
Customization Store

Holds the user's Customization and OverrideFlags, each in its own persisted
state under its own storage key, plus the persisted theme selection.

Every change re-serializes the affected aggregate (values first, then flags).
On load, stored JSON is merged over the defaults record by record, so settings
added in a later version are backfilled instead of failing the load. Corrupt
stored JSON is logged and replaced by defaults in full.

Examples:
    >>> store = CustomizationStore(MemoryStorage())
    >>> store.set_density_preset("compact")
    >>> store.update_layout(page_margin=18)
    >>> store.customization.layout.page_margin, store.customization.layout.section_spacing
    (18, 1)
    >>> store.flags.is_overridden("layout", "bullet_spacing")
    True
"""

import json
from dataclasses import asdict, replace
from typing import Any, Callable, Dict, Generic, Iterable, List, Mapping, Optional, TypeVar

from vitae.contexts.theming.customization_data_structure import (
    DENSITY_PRESETS,
    ENUMERATED_SETTINGS,
    SECTION_IDS,
    SETTINGS_RECORDS,
    Customization,
    SectionConfig,
    default_sections,
)
from vitae.contexts.theming.exceptions import CustomizationValidationError
from vitae.contexts.theming.logger import _log_debug, _log_info, _log_warning
from vitae.contexts.theming.overrides import OverrideFlags, changed_keys, validate_partial
from vitae.contexts.theming.themes import DEFAULT_THEME_ID, Theme, get_theme, is_theme_id
from vitae.utils.local_storage import LocalStorage

STORAGE_KEY = "resume-customization"
OVERRIDES_STORAGE_KEY = "resume-customization-overrides"
THEME_STORAGE_KEY = "resume-theme-preference"

T = TypeVar("T")


class PersistedState(Generic[T]):
    """
    One aggregate persisted as JSON under one storage key.

    Args:
        storage: Backing key/value storage
        key: Storage key
        default: Factory for the default value
        load: Builds a value from the decoded stored JSON
        dump: Converts a value to JSON-serializable data
    """

    def __init__(
        self,
        storage: LocalStorage,
        key: str,
        default: Callable[[], T],
        load: Callable[[Any], T],
        dump: Callable[[T], Any],
    ):
        self.storage = storage
        self.key = key
        self._default = default
        self._load = load
        self._dump = dump
        self.value: T = self._initial_value()

    def _initial_value(self) -> T:
        raw = self.storage.get_item(self.key)
        if raw is None:
            return self._default()
        try:
            return self._load(json.loads(raw))
        except (ValueError, TypeError, KeyError) as e:
            _log_warning(f"Discarding stored '{self.key}' (using defaults): {e}")
            return self._default()

    def set(self, value: T) -> None:
        self.value = value
        self.storage.set_item(self.key, json.dumps(self._dump(value)))

    def clear(self) -> None:
        self.value = self._default()
        self.storage.remove_item(self.key)


# --- Loading stored customization ---


def _merge_record(record_name: str, stored: Any) -> Any:
    """Stored record merged over the default record; unknown or invalid keys are dropped."""
    cls = SETTINGS_RECORDS[record_name]
    values = asdict(cls())
    if isinstance(stored, Mapping):
        for key, value in stored.items():
            if key not in values:
                continue
            try:
                validate_partial(record_name, {key: value})
            except CustomizationValidationError:
                _log_warning(f"Ignoring stored {record_name}.{key}={value!r}")
                continue
            values[key] = value
    return cls(**values)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# Acceptable stored value per SectionConfig field (id is matched separately)
_SECTION_FIELD_CHECKS: Dict[str, Callable[[Any], bool]] = {
    "visible": lambda value: isinstance(value, bool),
    "order": _is_int,
    "use_bullets": lambda value: isinstance(value, bool),
    "custom_title": lambda value: value is None or isinstance(value, str),
    "bullet_limit": lambda value: value is None or (_is_int(value) and value >= 1),
}


def _merge_section(default: SectionConfig, stored: Mapping[str, Any]) -> SectionConfig:
    """Stored section fields over the section's default; invalid values are dropped."""
    values = {}
    for key, is_valid in _SECTION_FIELD_CHECKS.items():
        if key not in stored:
            continue
        if not is_valid(stored[key]):
            _log_warning(f"Ignoring stored sections.{default.id}.{key}={stored[key]!r}")
            continue
        values[key] = stored[key]
    return replace(default, **values)


def _densify(sections: Iterable[SectionConfig]) -> List[SectionConfig]:
    """Sections sorted by order with order reassigned to 0..N-1."""
    ordered = sorted(sections, key=lambda s: s.order)
    return [replace(section, order=position) for position, section in enumerate(ordered)]


def _merge_sections(stored: Any) -> List[SectionConfig]:
    """
    Stored section list reconciled with the closed section id set.

    Unknown ids and duplicates are dropped; ids missing from storage are
    appended with their default configuration. Stored fields of the wrong type
    fall back to that section's default. Orders are re-densified.
    """
    if not isinstance(stored, list):
        return default_sections()

    defaults = {section.id: section for section in default_sections()}
    by_id: Dict[str, SectionConfig] = {}
    for item in stored:
        if not isinstance(item, Mapping) or item.get("id") not in SECTION_IDS:
            continue
        if item["id"] in by_id:
            continue
        by_id[item["id"]] = _merge_section(defaults[item["id"]], item)

    next_order = max((s.order for s in by_id.values()), default=-1) + 1
    for default in defaults.values():
        if default.id not in by_id:
            by_id[default.id] = replace(default, order=next_order)
            next_order += 1

    return _densify(by_id.values())


def customization_from_dict(data: Any) -> Customization:
    if not isinstance(data, Mapping):
        raise ValueError(f"expected an object, got {type(data).__name__}")
    return Customization(
        sections=_merge_sections(data.get("sections")),
        **{name: _merge_record(name, data.get(name)) for name in SETTINGS_RECORDS},
    )


def _flags_from_dict(data: Any) -> OverrideFlags:
    if not isinstance(data, Mapping):
        raise ValueError(f"expected an object, got {type(data).__name__}")
    return OverrideFlags.from_dict(data)


class CustomizationStore:
    """
    User customization plus override flags, persisted independently.

    Setting any value through an update_* method marks that value as overridden,
    so it wins over the active theme from then on. Section changes are
    structural and carry no flags.
    """

    def __init__(self, storage: LocalStorage):
        self.storage = storage
        self._values: PersistedState[Customization] = PersistedState(
            storage, STORAGE_KEY, Customization, customization_from_dict, Customization.to_dict
        )
        self._flags: PersistedState[OverrideFlags] = PersistedState(
            storage, OVERRIDES_STORAGE_KEY, OverrideFlags, _flags_from_dict, OverrideFlags.to_dict
        )

    @property
    def customization(self) -> Customization:
        return self._values.value

    @property
    def flags(self) -> OverrideFlags:
        return self._flags.value

    # --- Settings records ---

    def _update_record(self, record_name: str, partial: Dict[str, Any]) -> None:
        validate_partial(record_name, partial)
        old_record = self.customization.record(record_name)
        keys = changed_keys(old_record, partial)
        if not keys:
            return

        new_record = replace(old_record, **partial)
        self._values.set(self.customization.with_record(record_name, new_record))
        self._flags.set(self.flags.with_overrides(record_name, keys))
        _log_debug(f"Updated {record_name}: {partial}")

    def update_typography(self, **partial: Any) -> None:
        self._update_record("typography", partial)

    def update_layout(self, **partial: Any) -> None:
        self._update_record("layout", partial)

    def update_colors(self, **partial: Any) -> None:
        self._update_record("colors", partial)

    def update_header(self, **partial: Any) -> None:
        self._update_record("header", partial)

    def update_skills(self, **partial: Any) -> None:
        self._update_record("skills", partial)

    def set_density_preset(self, preset: str) -> None:
        """Apply a named layout bundle; margin, both spacings and the preset tag become overridden."""
        allowed = ENUMERATED_SETTINGS[("layout", "density_preset")]
        if preset not in allowed:
            raise CustomizationValidationError(
                f"Unknown density preset '{preset}'. Must be one of: {list(allowed)}",
                record="layout",
                key="density_preset",
                value=preset,
            )
        self._update_record("layout", {**DENSITY_PRESETS[preset], "density_preset": preset})

    # --- Sections ---

    def _set_sections(self, sections: List[SectionConfig]) -> None:
        self._values.set(replace(self.customization, sections=sections))

    def _require_section(self, section_id: str) -> None:
        if section_id not in SECTION_IDS:
            raise CustomizationValidationError(
                f"Unknown section '{section_id}'. Must be one of: {list(SECTION_IDS)}",
                record="sections",
                value=section_id,
            )

    def _replace_section(self, section_id: str, **changes: Any) -> None:
        self._require_section(section_id)
        self._set_sections(
            [replace(s, **changes) if s.id == section_id else s for s in self.customization.sections]
        )

    def ordered_sections(self) -> List[SectionConfig]:
        return self.customization.ordered_sections()

    def visible_sections(self) -> List[SectionConfig]:
        return [s for s in self.ordered_sections() if s.visible]

    def toggle_section_visibility(self, section_id: str) -> None:
        self._require_section(section_id)
        current = self.customization.section(section_id)
        self._replace_section(section_id, visible=not current.visible)

    def reorder_sections(self, from_index: int, to_index: int) -> None:
        """
        Move the section at from_index (in ascending-order view) to to_index.

        Every section's order is reassigned to its new position (0..N-1).

        Raises:
            CustomizationValidationError: If either index is not an in-range integer
        """
        ordered = self.ordered_sections()
        for name, index in (("from_index", from_index), ("to_index", to_index)):
            if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < len(ordered):
                raise CustomizationValidationError(
                    f"{name} must be an integer in [0, {len(ordered) - 1}], got {index!r}",
                    record="sections",
                    key=name,
                    value=index,
                )

        moved = ordered.pop(from_index)
        ordered.insert(to_index, moved)
        self._set_sections([replace(s, order=position) for position, s in enumerate(ordered)])

    def update_section_title(self, section_id: str, title: Optional[str]) -> None:
        """Set a custom title (trimmed); an empty title restores the default label."""
        self._replace_section(section_id, custom_title=(title or "").strip() or None)

    def set_section_bullets(
        self, section_id: str, use_bullets: bool, bullet_limit: Optional[int] = None
    ) -> None:
        """Choose bullet or paragraph rendering and the per-entry bullet limit (None = all)."""
        if bullet_limit is not None and (
            not isinstance(bullet_limit, int) or isinstance(bullet_limit, bool) or bullet_limit < 1
        ):
            raise CustomizationValidationError(
                f"bullet_limit must be a positive integer or None, got {bullet_limit!r}",
                record="sections",
                key="bullet_limit",
                value=bullet_limit,
            )
        self._replace_section(section_id, use_bullets=bool(use_bullets), bullet_limit=bullet_limit)

    def update_sections(self, sections: List[SectionConfig]) -> None:
        """
        Replace the whole section list.

        Raises:
            CustomizationValidationError: Unless the ids are exactly SECTION_IDS, each once
        """
        ids = [s.id for s in sections]
        if sorted(ids) != sorted(SECTION_IDS):
            raise CustomizationValidationError(
                f"Sections must contain each of {list(SECTION_IDS)} exactly once, got {ids}",
                record="sections",
            )
        self._set_sections(_densify(sections))

    # --- Reset ---

    def reset_to_defaults(self) -> None:
        """Restore default values and all-False flags, and clear both storage keys."""
        self._values.clear()
        self._flags.clear()
        _log_info("Customization reset to defaults")


class ThemeSelectionStore:
    """Persisted id of the selected theme. Unknown stored ids fall back to the default theme."""

    def __init__(self, storage: LocalStorage):
        self.storage = storage
        stored = storage.get_item(THEME_STORAGE_KEY)
        if stored is not None and not is_theme_id(stored):
            _log_warning(f"Ignoring unknown stored theme '{stored}'")
            stored = None
        self.theme_id: str = stored or DEFAULT_THEME_ID

    @property
    def theme(self) -> Theme:
        return get_theme(self.theme_id)

    def select(self, theme_id: str) -> Theme:
        """
        Select a theme and persist the choice.

        Raises:
            UnknownThemeError: If theme_id is not in the catalog
        """
        theme = get_theme(theme_id)
        self.theme_id = theme_id
        self.storage.set_item(THEME_STORAGE_KEY, theme_id)
        return theme

    def clear(self) -> None:
        self.theme_id = DEFAULT_THEME_ID
        self.storage.remove_item(THEME_STORAGE_KEY)
