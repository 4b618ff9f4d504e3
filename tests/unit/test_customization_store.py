"""Unit tests for CustomizationStore and ThemeSelectionStore."""

import itertools
import json

import pytest

from vitae.contexts.theming import (
    SECTION_IDS,
    Customization,
    CustomizationStore,
    CustomizationValidationError,
    OverrideFlags,
    ThemeSelectionStore,
    UnknownThemeError,
    list_themes,
    resolve_style,
)
from vitae.contexts.theming.customization_store import (
    OVERRIDES_STORAGE_KEY,
    STORAGE_KEY,
    THEME_STORAGE_KEY,
)
from vitae.utils.local_storage import MemoryStorage


def _apply_overrides(store):
    store.update_typography(font_family="georgia", body_font_size=12)
    store.set_density_preset("spacious")
    store.update_colors(accent_color="hsl(180, 60%, 30%)")
    store.update_header(alignment="left", show_linkedin=True, separator_style="line")
    store.update_skills(display_style="grouped")
    store.toggle_section_visibility("projects")
    store.reorder_sections(4, 0)


# --- Defaults & loading ---


@pytest.mark.unit
def test_fresh_store_has_defaults(storage):
    """Test that an empty storage yields default customization and cleared flags."""
    store = CustomizationStore(storage)

    assert store.customization == Customization()
    assert store.flags == OverrideFlags()
    assert [s.id for s in store.ordered_sections()] == list(SECTION_IDS)


@pytest.mark.unit
def test_corrupt_stored_json_falls_back_to_defaults():
    """Test that undecodable or mistyped stored state loads as defaults."""
    storage = MemoryStorage({STORAGE_KEY: "{not json", OVERRIDES_STORAGE_KEY: "[]"})

    store = CustomizationStore(storage)

    assert store.customization == Customization()
    assert store.flags == OverrideFlags()


@pytest.mark.unit
def test_stored_partial_record_is_backfilled():
    """Test that settings missing from storage are backfilled from defaults."""
    storage = MemoryStorage({STORAGE_KEY: json.dumps({"layout": {"page_margin": 15}})})

    store = CustomizationStore(storage)

    assert store.customization.layout.page_margin == 15
    assert store.customization.layout.section_spacing == 1.5
    assert store.customization.typography.font_family == "inter"


@pytest.mark.unit
def test_stored_sections_reconciled_with_section_ids():
    """Test that stored sections drop unknown and duplicate ids and gain missing ones."""
    stored = {
        "sections": [
            {"id": "skills", "visible": True, "order": 0},
            {"id": "skills", "visible": False, "order": 1},
            {"id": "hobbies", "visible": True, "order": 2},
            {"id": "summary", "visible": False, "order": 5},
        ]
    }
    store = CustomizationStore(MemoryStorage({STORAGE_KEY: json.dumps(stored)}))

    sections = store.ordered_sections()

    assert sorted(s.id for s in sections) == sorted(SECTION_IDS)
    assert [s.order for s in sections] == list(range(len(SECTION_IDS)))
    assert sections[0].id == "skills" and sections[0].visible
    assert sections[1].id == "summary" and not sections[1].visible


@pytest.mark.unit
@pytest.mark.parametrize(
    "key, value",
    [("bullet_limit", "5"), ("bullet_limit", 0), ("bullet_limit", True), ("use_bullets", "yes"),
     ("visible", 1), ("order", "1"), ("custom_title", 42)],
)
def test_stored_section_field_of_wrong_type_uses_section_default(key, value):
    """Test that a mistyped stored section field falls back to that section's default."""
    stored = {"sections": [{"id": "experience", "order": 1, "use_bullets": True, key: value}]}

    store = CustomizationStore(MemoryStorage({STORAGE_KEY: json.dumps(stored)}))

    experience = store.customization.section("experience")
    assert experience.bullet_limit == 5
    assert experience.use_bullets is True
    assert experience.visible is True
    assert experience.custom_title is None
    assert isinstance(experience.order, int)


@pytest.mark.unit
def test_stored_section_valid_fields_are_kept():
    """Test that well-typed stored section fields survive the load."""
    stored = {
        "sections": [
            {"id": "experience", "order": 0, "use_bullets": False, "bullet_limit": None,
             "custom_title": "Work", "visible": False},
        ]
    }

    store = CustomizationStore(MemoryStorage({STORAGE_KEY: json.dumps(stored)}))

    experience = store.customization.section("experience")

    assert (experience.use_bullets, experience.bullet_limit) == (False, None)
    assert (experience.custom_title, experience.visible) == ("Work", False)


# --- Settings updates & override flags ---


@pytest.mark.unit
def test_density_then_manual_margin():
    """Test that a manual margin after a density preset keeps the preset's other values."""
    store = CustomizationStore(MemoryStorage())

    store.set_density_preset("compact")
    store.update_layout(page_margin=18)

    layout = store.customization.layout
    assert (layout.page_margin, layout.section_spacing, layout.bullet_spacing) == (18, 1, 0.25)
    for key in ("page_margin", "section_spacing", "bullet_spacing"):
        assert store.flags.is_overridden("layout", key)


@pytest.mark.unit
def test_update_marks_only_present_keys(storage):
    """Test that an update flags only the keys it names."""
    store = CustomizationStore(storage)

    store.update_typography(line_height=1.5)

    assert store.flags.overridden() == {"typography": ["line_height"]}


@pytest.mark.unit
def test_flags_stay_set_across_later_updates(storage):
    """Test that override flags are never cleared by later updates."""
    store = CustomizationStore(storage)
    seen = set()

    for record, partial in [
        ("typography", {"font_family": "lato"}),
        ("layout", {"bullet_spacing": 0.5}),
        ("typography", {"font_family": "inter", "line_height": 1.4}),
        ("header", {"show_phone": False}),
        ("colors", {"accent_color": "hsl(0, 0%, 0%)"}),
    ]:
        getattr(store, f"update_{record}")(**partial)
        seen.update((record, key) for key in partial)
        for record_name, key in seen:
            assert store.flags.is_overridden(record_name, key)


@pytest.mark.unit
def test_invalid_update_changes_nothing(storage):
    """Test that a rejected update leaves values, flags and storage untouched."""
    store = CustomizationStore(storage)
    store.update_layout(page_margin=22)
    before = (store.customization, store.flags, dict(storage._items))

    with pytest.raises(CustomizationValidationError):
        store.update_layout(page_margin=10, gutter=2)
    with pytest.raises(CustomizationValidationError):
        store.set_density_preset("roomy")

    assert (store.customization, store.flags, dict(storage._items)) == before


@pytest.mark.unit
def test_empty_update_is_noop(storage):
    """Test that an update with no keys writes nothing."""
    store = CustomizationStore(storage)

    store.update_header()

    assert storage.keys() == []


# --- Sections ---


@pytest.mark.unit
@pytest.mark.parametrize(
    "from_index, to_index", list(itertools.product(range(len(SECTION_IDS)), repeat=2))
)
def test_reorder_sections_dense_and_order_preserving(from_index, to_index):
    """Test that every move keeps orders dense and other sections in relative order."""
    store = CustomizationStore(MemoryStorage())
    before = [s.id for s in store.ordered_sections()]

    store.reorder_sections(from_index, to_index)

    after = store.ordered_sections()
    assert [s.order for s in after] == list(range(len(SECTION_IDS)))
    assert after[to_index].id == before[from_index]
    moved = before[from_index]
    assert [i for i in (s.id for s in after) if i != moved] == [i for i in before if i != moved]


@pytest.mark.unit
@pytest.mark.parametrize("from_index, to_index", [(-1, 0), (0, 8), (None, 1), ("1", 2), (True, 0)])
def test_reorder_sections_rejects_bad_indices(storage, from_index, to_index):
    """Test that out-of-range or non-integer indices are rejected."""
    store = CustomizationStore(storage)

    with pytest.raises(CustomizationValidationError):
        store.reorder_sections(from_index, to_index)

    assert store.customization == Customization()


@pytest.mark.unit
def test_toggle_visibility(storage):
    """Test that toggling visibility does not touch override flags."""
    store = CustomizationStore(storage)

    store.toggle_section_visibility("achievements")

    assert store.customization.section("achievements").visible
    assert "achievements" in [s.id for s in store.visible_sections()]
    assert store.flags == OverrideFlags()


@pytest.mark.unit
def test_toggle_unknown_section(storage):
    """Test that toggling an unknown section id is rejected."""
    store = CustomizationStore(storage)

    with pytest.raises(CustomizationValidationError):
        store.toggle_section_visibility("hobbies")


@pytest.mark.unit
def test_section_title_set_and_cleared(storage):
    """Test that titles are trimmed and a blank title restores the default label."""
    store = CustomizationStore(storage)

    store.update_section_title("experience", "  Work History ")
    assert store.customization.section("experience").display_title == "Work History"

    store.update_section_title("experience", "   ")
    assert store.customization.section("experience").custom_title is None
    assert store.customization.section("experience").display_title == "Experience"


@pytest.mark.unit
def test_set_section_bullets(storage):
    """Test setting bullet mode and limit, and rejecting a zero limit."""
    store = CustomizationStore(storage)

    store.set_section_bullets("experience", False, bullet_limit=3)

    section = store.customization.section("experience")
    assert (section.use_bullets, section.bullet_limit) == (False, 3)

    with pytest.raises(CustomizationValidationError):
        store.set_section_bullets("experience", True, bullet_limit=0)


@pytest.mark.unit
def test_update_sections_requires_every_id(storage):
    """Test that update_sections needs the complete section set."""
    store = CustomizationStore(storage)
    sections = store.ordered_sections()

    with pytest.raises(CustomizationValidationError):
        store.update_sections(sections[:-1])

    store.update_sections(list(reversed(sections)))
    assert [s.id for s in store.ordered_sections()] == list(SECTION_IDS)


# --- Reset & persistence ---


@pytest.mark.unit
def test_reset_matches_fresh_store(storage):
    """Test that reset returns to defaults and removes the stored keys."""
    store = CustomizationStore(storage)
    _apply_overrides(store)

    store.reset_to_defaults()

    fresh = CustomizationStore(MemoryStorage())
    assert store.customization == fresh.customization
    assert store.flags == fresh.flags
    assert json.dumps(store.customization.to_dict()) == json.dumps(fresh.customization.to_dict())
    assert STORAGE_KEY not in storage.keys()
    assert OVERRIDES_STORAGE_KEY not in storage.keys()


@pytest.mark.unit
def test_persisted_customization_resolves_identically(storage):
    """Test that a reloaded store resolves the same style for every theme."""
    store = CustomizationStore(storage)
    _apply_overrides(store)

    reloaded = CustomizationStore(storage)

    assert reloaded.customization == store.customization
    assert reloaded.flags == store.flags
    for theme in list_themes():
        assert resolve_style(theme, reloaded.customization, reloaded.flags) == resolve_style(
            theme, store.customization, store.flags
        )


# --- Theme selection ---


@pytest.mark.unit
def test_theme_selection_defaults_and_persists(storage):
    """Test the default theme selection and that a selection persists."""
    selection = ThemeSelectionStore(storage)
    assert selection.theme_id == "modern-professional"

    selection.select("academic-research")

    assert storage.get_item(THEME_STORAGE_KEY) == "academic-research"
    assert ThemeSelectionStore(storage).theme.name == "Academic / Research"


@pytest.mark.unit
def test_theme_selection_rejects_unknown(storage):
    """Test that selecting an unknown theme changes nothing."""
    selection = ThemeSelectionStore(storage)

    with pytest.raises(UnknownThemeError):
        selection.select("neon-disco")

    assert selection.theme_id == "modern-professional"
    assert storage.get_item(THEME_STORAGE_KEY) is None


@pytest.mark.unit
def test_unknown_stored_theme_falls_back_to_default():
    """Test that a retired stored theme id falls back to the default."""
    selection = ThemeSelectionStore(MemoryStorage({THEME_STORAGE_KEY: "retired-theme"}))

    assert selection.theme_id == "modern-professional"
