"""Unit tests for override flags and the changed-key rule."""

import pytest

from vitae.contexts.theming import CustomizationValidationError, OverrideFlags, changed_keys
from vitae.contexts.theming.customization_data_structure import LayoutSettings, record_keys
from vitae.contexts.theming.overrides import validate_partial


@pytest.mark.unit
def test_changed_keys_counts_presence_not_difference():
    """Test that a key re-submitted with its current value still counts as changed."""
    old = LayoutSettings()

    keys = changed_keys(old, {"page_margin": old.page_margin, "section_spacing": 2})

    assert keys == frozenset({"page_margin", "section_spacing"})


@pytest.mark.unit
def test_changed_keys_empty_partial():
    """Test that an empty partial changes no keys."""
    assert changed_keys(LayoutSettings(), {}) == frozenset()


@pytest.mark.unit
def test_changed_keys_rejects_unknown_key():
    """Test that a key the record lacks is rejected."""
    with pytest.raises(CustomizationValidationError):
        changed_keys(LayoutSettings(), {"gutter": 4})


@pytest.mark.unit
def test_default_flags_all_false():
    """Test that fresh flags mark nothing as overridden."""
    flags = OverrideFlags()

    assert flags.overridden() == {}
    for key in record_keys("typography"):
        assert not flags.is_overridden("typography", key)


@pytest.mark.unit
def test_with_overrides_returns_copy():
    """Test that with_overrides leaves the original flags unchanged."""
    flags = OverrideFlags()

    updated = flags.with_overrides("colors", ["accent_color"])

    assert updated.is_overridden("colors", "accent_color")
    assert not flags.is_overridden("colors", "accent_color")


@pytest.mark.unit
def test_with_overrides_never_clears():
    """Test that flags accumulate across calls."""
    flags = OverrideFlags().with_overrides("header", ["alignment"])

    flags = flags.with_overrides("header", ["show_email"])

    assert flags.overridden() == {"header": ["show_email", "alignment"]}


@pytest.mark.unit
def test_from_dict_backfills_missing_keys():
    """Test that missing flag keys load as False and unknown records are dropped."""
    flags = OverrideFlags.from_dict({"layout": {"page_margin": True}, "bogus": {"x": True}})

    assert flags.is_overridden("layout", "page_margin")
    assert not flags.is_overridden("layout", "section_spacing")
    assert set(flags.to_dict()) == {"typography", "layout", "colors", "header", "skills"}


@pytest.mark.unit
def test_from_dict_drops_unknown_keys():
    """Test that unknown flag keys inside a record are dropped."""
    flags = OverrideFlags.from_dict({"skills": {"display_style": True, "columns": True}})

    assert flags.to_dict()["skills"] == {"display_style": True}


@pytest.mark.unit
@pytest.mark.parametrize(
    "record, partial",
    [
        ("typography", {"font_family": "comic-sans"}),
        ("typography", {"body_font_size": "11"}),
        ("header", {"show_email": 1}),
        ("header", {"alignment": "right"}),
        ("skills", {"display_style": "table"}),
        ("layout", {"gutter": 3}),
    ],
)
def test_validate_partial_rejects(record, partial):
    """Test that invalid values and unknown keys are rejected per record."""
    with pytest.raises(CustomizationValidationError) as exc_info:
        validate_partial(record, partial)

    assert exc_info.value.record == record


@pytest.mark.unit
def test_validate_partial_accepts_int_for_float_setting():
    """Test that an int is accepted for a float setting."""
    validate_partial("layout", {"page_margin": 18})
