"""Unit tests for style resolution."""

import dataclasses

import pytest

from vitae.contexts.theming import (
    Customization,
    CustomizationStore,
    OverrideFlags,
    get_theme,
    list_themes,
    resolve_style,
)
from vitae.contexts.theming.customization_data_structure import (
    ColorSettings,
    HeaderSettings,
    LayoutSettings,
    TypographySettings,
)
from vitae.contexts.theming.style_resolver import (
    STYLE_PROPERTIES,
    THEMEABLE_PROPERTIES,
    ResolvedStyle,
    theme_only_style,
)
from vitae.utils.local_storage import MemoryStorage


def _customized() -> Customization:
    return Customization(
        typography=TypographySettings(
            font_family="merriweather",
            name_font_size=32,
            section_header_font_size=15,
            body_font_size=10.5,
            line_height=1.25,
            letter_spacing=0.02,
        ),
        layout=LayoutSettings(page_margin=14, section_spacing=0.75, bullet_spacing=0.2),
        colors=ColorSettings(accent_color="hsl(350, 60%, 30%)"),
        header=HeaderSettings(alignment="left", separator_style="space"),
    )


@pytest.mark.unit
def test_every_resolved_field_has_one_row():
    """Test that each ResolvedStyle field has exactly one resolution row."""
    names = [p.name for p in STYLE_PROPERTIES]

    assert sorted(names) == sorted(f.name for f in dataclasses.fields(ResolvedStyle))
    assert len(names) == len(set(names))


@pytest.mark.unit
@pytest.mark.parametrize("theme", list_themes(), ids=lambda t: t.id)
@pytest.mark.parametrize("customization", [Customization(), _customized()], ids=["default", "custom"])
def test_no_flags_means_theme_values(theme, customization):
    """Test that without override flags every themeable property takes the theme value."""
    style = resolve_style(theme, customization, OverrideFlags())

    expected = {
        "accent_color": theme.colors.accent,
        "font_family": theme.font_family,
        "name_font_size": theme.header_style.font_size,
        "section_header_font_size": theme.section_style.title_font_size,
        "body_font_size": theme.body_style.font_size,
        "line_height": theme.body_style.line_height,
        "section_spacing": theme.section_style.spacing,
        "header_alignment": theme.header_style.text_align,
        "skills_display_style": None,
    }
    for name in THEMEABLE_PROPERTIES:
        assert getattr(style, name) == expected[name], name
    assert style == theme_only_style(theme, customization)


@pytest.mark.unit
def test_overridden_values_win_and_are_formatted():
    """Test that flagged customization values win and carry their CSS units."""
    store = CustomizationStore(MemoryStorage())
    store.update_typography(font_family="georgia", name_font_size=30, body_font_size=10.5, line_height=1.4)
    store.update_layout(section_spacing=1)
    store.update_colors(accent_color="hsl(150, 50%, 25%)")
    store.update_header(alignment="left")

    style = resolve_style(get_theme("executive-elite"), store.customization, store.flags)

    assert style.font_family == "'Georgia', 'Times New Roman', serif"
    assert style.name_font_size == "30px"
    assert style.body_font_size == "10.5px"
    assert style.line_height == "1.4"
    assert style.section_spacing == "1rem"
    assert style.accent_color == "hsl(150, 50%, 25%)"
    assert style.header_alignment == "left"
    # untouched themeable property keeps the theme value
    assert style.section_header_font_size == "1rem"


@pytest.mark.unit
def test_customization_only_properties_always_apply():
    """Test that properties themes do not define always come from customization."""
    theme = get_theme("modern-professional")

    style = resolve_style(theme, _customized(), OverrideFlags())

    assert style.letter_spacing == "0.02em"
    assert style.page_margin == "14mm"
    assert style.bullet_spacing == "0.2rem"
    assert style.contact_separator == "   "


@pytest.mark.unit
def test_default_customization_only_values():
    """Test the default values of customization-only properties."""
    style = resolve_style(get_theme("tech-focused"), Customization(), OverrideFlags())

    assert style.letter_spacing == "0em"
    assert style.page_margin == "20mm"
    assert style.bullet_spacing == "0.375rem"
    assert style.contact_separator == " • "


@pytest.mark.unit
def test_theme_only_properties_ignore_flags():
    """Test that theme-only properties ignore override flags."""
    theme = get_theme("creative-accent")
    flags = OverrideFlags().with_overrides("colors", ["accent_color"])

    style = resolve_style(theme, Customization(), flags)

    assert style.header_text_color == theme.colors.header_text
    assert style.section_title_uses_accent is True
    assert style.skills_separator == " | "
    assert style.header_border_bottom is True


@pytest.mark.unit
def test_right_aligned_theme_resolves_left():
    """Test that a right-aligned theme header resolves to left."""
    theme = dataclasses.replace(
        get_theme("minimal-ats"),
        header_style=dataclasses.replace(get_theme("minimal-ats").header_style, text_align="right"),
    )

    style = resolve_style(theme, Customization(), OverrideFlags())

    assert style.header_alignment == "left"


@pytest.mark.unit
def test_skills_display_style_follows_flag():
    """Test that the skills display style applies only when flagged."""
    theme = get_theme("modern-professional")
    customization = Customization()
    skills = ["Python", "SQL"]

    assert resolve_style(theme, customization, OverrideFlags()).render_skills(skills) == ["Python • SQL"]

    flags = OverrideFlags().with_overrides("skills", ["display_style"])
    style = resolve_style(theme, customization, flags)
    assert style.skills_display_style == "comma"
    assert style.render_skills(skills) == ["Python, SQL"]


@pytest.mark.unit
def test_to_dict_has_every_field():
    """Test that to_dict covers every resolved field."""
    style = resolve_style(get_theme("modern-professional"), Customization(), OverrideFlags())

    assert set(style.to_dict()) == {f.name for f in dataclasses.fields(ResolvedStyle)}
