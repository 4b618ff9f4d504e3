"""
Style Resolution

Computes the effective style of one render pass from the active theme, the
user's customization and the override flags.

Every resolvable property is one row of STYLE_PROPERTIES: where its theme value
comes from, where its customization value comes from, which flag decides
between them, and how a customization value is formatted. A row without a
theme accessor is customization-only (the theme has no equivalent); a row
without a customization accessor is a theme-only pass-through.
"""

from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, List, Optional, Tuple

from vitae.contexts.theming.customization_data_structure import (
    CONTACT_SEPARATORS,
    FONT_FAMILY_STACKS,
    Customization,
)
from vitae.contexts.theming.overrides import OverrideFlags
from vitae.contexts.theming.skill_categories import render_skills
from vitae.contexts.theming.themes import Theme

# Customization has no "right"; a right-aligned theme header falls back to left
_ALIGNMENT_REMAP = {"right": "left"}


@dataclass(frozen=True)
class ResolvedStyle:
    """Final style values for one render pass (CSS-ready strings unless noted)."""

    font_family: str
    name_font_size: str
    section_header_font_size: str
    body_font_size: str
    line_height: str
    letter_spacing: str
    section_spacing: str
    page_margin: str
    bullet_spacing: str
    accent_color: str
    header_alignment: str
    contact_separator: str
    header_font_weight: str
    header_border_bottom: bool
    header_margin_bottom: str
    section_title_font_weight: str
    section_title_text_transform: str
    section_title_letter_spacing: str
    section_title_border_bottom: bool
    section_title_uses_accent: bool
    header_text_color: str
    body_text_color: str
    muted_text_color: str
    skills_separator: str
    # None until the user picks a skills display style
    skills_display_style: Optional[str]

    def render_skills(self, skills: List[str]) -> List[str]:
        return render_skills(skills, self.skills_display_style, self.skills_separator)

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _number(value: float) -> str:
    """Format a number without a trailing .0 (1.0 -> "1", 0.375 -> "0.375")."""
    return f"{value:g}"


def _px(value: float) -> str:
    return f"{_number(value)}px"


def _rem(value: float) -> str:
    return f"{_number(value)}rem"


def _identity(value: Any) -> Any:
    return value


@dataclass(frozen=True)
class StyleProperty:
    """
    One row of the resolution table.

    Attributes:
        name: ResolvedStyle field this row fills
        theme_value: Theme -> value, or None for customization-only rows
        custom_value: Customization -> raw value, or None for theme-only rows
        flag: (record, key) of the deciding override flag, or None
        formatter: Raw customization value -> resolved value
    """

    name: str
    theme_value: Optional[Callable[[Theme], Any]]
    custom_value: Optional[Callable[[Customization], Any]]
    flag: Optional[Tuple[str, str]] = None
    formatter: Callable[[Any], Any] = _identity

    def resolve(self, theme: Theme, customization: Customization, flags: OverrideFlags) -> Any:
        if self.custom_value is None:
            return self.theme_value(theme)
        if self.theme_value is None or (self.flag and flags.is_overridden(*self.flag)):
            return self.formatter(self.custom_value(customization))
        return self.theme_value(theme)


STYLE_PROPERTIES: Tuple[StyleProperty, ...] = (
    # Themeable: the override flag decides
    StyleProperty(
        "accent_color",
        lambda t: t.colors.accent,
        lambda c: c.colors.accent_color,
        ("colors", "accent_color"),
    ),
    StyleProperty(
        "header_alignment",
        lambda t: _ALIGNMENT_REMAP.get(t.header_style.text_align, t.header_style.text_align),
        lambda c: c.header.alignment,
        ("header", "alignment"),
    ),
    StyleProperty(
        "font_family",
        lambda t: t.font_family,
        lambda c: c.typography.font_family,
        ("typography", "font_family"),
        FONT_FAMILY_STACKS.__getitem__,
    ),
    StyleProperty(
        "name_font_size",
        lambda t: t.header_style.font_size,
        lambda c: c.typography.name_font_size,
        ("typography", "name_font_size"),
        _px,
    ),
    StyleProperty(
        "section_header_font_size",
        lambda t: t.section_style.title_font_size,
        lambda c: c.typography.section_header_font_size,
        ("typography", "section_header_font_size"),
        _px,
    ),
    StyleProperty(
        "body_font_size",
        lambda t: t.body_style.font_size,
        lambda c: c.typography.body_font_size,
        ("typography", "body_font_size"),
        _px,
    ),
    StyleProperty(
        "line_height",
        lambda t: t.body_style.line_height,
        lambda c: c.typography.line_height,
        ("typography", "line_height"),
        _number,
    ),
    StyleProperty(
        "section_spacing",
        lambda t: t.section_style.spacing,
        lambda c: c.layout.section_spacing,
        ("layout", "section_spacing"),
        _rem,
    ),
    StyleProperty(
        "skills_display_style",
        lambda t: None,
        lambda c: c.skills.display_style,
        ("skills", "display_style"),
    ),
    # Customization-only: layered atop any theme
    StyleProperty(
        "letter_spacing",
        None,
        lambda c: c.typography.letter_spacing,
        formatter=lambda v: f"{_number(v)}em",
    ),
    StyleProperty(
        "page_margin", None, lambda c: c.layout.page_margin, formatter=lambda v: f"{_number(v)}mm"
    ),
    StyleProperty("bullet_spacing", None, lambda c: c.layout.bullet_spacing, formatter=_rem),
    StyleProperty(
        "contact_separator",
        None,
        lambda c: c.header.separator_style,
        formatter=CONTACT_SEPARATORS.__getitem__,
    ),
    # Theme-only pass-through
    StyleProperty("header_font_weight", lambda t: t.header_style.font_weight, None),
    StyleProperty("header_border_bottom", lambda t: t.header_style.border_bottom, None),
    StyleProperty("header_margin_bottom", lambda t: t.header_style.margin_bottom, None),
    StyleProperty("section_title_font_weight", lambda t: t.section_style.title_font_weight, None),
    StyleProperty(
        "section_title_text_transform", lambda t: t.section_style.title_text_transform, None
    ),
    StyleProperty(
        "section_title_letter_spacing", lambda t: t.section_style.title_letter_spacing, None
    ),
    StyleProperty(
        "section_title_border_bottom", lambda t: t.section_style.title_border_bottom, None
    ),
    StyleProperty("section_title_uses_accent", lambda t: t.section_style.title_accent_color, None),
    StyleProperty("header_text_color", lambda t: t.colors.header_text, None),
    StyleProperty("body_text_color", lambda t: t.colors.body_text, None),
    StyleProperty("muted_text_color", lambda t: t.colors.muted_text, None),
    StyleProperty("skills_separator", lambda t: t.body_style.skills_separator, None),
)

THEMEABLE_PROPERTIES = tuple(
    p.name for p in STYLE_PROPERTIES if p.theme_value is not None and p.custom_value is not None
)


def resolve_style(
    theme: Theme, customization: Customization, flags: OverrideFlags
) -> ResolvedStyle:
    """
    Resolve every style property for one render pass.

    Themeable properties take the customization value only when its override
    flag is set, otherwise the theme's. Customization-only properties always
    take the customization value; theme-only properties always the theme's.
    """
    return ResolvedStyle(
        **{prop.name: prop.resolve(theme, customization, flags) for prop in STYLE_PROPERTIES}
    )


def theme_only_style(theme: Theme, customization: Customization) -> ResolvedStyle:
    """Style with no overrides applied (what resolve_style gives for all-False flags)."""
    return resolve_style(theme, customization, OverrideFlags())
