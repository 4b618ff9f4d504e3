"""
Theme Catalog

The fixed set of visual presets a résumé can be rendered with. Each theme is a
complete, immutable style bundle; user customization is layered on top of it by
the style resolver. Sizes are stored pre-formatted (CSS length strings).

Premium themes carry a flag only; entitlement checks belong to the caller.
"""

from dataclasses import dataclass
from typing import Dict, List

from vitae.contexts.theming.exceptions import UnknownThemeError


@dataclass(frozen=True)
class HeaderStyle:
    font_size: str
    font_weight: str
    text_align: str  # "left" | "center" | "right"
    border_bottom: bool
    margin_bottom: str


@dataclass(frozen=True)
class SectionStyle:
    title_font_size: str
    title_font_weight: str
    title_text_transform: str  # "uppercase" | "capitalize" | "none"
    title_letter_spacing: str
    title_border_bottom: bool
    title_accent_color: bool
    spacing: str


@dataclass(frozen=True)
class BodyStyle:
    font_size: str
    line_height: str
    skills_separator: str


@dataclass(frozen=True)
class ThemeColors:
    accent: str
    header_text: str
    body_text: str
    muted_text: str


@dataclass(frozen=True)
class Theme:
    id: str
    name: str
    description: str
    font_family: str
    is_premium: bool
    header_style: HeaderStyle
    section_style: SectionStyle
    body_style: BodyStyle
    colors: ThemeColors


DEFAULT_THEME_ID = "modern-professional"

_CATALOG: Dict[str, Theme] = {
    theme.id: theme
    for theme in (
        Theme(
            id="modern-professional",
            name="Modern Professional",
            description="Clean layout with bold headers. Ideal for tech and corporate roles.",
            font_family="'Inter', 'Segoe UI', sans-serif",
            is_premium=False,
            header_style=HeaderStyle("2rem", "700", "center", True, "2rem"),
            section_style=SectionStyle("1.1rem", "600", "uppercase", "0.05em", True, False, "1.5rem"),
            body_style=BodyStyle("0.95rem", "1.6", " • "),
            colors=ThemeColors(
                "hsl(221, 83%, 53%)", "hsl(222, 47%, 11%)", "hsl(222, 47%, 11%)", "hsl(215, 16%, 47%)"
            ),
        ),
        Theme(
            id="minimal-classic",
            name="Minimal Classic",
            description="Simple typography with clean spacing. Great for ATS-heavy applications.",
            font_family="'Times New Roman', Georgia, serif",
            is_premium=False,
            header_style=HeaderStyle("1.75rem", "400", "center", False, "1.5rem"),
            section_style=SectionStyle("1rem", "700", "uppercase", "0.1em", False, False, "1.25rem"),
            body_style=BodyStyle("1rem", "1.5", ", "),
            colors=ThemeColors(
                "hsl(0, 0%, 0%)", "hsl(0, 0%, 0%)", "hsl(0, 0%, 15%)", "hsl(0, 0%, 40%)"
            ),
        ),
        Theme(
            id="creative-accent",
            name="Creative Accent",
            description="Accent colors with visual hierarchy. Still ATS-safe.",
            font_family="'Lato', 'Helvetica Neue', sans-serif",
            is_premium=False,
            header_style=HeaderStyle("2.25rem", "700", "left", True, "1.75rem"),
            section_style=SectionStyle("1.05rem", "600", "uppercase", "0.08em", False, True, "1.5rem"),
            body_style=BodyStyle("0.95rem", "1.65", " | "),
            colors=ThemeColors(
                "hsl(262, 83%, 58%)", "hsl(262, 83%, 58%)", "hsl(222, 47%, 11%)", "hsl(215, 16%, 47%)"
            ),
        ),
        Theme(
            id="executive-elite",
            name="Executive Elite",
            description="Elegant typography with subtle separators. Ideal for senior and leadership roles.",
            font_family="'Georgia', 'Times New Roman', serif",
            is_premium=False,
            header_style=HeaderStyle("2.25rem", "600", "center", True, "2.25rem"),
            section_style=SectionStyle("1rem", "600", "uppercase", "0.15em", True, False, "1.75rem"),
            body_style=BodyStyle("0.95rem", "1.7", " • "),
            colors=ThemeColors(
                "hsl(220, 25%, 25%)", "hsl(220, 30%, 15%)", "hsl(220, 20%, 20%)", "hsl(220, 10%, 45%)"
            ),
        ),
        Theme(
            id="tech-focused",
            name="Tech Focused",
            description="Clean sans-serif with compact spacing. Perfect for software and IT roles.",
            font_family="'SF Mono', 'Consolas', 'Monaco', monospace",
            is_premium=False,
            header_style=HeaderStyle("1.875rem", "700", "left", True, "1.5rem"),
            section_style=SectionStyle("0.95rem", "700", "uppercase", "0.1em", False, True, "1.25rem"),
            body_style=BodyStyle("0.9rem", "1.5", " | "),
            colors=ThemeColors(
                "hsl(160, 84%, 39%)", "hsl(210, 40%, 15%)", "hsl(210, 25%, 20%)", "hsl(210, 15%, 50%)"
            ),
        ),
        Theme(
            id="creative-professional",
            name="Creative Professional",
            description="Expressive with strong visual hierarchy. ATS-safe single-column design.",
            font_family="'Poppins', 'Helvetica Neue', sans-serif",
            is_premium=False,
            header_style=HeaderStyle("2.5rem", "800", "left", True, "2rem"),
            section_style=SectionStyle("1.1rem", "700", "capitalize", "0.02em", False, True, "1.5rem"),
            body_style=BodyStyle("0.95rem", "1.65", " · "),
            colors=ThemeColors(
                "hsl(340, 82%, 52%)", "hsl(340, 82%, 52%)", "hsl(0, 0%, 15%)", "hsl(0, 0%, 45%)"
            ),
        ),
        Theme(
            id="academic-research",
            name="Academic / Research",
            description="Formal typography emphasizing education and publications. Ideal for academia.",
            font_family="'Palatino Linotype', 'Book Antiqua', Palatino, serif",
            is_premium=False,
            header_style=HeaderStyle("1.875rem", "400", "center", False, "1.75rem"),
            section_style=SectionStyle("1.05rem", "700", "uppercase", "0.08em", True, False, "1.5rem"),
            body_style=BodyStyle("1rem", "1.6", ", "),
            colors=ThemeColors(
                "hsl(210, 50%, 40%)", "hsl(0, 0%, 10%)", "hsl(0, 0%, 15%)", "hsl(0, 0%, 40%)"
            ),
        ),
        Theme(
            id="minimal-ats",
            name="Minimal ATS",
            description="Ultra-clean layout optimized for maximum ATS parsing. No icons or dividers.",
            font_family="'Arial', 'Helvetica', sans-serif",
            is_premium=False,
            header_style=HeaderStyle("1.75rem", "700", "left", False, "1.25rem"),
            section_style=SectionStyle("1rem", "700", "uppercase", "0", False, False, "1.25rem"),
            body_style=BodyStyle("1rem", "1.5", ", "),
            colors=ThemeColors(
                "hsl(0, 0%, 0%)", "hsl(0, 0%, 0%)", "hsl(0, 0%, 0%)", "hsl(0, 0%, 30%)"
            ),
        ),
    )
}

THEME_IDS = tuple(_CATALOG)


def get_theme(theme_id: str) -> Theme:
    """
    Look up a theme by id.

    Raises:
        UnknownThemeError: If theme_id is not one of THEME_IDS
    """
    try:
        return _CATALOG[theme_id]
    except KeyError:
        raise UnknownThemeError(theme_id, THEME_IDS) from None


def list_themes() -> List[Theme]:
    """All themes in catalog order (a fresh list on every call)."""
    return list(_CATALOG.values())


def is_theme_id(value: str) -> bool:
    return value in _CATALOG
