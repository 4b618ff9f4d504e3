"""
Customization Data Structure

User-editable style and structure preferences layered on top of a theme, with
the documented defaults and the closed enumerations each setting draws from.
"""

from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Dict, List, Optional, Tuple

SECTION_IDS: Tuple[str, ...] = (
    "summary",
    "experience",
    "skills",
    "education",
    "projects",
    "certifications",
    "achievements",
    "publications",
)

SECTION_TITLE_LABELS: Dict[str, str] = {
    "summary": "Professional Summary",
    "experience": "Experience",
    "skills": "Skills",
    "education": "Education",
    "projects": "Projects",
    "certifications": "Certifications",
    "achievements": "Achievements",
    "publications": "Publications",
}

FONT_FAMILY_STACKS: Dict[str, str] = {
    "inter": "'Inter', 'Segoe UI', sans-serif",
    "georgia": "'Georgia', 'Times New Roman', serif",
    "times": "'Times New Roman', 'Times', serif",
    "arial": "'Arial', 'Helvetica', sans-serif",
    "palatino": "'Palatino Linotype', 'Book Antiqua', Palatino, serif",
    "lato": "'Lato', 'Helvetica Neue', sans-serif",
    "roboto": "'Roboto', 'Helvetica Neue', sans-serif",
    "merriweather": "'Merriweather', Georgia, serif",
}

FONT_FAMILY_LABELS: Dict[str, str] = {
    "inter": "Inter",
    "georgia": "Georgia",
    "times": "Times New Roman",
    "arial": "Arial",
    "palatino": "Palatino",
    "lato": "Lato",
    "roboto": "Roboto",
    "merriweather": "Merriweather",
}

# page_margin (mm), section_spacing (rem), bullet_spacing (rem)
DENSITY_PRESETS: Dict[str, Dict[str, float]] = {
    "compact": {"page_margin": 12, "section_spacing": 1, "bullet_spacing": 0.25},
    "balanced": {"page_margin": 20, "section_spacing": 1.5, "bullet_spacing": 0.375},
    "spacious": {"page_margin": 25, "section_spacing": 2, "bullet_spacing": 0.5},
}

# ATS-safe accent colors (section headers only; body text stays dark)
ACCENT_COLOR_PRESETS: Dict[str, str] = {
    "Black": "hsl(0, 0%, 0%)",
    "Navy": "hsl(220, 50%, 25%)",
    "Blue": "hsl(221, 83%, 40%)",
    "Teal": "hsl(180, 60%, 30%)",
    "Forest": "hsl(150, 50%, 25%)",
    "Burgundy": "hsl(350, 60%, 30%)",
    "Slate": "hsl(215, 20%, 35%)",
    "Charcoal": "hsl(0, 0%, 25%)",
}

HEADER_ALIGNMENTS = ("left", "center")

CONTACT_SEPARATORS: Dict[str, str] = {
    "dot": " • ",
    "line": " | ",
    "space": "   ",
}

SKILLS_DISPLAY_STYLES = ("comma", "grouped", "bullets")

# Setting name -> allowed values, for settings drawn from a closed set
ENUMERATED_SETTINGS: Dict[Tuple[str, str], Tuple[str, ...]] = {
    ("typography", "font_family"): tuple(FONT_FAMILY_STACKS),
    ("layout", "density_preset"): tuple(DENSITY_PRESETS),
    ("header", "alignment"): HEADER_ALIGNMENTS,
    ("header", "separator_style"): tuple(CONTACT_SEPARATORS),
    ("skills", "display_style"): SKILLS_DISPLAY_STYLES,
}


@dataclass
class SectionConfig:
    """
    Display configuration for one résumé section.

    Attributes:
        id: Section identifier from SECTION_IDS
        visible: Whether the section is rendered at all
        order: Position among all sections (dense, zero-based)
        use_bullets: Render entry content as a bullet list rather than a paragraph
        custom_title: Title override; None uses SECTION_TITLE_LABELS
        bullet_limit: Max bullets shown per entry; None shows all
    """

    id: str
    visible: bool = True
    order: int = 0
    use_bullets: bool = False
    custom_title: Optional[str] = None
    bullet_limit: Optional[int] = None

    @property
    def display_title(self) -> str:
        if self.custom_title:
            return self.custom_title
        return SECTION_TITLE_LABELS[self.id]


@dataclass
class TypographySettings:
    font_family: str = "inter"
    name_font_size: float = 28  # px
    section_header_font_size: float = 14  # px
    body_font_size: float = 11  # px
    line_height: float = 1.5  # ratio
    letter_spacing: float = 0  # em


@dataclass
class LayoutSettings:
    page_margin: float = 20  # mm
    section_spacing: float = 1.5  # rem
    bullet_spacing: float = 0.375  # rem
    density_preset: str = "balanced"


@dataclass
class ColorSettings:
    accent_color: str = "hsl(221, 83%, 40%)"


@dataclass
class HeaderSettings:
    show_email: bool = True
    show_phone: bool = True
    show_location: bool = True
    show_linkedin: bool = False
    show_portfolio: bool = False
    alignment: str = "center"
    separator_style: str = "dot"


@dataclass
class SkillsSettings:
    display_style: str = "comma"


# Record name -> settings class, in serialization order
SETTINGS_RECORDS = {
    "typography": TypographySettings,
    "layout": LayoutSettings,
    "colors": ColorSettings,
    "header": HeaderSettings,
    "skills": SkillsSettings,
}


def default_sections() -> List[SectionConfig]:
    return [
        SectionConfig("summary", visible=True, order=0, use_bullets=False),
        SectionConfig("experience", visible=True, order=1, use_bullets=True, bullet_limit=5),
        SectionConfig("skills", visible=True, order=2, use_bullets=False),
        SectionConfig("education", visible=True, order=3, use_bullets=False),
        SectionConfig("projects", visible=True, order=4, use_bullets=False),
        SectionConfig("certifications", visible=True, order=5, use_bullets=False),
        SectionConfig("achievements", visible=False, order=6, use_bullets=True),
        SectionConfig("publications", visible=False, order=7, use_bullets=False),
    ]


def record_keys(record_name: str) -> Tuple[str, ...]:
    """Field names of a settings record (e.g. "layout" -> ("page_margin", ...))."""
    return tuple(f.name for f in fields(SETTINGS_RECORDS[record_name]))


@dataclass
class Customization:
    """
    The full set of user preferences.

    Sections are structural and never themeable; the five settings records are
    layered over the active theme according to the override flags.
    """

    sections: List[SectionConfig] = field(default_factory=default_sections)
    typography: TypographySettings = field(default_factory=TypographySettings)
    layout: LayoutSettings = field(default_factory=LayoutSettings)
    colors: ColorSettings = field(default_factory=ColorSettings)
    header: HeaderSettings = field(default_factory=HeaderSettings)
    skills: SkillsSettings = field(default_factory=SkillsSettings)

    def record(self, record_name: str) -> Any:
        if record_name not in SETTINGS_RECORDS:
            raise KeyError(f"Unknown settings record: {record_name}")
        return getattr(self, record_name)

    def with_record(self, record_name: str, value: Any) -> "Customization":
        """Copy of this customization with one settings record replaced."""
        return replace(self, **{record_name: value})

    def ordered_sections(self) -> List[SectionConfig]:
        return sorted(self.sections, key=lambda s: s.order)

    def section(self, section_id: str) -> SectionConfig:
        for section in self.sections:
            if section.id == section_id:
                return section
        raise KeyError(f"Unknown section: {section_id}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
