"""
Theming Context

Responsibilities:
- Owns the fixed catalog of visual themes
- Holds and persists user customization and its override flags
- Resolves theme + customization into the effective style of a render pass

Owns: Theme catalog, customization store, style resolution
Never: Touches résumé content or decides which content is shown
"""

from vitae.contexts.theming.customization_data_structure import (
    SECTION_IDS,
    Customization,
    SectionConfig,
)
from vitae.contexts.theming.customization_store import CustomizationStore, ThemeSelectionStore
from vitae.contexts.theming.exceptions import CustomizationValidationError, UnknownThemeError
from vitae.contexts.theming.overrides import OverrideFlags, changed_keys
from vitae.contexts.theming.style_resolver import ResolvedStyle, resolve_style
from vitae.contexts.theming.themes import DEFAULT_THEME_ID, Theme, get_theme, list_themes

__all__ = [
    # Catalog
    "Theme",
    "DEFAULT_THEME_ID",
    "get_theme",
    "list_themes",
    # Customization
    "SECTION_IDS",
    "Customization",
    "SectionConfig",
    "OverrideFlags",
    "changed_keys",
    "CustomizationStore",
    "ThemeSelectionStore",
    # Resolution
    "ResolvedStyle",
    "resolve_style",
    # Errors
    "CustomizationValidationError",
    "UnknownThemeError",
]
