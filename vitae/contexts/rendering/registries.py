"""
Rendering Registries

Loads and caches the Jinja2 templates that turn a rendered document into HTML.
"""

import os
from pathlib import Path
from typing import Dict

from dotenv import load_dotenv
from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    TemplateNotFound,
    select_autoescape,
)

from vitae.contexts.rendering.renderer import RenderedDocument

load_dotenv()
TEMPLATES_PATH = Path(
    os.getenv("VITAE_TEMPLATES_PATH", str(Path(__file__).resolve().parent / "templates"))
)

DEFAULT_TEMPLATE = "resume"


class TemplateRegistry:
    """
    Registry for loading and caching Jinja2 HTML templates.

    Templates are stored as {templates_path}/{name}.html.jinja.
    """

    def __init__(self, templates_path: Path = None):
        """
        Initialize the template registry.

        Args:
            templates_path: Directory holding the templates. Defaults to
                           VITAE_TEMPLATES_PATH, else the bundled templates/
        """
        if templates_path is None:
            templates_path = TEMPLATES_PATH

        self.templates_path = templates_path
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(templates_path)),
            # Catches silent failures
            undefined=StrictUndefined,
            autoescape=select_autoescape(["html", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def get_template(self, name: str) -> Template:
        """
        Get a template by name, loading and caching it if necessary.

        Raises:
            TemplateNotFound: If the template file doesn't exist
            TemplateSyntaxError: If the template has Jinja2 syntax errors
        """
        if name in self._cache:
            return self._cache[name]

        template_file = f"{name}.html.jinja"
        try:
            template = self.env.get_template(template_file)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Template '{name}' not found at {self.templates_path / template_file}"
            ) from e

        self._cache[name] = template
        return template

    def get_template_path(self, name: str) -> Path:
        return self.templates_path / f"{name}.html.jinja"

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()

    def is_cached(self, name: str) -> bool:
        return name in self._cache


_default_registry = None


def render_html(
    rendered: RenderedDocument, template_name: str = DEFAULT_TEMPLATE, registry: TemplateRegistry = None
) -> str:
    """
    Render a visual tree to a standalone HTML page.

    Editable nodes carry a data-field attribute holding their field path.
    """
    global _default_registry
    if registry is None:
        if _default_registry is None:
            _default_registry = TemplateRegistry()
        registry = _default_registry

    template = registry.get_template(template_name)
    return template.render(doc=rendered, header=rendered.header, style=rendered.style)
