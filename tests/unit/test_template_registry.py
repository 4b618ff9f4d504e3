"""Unit tests for TemplateRegistry and HTML rendering."""

from pathlib import Path

import pytest
from jinja2 import TemplateNotFound

from vitae.contexts.rendering import TemplateRegistry, render_document, render_html
from vitae.contexts.theming import (
    Customization,
    CustomizationStore,
    OverrideFlags,
    get_theme,
    resolve_style,
)
from vitae.utils.local_storage import MemoryStorage


@pytest.fixture
def rendered(sample_document):
    store = CustomizationStore(MemoryStorage())
    store.update_colors(accent_color="hsl(180, 60%, 30%)")
    style = resolve_style(get_theme("creative-accent"), store.customization, store.flags)
    return render_document(sample_document, style, store.customization)


@pytest.mark.unit
def test_template_registry_init():
    """Test TemplateRegistry initialization."""
    registry = TemplateRegistry()

    assert registry.templates_path.exists()
    assert registry._cache == {}


@pytest.mark.unit
def test_template_caching():
    """Test that templates are cached after first load."""
    registry = TemplateRegistry()

    template1 = registry.get_template("resume")
    assert registry.is_cached("resume")

    template2 = registry.get_template("resume")
    assert template1 is template2


@pytest.mark.unit
def test_get_template_not_found():
    """Test that a missing template raises TemplateNotFound."""
    with pytest.raises(TemplateNotFound):
        TemplateRegistry().get_template("nonexistent")


@pytest.mark.unit
def test_get_template_path():
    """Test resolving a template name to its .html.jinja file."""
    path = TemplateRegistry().get_template_path("resume")

    assert isinstance(path, Path)
    assert path.name == "resume.html.jinja"
    assert path.exists()


@pytest.mark.unit
def test_clear_cache():
    """Test that clear_cache empties the template cache."""
    registry = TemplateRegistry()
    registry.get_template("resume")

    registry.clear_cache()

    assert not registry.is_cached("resume")


@pytest.mark.unit
def test_html_carries_field_paths_and_sections(rendered):
    """Test that editable nodes and visible sections are tagged in the HTML."""
    html = render_html(rendered)

    assert '<span class="editable" data-field="summary">' in html
    assert 'data-field="experience.1.bullets.1"' in html
    assert 'data-section="certifications"' in html
    assert 'data-section="achievements"' not in html


@pytest.mark.unit
def test_html_uses_resolved_style(rendered):
    """Test that the resolved style is written as inline CSS."""
    html = render_html(rendered)

    assert "font-family: 'Lato', 'Helvetica Neue', sans-serif;" in html
    assert "hsl(180, 60%, 30%)" in html
    assert "text-align: left;" in html
    assert "padding: 20mm;" in html


@pytest.mark.unit
def test_html_escapes_content(sample_document):
    """Test that document text is HTML-escaped."""
    sample_document.summary = "Built <script> tooling & more"
    customization = Customization()
    style = resolve_style(get_theme("minimal-classic"), customization, OverrideFlags())

    html = render_html(render_document(sample_document, style, customization))

    assert "Built &lt;script&gt; tooling &amp; more" in html
