"""
Rendering Context

Responsibilities:
- Builds the visual tree of a résumé from content, resolved style and section config
- Renders that tree as an HTML page (preview, rasterizer input) or as markdown
- Captures the rendered document into a multi-page A4 PDF

Owns: Visual tree, preview formats, PDF capture
Never: Modifies résumé content or customization
"""

from vitae.contexts.rendering.markdown_formatter import format_document_markdown
from vitae.contexts.rendering.pdf_export import ExportResult, capture_to_pdf, paginate
from vitae.contexts.rendering.registries import TemplateRegistry, render_html
from vitae.contexts.rendering.renderer import (
    EntryNode,
    RenderedDocument,
    RenderedHeader,
    SectionNode,
    TextNode,
    build_contact_line,
    render_document,
)

__all__ = [
    # Visual tree
    "render_document",
    "build_contact_line",
    "RenderedDocument",
    "RenderedHeader",
    "SectionNode",
    "EntryNode",
    "TextNode",
    # Preview formats
    "TemplateRegistry",
    "render_html",
    "format_document_markdown",
    # PDF capture
    "capture_to_pdf",
    "paginate",
    "ExportResult",
]
