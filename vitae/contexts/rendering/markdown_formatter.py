"""
Markdown Utilities

Helper functions for formatting a rendered document as markdown, for terminal
previews and plain-text exports.
"""

from typing import List

from vitae.contexts.rendering.renderer import EntryNode, RenderedDocument, SectionNode


def format_entry_markdown(entry: EntryNode) -> str:
    """
    Format a single entry (job, degree, project) as markdown.

    The title is formatted as ### (section header added separately by caller).
    """
    parts = [f"### {entry.title}"]

    details = []
    if entry.subtitle:
        details.append(f"*{entry.subtitle}*")
    if entry.meta:
        details.append(entry.meta)
    if details:
        parts.append(" | ".join(details))

    parts.append("")

    for paragraph in entry.paragraphs:
        parts.append(paragraph.text)
    for bullet in entry.bullets:
        parts.append(f"- {bullet.text}")

    return "\n".join(parts).rstrip()


def format_section_markdown(section: SectionNode) -> str:
    """Format one section: ## title, then paragraphs, entries and list items."""
    parts: List[str] = [f"## {section.title}\n"]

    for paragraph in section.paragraphs:
        parts.append(paragraph.text)
    for entry in section.entries:
        parts.append(format_entry_markdown(entry) + "\n")
    for item in section.items:
        parts.append(f"- {item.text}")

    return "\n".join(parts).rstrip()


def format_document_markdown(rendered: RenderedDocument) -> str:
    """
    Format a full rendered document as markdown.

    Sections appear in render order; omitted (empty or hidden) sections do not
    appear at all.
    """
    header = rendered.header
    parts = [f"# {header.full_name}"]
    if header.job_title:
        parts.append(f"**{header.job_title}**")
    if header.contact_line:
        parts.append(header.contact_line)

    for section in rendered.sections:
        parts.append(format_section_markdown(section))

    return "\n\n".join(parts) + "\n"
