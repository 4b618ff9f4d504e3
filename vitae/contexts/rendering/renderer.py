"""
Document Rendering

Turns a résumé document, a resolved style and the section configuration into a
visual tree. The same tree backs the on-screen preview (HTML/markdown) and the
PDF capture, so both always show identical content.

Editable text nodes carry the field path the field editor commits to. A
section with no content is left out of the tree entirely: a title is never
rendered without a body.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from vitae.contexts.content.resume_data_structure import ResumeDocument
from vitae.contexts.rendering.logger import _log_debug
from vitae.contexts.theming.customization_data_structure import (
    Customization,
    HeaderSettings,
    SectionConfig,
)
from vitae.contexts.theming.style_resolver import ResolvedStyle


@dataclass
class TextNode:
    """A run of text; editable when it has a field path."""

    text: str
    field_path: Optional[str] = None

    @property
    def editable(self) -> bool:
        return self.field_path is not None


@dataclass
class EntryNode:
    """
    One entry of a list section (a job, a degree, a project).

    Attributes:
        title: Main line (role, degree, project name)
        subtitle: Secondary line (company, institution)
        meta: Right-aligned detail (duration, year)
        paragraphs: Body paragraphs
        bullets: Body bullets
    """

    title: str
    subtitle: str = ""
    meta: str = ""
    paragraphs: List[TextNode] = field(default_factory=list)
    bullets: List[TextNode] = field(default_factory=list)


@dataclass
class SectionNode:
    section_id: str
    title: str
    paragraphs: List[TextNode] = field(default_factory=list)
    entries: List[EntryNode] = field(default_factory=list)
    items: List[TextNode] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.paragraphs or self.entries or self.items)


@dataclass
class RenderedHeader:
    full_name: str
    job_title: str
    contact_line: str
    alignment: str


@dataclass
class RenderedDocument:
    header: RenderedHeader
    sections: List[SectionNode]
    style: ResolvedStyle

    def section(self, section_id: str) -> Optional[SectionNode]:
        for section in self.sections:
            if section.section_id == section_id:
                return section
        return None

    @property
    def section_ids(self) -> List[str]:
        return [s.section_id for s in self.sections]

    def editable_fields(self) -> List[str]:
        """Field paths of every editable node, in document order."""
        paths = []
        for section in self.sections:
            nodes = list(section.paragraphs) + list(section.items)
            for entry in section.entries:
                nodes.extend(entry.paragraphs)
                nodes.extend(entry.bullets)
            paths.extend(node.field_path for node in nodes if node.editable)
        return paths


def build_contact_line(document: ResumeDocument, header: HeaderSettings, separator: str) -> str:
    """Contact fields enabled in the header settings, non-empty only, joined by separator."""
    values = [
        value
        for name, value in document.contact_fields.items()
        if getattr(header, f"show_{name}") and value.strip()
    ]
    return separator.join(values)


# --- Section bodies ---


def _paragraph_section(field_name: str) -> Callable:
    def render(node: SectionNode, document: ResumeDocument, config, style) -> None:
        text = getattr(document, field_name)
        if text.strip():
            node.paragraphs.append(TextNode(text, field_path=field_name))

    return render


def _render_experience(
    node: SectionNode, document: ResumeDocument, config: SectionConfig, style: ResolvedStyle
) -> None:
    for i, experience in enumerate(document.experiences):
        entry = EntryNode(
            title=experience.role, subtitle=experience.company, meta=experience.duration
        )
        shown = experience.bullets[: config.bullet_limit] if config.bullet_limit else experience.bullets
        if config.use_bullets:
            entry.bullets = [
                TextNode(bullet, field_path=f"experience.{i}.bullets.{j}")
                for j, bullet in enumerate(shown)
            ]
        elif shown:
            entry.paragraphs = [TextNode(" ".join(_as_sentence(b) for b in shown))]
        node.entries.append(entry)


def _as_sentence(text: str) -> str:
    text = text.strip()
    return text if text.endswith((".", "!", "?")) else f"{text}."


def _render_education(node: SectionNode, document: ResumeDocument, config, style) -> None:
    node.entries = [
        EntryNode(title=edu.degree, subtitle=edu.institution, meta=edu.year)
        for edu in document.education
    ]


def _render_skills(
    node: SectionNode, document: ResumeDocument, config, style: ResolvedStyle
) -> None:
    node.paragraphs = [TextNode(line) for line in style.render_skills(document.skills)]


def _render_projects(node: SectionNode, document: ResumeDocument, config, style) -> None:
    for i, project in enumerate(document.projects):
        entry = EntryNode(title=project.name)
        if project.description:
            entry.paragraphs.append(
                TextNode(project.description, field_path=f"projects.{i}.description")
            )
        node.entries.append(entry)


def _list_section(field_name: str) -> Callable:
    def render(node: SectionNode, document: ResumeDocument, config, style) -> None:
        node.items = [TextNode(item) for item in getattr(document, field_name) if item.strip()]

    return render


SECTION_RENDERERS: Dict[str, Callable] = {
    "summary": _paragraph_section("summary"),
    "experience": _render_experience,
    "skills": _render_skills,
    "education": _render_education,
    "projects": _render_projects,
    "certifications": _paragraph_section("certifications"),
    "achievements": _list_section("achievements"),
    "publications": _list_section("publications"),
}


def render_document(
    document: ResumeDocument,
    style: ResolvedStyle,
    customization: Customization,
) -> RenderedDocument:
    """
    Build the visual tree for one render pass.

    Args:
        document: Résumé content
        style: Resolved style for this pass
        customization: Supplies section visibility/order/titles and header toggles

    Returns:
        RenderedDocument with visible, non-empty sections in ascending order
    """
    sections = []
    for config in customization.ordered_sections():
        if not config.visible:
            continue
        node = SectionNode(section_id=config.id, title=config.display_title)
        SECTION_RENDERERS[config.id](node, document, config, style)
        if node.is_empty:
            _log_debug(f"Omitting empty section '{config.id}'")
            continue
        sections.append(node)

    header = RenderedHeader(
        full_name=document.full_name,
        job_title=document.job_title,
        contact_line=build_contact_line(document, customization.header, style.contact_separator),
        alignment=style.header_alignment,
    )
    return RenderedDocument(header=header, sections=sections, style=style)
