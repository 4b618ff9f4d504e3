"""
In-Place Field Editing

Edits address a single text leaf of the résumé document through a dot-delimited
field path, as carried by editable nodes of the rendered document:

    summary                         -> document.summary
    fullName / full_name            -> document.full_name
    experience.0.role               -> document.experiences[0].role
    experience.1.bullets.2          -> document.experiences[1].bullets[2]
    projects.0.description          -> document.projects[0].description

A commit only ever replaces an existing string. Unknown sections, malformed
indices, out-of-range indices and non-string targets are ignored: list lengths
and field types never change through an edit.
"""

from typing import Any, List, Optional, Tuple

from vitae.contexts.content.resume_data_structure import ResumeDocument
from vitae.contexts.editing.logger import _log_debug, _log_info

_SECTION_ALIASES = {
    "fullName": "full_name",
    "jobTitle": "job_title",
    "experience": "experiences",
    "project": "projects",
}

SCALAR_FIELDS = ("summary", "certifications", "full_name", "job_title")

# List section -> editable sub-fields of each entry
ENTRY_FIELDS = {
    "experiences": ("role", "company", "duration", "bullets"),
    "projects": ("name", "description"),
    "education": ("degree", "institution", "year"),
}


def _parse_index(part: str) -> Optional[int]:
    if part.isascii() and part.isdigit():
        return int(part)
    return None


def _item(items: Any, part: str) -> Tuple[bool, Any]:
    """(found, value) for items[part] when part is an in-range index."""
    index = _parse_index(part)
    if not isinstance(items, list) or index is None or index >= len(items):
        return False, None
    return True, items[index]


def locate(document: ResumeDocument, field_path: str) -> Optional[Tuple[Any, Any]]:
    """
    Find the container and key of the string leaf a field path addresses.

    Returns:
        (container, key) where key is an attribute name (dataclass container)
        or an index (list container); None if the path does not address an
        existing string.
    """
    parts: List[str] = field_path.split(".") if field_path else []
    if not parts:
        return None

    section = _SECTION_ALIASES.get(parts[0], parts[0])

    if section in SCALAR_FIELDS:
        if len(parts) != 1 or not isinstance(getattr(document, section), str):
            return None
        return document, section

    if section not in ENTRY_FIELDS or len(parts) not in (3, 4):
        return None

    found, entry = _item(getattr(document, section), parts[1])
    if not found or parts[2] not in ENTRY_FIELDS[section]:
        return None
    value = getattr(entry, parts[2])

    if len(parts) == 3:
        return (entry, parts[2]) if isinstance(value, str) else None

    found, leaf = _item(value, parts[3])
    if not found or not isinstance(leaf, str):
        return None
    return value, int(parts[3])


def apply_edit(document: ResumeDocument, field_path: str, new_value: str) -> bool:
    """
    Write new_value to the leaf at field_path, in place.

    Returns:
        True if the document was changed, False if the path was ignored
    """
    target = locate(document, field_path)
    if target is None:
        _log_debug(f"Ignoring edit to unresolvable path '{field_path}'")
        return False

    container, key = target
    if isinstance(container, list):
        container[key] = new_value
    else:
        setattr(container, key, new_value)
    return True


class FieldEditor:
    """
    Tracks the single field currently being edited and commits it to a document.

    At most one field is in edit mode; starting a new edit abandons any
    uncommitted one.

    Example:
        >>> editor = FieldEditor(document)
        >>> editor.start_edit("summary", document.summary)
        >>> editor.set_value("Staff engineer with ten years of platform work.")
        >>> editor.commit()
        True
    """

    def __init__(self, document: ResumeDocument):
        self.document = document
        self.field_path: Optional[str] = None
        self.value = ""

    def start_edit(self, field_path: str, current_value: str) -> None:
        if self.field_path is not None and self.field_path != field_path:
            _log_debug(f"Abandoning uncommitted edit of '{self.field_path}'")
        self.field_path = field_path
        self.value = current_value

    def set_value(self, value: str) -> None:
        """Update the pending value; ignored outside edit mode."""
        if self.field_path is not None:
            self.value = value

    def cancel(self) -> None:
        self.field_path = None
        self.value = ""

    def is_editing(self, field_path: Optional[str] = None) -> bool:
        """Whether a field (or the given field) is in edit mode."""
        if field_path is None:
            return self.field_path is not None
        return self.field_path == field_path

    def commit(self, new_value: Optional[str] = None) -> bool:
        """
        Write the pending value (or new_value) to the document and leave edit mode.

        Edit mode is exited whether or not the path resolves.

        Returns:
            True if the document changed
        """
        if self.field_path is None:
            return False

        field_path = self.field_path
        value = self.value if new_value is None else new_value
        self.cancel()

        changed = apply_edit(self.document, field_path, value)
        if changed:
            _log_info(f"Committed edit to '{field_path}'")
        return changed
