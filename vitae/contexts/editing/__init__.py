"""
Editing Context

Responsibilities:
- Tracks the one field in edit mode
- Commits edited text to the addressed leaf of the résumé document

Owns: Field paths, edit mode
Never: Adds or removes list entries, re-renders
"""

from vitae.contexts.editing.field_editor import FieldEditor, apply_edit, locate

__all__ = [
    "FieldEditor",
    "apply_edit",
    "locate",
]
