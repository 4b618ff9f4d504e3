"""
Content Context

Responsibilities:
- Defines the résumé document model shared by every context
- Talks to the content generation service (generate, rewrite, tailor)
- Extracts text from uploaded résumé files

Owns: ResumeDocument, external content collaborators
Never: Makes styling or layout decisions
"""

from vitae.contexts.content.content_service import (
    ContentService,
    MatchReport,
    RewriteResult,
    TailorResult,
)
from vitae.contexts.content.exceptions import ContentServiceError, TextExtractionError
from vitae.contexts.content.resume_data_structure import (
    Education,
    Experience,
    Project,
    ResumeDocument,
)
from vitae.contexts.content.text_extraction import extract_text

__all__ = [
    # Document model
    "ResumeDocument",
    "Experience",
    "Education",
    "Project",
    # External collaborators
    "ContentService",
    "MatchReport",
    "RewriteResult",
    "TailorResult",
    "extract_text",
    # Errors
    "ContentServiceError",
    "TextExtractionError",
]
