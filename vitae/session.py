"""
Editing Session

Wires the contexts together for one interactive editor: the persisted theme
selection and customization, the résumé document being edited, the field
editor, and the optional external collaborators (content service, record
store).

External calls never raise out of the session. When one fails, the document
and the rest of the session state are left as they were and a single
Notification describing the failure is stored in last_notification.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from vitae.contexts.content import (
    ContentService,
    ContentServiceError,
    MatchReport,
    ResumeDocument,
    TextExtractionError,
    extract_text,
)
from vitae.contexts.editing import FieldEditor, locate
from vitae.contexts.editing.logger import _log_error, _log_info, _log_success
from vitae.contexts.rendering import (
    ExportResult,
    RenderedDocument,
    capture_to_pdf,
    render_document,
    render_html,
)
from vitae.contexts.rendering.pdf_export import PDF_SCALE, Rasterizer
from vitae.contexts.theming import (
    CustomizationStore,
    ResolvedStyle,
    Theme,
    ThemeSelectionStore,
    resolve_style,
)
from vitae.utils.local_storage import LocalStorage
from vitae.utils.resume_records import RecordStoreError, ResumeRecord, ResumeRecordStore


@dataclass
class Notification:
    """
    User-facing message about the outcome of a session operation.

    Attributes:
        title: Short headline
        message: Detail line
        level: "success", "info" or "error"
    """

    title: str
    message: str
    level: str = "info"


class EditorSession:
    """
    Application context for editing, theming and exporting one résumé.

    Args:
        storage: Durable key/value state (defaults to LocalStorage at VITAE_STATE_PATH)
        content_service: Content generation collaborator, if available
        record_store: Saved-résumé persistence, if available
    """

    def __init__(
        self,
        storage: Optional[LocalStorage] = None,
        content_service: Optional[ContentService] = None,
        record_store: Optional[ResumeRecordStore] = None,
    ):
        self.storage = storage if storage is not None else LocalStorage()
        self.theme_selection = ThemeSelectionStore(self.storage)
        self.customization = CustomizationStore(self.storage)
        self.content_service = content_service
        self.record_store = record_store

        self.document = ResumeDocument()
        self.original_content: Any = None
        self.record_id: Optional[str] = None
        self.editor = FieldEditor(self.document)

        self.is_exporting = False
        self.last_notification: Optional[Notification] = None

    def _notify(self, title: str, message: str, level: str = "info") -> None:
        self.last_notification = Notification(title=title, message=message, level=level)
        if level == "error":
            _log_error(f"{title}: {message}")
        else:
            _log_info(f"{title}: {message}")

    # --- Theme & style ---

    @property
    def theme(self) -> Theme:
        return self.theme_selection.theme

    def select_theme(self, theme_id: str) -> Theme:
        """
        Raises:
            UnknownThemeError: If theme_id is not in the catalog
        """
        theme = self.theme_selection.select(theme_id)
        _log_info(f"Theme selected: {theme.name}")
        return theme

    def resolved_style(self) -> ResolvedStyle:
        return resolve_style(self.theme, self.customization.customization, self.customization.flags)

    def render(self) -> RenderedDocument:
        """Render the current document with the current theme and customization."""
        return render_document(self.document, self.resolved_style(), self.customization.customization)

    def render_html(self) -> str:
        return render_html(self.render())

    # --- Document & editing ---

    def load_document(
        self,
        document: ResumeDocument,
        original_content: Any = None,
        record_id: Optional[str] = None,
    ) -> None:
        """Replace the current document; any field in edit mode is abandoned."""
        self.document = document
        self.original_content = original_content
        self.record_id = record_id
        self.editor = FieldEditor(document)

    def start_edit(self, field_path: str, current_value: Optional[str] = None) -> None:
        """Put a field into edit mode, seeded with its current text unless given."""
        if current_value is None:
            target = locate(self.document, field_path)
            if target is None:
                current_value = ""
            else:
                container, key = target
                current_value = container[key] if isinstance(container, list) else getattr(container, key)
        self.editor.start_edit(field_path, current_value)

    def commit_edit(self, new_value: Optional[str] = None) -> bool:
        return self.editor.commit(new_value)

    # --- Content service ---

    def _require_content_service(self, title: str) -> bool:
        if self.content_service is None:
            self._notify(title, "No content service is configured", level="error")
            return False
        return True

    def generate_resume(self, form_input: Dict[str, Any]) -> bool:
        """Generate a résumé from form input and make it the current document."""
        title = "Generation failed"
        if not self._require_content_service(title):
            return False
        try:
            document = self.content_service.generate(form_input)
        except ContentServiceError as e:
            self._notify(title, e.message, level="error")
            return False

        self.load_document(document, original_content=form_input)
        self._notify("Resume generated", "Your résumé is ready for editing", level="success")
        return True

    def improve_resume(self, raw_text: str) -> Optional[List[str]]:
        """
        Rewrite free-text résumé content into the current document.

        Returns:
            The list of improvements made, or None on failure
        """
        title = "Improvement failed"
        if not self._require_content_service(title):
            return None
        try:
            result = self.content_service.rewrite(raw_text)
        except ContentServiceError as e:
            self._notify(title, e.message, level="error")
            return None

        self.load_document(result.document, original_content=raw_text)
        self._notify(
            "Resume improved", f"{len(result.improvements)} improvement(s) applied", level="success"
        )
        return result.improvements

    def tailor_resume(self, job_text: str) -> Optional[MatchReport]:
        """
        Tailor the current document to a job description.

        The tailored document replaces the current one but keeps its record id,
        so a later save updates the same record.

        Returns:
            The match report, or None on failure
        """
        title = "Tailoring failed"
        if not self._require_content_service(title):
            return None
        try:
            result = self.content_service.tailor(self.document, job_text)
        except ContentServiceError as e:
            self._notify(title, e.message, level="error")
            return None

        self.load_document(result.document, self.original_content, self.record_id)
        report = result.match_report
        self._notify(
            "Resume tailored", f"Match score {report.score}% ({report.score_label})", level="success"
        )
        return report

    def import_file(self, file_path: Union[str, Path]) -> Optional[str]:
        """
        Extract text from an uploaded résumé file.

        Returns:
            Extracted text ready for improve_resume(), or None on failure
        """
        try:
            text = extract_text(file_path)
        except TextExtractionError as e:
            self._notify("Import failed", e.message, level="error")
            return None

        self._notify("File imported", f"Extracted {len(text)} characters", level="success")
        return text

    # --- Persistence ---

    def _require_record_store(self, title: str) -> bool:
        if self.record_store is None:
            self._notify(title, "No record store is configured", level="error")
            return False
        return True

    def save(self, title: Optional[str] = None) -> Optional[ResumeRecord]:
        """
        Save the current document, updating its record if it has one.

        Returns:
            The saved record, or None on failure
        """
        if not self._require_record_store("Save failed"):
            return None
        title = title or self.document.full_name or "Untitled Resume"

        try:
            if self.record_id is not None:
                record = self.record_store.update(
                    self.record_id, title=title, rendered_content=self.document.to_dict()
                )
            else:
                record = self.record_store.insert(
                    title, self.document.to_dict(), original_content=self.original_content
                )
        except RecordStoreError as e:
            self._notify("Save failed", str(e), level="error")
            return None

        self.record_id = record.id
        self._notify("Resume saved", title, level="success")
        return record

    def open_record(self, record_id: str) -> bool:
        """Load a saved résumé as the current document."""
        title = "Open failed"
        if not self._require_record_store(title):
            return False
        try:
            record = self.record_store.get(record_id)
        except RecordStoreError as e:
            self._notify(title, str(e), level="error")
            return False
        if record is None:
            self._notify(title, f"No saved résumé with id {record_id}", level="error")
            return False

        self.load_document(
            ResumeDocument.from_dict(record.rendered_content),
            original_content=record.original_content,
            record_id=record.id,
        )
        _log_success(f"Opened '{record.title}'")
        return True

    # --- Export ---

    def export_pdf(
        self, output_dir: Union[str, Path], rasterize: Rasterizer, scale: float = PDF_SCALE
    ) -> ExportResult:
        """
        Export the current render as <Full_Name>_Resume.pdf in output_dir.

        is_exporting is True for the duration of the capture.
        """
        output_path = Path(output_dir) / self.document.export_filename
        self.is_exporting = True
        try:
            result = capture_to_pdf(self.render(), output_path, rasterize, scale=scale)
        finally:
            self.is_exporting = False

        if result.success:
            self._notify("PDF downloaded", f"Saved to {result.pdf_path}", level="success")
        else:
            self._notify("Export failed", result.error or "Unknown error", level="error")
        return result
