"""
Best-effort text extraction from uploaded résumé files.

Supported inputs: PDF (pdfplumber), DOCX (python-docx), plain text/markdown.
Extraction that yields fewer than MIN_USABLE_LENGTH characters is rejected so
the rewrite step never runs on a near-empty or truncated document.
"""

from pathlib import Path
from typing import Callable, Dict, Union

import docx

from vitae.contexts.content.exceptions import TextExtractionError
from vitae.contexts.content.logger import _log_debug, _log_info, _log_warning
from vitae.utils.pdf_processing import extract_pdf_text

MIN_USABLE_LENGTH = 50


def _extract_docx(path: Path) -> str:
    document = docx.Document(str(path))
    lines = [paragraph.text for paragraph in document.paragraphs]
    # Table cells hold the content of many two-column résumé templates
    for table in document.tables:
        for row in table.rows:
            lines.extend(cell.text for cell in row.cells)
    return "\n".join(line for line in lines if line.strip())


def _extract_plaintext(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


EXTRACTORS: Dict[str, Callable[[Path], str]] = {
    ".pdf": extract_pdf_text,
    ".docx": _extract_docx,
    ".txt": _extract_plaintext,
    ".md": _extract_plaintext,
}


def extract_text(file_path: Union[str, Path]) -> str:
    """
    Extract the text content of an uploaded résumé file.

    Args:
        file_path: Path to a .pdf, .docx, .txt or .md file

    Returns:
        Extracted text, stripped

    Raises:
        TextExtractionError: If the file is missing, of an unsupported type,
            unreadable, or yields fewer than MIN_USABLE_LENGTH characters
    """
    path = Path(file_path)
    if not path.exists():
        raise TextExtractionError("File not found", source_path=path)

    extractor = EXTRACTORS.get(path.suffix.lower())
    if extractor is None:
        supported = ", ".join(sorted(EXTRACTORS))
        raise TextExtractionError(
            f"Unsupported file type '{path.suffix}'. Supported: {supported}", source_path=path
        )

    _log_debug(f"Extracting text from {path.name} with {extractor.__name__}")
    try:
        text = extractor(path).strip()
    except Exception as e:
        _log_warning(f"Extraction failed for {path.name}: {e}")
        raise TextExtractionError(
            "Could not extract text from this file. Please paste your résumé content manually.",
            source_path=path,
        ) from e

    if len(text) < MIN_USABLE_LENGTH:
        raise TextExtractionError(
            f"Could not extract enough text ({len(text)} characters, need {MIN_USABLE_LENGTH}). "
            "Please paste your résumé content manually.",
            source_path=path,
        )

    _log_info(f"Extracted {len(text)} characters from {path.name}")
    return text
