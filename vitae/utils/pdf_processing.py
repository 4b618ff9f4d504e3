"""
PDF inspection helpers.

    page_count: Quick page count without full extraction.
    extract_pdf_text: Page-ordered text from a PDF via pdfplumber.
"""

from pathlib import Path
from typing import Optional

import pdfplumber
from PyPDF2 import PdfReader


def page_count(pdf_path: Path) -> Optional[int]:
    """Get page count from PDF, or None if unreadable."""
    try:
        reader = PdfReader(str(pdf_path))
        return len(reader.pages)
    except Exception:
        return None


def extract_pdf_text(pdf_path: Path) -> str:
    """
    Extract text from every page of a PDF, pages separated by newlines.

    Pages without a text layer (scanned images) contribute nothing.
    """
    with pdfplumber.open(str(pdf_path)) as pdf:
        pages = [page.extract_text() or "" for page in pdf.pages]
    return "\n".join(text for text in pages if text.strip())
