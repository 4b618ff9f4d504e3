"""
PDF Capture

Exports a rendered document as a multi-page A4 PDF. Rasterization itself is an
external capability: the caller supplies a function that draws the rendered
document (typically its HTML preview) as one tall image at a given scale. This
module slices that image into A4-proportioned pages and writes them as a PDF.
"""

import math
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

from dotenv import load_dotenv
from PIL import Image

from vitae.contexts.rendering.logger import (
    _log_debug,
    log_export_result,
    log_export_start,
)
from vitae.contexts.rendering.renderer import RenderedDocument
from vitae.utils.pdf_processing import page_count

load_dotenv()
PDF_SCALE = float(os.getenv("VITAE_PDF_SCALE", "2"))

A4_WIDTH_MM = 210
A4_HEIGHT_MM = 297
MM_PER_INCH = 25.4

# (rendered document, scale) -> one image of the whole document
Rasterizer = Callable[[RenderedDocument, float], Image.Image]


@dataclass
class ExportResult:
    """
    Result of a PDF export.

    Attributes:
        success: Whether the PDF was written
        pdf_path: Path to the written PDF (None if failed)
        page_count: Pages in the written PDF (None if unavailable)
        elapsed_s: Wall time of the export
        error: Error description when the export failed
    """

    success: bool
    pdf_path: Optional[Path] = None
    page_count: Optional[int] = None
    elapsed_s: float = 0.0
    error: Optional[str] = None


def page_height_for(width: int) -> int:
    """Height in pixels of an A4 page rendered at the given pixel width."""
    return round(width * A4_HEIGHT_MM / A4_WIDTH_MM)


def _flatten(image: Image.Image) -> Image.Image:
    """RGB copy of image, transparent areas composited onto white."""
    if image.mode in ("RGBA", "LA") or "transparency" in image.info:
        rgba = image.convert("RGBA")
        background = Image.new("RGB", rgba.size, "white")
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    return image.convert("RGB")


def paginate(image: Image.Image) -> List[Image.Image]:
    """
    Slice a tall page image into A4-proportioned pages.

    Pages are as wide as the image; the last page is padded with white. An
    image with no height still yields one blank page.
    """
    image = _flatten(image)
    width, height = image.size
    page_height = page_height_for(width)
    num_pages = max(1, math.ceil(height / page_height))

    pages = []
    for index in range(num_pages):
        top = index * page_height
        page = Image.new("RGB", (width, page_height), "white")
        if top < height:
            page.paste(image.crop((0, top, width, min(top + page_height, height))), (0, 0))
        pages.append(page)
    return pages


def capture_to_pdf(
    rendered: RenderedDocument,
    output_path: Path,
    rasterize: Rasterizer,
    scale: float = PDF_SCALE,
) -> ExportResult:
    """
    Rasterize a rendered document and write it as a multi-page A4 PDF.

    Never raises: a failure anywhere in rasterization or writing is reported
    through ExportResult.error. Pages are written to a temporary sibling that
    replaces output_path only once it is complete, so a failed export leaves any
    earlier file at output_path untouched.

    Args:
        rendered: Visual tree to capture
        output_path: Destination .pdf path (parent directories are created)
        rasterize: External rasterizer returning one image of the whole document
        scale: Device pixel scale handed to the rasterizer

    Returns:
        ExportResult
    """
    output_path = Path(output_path)
    partial_path = output_path.with_name(output_path.name + ".tmp")
    log_export_start(rendered.header.full_name, output_path, scale)
    start = time.time()

    try:
        image = rasterize(rendered, scale)
        pages = paginate(image)
        dpi = pages[0].width / (A4_WIDTH_MM / MM_PER_INCH)
        _log_debug(f"Rasterized {image.width}x{image.height}px into {len(pages)} page(s) at {dpi:.0f} dpi")

        output_path.parent.mkdir(parents=True, exist_ok=True)
        pages[0].save(
            partial_path, "PDF", save_all=True, append_images=pages[1:], resolution=dpi
        )
        partial_path.replace(output_path)
    except Exception as e:
        if partial_path.exists():
            partial_path.unlink()
        result = ExportResult(success=False, elapsed_s=time.time() - start, error=str(e))
        log_export_result(result)
        return result

    result = ExportResult(
        success=True,
        pdf_path=output_path,
        page_count=page_count(output_path),
        elapsed_s=time.time() - start,
    )
    log_export_result(result)
    return result
