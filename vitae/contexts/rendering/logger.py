"""
Rendering context logger.

Provides logging interface for the rendering context (visual tree, HTML preview, PDF capture) with an automatic
[render] prefix. All rendering modules import from this module, not from loguru directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from vitae.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Optional[Path] = None, **provenance: str) -> Path:
    """
    Setup logger for the rendering context.

    Args:
        log_dir: Directory for this session (defaults to LOGS_PATH)
        **provenance: Extra provenance header fields

    Returns:
        Path to log file
    """
    return _setup_logger(context_name="render", log_dir=log_dir, extra_provenance=provenance)


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_export_start(full_name: str, output_path: Path, scale: float) -> None:
    """Log start of a PDF export."""
    _log_info(f"Exporting résumé for {full_name or '(unnamed)'}")
    _log_debug(f"Target: {output_path} (scale {scale})")


def log_export_result(result) -> None:
    """
    Log the outcome of a PDF export.

    Args:
        result: ExportResult from capture_to_pdf()
    """
    if result.success:
        _log_success(f"PDF written ({result.page_count} page(s), {result.elapsed_s:.2f}s)")
        _log_info(f"  Output: {result.pdf_path}")
    else:
        _log_error(f"PDF export failed ({result.elapsed_s:.2f}s)")
        _log_error(f"  Error: {result.error}")
