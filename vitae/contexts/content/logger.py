"""
Content context logger.

Provides logging interface for the content context (generate / rewrite / tailor, text extraction) with an automatic
[content] prefix. All content modules import from this module, not from loguru directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from vitae.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[content]"


def setup_content_logger(log_dir: Optional[Path] = None, **provenance: str) -> Path:
    """
    Setup logger for the content context.

    Args:
        log_dir: Directory for this session (defaults to LOGS_PATH)
        **provenance: Extra provenance header fields

    Returns:
        Path to log file
    """
    return _setup_logger(context_name="content", log_dir=log_dir, extra_provenance=provenance)


# Wrapper functions with automatic [content] prefix


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
