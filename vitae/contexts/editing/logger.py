"""
Editing context logger.

Provides logging interface for the editing context (in-place field edits) with an automatic
[edit] prefix. All editing modules import from this module, not from loguru directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from vitae.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[edit]"


def setup_editing_logger(log_dir: Optional[Path] = None, **provenance: str) -> Path:
    """
    Setup logger for the editing context.

    Args:
        log_dir: Directory for this session (defaults to LOGS_PATH)
        **provenance: Extra provenance header fields

    Returns:
        Path to log file
    """
    return _setup_logger(context_name="edit", log_dir=log_dir, extra_provenance=provenance)


# Wrapper functions with automatic [edit] prefix


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
