"""Process-wide stdlib logging setup used by the CLI.

Library modules only create ``logging.getLogger(__name__)`` loggers; handlers
are installed here, once per process.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from loadorder.core.utils.io import ensure_directory

_LOADORDER_HANDLER: logging.Handler | None = None

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
FILE_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(*, level: str = "WARNING", log_path: Optional[Path] = None) -> None:
    """Send loadorder logs to stderr, or to ``log_path`` when given.

    Idempotent: calling again replaces the handler installed previously.
    """
    global _LOADORDER_HANDLER

    root = logging.getLogger()
    root.setLevel(_level_from_name(level))

    if _LOADORDER_HANDLER is not None:
        root.removeHandler(_LOADORDER_HANDLER)
        _LOADORDER_HANDLER.close()
        _LOADORDER_HANDLER = None

    handler: logging.Handler
    if log_path is not None:
        resolved = Path(log_path).resolve()
        ensure_directory(resolved.parent)
        handler = logging.FileHandler(resolved, encoding="utf-8")
        handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.setLevel(_level_from_name(level))
    root.addHandler(handler)
    _LOADORDER_HANDLER = handler


def reset_logging_for_tests() -> None:
    """Test-only: remove the handler installed by ``configure_logging``."""
    global _LOADORDER_HANDLER
    if _LOADORDER_HANDLER is not None:
        logging.getLogger().removeHandler(_LOADORDER_HANDLER)
        _LOADORDER_HANDLER.close()
        _LOADORDER_HANDLER = None


__all__ = ["configure_logging", "reset_logging_for_tests"]
