"""YAML reading for resolver context files."""
from __future__ import annotations

import fcntl
from pathlib import Path
from typing import Any

import yaml

from .core import PathLike


def read_yaml(path: PathLike, default: Any = None, raise_on_error: bool = False) -> Any:
    """Load the YAML document at ``path`` with ``yaml.safe_load``.

    A missing file, an unreadable or malformed file, and an empty document all
    yield ``default``. With ``raise_on_error`` the first two raise instead
    (``FileNotFoundError`` / ``OSError`` / ``yaml.YAMLError``); an empty
    document still returns ``default``.
    """
    path = Path(path)
    if not path.exists():
        if raise_on_error:
            raise FileNotFoundError(f"File not found: {path}")
        return default

    try:
        with open(path, "r", encoding="utf-8") as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_SH)
            try:
                data = yaml.safe_load(f)
            finally:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)
    except (OSError, yaml.YAMLError):
        if raise_on_error:
            raise
        return default
    return default if data is None else data


__all__ = ["read_yaml"]
