"""JSON files read under a shared lock and replaced atomically."""
from __future__ import annotations

import fcntl
import json
from pathlib import Path
from typing import Any

from .core import PathLike, atomic_write

_MISSING = object()


def read_json(path: PathLike, *, default: Any = _MISSING) -> Any:
    """Load the JSON document at ``path``.

    Raises:
        FileNotFoundError: the file is missing and no ``default`` was given
        json.JSONDecodeError: the file is not valid JSON
    """
    path = Path(path)
    if not path.exists():
        if default is _MISSING:
            raise FileNotFoundError(f"JSON file not found: {path}")
        return default

    with open(path, "r", encoding="utf-8") as f:
        fcntl.flock(f.fileno(), fcntl.LOCK_SH)
        try:
            return json.load(f)
        finally:
            fcntl.flock(f.fileno(), fcntl.LOCK_UN)


def write_json_atomic(path: PathLike, data: Any, *, indent: int = 2, sort_keys: bool = True) -> None:
    """Serialize ``data`` to ``path`` (non-ASCII text is written as-is)."""
    atomic_write(
        path,
        lambda f: json.dump(data, f, indent=indent, sort_keys=sort_keys, ensure_ascii=False),
    )


__all__ = ["read_json", "write_json_atomic"]
