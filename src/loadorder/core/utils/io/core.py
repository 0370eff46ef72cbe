"""Filesystem primitives shared by the settings, metadata and log writers.

Every write that replaces a user-visible file goes through ``atomic_write``:
readers either see the old content or the new content, never a prefix.
"""
from __future__ import annotations

import fcntl
import os
import tempfile
from pathlib import Path
from typing import Callable, TextIO, Union

PathLike = Union[str, Path]


def ensure_directory(path: PathLike) -> Path:
    """Create ``path`` (and parents) if missing and return it.

    Raises:
        NotADirectoryError: ``path`` exists and is a regular file
    """
    path = Path(path)
    if path.exists() and not path.is_dir():
        raise NotADirectoryError(f"Path exists but is not a directory: {path}")
    path.mkdir(parents=True, exist_ok=True)
    return path


def atomic_write(path: PathLike, write_fn: Callable[[TextIO], None], *, encoding: str = "utf-8") -> None:
    """Replace ``path`` with whatever ``write_fn`` writes to a sibling temp file."""
    path = Path(path)
    ensure_directory(path.parent)

    tmp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding=encoding,
            dir=str(path.parent),
            prefix=f".{path.name}.",
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            fcntl.flock(f.fileno(), fcntl.LOCK_EX)
            write_fn(f)
            f.flush()
            os.fsync(f.fileno())
            fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        os.replace(tmp_path, path)
        tmp_path = None
    finally:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)


def read_text(path: PathLike) -> str:
    """Read a text file written by package authors.

    Undecodable bytes are replaced rather than raised; declaration files are
    not guaranteed to be UTF-8.
    """
    return Path(path).read_text(encoding="utf-8", errors="replace")


def write_text(path: PathLike, content: str) -> None:
    """Atomically write UTF-8 text to ``path``."""
    atomic_write(path, lambda f: f.write(content))


__all__ = [
    "PathLike",
    "atomic_write",
    "ensure_directory",
    "read_text",
    "write_text",
]
