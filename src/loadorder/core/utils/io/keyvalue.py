"""Flat ``key = value`` files (mod declarations and enable settings).

Format:
- one ``key = value`` pair per line, split on the first ``=``
- keys and values are trimmed
- blank lines and lines starting with ``#`` are kept verbatim on save
- a key repeated later in the file overrides the earlier value

Saving rewrites values in place, drops repeated keys after their first
occurrence, and appends keys that were not in the file.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from .core import PathLike, read_text, write_text

logger = logging.getLogger(__name__)


def _parse_line(line: str) -> Optional[Tuple[str, str]]:
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None
    if "=" not in stripped:
        return None
    key, _, value = stripped.partition("=")
    key = key.strip()
    if not key:
        return None
    return key, value.strip()


class KeyValueFile:
    """In-memory view of a key/value file that can be written back."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else None
        self._lines: List[str] = []
        self._values: Dict[str, str] = {}
        self.modified = False

    @classmethod
    def load(cls, path: PathLike) -> "KeyValueFile":
        """Read ``path``; a missing file yields an empty instance bound to it."""
        kv = cls(Path(path))
        if kv.path.exists():
            kv.parse(read_text(kv.path))
        else:
            logger.debug("Key/value file %s does not exist; starting empty", kv.path)
        return kv

    @classmethod
    def from_string(cls, content: str) -> "KeyValueFile":
        kv = cls()
        kv.parse(content)
        return kv

    def parse(self, content: str) -> None:
        self._lines = content.splitlines()
        self._values = {}
        for line in self._lines:
            parsed = _parse_line(line)
            if parsed is None:
                continue
            key, value = parsed
            self._values[key] = value
        self.modified = False

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def names(self) -> List[str]:
        return list(self._values)

    def items(self) -> List[Tuple[str, str]]:
        return list(self._values.items())

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._values.get(key, default)

    def get_int(self, key: str, default: int = 0) -> int:
        """Return ``key`` as an integer, or ``default`` when absent or malformed."""
        raw = self._values.get(key)
        if raw is None:
            return default
        try:
            return int(raw)
        except ValueError:
            logger.debug("Value %r for %s is not an integer; using %d", raw, key, default)
            return default

    def set(self, key: str, value: str) -> None:
        if self._values.get(key) != value:
            self._values[key] = value
            self.modified = True

    def set_bool(self, key: str, value: bool) -> None:
        self.set(key, "true" if value else "false")

    def remove(self, key: str) -> bool:
        if key not in self._values:
            return False
        del self._values[key]
        self.modified = True
        return True

    def to_string(self) -> str:
        out: List[str] = []
        written: set = set()
        for line in self._lines:
            parsed = _parse_line(line)
            if parsed is None:
                out.append(line)
                continue
            key = parsed[0]
            if key in written or key not in self._values:
                continue
            out.append(f"{key} = {self._values[key]}")
            written.add(key)
        for key, value in self._values.items():
            if key not in written:
                out.append(f"{key} = {value}")
        return "\n".join(out) + "\n" if out else ""

    def save(self, path: Optional[PathLike] = None) -> None:
        """Atomically write the file back to ``path`` (defaults to where it was loaded)."""
        target = Path(path) if path is not None else self.path
        if target is None:
            raise ValueError("KeyValueFile has no path to save to")
        content = self.to_string()
        write_text(target, content)
        self._lines = content.splitlines()
        self.path = target
        self.modified = False


def read_key_values(path: PathLike) -> Dict[str, str]:
    """Return the key/value pairs of ``path`` (empty when the file is missing)."""
    return dict(KeyValueFile.load(path).items())


__all__ = ["KeyValueFile", "read_key_values"]
