"""Per-package string metadata persisted as one JSON object per package.

Metadata for package ``foo`` lives at ``<root>/foo``. Values are always
strings; non-string JSON values are loaded as their JSON text.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Optional

from loadorder.core.exceptions import MetadataError
from loadorder.core.utils.io import ensure_directory, read_json, write_json_atomic

logger = logging.getLogger(__name__)


class PackageMetadata:
    """Flat string map owned by a single package."""

    def __init__(self, package_name: str) -> None:
        self.package_name = package_name
        self._values: Dict[str, str] = {}
        self.modified = False

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._values.get(key, default)

    def set(self, key: str, value: str) -> bool:
        """Set ``key``; an empty value removes it. Returns True if anything changed."""
        if value == "":
            return self.remove(key)
        if self._values.get(key) == value:
            return False
        self._values[key] = value
        self.modified = True
        return True

    def remove(self, key: str) -> bool:
        if key not in self._values:
            return False
        del self._values[key]
        self.modified = True
        return True

    def clear(self) -> None:
        self._values.clear()
        self.modified = True

    def to_dict(self) -> Dict[str, str]:
        return dict(self._values)

    def _file(self, root: Path) -> Path:
        return Path(root) / self.package_name

    def save(self, root: Path) -> None:
        """Write the metadata under ``root``, creating the directory if needed.

        Raises:
            MetadataError: ``root`` exists but is not a directory, or the write fails
        """
        try:
            ensure_directory(Path(root))
            write_json_atomic(self._file(root), self._values)
        except OSError as exc:
            raise MetadataError(
                f"Unable to save metadata for {self.package_name}: {exc}",
                context={"package": self.package_name, "root": str(root)},
            ) from exc
        self.modified = False

    def load(self, root: Path) -> bool:
        """Replace the current values with those stored under ``root``.

        Returns False when no metadata file exists.

        Raises:
            MetadataError: the file is not a JSON object
        """
        self._values = {}
        path = self._file(root)
        try:
            data = read_json(path, default=None)
        except json.JSONDecodeError as exc:
            raise MetadataError(
                f"Failed to read metadata for {self.package_name} (JSON decoding failure): {exc}",
                context={"package": self.package_name, "path": str(path)},
            ) from exc
        if data is None:
            return False
        if not isinstance(data, dict):
            raise MetadataError(
                f"Metadata for {self.package_name} must be a JSON object",
                context={"package": self.package_name, "path": str(path)},
            )
        self._values = {str(k): v if isinstance(v, str) else json.dumps(v) for k, v in data.items()}
        self.modified = False
        logger.debug("Loaded %d metadata entries for %s", len(self._values), self.package_name)
        return True


__all__ = ["PackageMetadata"]
