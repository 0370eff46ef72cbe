"""
loadorder data resource helpers.

Provides access to bundled schemas using importlib.resources.
"""

from __future__ import annotations

from importlib import resources
from pathlib import Path


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """
    Get absolute path to a data file or directory.

    Example:
        >>> get_data_path("schemas", "context.schema.yaml")
        PosixPath('/path/to/loadorder/data/schemas/context.schema.yaml')
    """
    pkg = resources.files("loadorder.data")
    base = Path(str(pkg / subpackage))
    return base / filename if filename else base


__all__ = ["get_data_path"]
