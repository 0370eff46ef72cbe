"""I/O utilities for loadorder.

This package provides safe, atomic file operations:
- core: atomic writes and directory creation
- json: package metadata documents
- yaml: resolver context files
- keyvalue: flat ``key = value`` settings and declaration files
"""
from __future__ import annotations

from .core import (
    PathLike,
    atomic_write,
    ensure_directory,
    read_text,
    write_text,
)
from .json import (
    read_json,
    write_json_atomic,
)
from .keyvalue import KeyValueFile, read_key_values
from .yaml import read_yaml

__all__ = [
    # core
    "PathLike",
    "ensure_directory",
    "atomic_write",
    "read_text",
    "write_text",
    # json
    "read_json",
    "write_json_atomic",
    # yaml
    "read_yaml",
    # key/value
    "KeyValueFile",
    "read_key_values",
]
