"""Package specs, declaration parsing and discovery.

This package stays dependency-lite (no resolution imports) so discovery can
be used on its own.
"""

from .declaration import parse_depends_line, parse_package_contents
from .discovery import discover, discover_flat, flatten
from .metadata import PackageMetadata
from .model import DeprecatedHandlingMode, PackageSpec, finalize_spec, is_valid_package_name

__all__ = [
    "DeprecatedHandlingMode",
    "PackageMetadata",
    "PackageSpec",
    "discover",
    "discover_flat",
    "finalize_spec",
    "flatten",
    "is_valid_package_name",
    "parse_depends_line",
    "parse_package_contents",
]
