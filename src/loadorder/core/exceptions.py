from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, Mapping


class LoadOrderError(Exception):
    """Base exception for loadorder."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class PackageError(LoadOrderError):
    """Raised for a problem with a single discovered package."""

    def __init__(
        self,
        message: str,
        *,
        package: str | None = None,
        path: Path | str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if package:
            ctx["package"] = package
        if path:
            ctx["path"] = str(path)
        super().__init__(message, context=ctx)


class InvalidPackageNameError(PackageError):
    """Raised when a package name contains characters outside [a-z0-9_]."""


class DeprecatedDeclarationError(PackageError):
    """Raised when deprecated declarations are configured to be fatal."""


class NameConflictError(LoadOrderError):
    """Raised when packages at the same precedence level share a name."""

    def __init__(self, conflicts: Iterable[str]) -> None:
        names = sorted(conflicts)
        message = "Unresolved name conflicts for mods " + ", ".join(f'"{n}"' for n in names) + "."
        super().__init__(message, context={"conflicts": names})
        self.conflicts = names


class MetadataError(LoadOrderError):
    """Raised when package metadata cannot be read or written."""


__all__ = [
    "LoadOrderError",
    "PackageError",
    "InvalidPackageNameError",
    "DeprecatedDeclarationError",
    "NameConflictError",
    "MetadataError",
]
