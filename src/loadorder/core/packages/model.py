from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Set

from loadorder.core.exceptions import DeprecatedDeclarationError, InvalidPackageNameError

PACKAGE_NAME_PATTERN = re.compile(r"[a-z0-9_]+")
PACKAGE_NAME_ALLOWED_CHARS = frozenset("abcdefghijklmnopqrstuvwxyz0123456789_")

DEPRECATED_HANDLING_ENV = "LOADORDER_DEPRECATED_HANDLING"


class DeprecatedHandlingMode(str, Enum):
    """How deprecation notices from legacy declarations are surfaced."""

    IGNORE = "ignore"
    LOG = "log"
    ERROR = "error"

    @classmethod
    def parse(cls, value: Optional[str], default: Optional["DeprecatedHandlingMode"] = None) -> "DeprecatedHandlingMode":
        if value is None or not str(value).strip():
            return default if default is not None else cls.LOG
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            choices = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown deprecated handling mode '{value}' (expected one of: {choices})") from exc

    @classmethod
    def from_env(cls, default: Optional["DeprecatedHandlingMode"] = None) -> "DeprecatedHandlingMode":
        return cls.parse(os.environ.get(DEPRECATED_HANDLING_ENV), default)


def is_valid_package_name(name: str) -> bool:
    return bool(PACKAGE_NAME_PATTERN.fullmatch(name or ""))


@dataclass
class PackageSpec:
    """A discovered package (or package group) and its declared dependencies."""

    name: str
    path: Path
    part_of_group: bool = False
    is_group: bool = False
    group_members: Dict[str, "PackageSpec"] = field(default_factory=dict)
    author: str = ""
    release: int = 0
    description: str = ""
    mandatory_deps: List[str] = field(default_factory=list)
    optional_deps: List[str] = field(default_factory=list)
    unsatisfied_mandatory: Set[str] = field(default_factory=set)
    unsatisfied_optional: Set[str] = field(default_factory=set)
    deprecation_notices: List[str] = field(default_factory=list)

    def add_mandatory(self, name: str) -> None:
        if name and name not in self.mandatory_deps:
            self.mandatory_deps.append(name)

    def add_optional(self, name: str) -> None:
        if name and name not in self.optional_deps:
            self.optional_deps.append(name)

    def to_dict(self) -> Dict[str, object]:
        data: Dict[str, object] = {
            "name": self.name,
            "path": str(self.path),
            "partOfGroup": self.part_of_group,
            "author": self.author,
            "release": self.release,
            "description": self.description,
            "depends": list(self.mandatory_deps),
            "optionalDepends": list(self.optional_deps),
        }
        if self.unsatisfied_mandatory:
            data["unsatisfiedDepends"] = sorted(self.unsatisfied_mandatory)
        if self.unsatisfied_optional:
            data["unsatisfiedOptionalDepends"] = sorted(self.unsatisfied_optional)
        if self.deprecation_notices:
            data["deprecations"] = list(self.deprecation_notices)
        return data


def finalize_spec(
    spec: PackageSpec,
    mode: DeprecatedHandlingMode = DeprecatedHandlingMode.LOG,
) -> Optional[str]:
    """Validate ``spec.name`` and apply the deprecation policy.

    Returns the deprecation report to surface as a warning, or None for
    ``IGNORE`` and for packages without notices.

    Raises:
        InvalidPackageNameError: name contains characters outside [a-z0-9_]
        DeprecatedDeclarationError: notices present and ``mode`` is ``ERROR``
    """
    if not is_valid_package_name(spec.name):
        raise InvalidPackageNameError(
            f'Error loading mod "{spec.name}": Mod name does not follow naming conventions: '
            "Only characters [a-z0-9_] are allowed.",
            package=spec.name,
            path=spec.path,
        )

    if not spec.deprecation_notices or mode is DeprecatedHandlingMode.IGNORE:
        return None

    report = [f"Mod {spec.name} at {spec.path}:"] + [f"\t{msg}" for msg in spec.deprecation_notices]
    if mode is DeprecatedHandlingMode.ERROR:
        raise DeprecatedDeclarationError(
            "\n".join(report),
            package=spec.name,
            path=spec.path,
            context={"deprecations": list(spec.deprecation_notices)},
        )
    return "\n".join(report)


__all__ = [
    "PACKAGE_NAME_ALLOWED_CHARS",
    "PACKAGE_NAME_PATTERN",
    "DEPRECATED_HANDLING_ENV",
    "DeprecatedHandlingMode",
    "PackageSpec",
    "finalize_spec",
    "is_valid_package_name",
]
