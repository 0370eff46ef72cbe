"""Per-package declaration parsing.

A package directory declares itself through ``mod.conf``. Older layouts are
still read but each legacy source used leaves a deprecation notice on the
spec:

- ``depends.txt``: one dependency per line, a trailing ``?`` marks it optional
- ``description.txt``: plain-text description

A directory containing ``modpack.conf`` (or the legacy ``modpack.txt``) is a
group: its subdirectories are discovered as member packages and nothing else
is parsed.

Parsing never validates the package name; see ``finalize_spec``.
"""
from __future__ import annotations

import logging
import re
from typing import List, Set, Tuple

from loadorder.core.packages.model import PACKAGE_NAME_ALLOWED_CHARS, PackageSpec
from loadorder.core.utils.io import KeyValueFile, read_text

logger = logging.getLogger(__name__)

DECLARATION_FILE = "mod.conf"
GROUP_MARKER_FILES = ("modpack.txt", "modpack.conf")
LEGACY_DEPENDS_FILE = "depends.txt"
LEGACY_DESCRIPTION_FILE = "description.txt"

MISSING_NAME_NOTICE = "Mods not having a mod.conf file with the name is deprecated."
LEGACY_DEPENDS_NOTICE = "depends.txt is deprecated, please use mod.conf instead."
LEGACY_DESCRIPTION_NOTICE = "description.txt is deprecated, please use mod.conf instead."

_WHITESPACE = re.compile(r"\s+")


def parse_depends_line(line: str) -> Tuple[str, Set[str]]:
    """Split a ``depends.txt`` line into the bare name and its trailing modifiers.

    >>> parse_depends_line("  default? ")
    ('default', {'?'})
    """
    dep = line.strip()
    pos = len(dep)
    symbols: Set[str] = set()
    while pos > 0 and dep[pos - 1] not in PACKAGE_NAME_ALLOWED_CHARS:
        symbols.add(dep[pos - 1])
        pos -= 1
    return dep[:pos].strip(), symbols


def split_depends_field(value: str) -> List[str]:
    """Split a comma-separated ``depends`` value, ignoring all whitespace."""
    compact = _WHITESPACE.sub("", value)
    return [dep for dep in compact.split(",") if dep]


def is_group_directory(spec: PackageSpec) -> bool:
    return any((spec.path / marker).is_file() for marker in GROUP_MARKER_FILES)


def _read_legacy_depends(spec: PackageSpec) -> None:
    depends_path = spec.path / LEGACY_DEPENDS_FILE
    if not depends_path.is_file():
        return

    spec.deprecation_notices.append(LEGACY_DEPENDS_NOTICE)
    for line in read_text(depends_path).splitlines():
        name, symbols = parse_depends_line(line)
        if not name:
            continue
        if "?" in symbols:
            spec.add_optional(name)
        else:
            spec.add_mandatory(name)


def parse_package_contents(spec: PackageSpec) -> PackageSpec:
    """Populate ``spec`` from the files in ``spec.path`` and return it."""
    # Mutually recursive with discovery.discover (groups contain packages).
    from loadorder.core.packages.discovery import discover

    spec.mandatory_deps = []
    spec.optional_deps = []
    spec.is_group = False
    spec.group_members = {}

    if is_group_directory(spec):
        spec.is_group = True
        spec.group_members = discover(spec.path, part_of_group=True)
        return spec

    info = KeyValueFile.load(spec.path / DECLARATION_FILE)

    if "name" in info:
        spec.name = info.get("name") or ""
    else:
        spec.deprecation_notices.append(MISSING_NAME_NOTICE)

    if "author" in info:
        spec.author = info.get("author") or ""

    if "release" in info:
        spec.release = info.get_int("release")

    has_depends = False
    if "depends" in info:
        has_depends = True
        for dep in split_depends_field(info.get("depends") or ""):
            spec.add_mandatory(dep)

    if "optional_depends" in info:
        has_depends = True
        for dep in split_depends_field(info.get("optional_depends") or ""):
            spec.add_optional(dep)

    if not has_depends:
        _read_legacy_depends(spec)

    description_path = spec.path / LEGACY_DESCRIPTION_FILE
    if "description" in info:
        spec.description = info.get("description") or ""
    elif description_path.is_file():
        spec.description = read_text(description_path)
        spec.deprecation_notices.append(LEGACY_DESCRIPTION_NOTICE)

    logger.debug(
        "Parsed package %s at %s (depends=%s, optional=%s)",
        spec.name,
        spec.path,
        spec.mandatory_deps,
        spec.optional_deps,
    )
    return spec


__all__ = [
    "DECLARATION_FILE",
    "GROUP_MARKER_FILES",
    "LEGACY_DEPENDS_FILE",
    "LEGACY_DESCRIPTION_FILE",
    "is_group_directory",
    "parse_depends_line",
    "parse_package_contents",
    "split_depends_field",
]
