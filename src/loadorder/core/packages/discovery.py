"""Package discovery across a single search root.

Every immediate subdirectory of a root is a candidate package; hidden
directories (``.git``, ``.svn``...) are skipped. Groups nest arbitrarily deep
and are expanded by ``flatten``.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Mapping

from loadorder.core.packages.declaration import parse_package_contents
from loadorder.core.packages.model import PackageSpec

logger = logging.getLogger(__name__)


def discover(root: Path, part_of_group: bool = False) -> Dict[str, PackageSpec]:
    """Return ``directory name -> PackageSpec`` for every package under ``root``."""
    root = Path(root)
    result: Dict[str, PackageSpec] = {}
    if not root.is_dir():
        logger.debug("Search root %s does not exist; no packages discovered", root)
        return result

    for child in sorted(root.iterdir(), key=lambda p: p.name):
        if not child.is_dir():
            continue
        if child.name.startswith("."):
            continue
        spec = PackageSpec(name=child.name, path=child, part_of_group=part_of_group)
        parse_package_contents(spec)
        result[child.name] = spec
    return result


def flatten(packages: Mapping[str, PackageSpec]) -> List[PackageSpec]:
    """Expand groups into their (recursively flattened) members."""
    result: List[PackageSpec] = []
    for spec in packages.values():
        if spec.is_group:
            result.extend(flatten(spec.group_members))
        else:
            result.append(spec)
    return result


def discover_flat(root: Path) -> List[PackageSpec]:
    """Convenience: ``flatten(discover(root))``."""
    return flatten(discover(root))


__all__ = ["discover", "flatten", "discover_flat"]
