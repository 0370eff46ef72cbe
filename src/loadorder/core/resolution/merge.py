"""Merge package lists contributed by successive search layers.

Each call to ``PackageSetMerger.merge`` is one precedence level, applied in
low → high order. Within a call, group members are placed before loose
packages so a loose package of the same name can still override them.

Outcomes for an incoming package whose name is already known:

- not yet seen in this pass: override (the earlier entry will not load) and
  clear any conflict recorded by an earlier level
- already seen in this pass: same-level conflict; the later entry is kept in
  the working set but the name stays conflicted until a later level overrides it
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Set

from loadorder.core.packages.model import PackageSpec

logger = logging.getLogger(__name__)


class PackageSetMerger:
    """Accumulates the working package set and its unresolved name conflicts."""

    def __init__(self) -> None:
        self.packages: List[PackageSpec] = []
        self.conflicts: Set[str] = set()
        self._index: Dict[str, int] = {}

    def merge(self, incoming: Iterable[PackageSpec]) -> List[PackageSpec]:
        new_packages = list(incoming)
        for from_group in (True, False):
            seen_this_iteration: Set[str] = set()
            for spec in new_packages:
                if spec.part_of_group != from_group:
                    continue

                index = self._index.get(spec.name)
                if index is None:
                    self._index[spec.name] = len(self.packages)
                    self.packages.append(spec)
                elif spec.name not in seen_this_iteration:
                    old = self.packages[index]
                    logger.warning(
                        'Mod name conflict detected: "%s"\nWill not load: %s\nOverridden by: %s',
                        spec.name,
                        old.path,
                        spec.path,
                    )
                    self.packages[index] = spec
                    self.conflicts.discard(spec.name)
                else:
                    old = self.packages[index]
                    logger.warning(
                        'Mod name conflict detected: "%s"\nWill not load: %s\nWill not load: %s',
                        spec.name,
                        old.path,
                        spec.path,
                    )
                    self.packages[index] = spec
                    self.conflicts.add(spec.name)

                seen_this_iteration.add(spec.name)
        return list(self.packages)


__all__ = ["PackageSetMerger"]
