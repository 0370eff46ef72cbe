"""Dependency resolution for a merged package set.

The traversal is a post-order depth-first walk over packages in name order.
A package is appended to the resolved order once all of its mandatory and
optional dependencies that exist have been walked, so the resolved order is
a valid topological order. Names are marked seen before they are expanded;
a name reached again after the cycle it belongs to has unwound is neither
revisited nor reported a second time.

A missing optional dependency is only reported when its name is known to
the set: a package in it, or somebody's mandatory dependency. Optional
names nobody else mentions are silently ignored.

The walk uses an explicit frame stack, so deep dependency chains are bounded
by memory rather than the interpreter recursion limit.
"""
from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Set, Tuple

from loadorder.core.packages.model import PackageSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CircularDependency:
    """A back-edge found during traversal: ``name`` was already on ``chain``."""

    name: str
    chain: Tuple[str, ...]


@dataclass(frozen=True)
class ResolutionResult:
    sorted_packages: Tuple[PackageSpec, ...] = ()
    unsatisfied_packages: Tuple[PackageSpec, ...] = ()
    packages_with_unsatisfied_optionals: Tuple[PackageSpec, ...] = ()
    circular_dependencies: Tuple[CircularDependency, ...] = ()
    name_conflicts: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def load_order(self) -> List[str]:
        return [spec.name for spec in self.sorted_packages]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "loadOrder": self.load_order,
            "unsatisfied": {
                spec.name: sorted(spec.unsatisfied_mandatory) for spec in self.unsatisfied_packages
            },
            "unsatisfiedOptional": {
                spec.name: sorted(spec.unsatisfied_optional)
                for spec in self.packages_with_unsatisfied_optionals
            },
            "circular": [
                {"name": cd.name, "chain": list(cd.chain)} for cd in self.circular_dependencies
            ],
            "nameConflicts": sorted(self.name_conflicts),
        }


@dataclass
class _Frame:
    name: str
    children: List[Tuple[str, bool]]  # (name, reached through an optional edge)
    index: int = 0


class DependencyResolver:
    """Single-use resolver; ``run`` may be called once per instance."""

    def __init__(self, packages: Iterable[PackageSpec]) -> None:
        self._by_name: Dict[str, PackageSpec] = {}
        for spec in packages:
            # Work on copies so callers' specs keep their pre-resolution state.
            self._by_name[spec.name] = dataclasses.replace(
                spec,
                unsatisfied_mandatory=set(),
                unsatisfied_optional=set(),
            )
        self._chain: List[str] = []
        self._on_chain: Set[str] = set()
        self._frames: List[_Frame] = []
        self._seen: Set[str] = set()
        self._known: Set[str] = set()
        self._resolved: List[str] = []
        self.circular_dependencies: List[CircularDependency] = []

    def _enter(self, name: str, optional: bool = False) -> None:
        if not optional:
            self._known.add(name)
        if name in self._on_chain:
            self.circular_dependencies.append(CircularDependency(name, tuple(self._chain)))
            return
        if name in self._seen:
            return

        self._seen.add(name)
        self._chain.append(name)
        self._on_chain.add(name)
        spec = self._by_name.get(name)
        children: List[Tuple[str, bool]] = []
        if spec is not None:
            children = [(dep, False) for dep in spec.mandatory_deps] + [(dep, True) for dep in spec.optional_deps]
        self._frames.append(_Frame(name, children))

    def _visit(self, root: str) -> None:
        self._enter(root)
        while self._frames:
            frame = self._frames[-1]
            if frame.index < len(frame.children):
                child, optional = frame.children[frame.index]
                frame.index += 1
                self._enter(child, optional)
                continue

            self._frames.pop()
            self._chain.pop()
            self._on_chain.discard(frame.name)
            if frame.name in self._by_name:
                self._resolved.append(frame.name)

    def run(self) -> ResolutionResult:
        for name in sorted(self._by_name):
            self._visit(name)

        resolved = set(self._resolved)
        for spec in self._by_name.values():
            spec.unsatisfied_mandatory = set(spec.mandatory_deps) - resolved
            spec.unsatisfied_optional = {
                dep for dep in spec.optional_deps if dep in self._known and dep not in resolved
            }

        sorted_packages: List[PackageSpec] = []
        unsatisfied: List[PackageSpec] = []
        with_unsatisfied_optionals: List[PackageSpec] = []
        for name in self._resolved:
            spec = self._by_name[name]
            if not spec.unsatisfied_mandatory:
                sorted_packages.append(spec)
                if spec.unsatisfied_optional:
                    with_unsatisfied_optionals.append(spec)
            else:
                unsatisfied.append(spec)

        logger.debug(
            "Resolved %d packages: %d sorted, %d unsatisfied, %d cycles",
            len(self._by_name),
            len(sorted_packages),
            len(unsatisfied),
            len(self.circular_dependencies),
        )
        return ResolutionResult(
            sorted_packages=tuple(sorted_packages),
            unsatisfied_packages=tuple(unsatisfied),
            packages_with_unsatisfied_optionals=tuple(with_unsatisfied_optionals),
            circular_dependencies=tuple(self.circular_dependencies),
        )


def resolve(packages: Iterable[PackageSpec]) -> ResolutionResult:
    """Resolve ``packages`` into a load order and failure classification."""
    return DependencyResolver(packages).run()


__all__ = ["CircularDependency", "DependencyResolver", "ResolutionResult", "resolve"]
