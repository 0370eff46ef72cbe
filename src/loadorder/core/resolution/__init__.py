"""Merging of layered package sets and dependency resolution."""

from .merge import PackageSetMerger
from .resolver import CircularDependency, DependencyResolver, ResolutionResult, resolve

__all__ = [
    "CircularDependency",
    "DependencyResolver",
    "PackageSetMerger",
    "ResolutionResult",
    "resolve",
]
