"""Top-level façade: settings file → discovery → merge → resolution.

``configure`` never raises for the fatal conditions of a run (invalid package
name, deprecated declarations under the ``error`` policy, unresolved name
conflicts). They are returned as a ``ConfigureFailure`` so callers branch on
``outcome.ok`` instead of catching. I/O errors on the settings file still
propagate.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Set, Tuple, Union

from loadorder.core.configuration.context import ResolverContext
from loadorder.core.configuration.diagnostics import (
    WARNING,
    Diagnostic,
    log_diagnostics,
    missing_packages_diagnostic,
    resolution_diagnostics,
)
from loadorder.core.exceptions import LoadOrderError, NameConflictError
from loadorder.core.packages.discovery import discover_flat
from loadorder.core.packages.model import PackageSpec, finalize_spec
from loadorder.core.resolution.merge import PackageSetMerger
from loadorder.core.resolution.resolver import ResolutionResult, resolve
from loadorder.core.utils.io import KeyValueFile

logger = logging.getLogger(__name__)

DISABLED_VALUES = frozenset({"false", "nil"})


@dataclass(frozen=True)
class ConfigureSuccess:
    result: ResolutionResult
    diagnostics: Tuple[Diagnostic, ...] = ()
    missing: FrozenSet[str] = frozenset()

    ok = True

    def to_dict(self) -> Dict[str, object]:
        return {
            **self.result.to_dict(),
            "missing": sorted(self.missing),
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }


@dataclass(frozen=True)
class ConfigureFailure:
    error: LoadOrderError
    diagnostics: Tuple[Diagnostic, ...] = ()

    ok = False

    def to_dict(self) -> Dict[str, object]:
        return {
            "error": self.error.to_json_error(),
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }


ConfigureOutcome = Union[ConfigureSuccess, ConfigureFailure]


def requested_packages(settings: KeyValueFile, key_prefix: str) -> Set[str]:
    """Names enabled by ``<prefix><name>`` keys (anything but ``false``/``nil``)."""
    names: Set[str] = set()
    for key, value in settings.items():
        if key.startswith(key_prefix) and value not in DISABLED_VALUES:
            names.add(key[len(key_prefix):])
    return names


def _collect_layers(
    context: ResolverContext,
    settings: KeyValueFile,
    requested: Set[str],
) -> List[List[PackageSpec]]:
    """Discover every layer, keeping requested packages and disabling the rest."""
    layers: List[List[PackageSpec]] = []
    for layer in context.layers:
        kept: List[PackageSpec] = []
        for root in layer.roots:
            for spec in discover_flat(root):
                if spec.name in requested:
                    kept.append(spec)
                else:
                    settings.set_bool(context.key_prefix + spec.name, False)
        logger.debug("Layer %s: %d requested packages", layer.id, len(kept))
        layers.append(kept)
    return layers


def _run(context: ResolverContext, diagnostics: List[Diagnostic]) -> Tuple[ResolutionResult, Set[str]]:
    settings = KeyValueFile.load(context.settings_path)
    requested = requested_packages(settings, context.key_prefix)

    layers = _collect_layers(context, settings, requested)
    settings.save()

    merger = PackageSetMerger()
    for specs in layers:
        merger.merge(specs)
    if merger.conflicts:
        raise NameConflictError(merger.conflicts)

    # Only packages that survived merging are finalized.
    for spec in merger.packages:
        report = finalize_spec(spec, context.deprecated_handling)
        if report:
            diagnostics.append(Diagnostic(WARNING, report, spec.name))

    result = resolve(merger.packages)
    diagnostics.extend(resolution_diagnostics(result))

    found = {spec.name for specs in layers for spec in specs}
    missing = requested - found
    missing_diag = missing_packages_diagnostic(missing)
    if missing_diag is not None:
        diagnostics.append(missing_diag)
    return result, missing


def configure(context: ResolverContext) -> ConfigureOutcome:
    """Resolve the packages enabled in ``context.settings_path``.

    The settings file is rewritten (before merging) so that every discovered
    but not requested package gets an explicit ``<prefix><name> = false``.
    """
    diagnostics: List[Diagnostic] = []
    try:
        result, missing = _run(context, diagnostics)
    except LoadOrderError as exc:
        log_diagnostics(diagnostics, logger)
        logger.error("%s", exc)
        return ConfigureFailure(error=exc, diagnostics=tuple(diagnostics))

    log_diagnostics(diagnostics, logger)
    return ConfigureSuccess(result=result, diagnostics=tuple(diagnostics), missing=frozenset(missing))


__all__ = [
    "ConfigureFailure",
    "ConfigureOutcome",
    "ConfigureSuccess",
    "configure",
    "requested_packages",
]
