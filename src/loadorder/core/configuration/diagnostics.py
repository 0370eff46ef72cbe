"""Human-readable diagnostics produced by a configure run.

Every non-fatal condition becomes a ``Diagnostic``; the orchestrator logs
each one through this module's logger at the matching level and returns the
full list to the caller.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from loadorder.core.resolution.resolver import ResolutionResult

logger = logging.getLogger(__name__)

ERROR = "error"
WARNING = "warning"

_LEVELS = {ERROR: logging.ERROR, WARNING: logging.WARNING}


@dataclass(frozen=True)
class Diagnostic:
    level: str
    message: str
    package: Optional[str] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {"level": self.level, "message": self.message, "package": self.package}


def _quoted(names: Iterable[str]) -> str:
    return " ".join(f'"{n}"' for n in names)


def resolution_diagnostics(result: ResolutionResult) -> List[Diagnostic]:
    """Unsatisfied (error), unsatisfied optional (warning) and cycle (warning) reports."""
    out: List[Diagnostic] = []
    for spec in result.unsatisfied_packages:
        out.append(
            Diagnostic(
                ERROR,
                f'mod "{spec.name}" has unsatisfied dependencies: {_quoted(sorted(spec.unsatisfied_mandatory))}',
                spec.name,
            )
        )
    for spec in result.packages_with_unsatisfied_optionals:
        out.append(
            Diagnostic(
                WARNING,
                f'mod "{spec.name}" has unsatisfied dependencies (optional): '
                f"{_quoted(sorted(spec.unsatisfied_optional))}",
                spec.name,
            )
        )
    for cycle in result.circular_dependencies:
        out.append(
            Diagnostic(
                WARNING,
                f'circular dependency triggered by "{cycle.name}" check mods in chain; '
                f"resolution-chain: {_quoted(cycle.chain)}",
                cycle.name,
            )
        )
    return out


def missing_packages_diagnostic(names: Iterable[str]) -> Optional[Diagnostic]:
    missing = sorted(names)
    if not missing:
        return None
    return Diagnostic(ERROR, f"The following mods could not be found: {_quoted(missing)}")


def log_diagnostics(diagnostics: Iterable[Diagnostic], log: Optional[logging.Logger] = None) -> None:
    target = log or logger
    for diag in diagnostics:
        target.log(_LEVELS.get(diag.level, logging.INFO), diag.message)


__all__ = [
    "Diagnostic",
    "ERROR",
    "WARNING",
    "log_diagnostics",
    "missing_packages_diagnostic",
    "resolution_diagnostics",
]
