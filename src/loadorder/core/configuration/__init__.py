"""Resolver context, diagnostics and the ``configure`` façade."""

from .context import DEFAULT_KEY_PREFIX, ResolverContext, SearchLayer
from .diagnostics import Diagnostic, log_diagnostics
from .orchestrator import (
    ConfigureFailure,
    ConfigureOutcome,
    ConfigureSuccess,
    configure,
    requested_packages,
)

__all__ = [
    "DEFAULT_KEY_PREFIX",
    "ConfigureFailure",
    "ConfigureOutcome",
    "ConfigureSuccess",
    "Diagnostic",
    "ResolverContext",
    "SearchLayer",
    "configure",
    "log_diagnostics",
    "requested_packages",
]
