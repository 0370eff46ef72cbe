"""
loadorder packages resolve command.

SUMMARY: Resolve enabled packages into a load order

Reads the enable settings, discovers packages from every search layer, and
prints the resulting load order. Diagnostics go through logging (stderr, or
the --log-file target). Exit code is 1 when resolution fails (invalid
name, fatal deprecation, name conflict).
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path

from loadorder.cli import OutputFormatter, add_deprecated_flag, add_json_flag, add_root_arg
from loadorder.core.configuration import ResolverContext, configure
from loadorder.core.packages import DeprecatedHandlingMode
from loadorder.core.schemas import SchemaValidationError

SUMMARY = "Resolve enabled packages into a load order"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--context",
        type=Path,
        help="YAML context file describing search layers and the settings file",
    )
    add_root_arg(parser)
    parser.add_argument(
        "--settings",
        type=Path,
        help="Enable-settings file (required with --root)",
    )
    add_deprecated_flag(parser)
    add_json_flag(parser)


def _build_context(args: argparse.Namespace) -> ResolverContext:
    mode = DeprecatedHandlingMode.parse(args.deprecated) if args.deprecated else None
    if args.context is not None:
        ctx = ResolverContext.from_yaml(args.context)
        if mode is not None:
            ctx = replace(ctx, deprecated_handling=mode)
        return ctx
    if not args.roots or args.settings is None:
        raise ValueError("either --context or both --root and --settings are required")
    return ResolverContext.from_paths(args.roots, args.settings, deprecated_handling=mode)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        context = _build_context(args)
    except (ValueError, FileNotFoundError) as exc:
        code = "schema" if isinstance(exc, SchemaValidationError) else "usage"
        formatter.error(exc, error_code=code)
        return 2

    outcome = configure(context)
    if not outcome.ok:
        failure = outcome.to_dict()
        formatter.error(
            outcome.error,
            error_code=outcome.error.__class__.__name__,
            data={"context": failure["error"]["context"], "diagnostics": failure["diagnostics"]},
        )
        return 1

    if formatter.json_mode:
        formatter.success(outcome.to_dict())
        return 0

    order = outcome.result.load_order
    formatter.text("Load order:" if order else "Load order: (empty)")
    for index, name in enumerate(order, start=1):
        formatter.text(f"  {index}. {name}")
    return 0
