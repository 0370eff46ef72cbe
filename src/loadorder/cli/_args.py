"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_root_arg(parser: argparse.ArgumentParser, required: bool = False) -> None:
    """Add repeatable --root for search roots (one precedence layer)."""
    parser.add_argument(
        "--root",
        dest="roots",
        action="append",
        default=[],
        required=required,
        metavar="DIR",
        help="Search root containing package directories (repeatable)",
    )


def add_deprecated_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--deprecated",
        choices=["ignore", "log", "error"],
        default=None,
        help="How to handle deprecated declaration files (default: $LOADORDER_DEPRECATED_HANDLING or log)",
    )


__all__ = ["add_json_flag", "add_root_arg", "add_deprecated_flag"]
