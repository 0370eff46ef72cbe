"""
loadorder packages list command.

SUMMARY: List the packages discovered under one or more search roots

Groups are expanded into their members; nothing is filtered or resolved.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from loadorder.cli import OutputFormatter, add_json_flag, add_root_arg
from loadorder.core.packages import discover_flat

SUMMARY = "List the packages discovered under one or more search roots"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_root_arg(parser, required=True)
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    packages = []
    for root in args.roots:
        packages.extend(discover_flat(Path(root)))

    if formatter.json_mode:
        formatter.success({"packages": [spec.to_dict() for spec in packages]})
        return 0

    if not packages:
        formatter.text("No packages found.")
        return 0
    for spec in packages:
        deps = ", ".join(spec.mandatory_deps) or "-"
        optional = ", ".join(spec.optional_deps) or "-"
        formatter.text(f"{spec.name}  {spec.path}  depends: {deps}  optional: {optional}")
    return 0
