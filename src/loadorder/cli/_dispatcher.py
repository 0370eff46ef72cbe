"""
Command-line entry point for loadorder.

Commands are discovered, not registered: every public module under a domain
subpackage (``loadorder/cli/packages/list.py`` -> ``loadorder packages list``)
exposing ``SUMMARY``, ``register_args(parser)`` and ``main(args) -> int``
becomes a subcommand.
"""

from __future__ import annotations

import argparse
import importlib
import pkgutil
import sys
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from types import ModuleType
from typing import Callable, Optional

from loadorder import __version__
from loadorder.core.logging import configure_logging

_CLI_DIR = Path(__file__).parent


@dataclass(frozen=True)
class CommandInfo:
    name: str
    summary: str
    register_args: Optional[Callable[[argparse.ArgumentParser], None]]
    main: Optional[Callable[[argparse.Namespace], int]]


def _public_modules(path: Path) -> list[pkgutil.ModuleInfo]:
    return [m for m in pkgutil.iter_modules([str(path)]) if not m.name.startswith("_")]


@lru_cache(maxsize=1)
def discover_domains() -> tuple[str, ...]:
    """Names of subpackages holding at least one command module."""
    return tuple(
        sorted(
            m.name
            for m in _public_modules(_CLI_DIR)
            if m.ispkg and any(not c.ispkg for c in _public_modules(_CLI_DIR / m.name))
        )
    )


def _command_info(module: ModuleType, name: str, domain: str) -> CommandInfo:
    return CommandInfo(
        name=name.replace("_", "-"),
        summary=getattr(module, "SUMMARY", f"{domain} {name}"),
        register_args=getattr(module, "register_args", None),
        main=getattr(module, "main", None),
    )


@lru_cache(maxsize=32)
def discover_commands(domain: str) -> tuple[CommandInfo, ...]:
    """Import and describe every command module of ``domain``."""
    commands = []
    for m in _public_modules(_CLI_DIR / domain):
        if m.ispkg:
            continue
        try:
            module = importlib.import_module(f"loadorder.cli.{domain}.{m.name}")
        except ImportError as e:
            print(f"Warning: Could not import {domain}.{m.name}: {e}", file=sys.stderr)
            continue
        commands.append(_command_info(module, m.name, domain))
    return tuple(sorted(commands, key=lambda c: c.name))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="loadorder",
        description="loadorder - resolve content packages into a deterministic load order",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level for diagnostics written to stderr (default: WARNING)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Write logs to this file instead of stderr",
    )

    domains = parser.add_subparsers(dest="domain", title="domains", metavar="<domain>")
    for domain in discover_domains():
        domain_parser = domains.add_parser(domain, help=f"{domain.title()} commands")
        domain_parser.set_defaults(_domain_parser=domain_parser)
        commands = domain_parser.add_subparsers(dest="command", title="commands", metavar="<command>")
        for info in discover_commands(domain):
            cmd_parser = commands.add_parser(info.name, help=info.summary, description=info.summary)
            if info.register_args is not None:
                info.register_args(cmd_parser)
            if info.main is not None:
                cmd_parser.set_defaults(_func=info.main)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return its exit code."""
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    func = getattr(args, "_func", None)
    if func is None:
        getattr(args, "_domain_parser", parser).print_help()
        return 0

    configure_logging(level=args.log_level, log_path=args.log_file)
    return int(func(args) or 0)


if __name__ == "__main__":
    sys.exit(main())
