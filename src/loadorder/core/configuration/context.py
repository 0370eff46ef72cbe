"""Resolver context: search layers, settings file and deprecation policy.

Search layers are ordered low → high precedence. Every root inside one layer
sits at the same precedence level, so two packages with the same name in
roots of one layer are a name conflict, while a package in a later layer
overrides an earlier one.

A context can be built in code (``ResolverContext.from_paths``) or loaded
from a YAML file::

    settings: world.mt
    deprecated_handling: log
    layers:
      - id: game
        roots: [games/base/mods]
      - id: user
        roots: [mods, worldmods]

Relative paths in the YAML file are resolved against the file's directory.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Sequence

import yaml

from loadorder.core.packages.model import DeprecatedHandlingMode
from loadorder.core.schemas import SchemaValidationError, validate_payload
from loadorder.core.utils.io import read_yaml

DEFAULT_KEY_PREFIX = "load_"
DEFAULT_LAYER_ID = "default"
CONTEXT_SCHEMA = "context.schema.yaml"


@dataclass(frozen=True)
class SearchLayer:
    """One precedence level made of one or more search roots."""

    id: str
    roots: tuple[Path, ...]


@dataclass(frozen=True)
class ResolverContext:
    layers: tuple[SearchLayer, ...]  # low → high
    settings_path: Path
    deprecated_handling: DeprecatedHandlingMode = DeprecatedHandlingMode.LOG
    key_prefix: str = DEFAULT_KEY_PREFIX
    source: Optional[Path] = field(default=None, compare=False)

    def layer_by_id(self, layer_id: str) -> Optional[SearchLayer]:
        for layer in self.layers:
            if layer.id == layer_id:
                return layer
        return None

    def search_roots(self) -> list[Path]:
        """Return every root in precedence order (low → high)."""
        return [root for layer in self.layers for root in layer.roots]

    @classmethod
    def from_paths(
        cls,
        roots: Iterable[Path | str],
        settings_path: Path | str,
        *,
        deprecated_handling: Optional[DeprecatedHandlingMode] = None,
        key_prefix: str = DEFAULT_KEY_PREFIX,
    ) -> "ResolverContext":
        """Build a context with all ``roots`` in a single layer.

        Without an explicit ``deprecated_handling`` the mode comes from
        ``LOADORDER_DEPRECATED_HANDLING`` (default: log).
        """
        layer = SearchLayer(id=DEFAULT_LAYER_ID, roots=tuple(Path(r) for r in roots))
        return cls(
            layers=(layer,),
            settings_path=Path(settings_path),
            deprecated_handling=_handling_mode(deprecated_handling),
            key_prefix=key_prefix,
        )

    @classmethod
    def from_layers(
        cls,
        layers: Sequence[tuple[str, Iterable[Path | str]]],
        settings_path: Path | str,
        *,
        deprecated_handling: Optional[DeprecatedHandlingMode] = None,
        key_prefix: str = DEFAULT_KEY_PREFIX,
    ) -> "ResolverContext":
        """Build a context from ``(layer_id, roots)`` pairs in low → high order."""
        seen: set[str] = set()
        built: list[SearchLayer] = []
        for layer_id, roots in layers:
            if layer_id in seen:
                raise ValueError(f"Duplicate layer id '{layer_id}' in resolver context.")
            seen.add(layer_id)
            built.append(SearchLayer(id=layer_id, roots=tuple(Path(r) for r in roots)))
        return cls(
            layers=tuple(built),
            settings_path=Path(settings_path),
            deprecated_handling=_handling_mode(deprecated_handling),
            key_prefix=key_prefix,
        )

    @classmethod
    def from_yaml(cls, path: Path | str) -> "ResolverContext":
        """Load and validate a context file.

        ``LOADORDER_DEPRECATED_HANDLING`` overrides ``deprecated_handling``.

        Raises:
            FileNotFoundError: the context file does not exist
            SchemaValidationError: the file is not YAML or does not match the context schema
            ValueError: duplicate layer ids
        """
        path = Path(path).resolve()
        try:
            data = read_yaml(path, default=None, raise_on_error=True)
        except yaml.YAMLError as exc:
            raise SchemaValidationError(f"Context file {path} is not valid YAML", [str(exc)]) from exc
        if data is None:
            raise SchemaValidationError(f"Context file {path} is empty", ["<root>: empty document"])
        validate_payload(data, CONTEXT_SCHEMA)
        return cls._from_mapping(data, base_dir=path.parent, source=path)

    @classmethod
    def _from_mapping(cls, data: Dict[str, Any], *, base_dir: Path, source: Optional[Path]) -> "ResolverContext":
        configured = DeprecatedHandlingMode.from_env(
            DeprecatedHandlingMode.parse(data.get("deprecated_handling"))
        )
        ctx = cls.from_layers(
            [
                (str(item["id"]), [_expand_path(r, base_dir=base_dir) for r in item["roots"]])
                for item in data["layers"]
            ],
            _expand_path(data["settings"], base_dir=base_dir),
            deprecated_handling=configured,
            key_prefix=str(data.get("key_prefix") or DEFAULT_KEY_PREFIX),
        )
        return replace(ctx, source=source)


def _handling_mode(explicit: Optional[DeprecatedHandlingMode]) -> DeprecatedHandlingMode:
    if explicit is not None:
        return explicit
    return DeprecatedHandlingMode.from_env()


def _expand_path(raw: str, *, base_dir: Path) -> Path:
    s = os.path.expandvars(str(raw)).strip()
    p = Path(s).expanduser()
    if not p.is_absolute():
        p = base_dir / p
    return p.resolve()


__all__ = ["DEFAULT_KEY_PREFIX", "ResolverContext", "SearchLayer"]
