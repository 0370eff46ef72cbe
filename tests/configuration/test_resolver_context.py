from __future__ import annotations

import textwrap
from pathlib import Path

import pytest
from helpers.packages import write

from loadorder.core.configuration.context import ResolverContext
from loadorder.core.packages.model import DeprecatedHandlingMode
from loadorder.core.schemas import SchemaValidationError


def _context_file(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "loadorder.yaml"
    write(path, textwrap.dedent(body))
    return path


def test_from_yaml_resolves_relative_paths(tmp_path: Path):
    path = _context_file(
        tmp_path,
        """
        settings: world.mt
        deprecated_handling: error
        key_prefix: load_mod_
        layers:
          - id: game
            roots: [games/base/mods]
          - id: user
            roots: [mods, worldmods]
        """,
    )
    ctx = ResolverContext.from_yaml(path)

    base = tmp_path.resolve()
    assert ctx.settings_path == base / "world.mt"
    assert ctx.deprecated_handling is DeprecatedHandlingMode.ERROR
    assert ctx.key_prefix == "load_mod_"
    assert [layer.id for layer in ctx.layers] == ["game", "user"]
    assert ctx.layer_by_id("user").roots == (base / "mods", base / "worldmods")
    assert ctx.layer_by_id("missing") is None
    assert ctx.search_roots() == [base / "games/base/mods", base / "mods", base / "worldmods"]
    assert ctx.source == path.resolve()


def test_from_yaml_defaults(tmp_path: Path):
    path = _context_file(
        tmp_path,
        """
        settings: world.mt
        layers:
          - id: only
            roots: [mods]
        """,
    )
    ctx = ResolverContext.from_yaml(path)
    assert ctx.deprecated_handling is DeprecatedHandlingMode.LOG
    assert ctx.key_prefix == "load_"


def test_environment_overrides_file_mode(tmp_path: Path, monkeypatch):
    path = _context_file(
        tmp_path,
        """
        settings: world.mt
        deprecated_handling: log
        layers:
          - id: only
            roots: [mods]
        """,
    )
    monkeypatch.setenv("LOADORDER_DEPRECATED_HANDLING", "ignore")
    assert ResolverContext.from_yaml(path).deprecated_handling is DeprecatedHandlingMode.IGNORE


@pytest.mark.parametrize(
    "body",
    [
        "layers: []\nsettings: world.mt\n",
        "settings: world.mt\n",
        "settings: world.mt\ndeprecated_handling: loud\nlayers:\n  - id: a\n    roots: [m]\n",
        "settings: world.mt\nlayers:\n  - id: a\n",
        "settings: world.mt\nunknown: 1\nlayers:\n  - id: a\n    roots: [m]\n",
    ],
)
def test_invalid_context_files_are_rejected(tmp_path: Path, body: str):
    path = _context_file(tmp_path, body)
    with pytest.raises(SchemaValidationError) as excinfo:
        ResolverContext.from_yaml(path)
    assert excinfo.value.errors


def test_empty_context_file_is_rejected(tmp_path: Path):
    path = _context_file(tmp_path, "")
    with pytest.raises(SchemaValidationError):
        ResolverContext.from_yaml(path)


def test_malformed_yaml_is_rejected(tmp_path: Path):
    path = _context_file(tmp_path, "settings: [unclosed\n")
    with pytest.raises(SchemaValidationError, match="not valid YAML"):
        ResolverContext.from_yaml(path)


def test_missing_context_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        ResolverContext.from_yaml(tmp_path / "absent.yaml")


def test_duplicate_layer_ids_are_rejected(tmp_path: Path):
    path = _context_file(
        tmp_path,
        """
        settings: world.mt
        layers:
          - id: user
            roots: [a]
          - id: user
            roots: [b]
        """,
    )
    with pytest.raises(ValueError, match="Duplicate layer id"):
        ResolverContext.from_yaml(path)


def test_from_paths_builds_single_layer(tmp_path: Path):
    ctx = ResolverContext.from_paths([tmp_path / "a", str(tmp_path / "b")], tmp_path / "world.mt")
    assert len(ctx.layers) == 1
    assert ctx.layers[0].roots == (tmp_path / "a", tmp_path / "b")
    assert ctx.deprecated_handling is DeprecatedHandlingMode.LOG


def test_explicit_mode_wins_over_environment(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("LOADORDER_DEPRECATED_HANDLING", "ignore")
    ctx = ResolverContext.from_paths(
        [tmp_path], tmp_path / "world.mt", deprecated_handling=DeprecatedHandlingMode.ERROR
    )
    assert ctx.deprecated_handling is DeprecatedHandlingMode.ERROR
