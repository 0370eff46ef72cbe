from __future__ import annotations

import json
from pathlib import Path

import pytest
from helpers.packages import make_package, write

from loadorder.cli._dispatcher import main


@pytest.fixture
def world(tmp_path: Path) -> tuple[Path, Path]:
    mods = tmp_path / "mods"
    make_package(mods, "a", depends=["b"])
    make_package(mods, "b", optional_depends=["c"])
    settings = tmp_path / "world.mt"
    write(settings, "load_a = true\nload_b = true\n")
    return mods, settings


def test_no_domain_prints_help(capsys):
    assert main([]) == 0
    assert "usage: loadorder" in capsys.readouterr().out


def test_list_json(world, capsys):
    mods, _ = world
    assert main(["packages", "list", "--root", str(mods), "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["status"] == "success"
    assert [p["name"] for p in payload["packages"]] == ["a", "b"]
    assert payload["packages"][0]["depends"] == ["b"]


def test_list_text_empty(tmp_path: Path, capsys):
    assert main(["packages", "list", "--root", str(tmp_path / "nothing")]) == 0
    assert "No packages found." in capsys.readouterr().out


def test_resolve_json(world, capsys):
    mods, settings = world
    code = main(["packages", "resolve", "--root", str(mods), "--settings", str(settings), "--json"])
    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["loadOrder"] == ["b", "a"]
    assert payload["missing"] == []


def test_resolve_text(world, capsys):
    mods, settings = world
    assert main(["packages", "resolve", "--root", str(mods), "--settings", str(settings)]) == 0
    out = capsys.readouterr().out
    assert "Load order:" in out
    assert "1. b" in out
    assert "2. a" in out


def test_resolve_from_context_file(world, tmp_path: Path, capsys):
    context = tmp_path / "context.yaml"
    write(
        context,
        "settings: world.mt\nlayers:\n  - id: user\n    roots: [mods]\n",
    )
    assert main(["packages", "resolve", "--context", str(context), "--json"]) == 0
    assert json.loads(capsys.readouterr().out)["loadOrder"] == ["b", "a"]


def test_resolve_failure_exit_code(tmp_path: Path, capsys):
    first, second = tmp_path / "p1", tmp_path / "p2"
    make_package(first, "a")
    make_package(second, "a")
    settings = tmp_path / "world.mt"
    write(settings, "load_a = true\n")

    code = main(
        [
            "--log-level",
            "CRITICAL",
            "packages",
            "resolve",
            "--root",
            str(first),
            "--root",
            str(second),
            "--settings",
            str(settings),
            "--json",
        ]
    )

    assert code == 1
    payload = json.loads(capsys.readouterr().err)
    assert payload["error"] == "NameConflictError"
    assert payload["message"] == 'Unresolved name conflicts for mods "a".'
    assert payload["context"] == {"conflicts": ["a"]}
    assert payload["diagnostics"] == []


def test_resolve_deprecated_flag_makes_legacy_fatal(tmp_path: Path, capsys):
    mods = tmp_path / "mods"
    pkg = make_package(mods, "doors")
    write(pkg / "depends.txt", "default\n")
    settings = tmp_path / "world.mt"
    write(settings, "load_doors = true\n")

    args = ["packages", "resolve", "--root", str(mods), "--settings", str(settings)]
    assert main(args) == 0
    capsys.readouterr()
    assert main(args + ["--deprecated", "error"]) == 1
    assert "depends.txt is deprecated" in capsys.readouterr().err


def test_resolve_usage_error(tmp_path: Path, capsys):
    assert main(["packages", "resolve", "--root", str(tmp_path)]) == 2
    assert "--settings" in capsys.readouterr().err


def test_resolve_invalid_context(tmp_path: Path, capsys):
    context = tmp_path / "context.yaml"
    write(context, "settings: world.mt\nlayers: []\n")
    assert main(["--log-level", "CRITICAL", "packages", "resolve", "--context", str(context), "--json"]) == 2
    assert json.loads(capsys.readouterr().err)["error"] == "schema"


def test_resolve_text_reports_each_diagnostic_once(tmp_path: Path, capsys):
    mods = tmp_path / "mods"
    make_package(mods, "a", depends=["ghost"])
    settings = tmp_path / "world.mt"
    write(settings, "load_a = true\n")

    assert main(["packages", "resolve", "--root", str(mods), "--settings", str(settings)]) == 0
    captured = capsys.readouterr()
    message = 'mod "a" has unsatisfied dependencies: "ghost"'
    assert "Load order: (empty)" in captured.out
    assert message not in captured.out
    assert captured.err.count(message) == 1
