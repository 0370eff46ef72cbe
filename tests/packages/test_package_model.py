from __future__ import annotations

from pathlib import Path

import pytest
from helpers.packages import spec

from loadorder.core.exceptions import DeprecatedDeclarationError, InvalidPackageNameError
from loadorder.core.packages.model import (
    DeprecatedHandlingMode,
    PackageSpec,
    finalize_spec,
    is_valid_package_name,
)


@pytest.mark.parametrize("name", ["default", "mod_2", "a", "0_0"])
def test_valid_names(name: str):
    assert is_valid_package_name(name)


@pytest.mark.parametrize("name", ["", "Default", "my-mod", "mod.name", "mod name", "émoji"])
def test_invalid_names(name: str):
    assert not is_valid_package_name(name)


def test_finalize_rejects_invalid_name_with_package_and_path():
    bad = PackageSpec(name="Bad-Name", path=Path("/mods/Bad-Name"))
    with pytest.raises(InvalidPackageNameError) as excinfo:
        finalize_spec(bad)
    err = excinfo.value
    assert "Bad-Name" in str(err)
    assert "[a-z0-9_]" in str(err)
    assert err.context == {"package": "Bad-Name", "path": "/mods/Bad-Name"}
    assert err.to_json_error()["code"] == "InvalidPackageNameError"


def test_finalize_without_notices_reports_nothing():
    assert finalize_spec(spec("clean"), DeprecatedHandlingMode.ERROR) is None


def test_finalize_deprecation_modes():
    legacy = spec("legacy")
    legacy.deprecation_notices.append("depends.txt is deprecated, please use mod.conf instead.")

    assert finalize_spec(legacy, DeprecatedHandlingMode.IGNORE) is None

    report = finalize_spec(legacy, DeprecatedHandlingMode.LOG)
    assert report is not None
    assert report.splitlines()[0] == "Mod legacy at /mods/legacy:"
    assert "\tdepends.txt is deprecated" in report

    with pytest.raises(DeprecatedDeclarationError) as excinfo:
        finalize_spec(legacy, DeprecatedHandlingMode.ERROR)
    assert excinfo.value.context["deprecations"] == legacy.deprecation_notices


def test_name_is_checked_before_deprecations():
    bad = spec("Bad")
    bad.deprecation_notices.append("anything")
    with pytest.raises(InvalidPackageNameError):
        finalize_spec(bad, DeprecatedHandlingMode.ERROR)


def test_handling_mode_parsing(monkeypatch):
    assert DeprecatedHandlingMode.parse("ERROR") is DeprecatedHandlingMode.ERROR
    assert DeprecatedHandlingMode.parse(None) is DeprecatedHandlingMode.LOG
    assert DeprecatedHandlingMode.parse("", DeprecatedHandlingMode.IGNORE) is DeprecatedHandlingMode.IGNORE
    with pytest.raises(ValueError, match="expected one of"):
        DeprecatedHandlingMode.parse("loud")

    monkeypatch.setenv("LOADORDER_DEPRECATED_HANDLING", "ignore")
    assert DeprecatedHandlingMode.from_env(DeprecatedHandlingMode.ERROR) is DeprecatedHandlingMode.IGNORE


def test_add_dependency_keeps_declaration_order_without_duplicates():
    s = spec("x")
    for dep in ["b", "a", "b", ""]:
        s.add_mandatory(dep)
    assert s.mandatory_deps == ["b", "a"]
