from __future__ import annotations

import json
from pathlib import Path

import pytest

from loadorder.core.exceptions import MetadataError
from loadorder.core.packages.metadata import PackageMetadata


def test_set_get_remove_tracks_modification():
    meta = PackageMetadata("farming")
    assert meta.get("seeds") is None
    assert meta.set("seeds", "12")
    assert meta.modified
    assert not meta.set("seeds", "12")
    assert meta.get("seeds") == "12"
    assert meta.remove("seeds")
    assert not meta.remove("seeds")


def test_setting_empty_string_removes_key():
    meta = PackageMetadata("farming")
    meta.set("seeds", "12")
    assert meta.set("seeds", "")
    assert meta.get("seeds", "gone") == "gone"


def test_save_and_load_round_trip(tmp_path: Path):
    root = tmp_path / "mod_storage"
    meta = PackageMetadata("farming")
    meta.set("seeds", "12")
    meta.set("owner", "sam")
    meta.save(root)
    assert not meta.modified
    assert json.loads((root / "farming").read_text(encoding="utf-8")) == {"owner": "sam", "seeds": "12"}

    loaded = PackageMetadata("farming")
    assert loaded.load(root)
    assert loaded.to_dict() == {"owner": "sam", "seeds": "12"}


def test_load_missing_file_returns_false(tmp_path: Path):
    meta = PackageMetadata("nothing")
    meta.set("stale", "1")
    assert not meta.load(tmp_path)
    assert meta.to_dict() == {}


def test_load_converts_non_string_values(tmp_path: Path):
    (tmp_path / "farming").write_text('{"count": 3, "enabled": true}', encoding="utf-8")
    meta = PackageMetadata("farming")
    meta.load(tmp_path)
    assert meta.to_dict() == {"count": "3", "enabled": "true"}


def test_load_rejects_invalid_json(tmp_path: Path):
    (tmp_path / "farming").write_text("{not json", encoding="utf-8")
    with pytest.raises(MetadataError, match="JSON decoding failure"):
        PackageMetadata("farming").load(tmp_path)


def test_save_into_a_file_path_fails(tmp_path: Path):
    blocker = tmp_path / "storage"
    blocker.write_text("", encoding="utf-8")
    meta = PackageMetadata("farming")
    meta.set("a", "b")
    with pytest.raises(MetadataError):
        meta.save(blocker)
    assert meta.modified
