from __future__ import annotations

import json
import os
import stat
from pathlib import Path

import pytest

from typespub.exceptions import PersistenceWriteError, StateCorruptError
from typespub.models.versions import VersionRecord
from typespub.state.engine import UpdateEngine
from typespub.state.store import VersionStore, dump_version_map


def test_missing_file_loads_empty_map(tmp_path: Path) -> None:
    store = VersionStore(tmp_path / "versions.json")

    assert store.load() == {}
    assert not (tmp_path / "versions.json").exists()


def test_save_then_load_returns_same_records(tmp_path: Path) -> None:
    store = VersionStore(tmp_path / "versions.json")
    records = {
        "jquery": VersionRecord(last_version=4, last_content_hash="abc"),
        "angular": VersionRecord(last_version=1, last_content_hash="def"),
    }

    store.save(records)

    assert store.load() == records


def test_saved_file_is_sorted_pretty_camel_case(tmp_path: Path) -> None:
    store = VersionStore(tmp_path / "versions.json")
    store.save(
        {
            "zepto": VersionRecord(last_version=2, last_content_hash="z"),
            "async": VersionRecord(last_version=1, last_content_hash="a"),
        }
    )

    text = (tmp_path / "versions.json").read_text(encoding="utf-8")
    assert text == (
        "{\n"
        '    "async": {\n'
        '        "lastContentHash": "a",\n'
        '        "lastVersion": 1\n'
        "    },\n"
        '    "zepto": {\n'
        '        "lastContentHash": "z",\n'
        '        "lastVersion": 2\n'
        "    }\n"
        "}\n"
    )


def test_dump_is_independent_of_insertion_order() -> None:
    a = VersionRecord(last_version=1, last_content_hash="a")
    b = VersionRecord(last_version=2, last_content_hash="b")

    assert dump_version_map({"a": a, "b": b}) == dump_version_map({"b": b, "a": a})


def test_save_replaces_previous_state_entirely(tmp_path: Path) -> None:
    store = VersionStore(tmp_path / "versions.json")
    store.save({"old": VersionRecord(last_version=1, last_content_hash="x")})

    store.save({"new": VersionRecord(last_version=1, last_content_hash="y")})

    assert list(store.load()) == ["new"]


def test_save_leaves_no_temp_files(tmp_path: Path) -> None:
    store = VersionStore(tmp_path / "versions.json")
    store.save({"pkg": VersionRecord(last_version=1, last_content_hash="x")})

    assert [p.name for p in tmp_path.iterdir()] == ["versions.json"]


def test_save_creates_parent_directory(tmp_path: Path) -> None:
    store = VersionStore(tmp_path / "state" / "versions.json")
    store.save({})

    assert (tmp_path / "state" / "versions.json").read_text(encoding="utf-8") == "{}\n"


def test_load_reads_camel_case_records(tmp_path: Path) -> None:
    path = tmp_path / "versions.json"
    path.write_text(
        json.dumps({"jquery": {"lastVersion": 3, "lastContentHash": "h"}}, indent=4),
        encoding="utf-8",
    )

    assert VersionStore(path).load() == {"jquery": VersionRecord(last_version=3, last_content_hash="h")}


@pytest.mark.parametrize(
    "payload",
    [
        "{not json",
        "[]",
        '{"pkg": {"lastVersion": -1, "lastContentHash": ""}}',
        '{"pkg": {"lastVersion": 1}, "extra": 5}',
        '{"pkg": {"lastVersion": 1, "lastContentHash": "x", "unexpected": true}}',
        '{"pkg": {"lastVersion": 5}}',
        '{"pkg": {}}',
        '{"pkg": {"lastVersion": "3", "lastContentHash": "h"}}',
        '{"pkg": {"lastVersion": true, "lastContentHash": "h"}}',
        '{"pkg": {"lastVersion": 3, "lastContentHash": 7}}',
    ],
)
def test_corrupt_state_raises(tmp_path: Path, payload: str) -> None:
    path = tmp_path / "versions.json"
    path.write_text(payload, encoding="utf-8")

    with pytest.raises(StateCorruptError) as exc_info:
        VersionStore(path).load()

    assert exc_info.value.path == path


def test_unwritable_location_raises_persistence_error(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = VersionStore(blocker / "versions.json")

    with pytest.raises(PersistenceWriteError):
        store.save({"pkg": VersionRecord(last_version=1, last_content_hash="x")})


@pytest.mark.parametrize("mode", [0o644, 0o640])
def test_save_keeps_existing_file_mode(tmp_path: Path, mode: int) -> None:
    path = tmp_path / "versions.json"
    store = VersionStore(path)
    store.save({})
    os.chmod(path, mode)

    store.save({"pkg": VersionRecord(last_version=1, last_content_hash="x")})

    assert stat.S_IMODE(path.stat().st_mode) == mode


def test_new_file_mode_follows_umask(tmp_path: Path) -> None:
    path = tmp_path / "versions.json"
    umask = os.umask(0o022)
    try:
        VersionStore(path).save({})
    finally:
        os.umask(umask)

    assert stat.S_IMODE(path.stat().st_mode) == 0o644


def test_corrupt_record_blocks_engine_cycle(tmp_path: Path) -> None:
    path = tmp_path / "versions.json"
    path.write_text('{"pkg": {"lastVersion": 5}}', encoding="utf-8")
    calls: list[int] = []

    def _apply(version: int) -> bool:
        calls.append(version)
        return True

    with pytest.raises(StateCorruptError):
        UpdateEngine(VersionStore(path)).perform_update("pkg", "x", _apply)

    assert calls == []
    assert path.read_text(encoding="utf-8") == '{"pkg": {"lastVersion": 5}}'
