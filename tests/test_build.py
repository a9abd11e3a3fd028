from __future__ import annotations

import os
from pathlib import Path

import pytest

from conftest import DEMO_FILES, fake_transpile, write_tree
from vhbundle.bundle.build import BundleMode, BundleResult, build_modules, build_room
from vhbundle.core.errors import (
    DirectoryUnreadable,
    EmptyModuleSet,
    InvalidJson,
    MissingEntryPoint,
    TranspileError,
    UnknownEntryPoint,
)
from vhbundle.core.model import RecordType


def test_build_room_shapes_table_and_flags_only_entry(demo_root: Path) -> None:
    result = build_room(demo_root, "index.ts", transpile=fake_transpile)

    assert result.mode is BundleMode.ROOM
    assert result.main == "index.js"
    assert list(result.modules) == ["data.json", "img.png", "index.ts", "lib/util.js", "readme.txt"]

    table = result.table_value()
    assert table["main"] == "index.js"
    assert table["source"]["index.ts"] == {
        "type": "js",
        "source": "export const answer = 42;\n",
        "evaluate": True,
        "hooks": "*",
    }
    assert table["source"]["lib/util.js"] == {"type": "js", "source": DEMO_FILES["lib/util.js"]}
    assert table["source"]["data.json"] == {"type": "json", "source": '{"a":[1,2],"b":"x"}'}
    assert table["source"]["readme.txt"] == {"type": "text", "source": "hello room\n"}
    assert table["source"]["img.png"] == {"type": "bin", "source": b"\x00\xff\x80"}

    flagged = [name for name, rec in result.modules.items() if rec.evaluate or rec.hooks]
    assert flagged == ["index.ts"]


def test_build_room_covers_every_record_type(demo_root: Path) -> None:
    result = build_room(demo_root, "index.ts", transpile=fake_transpile)
    assert {rec.type for rec in result.modules.values()} == set(RecordType)


def test_build_room_flags_every_canonical_collision(tmp_path: Path) -> None:
    root = write_tree(tmp_path / "mods", {"a.ts": "export {};", "a.js": "export {};", "b.js": ""})

    result = build_room(root, "a.ts", transpile=fake_transpile)

    assert sorted(n for n, r in result.modules.items() if r.is_entry) == ["a.js", "a.ts"]


def test_fingerprint_is_stable_across_runs(demo_root: Path) -> None:
    a = build_room(demo_root, "index.ts", transpile=fake_transpile)
    b = build_room(demo_root, "index.ts", transpile=fake_transpile)
    assert a.integrity == b.integrity
    assert a.to_source() == b.to_source()


def test_fingerprint_ignores_enumeration_order(demo_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    baseline = build_room(demo_root, "index.ts", transpile=fake_transpile)
    real_scandir = os.scandir

    class _ReversedListing:
        def __init__(self, path: str) -> None:
            with real_scandir(path) as it:
                self._entries = list(it)[::-1]

        def __enter__(self):
            return iter(self._entries)

        def __exit__(self, *exc: object) -> bool:
            return False

    monkeypatch.setattr("vhbundle.io.walk.os.scandir", _ReversedListing)
    permuted = build_room(demo_root, "index.ts", transpile=fake_transpile)

    assert permuted.integrity == baseline.integrity
    assert permuted.to_source() == baseline.to_source()


def test_fingerprint_changes_on_content_byte(demo_root: Path) -> None:
    before = build_room(demo_root, "index.ts", transpile=fake_transpile).integrity
    (demo_root / "img.png").write_bytes(bytes([0, 255, 129]))
    after = build_room(demo_root, "index.ts", transpile=fake_transpile).integrity
    assert before != after


def test_fingerprint_changes_on_rename(demo_root: Path) -> None:
    before = build_room(demo_root, "index.ts", transpile=fake_transpile).integrity
    (demo_root / "readme.txt").rename(demo_root / "notes.txt")
    after = build_room(demo_root, "index.ts", transpile=fake_transpile).integrity
    assert before != after


def test_build_room_requires_entry(demo_root: Path) -> None:
    with pytest.raises(MissingEntryPoint) as exc:
        build_room(demo_root, None, label="mods", transpile=fake_transpile)
    assert exc.value.suggestion == "index.ts"
    assert "mods:index.ts" in str(exc.value)


def test_build_room_unknown_entry_is_checked_before_transforming(demo_root: Path) -> None:
    calls: list[str] = []

    def transpile(source: str, filename: str) -> str:
        calls.append(filename)
        return source

    with pytest.raises(UnknownEntryPoint) as exc:
        build_room(demo_root, "indx.ts", transpile=transpile)
    assert exc.value.suggestion == "index.ts"
    assert calls == []


@pytest.mark.parametrize("entry", [None, "index.ts"])
def test_empty_directory_is_rejected_in_every_mode(tmp_path: Path, entry: str | None) -> None:
    root = tmp_path / "empty"
    (root / "nested").mkdir(parents=True)

    with pytest.raises(EmptyModuleSet):
        build_room(root, entry)
    with pytest.raises(EmptyModuleSet):
        build_modules(root, entry)


def test_missing_root_is_directory_unreadable(tmp_path: Path) -> None:
    with pytest.raises(DirectoryUnreadable):
        build_room(tmp_path / "nope", "index.ts")


def test_build_modules_flat_names_and_optional_entry(demo_root: Path) -> None:
    plain = build_modules(demo_root, transpile=fake_transpile)
    assert plain.mode is BundleMode.MODULES
    assert plain.main is None
    assert list(plain.modules) == ["/data.json", "/img.png", "/index.ts", "/lib/util.js", "/readme.txt"]
    assert not any(rec.is_entry for rec in plain.modules.values())
    assert set(plain.table_value()) == set(plain.modules)

    with_entry = build_modules(demo_root, "index.ts", transpile=fake_transpile)
    assert with_entry.main == "index.js"
    assert [n for n, r in with_entry.modules.items() if r.is_entry] == ["/index.ts"]
    assert with_entry.integrity != plain.integrity


def test_build_modules_rejects_unknown_entry(demo_root: Path) -> None:
    with pytest.raises(UnknownEntryPoint):
        build_modules(demo_root, "missing.js", transpile=fake_transpile)


def test_first_failing_file_aborts_build(demo_root: Path) -> None:
    (demo_root / "broken.json").write_text("{", encoding="utf-8")
    with pytest.raises(InvalidJson):
        build_room(demo_root, "index.ts", transpile=fake_transpile)


def test_transpile_failure_aborts_build(demo_root: Path) -> None:
    def transpile(source: str, filename: str) -> str:
        raise TranspileError(filename, ["boom"])

    with pytest.raises(TranspileError, match=r"boom"):
        build_room(demo_root, "index.ts", transpile=transpile)


def test_source_paths_lists_every_discovered_file(demo_root: Path) -> None:
    result = build_room(demo_root, "index.ts", transpile=fake_transpile)
    assert result.source_paths == sorted(str(demo_root / name) for name in DEMO_FILES)


def test_json_with_lone_surrogate_bundles(tmp_path: Path) -> None:
    root = write_tree(tmp_path / "mods", {"index.js": "", "d.json": '{"a": "\\ud800"}'})

    result = build_room(root, "index.js")

    assert result.modules["d.json"].source == '{"a":"\\ud800"}'
    assert len(result.integrity) == 64
    assert '["d.json"]:{type:"json",source:"{\\"a\\":\\"\\\\ud800\\"}"}' in result.to_source()


def test_room_result_without_main_is_rejected(demo_root: Path) -> None:
    result = build_room(demo_root, "index.ts", transpile=fake_transpile)
    broken = BundleResult(
        root=result.root,
        mode=BundleMode.ROOM,
        entry=None,
        main=None,
        modules=result.modules,
        locations=result.locations,
        integrity=result.integrity,
    )
    with pytest.raises(ValueError, match=r"main must be set"):
        broken.table_value()
