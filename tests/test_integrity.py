from __future__ import annotations

import hashlib
import re

import pytest

from vhbundle.bundle.integrity import fingerprint, sha256_bytes
from vhbundle.core.model import ModuleRecord, RecordType


def _table() -> dict:
    return {
        "main": "index.js",
        "source": {
            "index.ts": {"type": "js", "source": "export {}", "evaluate": True, "hooks": "*"},
            "data.json": {"type": "json", "source": '{"a":1}'},
            "img.png": {"type": "bin", "source": b"\x00\xff\x80"},
        },
    }


def test_fingerprint_is_fixed_width_hex() -> None:
    assert re.fullmatch(r"[0-9a-f]{64}", fingerprint(_table()))


def test_fingerprint_ignores_mapping_order() -> None:
    a = _table()
    b = {"source": dict(reversed(list(a["source"].items()))), "main": "index.js"}
    assert fingerprint(a) == fingerprint(b)


def test_fingerprint_type_tags_prevent_collisions() -> None:
    assert fingerprint("1") != fingerprint(1)
    assert fingerprint(1) != fingerprint(1.0)
    assert fingerprint(True) != fingerprint(1)
    assert fingerprint(None) != fingerprint("null")
    assert fingerprint(b"abc") != fingerprint("abc")
    assert fingerprint(["ab", "c"]) != fingerprint(["a", "bc"])
    assert fingerprint({"a": "bc"}) != fingerprint({"ab": "c"})
    assert fingerprint([]) != fingerprint({})


@pytest.mark.parametrize(
    "mutate",
    [
        lambda t: t["source"]["img.png"].update(source=b"\x00\xff\x81"),
        lambda t: t["source"]["data.json"].update(type="text"),
        lambda t: t["source"]["index.ts"].pop("hooks"),
        lambda t: t["source"]["index.ts"].update(evaluate=False),
        lambda t: t.update(main="other.js"),
        lambda t: t["source"].update({"renamed.json": t["source"].pop("data.json")}),
    ],
)
def test_fingerprint_is_sensitive_to_every_change(mutate) -> None:
    before = fingerprint(_table())
    changed = _table()
    mutate(changed)
    assert fingerprint(changed) != before


def test_fingerprint_accepts_records_directly() -> None:
    rec = ModuleRecord(type=RecordType.JS, source="x").as_entry()
    assert fingerprint({"a": rec}) == fingerprint({"a": {"type": "js", "source": "x", "evaluate": True, "hooks": "*"}})


def test_fingerprint_rejects_unsupported_values() -> None:
    with pytest.raises(TypeError, match=r"unsupported value type set"):
        fingerprint({"a": {1, 2}})
    with pytest.raises(TypeError, match=r"mapping keys must be str"):
        fingerprint({1: "a"})


def test_sha256_bytes_matches_hashlib() -> None:
    assert sha256_bytes(b"room") == hashlib.sha256(b"room").hexdigest()
    with pytest.raises(TypeError):
        sha256_bytes("room")  # type: ignore[arg-type]


def test_fingerprint_accepts_lone_surrogates() -> None:
    assert fingerprint("\ud800") != fingerprint("\\ud800")
    assert fingerprint("\ud800") != fingerprint("\ud801")
