"""Order-independent SHA-256 fingerprint over nested module tables.

Values are fed to the hash through a type-tagged, length-prefixed encoding:

    None  -> b"n"
    bool  -> b"T" | b"F"
    int   -> b"i" <decimal> b";"
    float -> b"f" <repr> b";"
    str   -> b"s" <utf8 length> b":" <utf8, lone surrogates passed through>
    bytes -> b"b" <length> b":" <raw>
    list  -> b"l" <count> b":" <items...>
    dict  -> b"d" <count> b":" (<key as str> <value>)...   keys sorted

so `"1"` and `1` never collide and mapping order never matters.
"""

from __future__ import annotations

import hashlib
from typing import Any, Mapping

from vhbundle.core.model import ModuleRecord


def sha256_bytes(b: bytes) -> str:
    """Return hex-encoded sha256 for bytes."""
    if not isinstance(b, (bytes, bytearray)):
        raise TypeError(f"sha256_bytes: expected bytes, got {type(b).__name__}")
    return hashlib.sha256(bytes(b)).hexdigest()


def _feed(h: "hashlib._Hash", value: Any) -> None:
    if isinstance(value, ModuleRecord):
        value = value.to_value()

    if value is None:
        h.update(b"n")
    elif isinstance(value, bool):
        h.update(b"T" if value else b"F")
    elif isinstance(value, int):
        h.update(b"i%d;" % value)
    elif isinstance(value, float):
        h.update(b"f" + repr(value).encode("ascii") + b";")
    elif isinstance(value, str):
        raw = value.encode("utf-8", "surrogatepass")
        h.update(b"s%d:" % len(raw))
        h.update(raw)
    elif isinstance(value, (bytes, bytearray, memoryview)):
        raw = bytes(value)
        h.update(b"b%d:" % len(raw))
        h.update(raw)
    elif isinstance(value, Mapping):
        keys = list(value.keys())
        for k in keys:
            if not isinstance(k, str):
                raise TypeError(f"fingerprint: mapping keys must be str, got {type(k).__name__}")
        h.update(b"d%d:" % len(keys))
        for k in sorted(keys):
            _feed(h, k)
            _feed(h, value[k])
    elif isinstance(value, (list, tuple)):
        h.update(b"l%d:" % len(value))
        for item in value:
            _feed(h, item)
    else:
        raise TypeError(f"fingerprint: unsupported value type {type(value).__name__}")


def fingerprint(value: Any) -> str:
    """Return the 64-char hex SHA-256 digest of `value`'s logical content."""
    h = hashlib.sha256()
    _feed(h, value)
    return h.hexdigest()
