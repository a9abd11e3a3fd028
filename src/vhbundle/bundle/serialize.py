"""Render module tables as JavaScript source literals.

- bytes         -> `Uint8Array.of(0,255,128)`
- list / tuple  -> `[a,b,...]`
- mapping       -> `{key:value,...}`; keys matching `[a-z]+` are bare,
                   all others are computed keys `["/a.js"]:value`
- everything else (str, int, float, bool, None) -> its JSON literal

Mapping entries keep insertion order; the output is not normalized.
"""

from __future__ import annotations

import json
import math
import re
from typing import Any, Mapping

from vhbundle.core.model import ModuleRecord

_BARE_KEY = re.compile(r"[a-z]+")


def _key_source(key: str) -> str:
    if not isinstance(key, str):
        raise TypeError(f"to_source: mapping keys must be str, got {type(key).__name__}")
    if _BARE_KEY.fullmatch(key):
        return key
    return "[" + json.dumps(key) + "]"


def to_source(value: Any) -> str:
    """Serialize `value` to a JavaScript expression that rebuilds it."""
    if isinstance(value, ModuleRecord):
        value = value.to_value()

    if isinstance(value, (bytes, bytearray, memoryview)):
        return "Uint8Array.of(" + ",".join(str(b) for b in bytes(value)) + ")"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(to_source(v) for v in value) + "]"
    if isinstance(value, Mapping):
        return "{" + ",".join(_key_source(k) + ":" + to_source(v) for k, v in value.items()) + "}"
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"to_source: non-finite float {value!r} has no literal form")
    if value is None or isinstance(value, (str, bool, int, float)):
        return json.dumps(value)
    raise TypeError(f"to_source: unsupported value type {type(value).__name__}")
