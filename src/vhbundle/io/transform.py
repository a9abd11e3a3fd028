"""Per-file content transformation into `ModuleRecord`s.

Dispatch, in priority order:
1. `.json`        -> parsed and re-emitted as compact JSON (`json`)
2. `.ts` / `.mts` -> transpiled to JavaScript (`js`)
3. `.js`          -> passed through (`js`)
4. MIME `text/*`  -> decoded UTF-8 (`text`)
5. anything else  -> raw bytes (`bin`)

Only `js` records are ever flagged as the entry point.
"""

from __future__ import annotations

import json
import logging
import math
import mimetypes
import re
from pathlib import Path
from typing import Any, Callable

from vhbundle.config import BundleConfig
from vhbundle.core.errors import FileUnreadable, InvalidJson
from vhbundle.core.model import FileLocation, ModuleRecord, RecordType
from vhbundle.io.transpile import transpile_typescript

logger = logging.getLogger(__name__)

# (source, filename) -> JavaScript
Transpiler = Callable[[str, str], str]

TYPESCRIPT_SUFFIXES = (".ts", ".mts")

# Built-in table only; system mime.types files would make classification host-dependent.
_MIME = mimetypes.MimeTypes(filenames=())

_LONE_SURROGATE = re.compile(r"[\ud800-\udfff]")

# JSON.stringify switches to exponent notation from here on.
_MAX_PLAIN_INTEGRAL = 1e21


def is_typescript(name: str) -> bool:
    return name.endswith(TYPESCRIPT_SUFFIXES)


def classify(name: str) -> RecordType:
    """Map a file or module name to the record type it bundles as."""
    if name.endswith(".json"):
        return RecordType.JSON
    if is_typescript(name) or name.endswith(".js"):
        return RecordType.JS
    mime, _ = _MIME.guess_type(name, strict=False)
    if mime is not None and mime.startswith("text/"):
        return RecordType.TEXT
    return RecordType.BIN


def _reject_constant(name: str) -> float:
    raise ValueError(f"{name} is not valid JSON")


def _js_numbers(value: Any) -> Any:
    """Coerce parsed floats to what JSON.stringify prints: non-finite -> null, 1.0 -> 1."""
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        if value.is_integer() and abs(value) < _MAX_PLAIN_INTEGRAL:
            return int(value)
        return value
    if isinstance(value, list):
        return [_js_numbers(v) for v in value]
    if isinstance(value, dict):
        return {k: _js_numbers(v) for k, v in value.items()}
    return value


def _canonical_json(text: str, path: Path) -> str:
    """Re-emit `text` the way `JSON.stringify(JSON.parse(text))` would."""
    try:
        obj = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise InvalidJson(path, e.msg, lineno=e.lineno, colno=e.colno) from e
    except ValueError as e:
        raise InvalidJson(path, str(e)) from e
    text = json.dumps(_js_numbers(obj), ensure_ascii=False, separators=(",", ":"))
    return _LONE_SURROGATE.sub(lambda m: "\\u%04x" % ord(m.group()), text)


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise FileUnreadable(path, e.strerror or str(e)) from e


def transform_file(
    location: FileLocation,
    is_entry: bool = False,
    *,
    transpile: Transpiler | None = None,
    config: BundleConfig | None = None,
) -> ModuleRecord:
    """Read one file and return its bundled record.

    Args:
        location: discovered file.
        is_entry: whether this module is the bundle's entry point; sets
            `evaluate`/`hooks` on `js` records.
        transpile: TypeScript transpiler; defaults to `transpile_typescript`
            with `config`.

    Raises:
        FileUnreadable, InvalidJson, TranspileError
    """
    path = Path(location.path)
    data = _read_bytes(path)
    kind = classify(path.name)

    if kind is RecordType.JSON:
        return ModuleRecord(type=kind, source=_canonical_json(data.decode("utf-8", errors="replace"), path))

    if kind is RecordType.JS:
        text = data.decode("utf-8", errors="replace")
        if is_typescript(path.name):
            if transpile is None:
                text = transpile_typescript(text, str(path), config)
            else:
                text = transpile(text, str(path))
        rec = ModuleRecord(type=kind, source=text)
        if is_entry:
            logger.debug("entry point %s", location.module_name)
            rec = rec.as_entry()
        return rec

    if kind is RecordType.TEXT:
        return ModuleRecord(type=kind, source=data.decode("utf-8", errors="replace"))

    return ModuleRecord(type=RecordType.BIN, source=data)
