"""Bundle manifest and inventory utilities.

- `inventory()`: one row per module (pandas DataFrame), sorted by module name
- `build_manifest()`: JSON-ready description with per-module sha256
- `read_manifest()` / `write_manifest()`: stable manifest.json I/O
- `verify_manifest()`: rebuild and compare against a saved manifest
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, Mapping

from vhbundle.bundle.integrity import sha256_bytes
from vhbundle.core.model import ModuleRecord
from vhbundle.core.names import canonicalize, strip_root_slash

if TYPE_CHECKING:  # pragma: no cover
    import pandas as pd

    from vhbundle.bundle.build import BundleResult
    from vhbundle.config import BundleConfig
    from vhbundle.io.transform import Transpiler

INVENTORY_COLUMNS = ["module", "canonical", "type", "size", "sha256", "entry"]


def _now_utc_iso() -> str:
    # Example: 2025-12-16T00:00:00Z
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def _source_bytes(rec: ModuleRecord) -> bytes:
    if isinstance(rec.source, bytes):
        return rec.source
    return rec.source.encode("utf-8")


def inventory(modules: Mapping[str, ModuleRecord]) -> "pd.DataFrame":
    """Tabulate `modules` with sizes and content hashes."""
    import pandas as pd  # local import to keep module import-light

    rows: list[dict[str, Any]] = []
    for name in sorted(modules):
        rec = modules[name]
        raw = _source_bytes(rec)
        rows.append(
            {
                "module": name,
                "canonical": canonicalize(strip_root_slash(name)),
                "type": rec.type.value,
                "size": len(raw),
                "sha256": sha256_bytes(raw),
                "entry": rec.is_entry,
            }
        )
    df = pd.DataFrame(rows, columns=INVENTORY_COLUMNS)
    return df.astype(
        {
            "module": "string",
            "canonical": "string",
            "type": "string",
            "size": "int64",
            "sha256": "string",
            "entry": "bool",
        }
    )


def build_manifest(result: "BundleResult", *, created_utc: str | None = None) -> dict[str, Any]:
    """Describe a built bundle: mode, entry, integrity and per-module hashes."""
    if created_utc is None:
        created_utc = _now_utc_iso()

    modules: dict[str, dict[str, Any]] = {}
    for name, rec in result.modules.items():
        raw = _source_bytes(rec)
        modules[name] = {"type": rec.type.value, "size": len(raw), "sha256": sha256_bytes(raw)}

    return {
        "schema_version": "vhbundle-1.0",
        "root": str(result.root).replace("\\", "/"),
        "mode": result.mode.value,
        "entry": result.entry,
        "main": result.main,
        "integrity": result.integrity,
        "created_utc": created_utc,
        "modules": modules,
    }


def read_manifest(path: Path) -> dict[str, Any]:
    p = Path(path)
    obj = json.loads(p.read_text(encoding="utf-8"))
    if not isinstance(obj, dict):
        raise ValueError("manifest.json: expected JSON object")
    return obj


def write_manifest(path: Path, manifest: dict[str, Any]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    text = json.dumps(manifest, indent=2, sort_keys=True) + "\n"
    p.write_text(text, encoding="utf-8")


def verify_manifest(
    manifest: Mapping[str, Any],
    *,
    transpile: "Transpiler | None" = None,
    config: "BundleConfig | None" = None,
) -> list[str]:
    """Rebuild the bundle `manifest` describes and list every difference.

    An empty list means the module directory still matches the manifest.

    Raises:
        ValueError: the manifest is malformed.
        BundleError subclasses: the rebuild itself fails.
    """
    from vhbundle.bundle.build import BundleMode, build_modules, build_room

    root = manifest.get("root")
    if not isinstance(root, str) or not root:
        raise ValueError("manifest.json: root must be a non-empty string")
    try:
        mode = BundleMode(manifest.get("mode"))
    except ValueError as e:
        raise ValueError("manifest.json: mode must be 'room' or 'modules'") from e
    expected = manifest.get("modules")
    if not isinstance(expected, dict):
        raise ValueError("manifest.json: modules must be an object")
    entry = manifest.get("entry")

    build = build_room if mode is BundleMode.ROOM else build_modules
    result = build(Path(root), entry, transpile=transpile, config=config)
    actual = build_manifest(result)["modules"]

    problems: list[str] = []
    for name in sorted(set(expected) | set(actual)):
        if name not in actual:
            problems.append(f"{name}: missing")
        elif name not in expected:
            problems.append(f"{name}: not in manifest")
        elif not isinstance(expected[name], dict) or expected[name].get("sha256") != actual[name]["sha256"]:
            problems.append(f"{name}: sha256 mismatch")
    if manifest.get("integrity") != result.integrity:
        problems.append(f"integrity mismatch: expected {manifest.get('integrity')}, got {result.integrity}")
    return problems
