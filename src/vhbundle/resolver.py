"""Host build-tool resolver glue.

A host asks to resolve a specifier `root[:entry]` imported from `source_path`
under a named pipeline; the answer is a generated artifact:

- `varhub-modules`:           `export const integrity=...;export const modules=...;`
- `varhub-modules-integrity`: the integrity digest as a JSON string
- `varhub-room`:              `export const roomIntegrity=...;export const roomModule=...;`

Other pipelines are not ours and resolve to None.
"""

from __future__ import annotations

import base64
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from vhbundle.bundle.build import BundleMode, BundleResult, build_modules, build_room
from vhbundle.config import BundleConfig
from vhbundle.core.model import BundleSpecifier
from vhbundle.io.transform import Transpiler

logger = logging.getLogger(__name__)

PIPELINE_MODULES = "varhub-modules"
PIPELINE_INTEGRITY = "varhub-modules-integrity"
PIPELINE_ROOM = "varhub-room"

PIPELINES = (PIPELINE_MODULES, PIPELINE_INTEGRITY, PIPELINE_ROOM)


@dataclass(frozen=True)
class ResolveResult:
    """Generated artifact handed back to the host.

    `pipeline` is always None: the generated code needs no further processing.
    """

    file_path: Path
    code: str
    invalidate_on_file_create: tuple[dict[str, str], ...]
    invalidate_on_file_change: tuple[str, ...]
    pipeline: None = None


def entry_tag(entry: str | None) -> str:
    """Filesystem-safe tag that keeps generated paths unique per entry point."""
    return base64.urlsafe_b64encode((entry or "").encode("utf-8")).decode("ascii")


def _artifact(result: BundleResult, file_name: str, code: str) -> ResolveResult:
    return ResolveResult(
        file_path=result.root / file_name,
        code=code,
        invalidate_on_file_create=({"glob": result.root.as_posix().rstrip("/") + "/**/*"},),
        invalidate_on_file_change=tuple(result.source_paths),
    )


def resolve(
    specifier: str | BundleSpecifier,
    source_path: str | Path,
    pipeline: str | None,
    *,
    transpile: Transpiler | None = None,
    config: BundleConfig | None = None,
) -> ResolveResult | None:
    """Resolve `specifier` imported from `source_path` for `pipeline`.

    Returns None for pipelines this resolver does not handle.

    Raises:
        BundleError subclasses on any build failure; entry-point errors carry
        a `root:<suggestion>` hint in their message.
    """
    if pipeline not in PIPELINES:
        return None
    logger.debug("resolving %s from %s (%s)", specifier, source_path, pipeline)
    return resolve_in(specifier, Path(source_path).parent, pipeline, transpile=transpile, config=config)


def resolve_in(
    specifier: str | BundleSpecifier,
    base_dir: str | Path,
    pipeline: str,
    *,
    transpile: Transpiler | None = None,
    config: BundleConfig | None = None,
) -> ResolveResult:
    """Like `resolve`, with the module root taken relative to `base_dir`."""
    result = build_for(specifier, base_dir, pipeline, transpile=transpile, config=config)
    return render(result, pipeline)


def build_for(
    specifier: str | BundleSpecifier,
    base_dir: str | Path,
    pipeline: str,
    *,
    transpile: Transpiler | None = None,
    config: BundleConfig | None = None,
) -> BundleResult:
    """Build the table shape `pipeline` needs for `specifier` under `base_dir`."""
    if pipeline not in PIPELINES:
        raise ValueError(f"unknown pipeline {pipeline!r}; expected one of {list(PIPELINES)}")

    spec = specifier if isinstance(specifier, BundleSpecifier) else BundleSpecifier.parse(specifier)
    # Collapse `..` segments, as the host reports normalized paths.
    root = Path(os.path.normpath(Path(base_dir) / spec.root))
    if pipeline == PIPELINE_ROOM:
        return build_room(root, spec.entry, label=spec.root, transpile=transpile, config=config)
    return build_modules(root, spec.entry, label=spec.root, transpile=transpile, config=config)


def render(result: BundleResult, pipeline: str) -> ResolveResult:
    """Turn a built bundle into the artifact `pipeline` expects."""
    tag = entry_tag(result.entry)
    integrity = json.dumps(result.integrity)

    if pipeline == PIPELINE_ROOM:
        if result.mode is not BundleMode.ROOM:
            raise ValueError(f"{pipeline}: expected a room bundle, got {result.mode.value}")
        code = f"export const roomIntegrity={integrity};export const roomModule={result.to_source()};"
        return _artifact(result, f".varhub-room.{tag}.js", code)

    if result.mode is not BundleMode.MODULES:
        raise ValueError(f"{pipeline}: expected a flat modules bundle, got {result.mode.value}")
    if pipeline == PIPELINE_INTEGRITY:
        return _artifact(result, f".varhub-modules-integrity.{tag}.json", integrity)
    if pipeline == PIPELINE_MODULES:
        code = f"export const integrity={integrity};export const modules={result.to_source()};"
        return _artifact(result, f".varhub-modules.{tag}.js", code)
    raise ValueError(f"unknown pipeline {pipeline!r}; expected one of {list(PIPELINES)}")
