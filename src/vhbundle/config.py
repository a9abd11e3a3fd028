"""Runtime configuration for bundle builds.

Defaults can be overridden from the environment (`BundleConfig.from_env`) and
then per call (CLI options use `dataclasses.replace`).

Environment variables:
- VHBUNDLE_NODE: Node.js executable used to run the TypeScript compiler
- VHBUNDLE_NODE_PATH: directory whose `node_modules` provides `typescript`
- VHBUNDLE_MAX_WORKERS: thread fan-out for file transforms
- VHBUNDLE_TRANSPILE_TIMEOUT: seconds before a transpile subprocess is killed
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping


def _env_int(environ: Mapping[str, str], key: str) -> int | None:
    raw = environ.get(key, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError as e:
        raise ValueError(f"{key}: expected an integer, got {raw!r}") from e
    if value < 1:
        raise ValueError(f"{key}: must be >= 1, got {value}")
    return value


def _env_float(environ: Mapping[str, str], key: str, default: float) -> float:
    raw = environ.get(key, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as e:
        raise ValueError(f"{key}: expected a number, got {raw!r}") from e
    if value <= 0:
        raise ValueError(f"{key}: must be > 0, got {value}")
    return value


@dataclass(frozen=True)
class BundleConfig:
    node: str = "node"
    node_path: str | None = None
    max_workers: int | None = None
    timeout_s: float = 60.0

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "BundleConfig":
        env = os.environ if environ is None else environ
        return cls(
            node=env.get("VHBUNDLE_NODE", "").strip() or "node",
            node_path=env.get("VHBUNDLE_NODE_PATH", "").strip() or None,
            max_workers=_env_int(env, "VHBUNDLE_MAX_WORKERS"),
            timeout_s=_env_float(env, "VHBUNDLE_TRANSPILE_TIMEOUT", 60.0),
        )
