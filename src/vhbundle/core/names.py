"""Module-name normalization for entry-point matching.

Source and compiled variants of a module compare equal once canonicalized:
`a.ts -> a.js`, `a.tsx -> a.jsx`, `a.mts -> a.mjs`. Storage keys are never
rewritten.
"""

from __future__ import annotations

_REWRITES = (
    (".mts", ".mjs"),
    (".ts", ".js"),
    (".tsx", ".jsx"),
)


def canonicalize(name: str) -> str:
    """Return the canonical comparable form of a module name."""
    for src, dst in _REWRITES:
        if name.endswith(src):
            return name[: -len(src)] + dst
    return name


def strip_root_slash(name: str) -> str:
    """Drop the leading `/` used by flat-mode module names."""
    return name[1:] if name.startswith("/") else name
