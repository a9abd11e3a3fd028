"""vhbundle I/O: directory walking, file transformation, TypeScript transpiling."""

from __future__ import annotations

from .transform import classify, transform_file
from .transpile import transpile_typescript
from .walk import walk_tree

__all__ = [
    "classify",
    "transform_file",
    "transpile_typescript",
    "walk_tree",
]
