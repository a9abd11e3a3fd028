"""Core data model for module bundles.

- `ModuleRecord`: one file's bundled form (json/js/text/bin)
- `FileLocation`: a discovered file and its virtual module name
- `BundleSpecifier`: the `root[:entry]` grammar, parsed once at the boundary

This module must not import io/bundle/cli.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any


class RecordType(str, Enum):
    JSON = "json"
    JS = "js"
    TEXT = "text"
    BIN = "bin"


# Value of `hooks` on the entry-point record: expose every export.
ALL_HOOKS = "*"


@dataclass(frozen=True)
class ModuleRecord:
    """Typed record for one bundled file.

    `source` is `bytes` for `bin` records and `str` for every other type.
    `evaluate`/`hooks` are only ever set on the entry-point `js` record.
    """

    type: RecordType
    source: str | bytes
    evaluate: bool | None = None
    hooks: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", RecordType(self.type))
        if self.type is RecordType.BIN:
            if not isinstance(self.source, (bytes, bytearray)):
                raise TypeError(f"bin record: expected bytes source, got {type(self.source).__name__}")
            object.__setattr__(self, "source", bytes(self.source))
        elif not isinstance(self.source, str):
            raise TypeError(f"{self.type.value} record: expected str source, got {type(self.source).__name__}")
        if (self.evaluate is not None or self.hooks is not None) and self.type is not RecordType.JS:
            raise ValueError(f"{self.type.value} record: only js records may carry evaluate/hooks")

    @property
    def is_entry(self) -> bool:
        return bool(self.evaluate)

    def as_entry(self) -> "ModuleRecord":
        """Return a copy flagged as the eagerly evaluated, hook-exposing entry point."""
        if self.type is not RecordType.JS:
            raise ValueError(f"{self.type.value} record cannot be an entry point")
        return ModuleRecord(type=self.type, source=self.source, evaluate=True, hooks=ALL_HOOKS)

    def to_value(self) -> dict[str, Any]:
        """Plain mapping used for hashing and serialization (unset flags omitted)."""
        out: dict[str, Any] = {"type": self.type.value, "source": self.source}
        if self.evaluate is not None:
            out["evaluate"] = self.evaluate
        if self.hooks is not None:
            out["hooks"] = self.hooks
        return out


@dataclass(frozen=True)
class FileLocation:
    path: Path
    module_name: str


@dataclass(frozen=True)
class BundleSpecifier:
    """Parsed `root[":" entry]` specifier.

    Only the first `:` separates; an empty entry (`"root:"`) means no entry.
    """

    root: str
    entry: str | None = None

    @classmethod
    def parse(cls, text: str) -> "BundleSpecifier":
        if not isinstance(text, str):
            raise TypeError(f"specifier: expected str, got {type(text).__name__}")
        root, sep, entry = text.partition(":")
        root = root.strip()
        if not root:
            raise ValueError(f"specifier {text!r}: root directory must be non-empty")
        return cls(root=root, entry=(entry.strip() or None) if sep else None)

    def __str__(self) -> str:
        return self.root if self.entry is None else f"{self.root}:{self.entry}"


def module_table_value(modules: dict[str, ModuleRecord]) -> dict[str, Any]:
    """Flat `name -> record` mapping as plain values."""
    return {name: rec.to_value() for name, rec in modules.items()}


def room_table_value(main: str, modules: dict[str, ModuleRecord]) -> dict[str, Any]:
    """Structured `{main, source}` table as plain values."""
    return {"main": main, "source": module_table_value(modules)}
