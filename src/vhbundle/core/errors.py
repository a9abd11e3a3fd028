"""Error taxonomy for bundle builds.

Every error is fatal to the current build request. Messages are deterministic
so tests (and host tools) can assert on them.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable


class BundleError(Exception):
    """Base class for all bundle build failures."""


class DirectoryUnreadable(BundleError):
    """Raised when the module root (or a nested directory) cannot be listed."""

    def __init__(self, path: str | Path, reason: str = "") -> None:
        self.path = Path(path)
        msg = f"cannot list module directory {str(self.path)!r}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class FileUnreadable(BundleError):
    """Raised when a discovered file cannot be stat'ed or read."""

    def __init__(self, path: str | Path, reason: str = "") -> None:
        self.path = Path(path)
        msg = f"cannot read module file {str(self.path)!r}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class EmptyModuleSet(BundleError, ValueError):
    """Raised when the module root contains no files at all."""

    def __init__(self, root: str | Path) -> None:
        self.root = str(root)
        super().__init__(f"module directory {self.root!r} contains no files")


class MissingEntryPoint(BundleError, ValueError):
    """Raised when a bundle is requested without naming its entry point.

    `suggestion` is the closest discovered module name to `index.ts`.
    """

    def __init__(self, *, suggestion: str | None, root: str | None = None) -> None:
        self.suggestion = suggestion
        self.root = root
        msg = "missing entry point"
        if suggestion is not None:
            hint = f"{root}:{suggestion}" if root is not None else suggestion
            msg += f"; did you mean {hint!r}?"
        super().__init__(msg)


class UnknownEntryPoint(BundleError, ValueError):
    """Raised when the requested entry point matches no discovered module."""

    def __init__(self, entry: str, *, suggestion: str | None, root: str | None = None) -> None:
        self.entry = entry
        self.suggestion = suggestion
        self.root = root
        msg = f"unknown entry point {entry!r}"
        if suggestion is not None:
            hint = f"{root}:{suggestion}" if root is not None else suggestion
            msg += f"; did you mean {hint!r}?"
        super().__init__(msg)


class InvalidJson(BundleError, ValueError):
    """Raised when a `.json` module does not parse."""

    def __init__(self, path: str | Path, reason: str, *, lineno: int | None = None, colno: int | None = None) -> None:
        self.path = Path(path)
        self.lineno = lineno
        self.colno = colno
        where = str(self.path)
        if lineno is not None:
            where += f":{lineno}:{colno}"
        super().__init__(f"invalid JSON in {where}: {reason}")


class TranspileError(BundleError):
    """Raised when the TypeScript compiler rejects a module or cannot be run."""

    def __init__(self, filename: str | Path, diagnostics: Iterable[str]) -> None:
        self.filename = str(filename)
        self.diagnostics = tuple(diagnostics)
        msg = f"cannot transpile {self.filename!r}"
        if self.diagnostics:
            msg += ":\n" + "\n".join(f"  - {d}" for d in self.diagnostics)
        super().__init__(msg)


__all__ = [
    "BundleError",
    "DirectoryUnreadable",
    "EmptyModuleSet",
    "FileUnreadable",
    "InvalidJson",
    "MissingEntryPoint",
    "TranspileError",
    "UnknownEntryPoint",
]
