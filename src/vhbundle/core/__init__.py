"""vhbundle core: data model, name normalization and entry resolution.

This package is standalone and must not import io/bundle/cli.
"""

from __future__ import annotations

from .errors import (
    BundleError,
    DirectoryUnreadable,
    EmptyModuleSet,
    FileUnreadable,
    InvalidJson,
    MissingEntryPoint,
    TranspileError,
    UnknownEntryPoint,
)
from .model import ALL_HOOKS, BundleSpecifier, FileLocation, ModuleRecord, RecordType
from .names import canonicalize
from .resolve import resolve_entry
from .suggest import levenshtein, suggest

__all__ = [
    "ALL_HOOKS",
    "BundleError",
    "BundleSpecifier",
    "DirectoryUnreadable",
    "EmptyModuleSet",
    "FileLocation",
    "FileUnreadable",
    "InvalidJson",
    "MissingEntryPoint",
    "ModuleRecord",
    "RecordType",
    "TranspileError",
    "UnknownEntryPoint",
    "canonicalize",
    "levenshtein",
    "resolve_entry",
    "suggest",
]
