"""vhbundle: directory -> fingerprinted, embeddable module bundle.

A module root directory is walked, each file is turned into a typed record
(json/js/text/bin, TypeScript transpiled to JavaScript), the entry point is
validated with "did you mean" suggestions, and the table is fingerprinted
and rendered as JavaScript source.
"""

from __future__ import annotations

from vhbundle.bundle import BundleMode, BundleResult, build_modules, build_room, fingerprint, to_source
from vhbundle.core import BundleError, BundleSpecifier, ModuleRecord, RecordType, canonicalize, resolve_entry
from vhbundle.resolver import resolve

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "BundleError",
    "BundleMode",
    "BundleResult",
    "BundleSpecifier",
    "ModuleRecord",
    "RecordType",
    "build_modules",
    "build_room",
    "canonicalize",
    "fingerprint",
    "resolve",
    "resolve_entry",
    "to_source",
]
