"""vhbundle bundles: assembly, fingerprinting, serialization, manifests."""

from __future__ import annotations

from .build import BundleMode, BundleResult, build_modules, build_room
from .integrity import fingerprint
from .manifest import build_manifest, inventory, read_manifest, verify_manifest, write_manifest
from .serialize import to_source

__all__ = [
    "BundleMode",
    "BundleResult",
    "build_manifest",
    "build_modules",
    "build_room",
    "fingerprint",
    "inventory",
    "read_manifest",
    "to_source",
    "verify_manifest",
    "write_manifest",
]
