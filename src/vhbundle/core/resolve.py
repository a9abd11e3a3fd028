"""Entry-point resolution against the discovered module names.

Two-tier failure so callers can tell "no entry given" from "entry not found":

- `MissingEntryPoint`: no entry supplied; suggests the name closest to `index.ts`
- `UnknownEntryPoint`: entry supplied but no module's canonical form matches it;
  suggests the name closest to the raw entry string

Canonical-name collisions (`a.ts` next to `a.js`) are tolerated: any name whose
canonical form matches is accepted.
"""

from __future__ import annotations

from typing import Sequence

from vhbundle.core.errors import EmptyModuleSet, MissingEntryPoint, UnknownEntryPoint
from vhbundle.core.names import canonicalize
from vhbundle.core.suggest import suggest

DEFAULT_ENTRY_HINT = "index.ts"


def resolve_entry(
    entry: str | None,
    names: Sequence[str],
    *,
    root: str | None = None,
) -> str:
    """Validate `entry` against `names` and return its canonical name.

    Args:
        entry: requested entry-point module name, or None if none was given.
        names: discovered module names (no leading slash).
        root: module root as written in the specifier; only used to build
            `root:<suggestion>` hints in error messages.

    Raises:
        EmptyModuleSet: `names` is empty.
        MissingEntryPoint: `entry` is None or empty.
        UnknownEntryPoint: no name canonicalizes to `canonicalize(entry)`.
    """
    names = list(names)
    if not names:
        raise EmptyModuleSet(root if root is not None else "")

    if not entry:
        raise MissingEntryPoint(suggestion=suggest(DEFAULT_ENTRY_HINT, names), root=root)

    main = canonicalize(entry)
    if any(canonicalize(n) == main for n in names):
        return main

    raise UnknownEntryPoint(entry, suggestion=suggest(entry, names), root=root)


def is_entry_module(name: str, main: str | None) -> bool:
    """True iff `name` is (one of) the module(s) selected by canonical `main`."""
    return main is not None and canonicalize(name) == main
