"""Edit-distance suggestions for mistyped module names."""

from __future__ import annotations

from typing import Iterable


def levenshtein(a: str, b: str) -> int:
    """Levenshtein distance with unit-cost insert/delete/substitute."""
    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    # Two-row DP over the shorter string.
    prev = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        cur = [i]
        for j, cb in enumerate(b, start=1):
            cur.append(
                min(
                    prev[j] + 1,  # deletion
                    cur[j - 1] + 1,  # insertion
                    prev[j - 1] + (ca != cb),  # substitution
                )
            )
        prev = cur
    return prev[-1]


def suggest(query: str, candidates: Iterable[str]) -> str | None:
    """Return the candidate closest to `query`, or None if there are none.

    Ties go to the candidate seen first.
    """
    best: str | None = None
    best_dist = -1
    for cand in candidates:
        d = levenshtein(query, cand)
        if best is None or d < best_dist:
            best, best_dist = cand, d
            if d == 0:
                break
    return best
