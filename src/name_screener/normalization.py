"""Name normalization helpers."""

from __future__ import annotations

from typing import AbstractSet, List

from .errors import InvalidInput


def tokenize(name: str) -> List[str]:
    """Split `name` on single spaces, dropping the empty pieces."""

    return [token for token in name.split(" ") if token]


def normalize(name: str, noise: AbstractSet[str] = frozenset()) -> str:
    """Return `name` without commas and noise words, lower-cased and collapsed.

    Noise membership is exact and case-sensitive: ``"Mr"`` in `noise` does not
    remove ``"mr"`` from the name.
    """

    raw = str(name or "")
    if not raw.strip():
        raise InvalidInput("Person name empty but required")

    without_commas = raw.replace(",", "")
    kept = [token for token in tokenize(without_commas) if token not in noise]
    normalized = " ".join(kept).strip().lower()
    # Stricter than a blank check: an empty name would match every entry by word order.
    if not normalized:
        raise InvalidInput(f"Person name '{raw}' contains only noise words")
    return normalized
