"""Pure math / metric helpers (no I/O)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Hashable


def weighted_mean(
    counts: Mapping[Hashable, int], weights: Mapping[Hashable, int]
) -> float | None:
    """Count-weighted mean of ``weights`` over the keys present in ``counts``.

    Returns None when ``counts`` is empty or its counts sum to zero.
    """
    if not counts:
        return None
    total = 0
    weighted = 0
    for key, count in counts.items():
        total += count
        weighted += weights[key] * count
    if total == 0:
        return None
    return weighted / total
