"""Diversity and inequality indices over a vector of proportions.

Every function takes the proportions of a single group. Entries may be zero
(categories without mass); they must not be negative or NaN.
"""

from __future__ import annotations

import math
from typing import Sequence, Union

import numpy as np

ProportionsLike = Union[np.ndarray, Sequence[float]]


def _as_proportions(proportions: ProportionsLike) -> np.ndarray:
    arr = np.asarray(proportions, dtype=np.float64)
    if arr.ndim != 1:
        raise ValueError(f"proportions must be 1-D, got shape {arr.shape}")
    if np.any(~np.isfinite(arr)) or np.any(arr < 0):
        raise ValueError("proportions must be finite and non-negative.")
    return arr


def nonzero_count(proportions: ProportionsLike) -> int:
    """Number of categories with a strictly positive share (k)."""
    return int(np.count_nonzero(_as_proportions(proportions) > 0))


def shannon_entropy(
    proportions: ProportionsLike,
    base: float = math.e,
    normalize: bool = False,
) -> float:
    """Shannon entropy H = -sum(p * log_base(p)) over the positive shares.

    With ``normalize`` the entropy is divided by its maximum, log_base(k). A
    group with a single positive category has no spread to normalize against
    and scores exactly 0.
    """
    if not math.isfinite(base) or base <= 1:
        raise ValueError(f"base must be a finite number greater than 1, got {base!r}")
    p = _as_proportions(proportions)
    positive = p[p > 0]
    log_base = math.log(base)
    entropy = float(-np.sum(positive * (np.log(positive) / log_base)))
    # -0.0 when every term vanishes (k == 1)
    entropy = entropy + 0.0
    if not normalize:
        return entropy
    k = positive.size
    if k <= 1:
        return 0.0
    return entropy / (math.log(k) / log_base)


def simpson_diversity(proportions: ProportionsLike) -> float:
    """Simpson diversity 1 - sum(p^2)."""
    p = _as_proportions(proportions)
    return float(1.0 - np.sum(p * p))


def gini_coefficient(proportions: ProportionsLike) -> float:
    """Gini coefficient on proportions, sum((2i - n - 1) * p_(i)) / n.

    ``n`` counts every category of the group, including those with a zero
    share, so a single dominant category out of four scores 0.75.
    """
    p = np.sort(_as_proportions(proportions))
    n = p.size
    if n == 0:
        raise ValueError("gini_coefficient requires at least one category.")
    ranks = np.arange(1, n + 1, dtype=np.float64)
    weights = 2 * ranks - n - 1
    return float(np.sum(weights * p) / n)


__all__ = [
    "ProportionsLike",
    "gini_coefficient",
    "nonzero_count",
    "shannon_entropy",
    "simpson_diversity",
]
