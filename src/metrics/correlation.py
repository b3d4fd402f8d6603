"""Pearson correlation checks between per-group diversity indices."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd
from scipy import stats

from src.metrics.diversity.records import INDEX_NAMES, IndexName, IndexResult

IndexPair = Tuple[IndexName, IndexName]

DEFAULT_PAIRS: Tuple[IndexPair, ...] = (
    ("shannon", "simpson"),
    ("shannon", "gini"),
    ("simpson", "gini"),
)
MIN_OBSERVATIONS = 3


@dataclass(frozen=True)
class CorrelationResult:
    """Pearson product-moment test for one pair of indices."""

    x: str
    y: str
    n: int
    statistic: float
    p_value: float
    confidence_level: float
    ci_low: Optional[float] = None
    ci_high: Optional[float] = None

    @property
    def significant(self) -> bool:
        """True when the test rejects r = 0 at 1 - confidence_level."""
        return bool(np.isfinite(self.p_value) and self.p_value < 1 - self.confidence_level)


def correlate_indices(
    results: Union[Sequence[IndexResult], pd.DataFrame],
    pairs: Sequence[IndexPair] = DEFAULT_PAIRS,
    confidence_level: float = 0.95,
) -> List[CorrelationResult]:
    """Correlate index columns pairwise over groups where both are defined.

    Args:
        results: IndexResult records or a frame with one column per index.
        pairs: Index pairs to test.
        confidence_level: Level of the Fisher-z confidence interval.

    Returns:
        One CorrelationResult per pair, in the order given.
    """
    if not 0 < confidence_level < 1:
        raise ValueError("confidence_level must fall within (0, 1).")

    columns = _index_columns(results)
    output: List[CorrelationResult] = []
    for x_name, y_name in pairs:
        for name in (x_name, y_name):
            if name not in INDEX_NAMES:
                raise ValueError(f"Unknown index '{name}'. Available: {list(INDEX_NAMES)}")
        output.append(_pearson(x_name, y_name, columns[x_name], columns[y_name], confidence_level))
    return output


def _index_columns(results: Union[Sequence[IndexResult], pd.DataFrame]) -> dict[str, np.ndarray]:
    if isinstance(results, pd.DataFrame):
        return {
            name: results[name].to_numpy(dtype=float, na_value=np.nan)
            if name in results.columns
            else np.full(len(results), np.nan)
            for name in INDEX_NAMES
        }
    columns: dict[str, np.ndarray] = {}
    for name in INDEX_NAMES:
        values = [result.value(name) for result in results]
        columns[name] = np.asarray([np.nan if value is None else value for value in values], dtype=float)
    return columns


def _pearson(
    x_name: str,
    y_name: str,
    x: np.ndarray,
    y: np.ndarray,
    confidence_level: float,
) -> CorrelationResult:
    complete = np.isfinite(x) & np.isfinite(y)
    n = int(complete.sum())
    if n < MIN_OBSERVATIONS:
        raise ValueError(
            f"Need at least {MIN_OBSERVATIONS} groups with both {x_name} and {y_name} defined, found {n}."
        )

    test = stats.pearsonr(x[complete], y[complete])
    ci_low: Optional[float] = None
    ci_high: Optional[float] = None
    # The Fisher interval needs n > 3.
    if n > MIN_OBSERVATIONS and np.isfinite(test.statistic):
        interval = test.confidence_interval(confidence_level=confidence_level)
        ci_low, ci_high = float(interval.low), float(interval.high)

    return CorrelationResult(
        x=x_name,
        y=y_name,
        n=n,
        statistic=float(test.statistic),
        p_value=float(test.pvalue),
        confidence_level=confidence_level,
        ci_low=ci_low,
        ci_high=ci_high,
    )


__all__ = ["CorrelationResult", "DEFAULT_PAIRS", "correlate_indices"]
