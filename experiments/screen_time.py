from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import pandas as pd

from src.datahub import generate_screen_time
from src.datahub.config import SCREEN_TIME
from src.metrics.correlation import CorrelationResult, correlate_indices
from src.metrics.diversity import compute_indices_frame


@dataclass
class ScreenTimeReport:
    """Tables produced by one screen-time run."""

    data: pd.DataFrame
    unweighted: pd.DataFrame
    weighted: Optional[pd.DataFrame] = None
    correlations: List[CorrelationResult] = field(default_factory=list)


def run_screen_time(
    n_days: int = SCREEN_TIME["n_days"],
    seed: Optional[int] = SCREEN_TIME["seed"],
    shannon_base: float = 2.0,
    normalize_shannon: bool = True,
    weighted: bool = True,
    keep_diagnostics: bool = True,
) -> ScreenTimeReport:
    """Daily device-usage diversity, unweighted and weighted by intensity."""
    data = generate_screen_time(n_days=n_days, seed=seed)
    print(f"[screen-time] Generated {len(data)} rows over {n_days} days (seed={seed}).")

    # Minutes alone: higher diversity means usage is spread across devices.
    unweighted = compute_indices_frame(
        data,
        group_col="day",
        value_col="minutes",
        shannon_base=shannon_base,
        normalize_shannon=normalize_shannon,
    )

    weighted_frame: Optional[pd.DataFrame] = None
    if weighted:
        # Minutes scaled by the intensity weight, with totals and k kept for inspection.
        weighted_frame = compute_indices_frame(
            data,
            group_col="day",
            value_col="minutes",
            shannon_base=shannon_base,
            normalize_shannon=normalize_shannon,
            weight_col=SCREEN_TIME["weight_column"],
            keep_diagnostics=keep_diagnostics,
        )

    correlations: List[CorrelationResult] = []
    try:
        correlations = correlate_indices(unweighted)
    except ValueError as exc:
        print(f"[screen-time] Skipping correlation checks: {exc}")

    return ScreenTimeReport(
        data=data,
        unweighted=unweighted,
        weighted=weighted_frame,
        correlations=correlations,
    )


__all__ = ["ScreenTimeReport", "run_screen_time"]
