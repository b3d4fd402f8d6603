"""Synthetic screen-time table: minutes per device per day."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .config import SCREEN_TIME


def generate_screen_time(
    n_days: int = SCREEN_TIME["n_days"],
    devices: Sequence[str] = SCREEN_TIME["devices"],
    seed: Optional[int] = SCREEN_TIME["seed"],
    minutes_range: Tuple[float, float] = SCREEN_TIME["minutes_range"],
    weight_range: Tuple[float, float] = SCREEN_TIME["weight_range"],
) -> pd.DataFrame:
    """Draw one row per (day, device) with uniform minutes and weights.

    Days are numbered from 1. Minutes are rounded to whole numbers and weights
    to two decimals; the same seed always yields the same table.
    """
    if n_days < 1:
        raise ValueError("n_days must be at least 1.")
    devices = list(devices)
    if not devices:
        raise ValueError("At least one device is required.")
    for name, (low, high) in (("minutes_range", minutes_range), ("weight_range", weight_range)):
        if not low <= high:
            raise ValueError(f"{name} must be (low, high) with low <= high, got {(low, high)}.")

    rng = np.random.default_rng(seed)
    n_rows = n_days * len(devices)
    minutes = np.round(rng.uniform(minutes_range[0], minutes_range[1], size=n_rows))
    weights = np.round(rng.uniform(weight_range[0], weight_range[1], size=n_rows), 2)

    return pd.DataFrame(
        {
            "day": np.repeat(np.arange(1, n_days + 1), len(devices)),
            "device": np.tile(devices, n_days),
            "minutes": minutes.astype(int),
            SCREEN_TIME["weight_column"]: weights,
        }
    )


__all__ = ["generate_screen_time"]
