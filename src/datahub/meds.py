from __future__ import annotations

import pandas as pd

from .config import MEDS


def build_meds_table() -> pd.DataFrame:
    """Return the bundled medication table (person_id, med_name, color, shape)."""
    return pd.DataFrame(MEDS, columns=["person_id", "med_name", "color", "shape"])


def count_attribute(meds: pd.DataFrame, group_col: str, attribute: str) -> pd.DataFrame:
    """Count rows per (group, attribute value) into an ``n_<attribute>`` column."""
    missing = [column for column in (group_col, attribute) if column not in meds.columns]
    if missing:
        raise ValueError(f"Column(s) {missing} not found. Available: {list(meds.columns)}")
    return (
        meds.groupby([group_col, attribute], sort=True)
        .size()
        .reset_index(name=f"n_{attribute}")
    )


__all__ = ["build_meds_table", "count_attribute"]
