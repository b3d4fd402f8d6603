from __future__ import annotations

from typing import Dict, Sequence

import pandas as pd

from src.datahub import build_meds_table, count_attribute
from src.metrics.diversity import compute_indices_frame

DEFAULT_ATTRIBUTES = ("color", "shape")


def run_meds(
    attributes: Sequence[str] = DEFAULT_ATTRIBUTES,
    shannon_base: float = 2.0,
    normalize_shannon: bool = True,
) -> Dict[str, pd.DataFrame]:
    """Per-person diversity of pill attributes, computed from attribute counts."""
    meds = build_meds_table()
    print(f"[meds] Loaded {len(meds)} medications for {meds['person_id'].nunique()} people.")

    tables: Dict[str, pd.DataFrame] = {}
    for attribute in attributes:
        counts = count_attribute(meds, "person_id", attribute)
        tables[attribute] = compute_indices_frame(
            counts,
            group_col="person_id",
            value_col=f"n_{attribute}",
            shannon_base=shannon_base,
            normalize_shannon=normalize_shannon,
        )
        print(f"[meds] Computed {attribute} diversity for {len(tables[attribute])} people.")
    return tables


__all__ = ["DEFAULT_ATTRIBUTES", "run_meds"]
