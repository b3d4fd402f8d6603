"""pandas entry point: bind group/value/weight columns by name."""

from __future__ import annotations

import math
from typing import Iterable, List, Optional, Sequence, Union

import numpy as np
import pandas as pd
from pandas.api.types import is_bool_dtype, is_numeric_dtype, is_scalar

from .grouped import compute_grouped_indices
from .records import INDEX_NAMES, IndexResult, InvalidArgumentError, InvalidInputError

DIAGNOSTIC_COLUMNS = ("total", "k")


def compute_indices_frame(
    frame: pd.DataFrame,
    group_col: str,
    value_col: str,
    *,
    indices: Union[str, Iterable[str]] = INDEX_NAMES,
    shannon_base: float = math.e,
    normalize_shannon: bool = False,
    weight_col: Optional[str] = None,
    keep_diagnostics: bool = False,
) -> pd.DataFrame:
    """Compute grouped indices on a DataFrame and return one row per group.

    Undefined and unrequested indices are NaN in the returned frame.
    """
    _require_columns(frame, [group_col, value_col] + ([weight_col] if weight_col else []))
    _require_numeric(frame, value_col)
    if weight_col:
        _require_numeric(frame, weight_col)

    columns = [c for c in dict.fromkeys([group_col, value_col, weight_col]) if c is not None]
    records = frame[columns].to_dict("records")
    results = compute_grouped_indices(
        records,
        group_key_fn=lambda row: _missing_key_to_none(row[group_col]),
        value_fn=lambda row: _missing_to_none(row[value_col]),
        indices=indices,
        shannon_base=shannon_base,
        normalize_shannon=normalize_shannon,
        weight_fn=(lambda row: _missing_to_none(row[weight_col])) if weight_col else None,
        keep_diagnostics=keep_diagnostics,
    )
    return results_to_frame(results, group_col=group_col, keep_diagnostics=keep_diagnostics)


def results_to_frame(
    results: Sequence[IndexResult],
    group_col: str = "group",
    keep_diagnostics: bool = False,
) -> pd.DataFrame:
    """Lay out IndexResult records as a DataFrame (group, [total, k], indices)."""
    columns: List[str] = [group_col]
    if keep_diagnostics:
        columns.extend(DIAGNOSTIC_COLUMNS)
    columns.extend(INDEX_NAMES)

    rows = []
    for result in results:
        row = {group_col: result.group}
        if keep_diagnostics:
            row["total"] = result.total
            row["k"] = result.k
        for name in INDEX_NAMES:
            value = result.value(name)
            row[name] = np.nan if value is None else value
        rows.append(row)

    df = pd.DataFrame(rows, columns=columns)
    for name in INDEX_NAMES:
        df[name] = df[name].astype(float)
    return df


def _require_columns(frame: pd.DataFrame, columns: Sequence[str]) -> None:
    missing = [column for column in columns if column not in frame.columns]
    if missing:
        raise InvalidArgumentError(f"Column(s) {missing} not found. Available: {list(frame.columns)}")


def _require_numeric(frame: pd.DataFrame, column: str) -> None:
    dtype = frame[column].dtype
    if is_bool_dtype(dtype) or not is_numeric_dtype(dtype):
        raise InvalidInputError(f"Column '{column}' must be numeric, got dtype {dtype}.")


def _missing_key_to_none(key: object) -> object:
    # Every NaN is a distinct object that never equals another; all missing keys share one group.
    if is_scalar(key) and pd.isna(key):
        return None
    return key


def _missing_to_none(value: object) -> object:
    # pd.NA and NaT are not real numbers; treat them as missing like NaN.
    if value is pd.NA or value is pd.NaT:
        return None
    return value


__all__ = ["DIAGNOSTIC_COLUMNS", "compute_indices_frame", "results_to_frame"]
