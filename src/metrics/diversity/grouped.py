"""Per-group Shannon, Simpson and Gini indices over a table of rows."""

from __future__ import annotations

import math
from decimal import Decimal
from numbers import Real
from typing import Any, Callable, Hashable, Iterable, List, Optional, Sequence, Tuple, TypeVar, Union

import numpy as np

from src.pipelines import build_bucket_plan

from .indices import gini_coefficient, nonzero_count, shannon_entropy, simpson_diversity
from .records import INDEX_NAMES, DiversityConfig, IndexResult, InvalidArgumentError, InvalidInputError

RowT = TypeVar("RowT")
Accessor = Callable[[RowT], Any]


def compute_grouped_indices(
    data: Iterable[RowT],
    group_key_fn: Callable[[RowT], Hashable],
    value_fn: Accessor,
    indices: Union[str, Iterable[str]] = INDEX_NAMES,
    shannon_base: float = math.e,
    normalize_shannon: bool = False,
    weight_fn: Optional[Accessor] = None,
    keep_diagnostics: bool = False,
    sort_groups: bool = True,
) -> List[IndexResult]:
    """Compute the requested indices for every group in ``data``.

    Args:
        data: Rows of any shape; they are only read through the accessors.
        group_key_fn: Returns the (hashable) group key of a row.
        value_fn: Returns the numeric value of a row. ``None``/NaN is missing.
        indices: Any of "shannon", "simpson", "gini".
        shannon_base: Log base for Shannon (e for nats, 2 for bits).
        normalize_shannon: Divide Shannon by log_base(k).
        weight_fn: Optional per-row weight; the value used is value * weight.
        keep_diagnostics: Include the group total and k in each result.
        sort_groups: Emit groups sorted by key instead of first-seen order.

    Returns:
        One IndexResult per group.

    Raises:
        InvalidArgumentError: Unknown index name or unusable log base.
        InvalidInputError: A value, weight or their product is not a finite real number.
    """
    config = DiversityConfig.build(
        indices=indices,
        shannon_base=shannon_base,
        normalize_shannon=normalize_shannon,
        keep_diagnostics=keep_diagnostics,
        sort_groups=sort_groups,
    )
    return compute_indices_with_config(data, group_key_fn, value_fn, config, weight_fn=weight_fn)


def compute_indices_with_config(
    data: Iterable[RowT],
    group_key_fn: Callable[[RowT], Hashable],
    value_fn: Accessor,
    config: DiversityConfig,
    weight_fn: Optional[Accessor] = None,
) -> List[IndexResult]:
    """Same as `compute_grouped_indices` with the options bundled in ``config``."""
    config.validate()
    rows: Sequence[RowT] = list(data)

    effective = _extract_numeric(rows, value_fn, "value")
    if weight_fn is not None:
        effective = _apply_weights(effective, _extract_numeric(rows, weight_fn, "weight"))

    plan = build_bucket_plan(rows, group_key_fn)
    try:
        keys = plan.keys(sort=config.sort_groups)
    except TypeError as exc:
        raise InvalidArgumentError(f"{exc}; pass sort_groups=False to keep first-seen order.") from exc

    return [_reduce_group(key, effective[plan.indices[key]], config) for key in keys]


def group_proportions(effective: np.ndarray) -> Tuple[float, Optional[np.ndarray]]:
    """Return the group total and each row's share of it.

    Missing and negative contributions are skipped, not propagated: they add
    nothing to the total and get a zero share. Shares are ``None`` when the
    total is not positive. They are taken relative to the largest value, so
    they still sum to 1 when the total itself overflows to inf.
    """
    usable = np.where(np.isfinite(effective) & (effective > 0), effective, 0.0)
    with np.errstate(over="ignore"):
        total = float(usable.sum())
    if total <= 0:
        return total, None
    scaled = usable / usable.max()
    return total, scaled / scaled.sum()


def _extract_numeric(rows: Sequence[RowT], accessor: Accessor, label: str) -> np.ndarray:
    values = np.empty(len(rows), dtype=np.float64)
    for idx, row in enumerate(rows):
        values[idx] = _coerce_real(accessor(row), label, idx)
    return values


def _coerce_real(raw: Any, label: str, idx: int) -> float:
    if raw is None:
        return math.nan
    if isinstance(raw, bool) or not isinstance(raw, (Real, Decimal)):
        raise InvalidInputError(f"{label} must be numeric; row {idx} has {raw!r} ({type(raw).__name__}).")
    value = float(raw)
    if math.isinf(value):
        raise InvalidInputError(f"{label} must be finite; row {idx} has {raw!r}.")
    return value


def _apply_weights(values: np.ndarray, weights: np.ndarray) -> np.ndarray:
    with np.errstate(over="ignore"):
        effective = values * weights
    overflowed = np.flatnonzero(np.isinf(effective))
    if overflowed.size:
        idx = int(overflowed[0])
        raise InvalidInputError(
            f"value * weight overflows on row {idx} ({values[idx]!r} * {weights[idx]!r})."
        )
    return effective


def _reduce_group(key: Hashable, effective: np.ndarray, config: DiversityConfig) -> IndexResult:
    total, proportions = group_proportions(effective)

    if proportions is None:
        return IndexResult(
            group=key,
            total=total if config.keep_diagnostics else None,
            k=0 if config.keep_diagnostics else None,
        )

    return IndexResult(
        group=key,
        shannon=(
            shannon_entropy(proportions, base=config.shannon_base, normalize=config.normalize_shannon)
            if config.wants("shannon")
            else None
        ),
        simpson=simpson_diversity(proportions) if config.wants("simpson") else None,
        gini=gini_coefficient(proportions) if config.wants("gini") else None,
        total=total if config.keep_diagnostics else None,
        k=nonzero_count(proportions) if config.keep_diagnostics else None,
    )


__all__ = ["compute_grouped_indices", "compute_indices_with_config", "group_proportions"]
