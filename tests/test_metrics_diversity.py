"""Unit tests for the per-group index formulas and the grouped computation."""

from __future__ import annotations

import math
from decimal import Decimal
from fractions import Fraction
from pathlib import Path
import sys
from typing import Any, Dict, List, Optional

import numpy as np
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.metrics.diversity import (
    DiversityConfig,
    IndexResult,
    InvalidArgumentError,
    InvalidInputError,
    compute_grouped_indices,
    compute_indices_with_config,
    gini_coefficient,
    shannon_entropy,
    simpson_diversity,
)
from src.metrics.diversity.grouped import group_proportions
from src.metrics.diversity.indices import nonzero_count


# ---------------------------------------------------------------------------
# Helper utilities


Row = Dict[str, Any]


def _rows(group: Any, values: List[Optional[float]], weights: Optional[List[float]] = None) -> List[Row]:
    rows: List[Row] = []
    for idx, value in enumerate(values):
        row: Row = {"group": group, "category": idx, "value": value}
        if weights is not None:
            row["weight"] = weights[idx]
        rows.append(row)
    return rows


def _compute(rows: List[Row], **kwargs: Any) -> List[IndexResult]:
    return compute_grouped_indices(
        rows,
        group_key_fn=lambda row: row["group"],
        value_fn=lambda row: row["value"],
        **kwargs,
    )


def _single(values: List[Optional[float]], **kwargs: Any) -> IndexResult:
    results = _compute(_rows("g", values), **kwargs)
    assert len(results) == 1
    return results[0]


# ---------------------------------------------------------------------------
# Formula tests


def test_shannon_even_split_reaches_log_k() -> None:
    p = np.full(4, 0.25)
    assert shannon_entropy(p) == pytest.approx(math.log(4))
    assert shannon_entropy(p, base=2) == pytest.approx(2.0)
    assert shannon_entropy(p, normalize=True) == pytest.approx(1.0)


def test_shannon_single_category_is_zero() -> None:
    p = np.array([0.0, 1.0, 0.0])
    assert shannon_entropy(p) == 0.0
    assert shannon_entropy(p, normalize=True) == 0.0


def test_shannon_rejects_unusable_base() -> None:
    with pytest.raises(ValueError):
        shannon_entropy([0.5, 0.5], base=1.0)


def test_simpson_and_gini_on_known_vectors() -> None:
    p = np.array([0.1, 0.2, 0.3, 0.4])
    assert simpson_diversity(p) == pytest.approx(1 - (0.01 + 0.04 + 0.09 + 0.16))
    assert gini_coefficient(p) == pytest.approx(0.25)
    assert gini_coefficient([0.4, 0.3, 0.2, 0.1]) == pytest.approx(0.25)


def test_gini_counts_zero_share_categories() -> None:
    assert gini_coefficient([1.0, 0.0, 0.0, 0.0]) == pytest.approx(0.75)
    assert gini_coefficient([1.0]) == 0.0


def test_formulas_reject_negative_or_nan_proportions() -> None:
    with pytest.raises(ValueError):
        simpson_diversity([0.5, -0.5, 1.0])
    with pytest.raises(ValueError):
        gini_coefficient([0.5, float("nan")])
    with pytest.raises(ValueError):
        gini_coefficient([])


def test_nonzero_count() -> None:
    assert nonzero_count([0.0, 0.5, 0.5, 0.0]) == 2


# ---------------------------------------------------------------------------
# Reference scenarios


def test_even_four_way_split() -> None:
    result = _single([10, 10, 10, 10], keep_diagnostics=True)
    assert result.shannon == pytest.approx(1.3863, abs=1e-4)
    assert result.simpson == pytest.approx(0.75)
    assert result.gini == pytest.approx(0.0, abs=1e-12)
    assert result.total == pytest.approx(40.0)
    assert result.k == 4

    normalized = _single([10, 10, 10, 10], normalize_shannon=True)
    assert normalized.shannon == pytest.approx(1.0)


def test_single_dominant_category() -> None:
    result = _single([100, 0, 0, 0], keep_diagnostics=True)
    assert result.k == 1
    assert result.shannon == 0.0
    assert result.simpson == pytest.approx(0.0)
    assert result.gini == pytest.approx(0.75)

    normalized = _single([100, 0, 0, 0], normalize_shannon=True)
    assert normalized.shannon == 0.0


def test_all_zero_group_is_undefined_not_zero() -> None:
    rows = _rows("empty", [0, 0, 0]) + _rows("full", [5, 5])
    results = _compute(rows, keep_diagnostics=True)
    by_group = {result.group: result for result in results}

    empty = by_group["empty"]
    assert empty.shannon is None
    assert empty.simpson is None
    assert empty.gini is None
    assert empty.defined is False
    assert empty.total == 0.0
    assert empty.k == 0

    full = by_group["full"]
    assert full.simpson == pytest.approx(0.5)
    assert full.defined is True


def test_weights_change_results_when_non_uniform() -> None:
    values = [30.0, 30.0, 30.0]
    rows = _rows("day", values, weights=[1.0, 2.0, 0.5])

    unweighted = _compute(rows)[0]
    weighted = _compute(rows, weight_fn=lambda row: row["weight"], keep_diagnostics=True)[0]

    assert weighted.total == pytest.approx(30 + 60 + 15)
    assert weighted.shannon != pytest.approx(unweighted.shannon)
    assert weighted.simpson != pytest.approx(unweighted.simpson)
    assert weighted.gini != pytest.approx(unweighted.gini)


def test_uniform_weights_leave_results_unchanged() -> None:
    rows = _rows("day", [5.0, 15.0, 30.0], weights=[2.0, 2.0, 2.0])
    unweighted = _compute(rows)[0]
    weighted = _compute(rows, weight_fn=lambda row: row["weight"])[0]
    assert weighted.shannon == pytest.approx(unweighted.shannon)
    assert weighted.gini == pytest.approx(unweighted.gini)


# ---------------------------------------------------------------------------
# Missing and negative contributions


def test_missing_values_are_skipped() -> None:
    result = _single([10, None, float("nan"), 10], keep_diagnostics=True)
    assert result.total == pytest.approx(20.0)
    assert result.k == 2
    assert result.shannon == pytest.approx(math.log(2))
    # n counts all four rows; sorted shares are [0, 0, 0.5, 0.5].
    assert result.gini == pytest.approx((1 * 0.5 + 3 * 0.5) / 4)


def test_negative_values_do_not_crash_and_are_skipped() -> None:
    result = _single([10, -5, 10], keep_diagnostics=True)
    assert result.total == pytest.approx(20.0)
    assert result.k == 2
    assert result.simpson == pytest.approx(0.5)
    assert result.gini == pytest.approx(1 / 3)


def test_all_negative_group_is_undefined() -> None:
    result = _single([-1, -2], keep_diagnostics=True)
    assert result.shannon is None
    assert result.k == 0


# ---------------------------------------------------------------------------
# Numeric types


def test_decimal_and_fraction_values_accepted() -> None:
    result = _single([Decimal("10"), Decimal("10"), Fraction(20, 1)], keep_diagnostics=True)
    assert result.total == pytest.approx(40.0)
    assert result.gini == pytest.approx(1 / 3 * (-2 * 0.25 + 0 * 0.25 + 2 * 0.5))
    assert _single([Decimal("NaN"), Decimal("5")], keep_diagnostics=True).k == 1


def test_infinite_decimal_rejected() -> None:
    with pytest.raises(InvalidInputError):
        _single([Decimal("Infinity"), Decimal("1")])


# ---------------------------------------------------------------------------
# Large magnitudes


def test_total_overflow_keeps_shares_summing_to_one() -> None:
    result = _single([1e308] * 4, keep_diagnostics=True)
    assert result.k == 4
    assert result.simpson == pytest.approx(0.75)
    assert result.shannon == pytest.approx(math.log(4))
    assert result.gini == pytest.approx(0.0, abs=1e-12)


def test_weighted_product_overflow_rejected() -> None:
    rows = _rows("a", [1e200, 1.0], weights=[1e200, 1.0])
    with pytest.raises(InvalidInputError):
        _compute(rows, weight_fn=lambda row: row["weight"])


def test_group_proportions_skip_missing_and_negative() -> None:
    total, shares = group_proportions(np.array([3.0, np.nan, -2.0, 1.0]))
    assert total == pytest.approx(4.0)
    assert shares is not None
    assert shares.tolist() == pytest.approx([0.75, 0.0, 0.0, 0.25])

    total, shares = group_proportions(np.array([0.0, -1.0, np.nan]))
    assert total == 0.0
    assert shares is None


# ---------------------------------------------------------------------------
# Options


def test_only_requested_indices_are_populated() -> None:
    result = _single([1, 2, 3], indices="gini")
    assert result.gini is not None
    assert result.shannon is None
    assert result.simpson is None


def test_duplicate_index_names_collapse() -> None:
    config = DiversityConfig.build(indices=["simpson", "simpson", "shannon"])
    assert config.indices == ("simpson", "shannon")


def test_diagnostics_hidden_by_default() -> None:
    result = _single([1, 2, 3])
    assert result.total is None
    assert result.k is None


def test_groups_sorted_by_default() -> None:
    rows = _rows(3, [1, 2]) + _rows(1, [1, 1]) + _rows(2, [4, 0])
    assert [result.group for result in _compute(rows)] == [1, 2, 3]
    assert [result.group for result in _compute(rows, sort_groups=False)] == [3, 1, 2]


def test_unorderable_group_keys_require_first_seen_order() -> None:
    rows = _rows(1, [1, 2]) + _rows("a", [3, 4])
    with pytest.raises(InvalidArgumentError):
        _compute(rows)
    assert [result.group for result in _compute(rows, sort_groups=False)] == [1, "a"]


def test_empty_input_returns_no_groups() -> None:
    assert _compute([]) == []


def test_compute_with_config_matches_keyword_entry_point() -> None:
    rows = _rows("a", [3, 1, 6]) + _rows("b", [2, 2])
    config = DiversityConfig(shannon_base=2.0, normalize_shannon=True, keep_diagnostics=True)
    direct = compute_indices_with_config(rows, lambda row: row["group"], lambda row: row["value"], config)
    assert direct == _compute(rows, shannon_base=2.0, normalize_shannon=True, keep_diagnostics=True)


def test_compute_is_idempotent() -> None:
    rows = _rows("a", [3, 1, 6]) + _rows("b", [0, 0]) + _rows("c", [7])
    assert _compute(rows, keep_diagnostics=True) == _compute(rows, keep_diagnostics=True)


def test_result_value_lookup() -> None:
    result = _single([1, 3])
    assert result.value("simpson") == result.simpson
    with pytest.raises(InvalidArgumentError):
        result.value("entropy")  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Argument and input errors


@pytest.mark.parametrize("indices", [["entropy"], ["shannon", "theil"], []])
def test_unknown_or_empty_indices_rejected(indices: List[str]) -> None:
    with pytest.raises(InvalidArgumentError):
        _single([1, 2], indices=indices)


@pytest.mark.parametrize("base", [0, -2.0, 1, 1.0, 0.5, float("inf"), float("nan")])
def test_invalid_shannon_base_rejected(base: float) -> None:
    with pytest.raises(InvalidArgumentError):
        _single([1, 2], shannon_base=base)


@pytest.mark.parametrize("bad_value", ["10", True, object(), float("inf")])
def test_non_numeric_value_rejected(bad_value: Any) -> None:
    rows = _rows("a", [1, 2]) + _rows("b", [3, bad_value])
    with pytest.raises(InvalidInputError):
        _compute(rows)


def test_non_numeric_weight_rejected() -> None:
    rows = _rows("a", [1, 2], weights=[1.0, "heavy"])  # type: ignore[list-item]
    with pytest.raises(InvalidInputError):
        _compute(rows, weight_fn=lambda row: row["weight"])


def test_errors_are_value_errors() -> None:
    assert issubclass(InvalidInputError, ValueError)
    assert issubclass(InvalidArgumentError, ValueError)


def test_numpy_scalars_accepted() -> None:
    result = _single([np.int64(4), np.float32(4.0)])
    assert result.simpson == pytest.approx(0.5)


# ---------------------------------------------------------------------------
# Properties


def test_properties_hold_for_random_groups() -> None:
    rng = np.random.default_rng(7)
    for _ in range(50):
        n = int(rng.integers(1, 8))
        values = rng.integers(0, 20, size=n).astype(float)
        result = _single(list(values), keep_diagnostics=True)
        normalized = _single(list(values), normalize_shannon=True)
        if values.sum() == 0:
            assert result.shannon is None
            continue

        total, shares = group_proportions(values)
        assert shares is not None
        assert float(shares.sum()) == pytest.approx(1.0)
        assert total == pytest.approx(result.total)
        k = int(np.count_nonzero(values))
        assert result.k == k
        assert 0.0 <= result.simpson <= 1 - 1 / k + 1e-12
        assert result.shannon >= 0.0
        assert result.shannon <= math.log(k) + 1e-12
        assert 0.0 <= normalized.shannon <= 1.0 + 1e-12
        assert 0.0 <= result.gini < 1.0
        if k == 1:
            assert result.shannon == 0.0
            assert normalized.shannon == 0.0
            assert result.simpson == pytest.approx(0.0, abs=1e-12)


def test_concentrating_mass_lowers_diversity() -> None:
    spread = _single([40, 30, 20, 10])
    concentrated = _single([70, 20, 10, 0])
    assert concentrated.shannon < spread.shannon
    assert concentrated.simpson < spread.simpson
    assert concentrated.gini > spread.gini
    assert spread.gini == pytest.approx(0.25)
    assert concentrated.gini == pytest.approx(0.55)
