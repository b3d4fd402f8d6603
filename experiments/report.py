"""Console formatting for index tables and correlation checks."""

from __future__ import annotations

from typing import Iterable, Optional

import pandas as pd

from src.metrics.correlation import CorrelationResult

FLOAT_FORMAT = "{:.4f}".format


def format_frame(df: pd.DataFrame, title: Optional[str] = None) -> str:
    """Render a frame without its index, NaN shown as NA."""
    body = df.to_string(index=False, na_rep="NA", float_format=FLOAT_FORMAT)
    if title:
        return f"{title}\n{'-' * len(title)}\n{body}"
    return body


def format_correlation(result: CorrelationResult) -> str:
    line = (
        f"{result.x} vs {result.y}: r={result.statistic:.3f}, "
        f"p={result.p_value:.4f}, n={result.n}"
    )
    if result.ci_low is not None and result.ci_high is not None:
        level = int(round(result.confidence_level * 100))
        line += f", {level}% CI [{result.ci_low:.3f}, {result.ci_high:.3f}]"
    return line


def format_correlations(results: Iterable[CorrelationResult]) -> str:
    return "\n".join(format_correlation(result) for result in results)


__all__ = ["format_correlation", "format_correlations", "format_frame"]
