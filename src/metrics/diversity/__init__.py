"""Grouped Shannon, Simpson and Gini indices with an explanation table."""

from .explain import IndexExplanation, explain_indices, explanation_frame
from .frame import compute_indices_frame, results_to_frame
from .grouped import compute_grouped_indices, compute_indices_with_config
from .indices import gini_coefficient, shannon_entropy, simpson_diversity
from .records import (
    INDEX_NAMES,
    DiversityConfig,
    IndexName,
    IndexResult,
    InvalidArgumentError,
    InvalidInputError,
)

__all__ = [
    "INDEX_NAMES",
    "DiversityConfig",
    "IndexExplanation",
    "IndexName",
    "IndexResult",
    "InvalidArgumentError",
    "InvalidInputError",
    "compute_grouped_indices",
    "compute_indices_frame",
    "compute_indices_with_config",
    "explain_indices",
    "explanation_frame",
    "gini_coefficient",
    "results_to_frame",
    "shannon_entropy",
    "simpson_diversity",
]
