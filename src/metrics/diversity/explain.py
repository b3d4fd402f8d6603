"""Plain-language descriptions of each index, for reports and onboarding."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Tuple

import pandas as pd


@dataclass(frozen=True)
class IndexExplanation:
    index_name: str
    plain_language_description: str
    example_framing: str
    typical_range: str


EXPLANATIONS: Tuple[IndexExplanation, ...] = (
    IndexExplanation(
        index_name="Shannon entropy (H)",
        plain_language_description=(
            "How 'uncertain' the next device is. If time is evenly spread across devices, "
            "Shannon is higher. If one device dominates, Shannon is lower."
        ),
        example_framing="Higher when minutes are spread across devices; lower when one device takes most minutes.",
        typical_range=">= 0; max is log_base(k)",
    ),
    IndexExplanation(
        index_name="Normalized Shannon (H / log(k))",
        plain_language_description=(
            "Shannon entropy scaled so it's easier to compare across days with different numbers "
            "of devices. 0 = one device; 1 = perfectly even."
        ),
        example_framing="Lets you compare days even if some days have fewer devices recorded.",
        typical_range="0 to 1 (when k > 1)",
    ),
    IndexExplanation(
        index_name="Simpson diversity (1 - sum p^2)",
        plain_language_description=(
            "If you pick two random minutes, how likely they come from different devices. "
            "More mixing means higher Simpson."
        ),
        example_framing="Higher when balanced across devices; lower when one device dominates.",
        typical_range="0 to near 1",
    ),
    IndexExplanation(
        index_name="Gini (inequality of proportions)",
        plain_language_description=(
            "How unequal the distribution is. If one device hogs most minutes, Gini is high; "
            "if evenly spread, Gini is low."
        ),
        example_framing="Higher when one device dominates; lower when minutes are evenly split.",
        typical_range="0 to 1 (common use)",
    ),
)


def explain_indices() -> Tuple[IndexExplanation, ...]:
    """Return the fixed explanation rows, one per reported index."""
    return EXPLANATIONS


def explanation_frame() -> pd.DataFrame:
    return pd.DataFrame([asdict(row) for row in EXPLANATIONS])


__all__ = ["EXPLANATIONS", "IndexExplanation", "explain_indices", "explanation_frame"]
