from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Hashable, List, Sequence, TypeVar

RowT = TypeVar("RowT")
BucketKey = Hashable


@dataclass(frozen=True)
class BucketPlan(Generic[RowT]):
    """Partition of rows into groups, keyed by the group value."""

    indices: Dict[BucketKey, List[int]]

    @property
    def sizes(self) -> Dict[BucketKey, int]:
        return {key: len(members) for key, members in self.indices.items()}

    def keys(self, sort: bool = False) -> List[BucketKey]:
        """Return bucket keys in first-seen order, or sorted when `sort` is set.

        A ``None`` key (missing group) sorts after every other key.
        """
        keys = list(self.indices)
        if not sort:
            return keys
        present = [key for key in keys if key is not None]
        try:
            ordered = sorted(present)  # type: ignore[type-var]
        except TypeError as exc:
            raise TypeError(f"Group keys cannot be ordered against each other: {exc}") from exc
        if len(present) < len(keys):
            ordered.append(None)
        return ordered


def build_bucket_plan(
    rows: Sequence[RowT],
    key_fn: Callable[[RowT], BucketKey],
) -> BucketPlan[RowT]:
    """Group rows by `key_fn`, keeping the row order inside each bucket."""
    buckets: Dict[BucketKey, List[int]] = defaultdict(list)
    for idx, row in enumerate(rows):
        buckets[key_fn(row)].append(idx)
    return BucketPlan(indices=dict(buckets))
