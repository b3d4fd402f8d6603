"""Shared records and configuration for grouped diversity indices."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Hashable, Iterable, Literal, Optional, Tuple, Union, cast

IndexName = Literal["shannon", "simpson", "gini"]

# Column order used when results are laid out as a table.
INDEX_NAMES: Tuple[IndexName, ...] = ("shannon", "gini", "simpson")


class InvalidInputError(ValueError):
    """A row produced a value or weight that is not a finite real number."""


class InvalidArgumentError(ValueError):
    """The caller passed an unsupported option (index name, log base, ...)."""


@dataclass(frozen=True)
class IndexResult:
    """Indices computed for a single group.

    ``None`` marks an index that was not requested or cannot be computed for
    the group (non-positive total). A computed zero is always ``0.0``.
    """

    group: Hashable
    shannon: Optional[float] = None
    simpson: Optional[float] = None
    gini: Optional[float] = None
    total: Optional[float] = None
    k: Optional[int] = None

    def value(self, name: IndexName) -> Optional[float]:
        """Return the index stored under ``name``."""
        if name not in INDEX_NAMES:
            raise InvalidArgumentError(f"Unknown index '{name}'. Available: {list(INDEX_NAMES)}")
        return cast(Optional[float], getattr(self, name))

    @property
    def defined(self) -> bool:
        """True when at least one index carries a value."""
        return any(getattr(self, name) is not None for name in INDEX_NAMES)


@dataclass(frozen=True)
class DiversityConfig:
    """Options for `compute_grouped_indices`."""

    indices: Tuple[IndexName, ...] = INDEX_NAMES
    shannon_base: float = math.e
    normalize_shannon: bool = False
    keep_diagnostics: bool = False
    sort_groups: bool = True

    def validate(self) -> None:
        if not self.indices:
            raise InvalidArgumentError("At least one index must be requested.")
        unknown = [name for name in self.indices if name not in INDEX_NAMES]
        if unknown:
            raise InvalidArgumentError(
                f"Unknown index name(s) {unknown}. Available: {list(INDEX_NAMES)}"
            )
        base = self.shannon_base
        if isinstance(base, bool) or not isinstance(base, Real):
            raise InvalidArgumentError(f"shannon_base must be a real number, got {base!r}.")
        if not math.isfinite(base) or base <= 1:
            raise InvalidArgumentError(f"shannon_base must be a finite number greater than 1, got {base!r}.")

    @classmethod
    def build(
        cls,
        indices: Union[str, Iterable[str]] = INDEX_NAMES,
        shannon_base: float = math.e,
        normalize_shannon: bool = False,
        keep_diagnostics: bool = False,
        sort_groups: bool = True,
    ) -> "DiversityConfig":
        """Normalize loose caller arguments into a validated config."""
        requested = [indices] if isinstance(indices, str) else list(indices)
        # Deduplicate while keeping the caller's order.
        unique = tuple(dict.fromkeys(requested))
        config = cls(
            indices=cast(Tuple[IndexName, ...], unique),
            shannon_base=shannon_base,
            normalize_shannon=normalize_shannon,
            keep_diagnostics=keep_diagnostics,
            sort_groups=sort_groups,
        )
        config.validate()
        return config

    def wants(self, name: IndexName) -> bool:
        return name in self.indices
