"""String similarity oracles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol

from rapidfuzz import fuzz


class SimilarityOracle(Protocol):
    """Pure, bounded similarity score between two strings; higher is more similar."""

    max_score: float

    def __call__(self, first: str, second: str) -> float: ...


@dataclass(frozen=True)
class RatioOracle:
    """Normalised Indel similarity from :func:`rapidfuzz.fuzz.ratio` (``0`` to ``100``)."""

    scorer: Callable[[str, str], float] = fuzz.ratio
    max_score: float = 100.0

    def __post_init__(self) -> None:
        if self.max_score <= 0.0:
            raise ValueError("max_score must be positive")

    def __call__(self, first: str, second: str) -> float:
        return float(self.scorer(first, second))


__all__ = ["RatioOracle", "SimilarityOracle"]
