"""Disagreement between embedding distance and string similarity."""

from __future__ import annotations

from dataclasses import dataclass

import torch
from torch import Tensor

from ..config import CostTarget
from ..core.encoder import RecurrentEncoder
from .similarity import SimilarityOracle


@dataclass(frozen=True, slots=True)
class CostBreakdown:
    """Components of the cost for a single string pair.

    ``encoded_distance`` is the embedding distance divided by
    :meth:`RecurrentEncoder.output_norm_max`, ``similarity`` the oracle score
    divided by its maximum and ``target`` the value the distance is compared
    against.
    """

    encoded_distance: float
    similarity: float
    target: float
    cost: float


def compare(
    encoded_first: Tensor,
    encoded_second: Tensor,
    norm_max: float,
    similarity: float,
    target: CostTarget = CostTarget.SIMILARITY,
) -> CostBreakdown:
    """Cost of two already encoded strings given their normalised similarity.

    With the default :attr:`CostTarget.SIMILARITY` the distance is compared
    with the similarity itself rather than ``1 - similarity``, so identical
    strings cost ``1.0``. Whether the dissimilarity was meant instead is
    unresolved; :attr:`CostTarget.DISSIMILARITY` applies that reading.
    """

    distance = float(torch.linalg.vector_norm(encoded_first - encoded_second))
    encoded_distance = distance / norm_max
    if target is CostTarget.DISSIMILARITY:
        compared = 1.0 - similarity
    else:
        compared = similarity
    return CostBreakdown(
        encoded_distance=encoded_distance,
        similarity=similarity,
        target=compared,
        cost=abs(encoded_distance - compared),
    )


def pair_cost(
    encoder: RecurrentEncoder,
    oracle: SimilarityOracle,
    first: str,
    second: str,
    target: CostTarget = CostTarget.SIMILARITY,
) -> CostBreakdown:
    """Encode both strings independently and return ``|distance - target|``."""

    return compare(
        encoder.encode(first),
        encoder.encode(second),
        encoder.output_norm_max(),
        oracle(first, second) / oracle.max_score,
        target,
    )


__all__ = ["CostBreakdown", "CostTarget", "compare", "pair_cost"]
