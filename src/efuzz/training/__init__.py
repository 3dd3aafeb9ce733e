"""Hill-climbing training for string encoders."""

from .checkpoint import load_checkpoint, load_trainer, save_checkpoint
from .cost import CostBreakdown, CostTarget, compare, pair_cost
from .dataset import Dataset
from .similarity import RatioOracle, SimilarityOracle
from .trainer import CostLogEntry, StochasticTrainer, TrainingHistory, TrainingResult

__all__ = [
    "CostBreakdown",
    "CostLogEntry",
    "CostTarget",
    "Dataset",
    "RatioOracle",
    "SimilarityOracle",
    "StochasticTrainer",
    "TrainingHistory",
    "TrainingResult",
    "compare",
    "load_checkpoint",
    "load_trainer",
    "pair_cost",
    "save_checkpoint",
]
