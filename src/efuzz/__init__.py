"""Learned fixed-size string embeddings that track fuzzy string similarity.

Strings are folded character by character through a small network
(:class:`RecurrentEncoder`) and the network is trained by derivative-free
hill climbing (:class:`StochasticTrainer`) so that embedding distances follow
a fuzzy matching score.
"""

from .config import CostTarget, EncoderConfig, NetworkConfig, TrainerConfig
from .core import CHARACTER_WIDTHS, BitEncoder, RecurrentEncoder
from .errors import ConfigurationError, EfuzzError, InputError
from .models import NeuralNetwork, NeuralNetworkDiff, tapered_layer_sizes
from .training import (
    CostBreakdown,
    CostLogEntry,
    Dataset,
    RatioOracle,
    SimilarityOracle,
    StochasticTrainer,
    TrainingHistory,
    TrainingResult,
    load_checkpoint,
    load_trainer,
    save_checkpoint,
)

__all__ = [
    "BitEncoder",
    "CHARACTER_WIDTHS",
    "ConfigurationError",
    "CostBreakdown",
    "CostLogEntry",
    "CostTarget",
    "Dataset",
    "EfuzzError",
    "EncoderConfig",
    "InputError",
    "NetworkConfig",
    "NeuralNetwork",
    "NeuralNetworkDiff",
    "RatioOracle",
    "RecurrentEncoder",
    "SimilarityOracle",
    "StochasticTrainer",
    "TrainerConfig",
    "TrainingHistory",
    "TrainingResult",
    "load_checkpoint",
    "load_trainer",
    "save_checkpoint",
    "tapered_layer_sizes",
]
