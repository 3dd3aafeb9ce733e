"""Computational units used by the string encoder."""

from .network import NeuralNetwork, NeuralNetworkDiff
from .schedules import linear_schedule, tapered_layer_sizes

__all__ = [
    "NeuralNetwork",
    "NeuralNetworkDiff",
    "linear_schedule",
    "tapered_layer_sizes",
]
