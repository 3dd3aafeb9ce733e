"""Configuration dataclasses for encoders, networks and trainers."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CostTarget(str, Enum):
    """Quantity the normalised embedding distance is compared against.

    ``SIMILARITY`` compares distance with the oracle similarity itself, so two
    identical strings cost ``1.0``. ``DISSIMILARITY`` compares it with
    ``1 - similarity`` instead and must be selected explicitly.
    """

    SIMILARITY = "similarity"
    DISSIMILARITY = "dissimilarity"


@dataclass(slots=True)
class EncoderConfig:
    """Configuration controlling the recurrent encoder.

    Parameters
    ----------
    text_encoding:
        Text encoding used to split strings into characters. Determines the
        character width: ``utf-8`` gives 8 bit units, ``utf-16`` 16 bit units
        and ``utf-32`` one 32 bit unit per code point.
    encoding_size:
        Dimension of the produced embedding. ``None`` leaves it dynamic so it
        can be resolved once later, for example from a loaded network.
    hidden_layers:
        Number of hidden layers between the input and output layer of the
        recurrent network.
    randomize:
        Draw the initial weights at random. When disabled all parameters start
        at zero.
    """

    text_encoding: str = "utf-8"
    encoding_size: Optional[int] = 10
    hidden_layers: int = 2
    randomize: bool = True

    def __post_init__(self) -> None:
        if self.encoding_size is not None and self.encoding_size <= 0:
            raise ValueError("encoding_size must be positive")
        if self.hidden_layers < 0:
            raise ValueError("hidden_layers must be non-negative")


@dataclass(slots=True)
class NetworkConfig:
    """Perturbation settings for :class:`~efuzz.models.network.NeuralNetwork`.

    ``mutation_rate`` is the probability that any single parameter entry is
    touched by a random diff, ``mutation_scale`` the standard deviation of the
    gaussian noise added to touched entries. ``seed`` makes initialisation and
    perturbations reproducible.
    """

    mutation_rate: float = 0.1
    mutation_scale: float = 0.5
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if not 0.0 < self.mutation_rate <= 1.0:
            raise ValueError("mutation_rate must lie in (0, 1]")
        if self.mutation_scale <= 0.0:
            raise ValueError("mutation_scale must be positive")


@dataclass(slots=True)
class TrainerConfig:
    """Settings for :class:`~efuzz.training.trainer.StochasticTrainer`."""

    cost_target: CostTarget = CostTarget.SIMILARITY
    sample_pairs: int = 5
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.sample_pairs <= 0:
            raise ValueError("sample_pairs must be positive")
        self.cost_target = CostTarget(self.cost_target)


__all__ = ["CostTarget", "EncoderConfig", "NetworkConfig", "TrainerConfig"]
