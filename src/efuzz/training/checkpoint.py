"""Persist and restore trainer state with :func:`torch.save`."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import torch

from ..config import NetworkConfig, TrainerConfig
from ..core.encoder import RecurrentEncoder
from ..models.network import NeuralNetwork
from .similarity import SimilarityOracle
from .trainer import StochasticTrainer

logger = logging.getLogger(__name__)


def save_checkpoint(trainer: StochasticTrainer, path: str | Path) -> None:
    """Write encoder parameters, dataset, iteration count and cost log to ``path``."""

    torch.save(trainer.state_dict(), path)
    logger.info("Saved checkpoint at iteration %d to %s", trainer.iteration, path)


def load_checkpoint(trainer: StochasticTrainer, path: str | Path) -> None:
    """Restore ``trainer`` in place from a checkpoint written by :func:`save_checkpoint`."""

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Checkpoint not found: {path}")
    state = torch.load(path, map_location="cpu")
    trainer.load_state_dict(state)
    logger.info("Loaded checkpoint at iteration %d from %s", trainer.iteration, path)


def load_trainer(
    path: str | Path,
    *,
    oracle: Optional[SimilarityOracle] = None,
    config: Optional[TrainerConfig] = None,
    network_config: Optional[NetworkConfig] = None,
) -> StochasticTrainer:
    """Build a fresh encoder and trainer from a checkpoint file."""

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Checkpoint not found: {path}")
    state = torch.load(path, map_location="cpu")
    encoder = RecurrentEncoder(
        state["text_encoding"],
        state["encoding_size"],
        network=NeuralNetwork(config=network_config),
    )
    trainer = StochasticTrainer(encoder, oracle=oracle, config=config)
    trainer.load_state_dict(state)
    return trainer


__all__ = ["load_checkpoint", "load_trainer", "save_checkpoint"]
