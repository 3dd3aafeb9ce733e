"""Zeroth-order hill climbing for :class:`~efuzz.core.encoder.RecurrentEncoder`.

Every training call follows the same cycle: measure the cost under the
current parameters, draw a random perturbation, measure again, then restore
the original parameters. The returned :class:`TrainingResult` carries the
perturbation only when it lowered the cost; keeping it is an explicit,
separate call (:meth:`StochasticTrainer.apply_training_result`).

A trainer is not safe to share between threads, and its encoder must not be
used for encoding elsewhere while a training call is running.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import asdict, dataclass, field
import logging
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

import numpy as np
from tqdm.auto import tqdm

from ..config import TrainerConfig
from ..core.encoder import RecurrentEncoder
from ..errors import ConfigurationError, InputError
from ..models.network import NeuralNetwork, NeuralNetworkDiff
from .cost import CostBreakdown, compare, pair_cost
from .dataset import Dataset
from .similarity import RatioOracle, SimilarityOracle

logger = logging.getLogger(__name__)

StringPair = Tuple[str, str]


@dataclass(frozen=True)
class TrainingResult:
    """Outcome of one perturb/evaluate/revert cycle.

    ``diff`` is only set when ``modified_cost < original_cost``.
    """

    diff: Optional[NeuralNetworkDiff]
    original_cost: float
    modified_cost: float

    @property
    def improved(self) -> bool:
        return self.modified_cost < self.original_cost


@dataclass(frozen=True, slots=True)
class CostLogEntry:
    iteration: int
    original_cost: float
    modified_cost: float


@dataclass
class TrainingHistory:
    """Costs collected during :meth:`StochasticTrainer.fit`."""

    original_costs: list[float] = field(default_factory=list)
    modified_costs: list[float] = field(default_factory=list)
    accepted: int = 0

    def record(self, result: TrainingResult, accepted: bool) -> None:
        self.original_costs.append(result.original_cost)
        self.modified_costs.append(result.modified_cost)
        self.accepted += int(accepted)

    @property
    def best_cost(self) -> float:
        costs = self.original_costs + self.modified_costs
        return min(costs) if costs else float("inf")


class StochasticTrainer:
    """Train an encoder by random search over its network parameters."""

    def __init__(
        self,
        encoder: RecurrentEncoder,
        dataset: Optional[Dataset | Iterable[str]] = None,
        *,
        oracle: Optional[SimilarityOracle] = None,
        config: Optional[TrainerConfig] = None,
    ) -> None:
        self.encoder = encoder
        self.oracle = oracle or RatioOracle()
        self.config = config or TrainerConfig()
        self.iteration = 0
        self._dataset: Optional[Dataset] = None
        self._cost_log: List[CostLogEntry] = []
        self._rng = np.random.default_rng(self.config.seed)
        if dataset is not None:
            self.set_dataset(dataset)

    # ------------------------------------------------------------------
    # Dataset
    # ------------------------------------------------------------------
    @property
    def dataset(self) -> Optional[Dataset]:
        return self._dataset

    def set_dataset(self, dataset: Dataset | Iterable[str]) -> None:
        """Point the trainer at ``dataset``; plain iterables are wrapped in a new one."""

        if not isinstance(dataset, Dataset):
            dataset = Dataset(dataset)
        self._dataset = dataset
        logger.info("Using dataset with %d strings", len(dataset))

    def get_dataset(self) -> Dataset:
        if self._dataset is None:
            self._dataset = Dataset()
        return self._dataset

    def add_to_dataset(self, string: str) -> None:
        self.get_dataset().append(string)

    def extend_dataset(self, strings: Iterable[str]) -> None:
        self.get_dataset().extend(strings)

    def _require_dataset(self) -> Dataset:
        if self._dataset is None:
            raise InputError("No dataset provided")
        if len(self._dataset) < 2:
            raise InputError("Dataset too small: at least two strings are required")
        return self._dataset

    # ------------------------------------------------------------------
    # Cost
    # ------------------------------------------------------------------
    def cost(self, first: str, second: str) -> float:
        return self.cost_breakdown(first, second).cost

    def cost_breakdown(self, first: str, second: str) -> CostBreakdown:
        return pair_cost(self.encoder, self.oracle, first, second, self.config.cost_target)

    def _mean_cost(self, pairs: Sequence[StringPair]) -> float:
        total = 0.0
        for first, second in pairs:
            total += self.cost(first, second)
        return total / len(pairs)

    def _mean_cost_all_pairs(self, strings: Sequence[str]) -> float:
        # Encodings are cached per string; the ordered pairs are scanned in place.
        encodings = [self.encoder.encode(string) for string in strings]
        norm_max = self.encoder.output_norm_max()
        count = len(strings)
        total = 0.0
        for index_1 in range(count):
            for index_2 in range(count):
                if index_1 == index_2:
                    continue
                similarity = self.oracle(strings[index_1], strings[index_2]) / self.oracle.max_score
                total += compare(
                    encodings[index_1],
                    encodings[index_2],
                    norm_max,
                    similarity,
                    self.config.cost_target,
                ).cost
        return total / (count * (count - 1))

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------
    @contextmanager
    def _perturbed(self, network: NeuralNetwork, diff: NeuralNetworkDiff) -> Iterator[None]:
        saved = network.snapshot()
        try:
            network.modify(diff)
            yield
        finally:
            network.restore(saved)

    def _hill_climb(self, evaluate: Callable[[], float]) -> TrainingResult:
        network = self.encoder.get_word_vector_encoder_nn()
        original_cost = evaluate()
        diff = network.random_diff()
        with self._perturbed(network, diff):
            modified_cost = evaluate()
        self.iteration += 1
        improved = modified_cost < original_cost
        logger.debug(
            "iteration %d: original_cost=%.6f modified_cost=%.6f improved=%s",
            self.iteration,
            original_cost,
            modified_cost,
            improved,
        )
        return TrainingResult(
            diff=diff if improved else None,
            original_cost=original_cost,
            modified_cost=modified_cost,
        )

    def train(
        self,
        first: str | Sequence[StringPair],
        second: Optional[str] = None,
    ) -> TrainingResult:
        """``train(s1, s2)`` for a single pair, ``train(pairs)`` for a batch."""

        if second is None:
            return self.train_batch(first)  # type: ignore[arg-type]
        return self.train_pair(first, second)  # type: ignore[arg-type]

    def train_pair(self, first: str, second: str) -> TrainingResult:
        return self._hill_climb(lambda: self.cost(first, second))

    def train_batch(self, pairs: Iterable[StringPair]) -> TrainingResult:
        """Compare the mean cost over ``pairs`` before and after a perturbation."""

        pairs = list(pairs)
        if not pairs:
            raise InputError("Empty string pairs provided")
        return self._hill_climb(lambda: self._mean_cost(pairs))

    def train_random(self, iterations: Optional[int] = None) -> TrainingResult:
        """Train on ``iterations`` uniformly sampled pairs, dropping self pairs.

        Self pairs are skipped, so fewer than ``iterations`` pairs may be
        compared. If every draw was a self pair, the sample is redrawn until
        at least one distinct pair exists.
        """

        dataset = self._require_dataset()
        if iterations is None:
            iterations = self.config.sample_pairs
        if iterations <= 0:
            raise InputError("iterations must be positive")
        pairs = self._sample_pairs(dataset, iterations)
        while not pairs:
            logger.debug("All %d sampled pairs were self pairs; resampling", iterations)
            pairs = self._sample_pairs(dataset, iterations)
        if len(pairs) < iterations:
            logger.debug("Skipped %d self pairs", iterations - len(pairs))
        return self.train_batch(pairs)

    def _sample_pairs(self, dataset: Dataset, count: int) -> List[StringPair]:
        indices = self._rng.integers(0, len(dataset), size=(count, 2))
        return [
            (dataset[int(index_1)], dataset[int(index_2)])
            for index_1, index_2 in indices
            if index_1 != index_2
        ]

    def train_all(self) -> TrainingResult:
        """Compare the mean cost over every ordered pair of distinct strings."""

        dataset = self._require_dataset()
        if not self.encoder.get_word_vector_encoder_nn().has_topology:
            raise ConfigurationError(
                "encoder network has no topology; call set_encoding_nn_layer_sizes first"
            )
        strings = dataset.to_list()
        return self._hill_climb(lambda: self._mean_cost_all_pairs(strings))

    def apply_training_result(self, result: TrainingResult) -> bool:
        """Keep the perturbation of ``result`` if it lowered the cost."""

        if result.diff is None or not result.modified_cost < result.original_cost:
            return False
        self.modify_encoder(result.diff)
        return True

    def modify_encoder(self, diff: NeuralNetworkDiff) -> "StochasticTrainer":
        self.encoder.modify(diff)
        return self

    def fit(
        self,
        steps: int,
        *,
        mode: str = "all",
        sample_pairs: Optional[int] = None,
        log_costs: bool = True,
        progress: bool = False,
        callback: Optional[Callable[["StochasticTrainer", TrainingResult, bool], None]] = None,
    ) -> TrainingHistory:
        """Run ``steps`` hill-climbing steps, keeping every improving perturbation.

        ``callback(trainer, result, accepted)`` is called after every step,
        once the result has been applied and logged.
        """

        if steps <= 0:
            raise InputError("steps must be positive")
        if mode not in {"all", "random"}:
            raise ValueError(f"mode must be 'all' or 'random', got {mode!r}")

        history = TrainingHistory()
        iterator: Iterable[int] = range(steps)
        if progress:
            iterator = tqdm(iterator, desc="Hill climbing", total=steps)
        for _ in iterator:
            if mode == "all":
                result = self.train_all()
            else:
                result = self.train_random(sample_pairs)
            accepted = self.apply_training_result(result)
            if log_costs:
                self.log_result(result)
            history.record(result, accepted)
            if accepted:
                logger.info(
                    "iteration %d: accepted perturbation, cost %.6f -> %.6f",
                    self.iteration,
                    result.original_cost,
                    result.modified_cost,
                )
            if callback is not None:
                callback(self, result, accepted)
            if progress:
                iterator.set_postfix(cost=min(result.original_cost, result.modified_cost))  # type: ignore[attr-defined]
        return history

    # ------------------------------------------------------------------
    # Cost log
    # ------------------------------------------------------------------
    @property
    def cost_log(self) -> Tuple[CostLogEntry, ...]:
        return tuple(self._cost_log)

    def log_result(self, result: TrainingResult) -> CostLogEntry:
        """Append ``result`` under the current iteration count."""

        return self.record_cost(self.iteration, result.original_cost, result.modified_cost)

    def record_cost(self, iteration: int, original_cost: float, modified_cost: float) -> CostLogEntry:
        entry = CostLogEntry(iteration, float(original_cost), float(modified_cost))
        self._cost_log.append(entry)
        return entry

    def clear_cost_log(self) -> None:
        self._cost_log.clear()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def state_dict(self) -> Dict[str, Any]:
        """Plain-data view of everything needed to resume training."""

        network = self.encoder.get_word_vector_encoder_nn()
        return {
            "text_encoding": self.encoder.text_encoding,
            "encoding_size": self.encoder.encoding_size,
            "layer_sizes": list(network.layer_sizes),
            "network_state": network.snapshot(),
            "dataset": self._dataset.to_list() if self._dataset is not None else None,
            "iteration": self.iteration,
            "cost_log": [asdict(entry) for entry in self._cost_log],
        }

    def load_state_dict(self, state: Dict[str, Any]) -> None:
        if state["text_encoding"] != self.encoder.text_encoding:
            raise ConfigurationError(
                f"checkpoint uses {state['text_encoding']!r}, encoder uses {self.encoder.text_encoding!r}"
            )
        self.encoder.resolve_encoding_size(state["encoding_size"])
        current = self.encoder.get_word_vector_encoder_nn()
        layer_sizes = state["layer_sizes"]
        if layer_sizes:
            network = NeuralNetwork.from_state(layer_sizes, state["network_state"], current.config)
        else:
            network = NeuralNetwork(config=current.config)
        self.encoder.set_word_vector_encoder_nn(network)
        if state.get("dataset") is not None:
            self._dataset = Dataset(state["dataset"])
        self.iteration = int(state.get("iteration", 0))
        self._cost_log = [CostLogEntry(**entry) for entry in state.get("cost_log", [])]


__all__ = [
    "CostLogEntry",
    "StochasticTrainer",
    "TrainingHistory",
    "TrainingResult",
]
