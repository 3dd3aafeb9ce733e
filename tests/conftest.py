import pytest

from efuzz import NetworkConfig, RecurrentEncoder


class ConstantOracle:
    """Oracle returning the same score for every pair and recording the calls."""

    def __init__(self, score: float = 50.0, max_score: float = 100.0) -> None:
        self.score = score
        self.max_score = max_score
        self.calls: list[tuple[str, str]] = []

    def __call__(self, first: str, second: str) -> float:
        self.calls.append((first, second))
        return self.score


@pytest.fixture
def encoder() -> RecurrentEncoder:
    encoder = RecurrentEncoder("utf-8", 10)
    encoder.set_encoding_nn_layer_sizes(
        [18, 14, 10],
        randomize=True,
        config=NetworkConfig(mutation_rate=1.0, mutation_scale=0.5, seed=0),
    )
    return encoder


@pytest.fixture
def oracle() -> ConstantOracle:
    return ConstantOracle()
