"""Layer width schedules for encoder networks."""
from __future__ import annotations

from typing import Iterator, List


def linear_schedule(start: float, end: float, steps: int) -> Iterator[float]:
    """Yield linearly spaced values from ``start`` to ``end``."""

    if steps <= 0:
        raise ValueError("steps must be positive")
    delta = (end - start) / max(steps - 1, 1)
    for index in range(steps):
        yield start + index * delta


def tapered_layer_sizes(input_size: int, output_size: int, hidden_layers: int) -> List[int]:
    """Return ``[input, h1, ..., hk, output]`` narrowing linearly towards the output.

    Hidden widths never drop below ``output_size``.
    """

    if input_size <= 0 or output_size <= 0:
        raise ValueError("layer widths must be positive")
    if hidden_layers < 0:
        raise ValueError("hidden_layers must be non-negative")
    widths = list(linear_schedule(input_size, output_size, hidden_layers + 2))
    hidden = [max(output_size, round(width)) for width in widths[1:-1]]
    return [input_size, *hidden, output_size]


__all__ = ["linear_schedule", "tapered_layer_sizes"]
