"""Feed-forward network used as the recurrent step of the string encoder.

The network only needs two capabilities beyond plain evaluation: producing a
random perturbation of its parameters and applying such a perturbation. Both
are driven by a seeded numpy generator so that training runs can be
reproduced exactly.
"""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Dict, Iterable, Optional, Sequence, Tuple

import numpy as np
import torch
from torch import Tensor, nn

from ..config import NetworkConfig
from ..errors import ConfigurationError


@dataclass(frozen=True, eq=False)
class NeuralNetworkDiff:
    """Opaque parameter perturbation produced by :meth:`NeuralNetwork.random_diff`.

    Only the network that produced a diff (or one with the same topology)
    knows how to apply it. Callers are expected to pass it through untouched.
    """

    layer_sizes: Tuple[int, ...]
    deltas: Tuple[Tensor, ...]

    def __repr__(self) -> str:
        touched = sum(int(torch.count_nonzero(delta)) for delta in self.deltas)
        return f"NeuralNetworkDiff(layer_sizes={self.layer_sizes}, touched={touched})"


class NeuralNetwork(nn.Module):
    """Stack of sigmoid-activated linear layers with random perturbation support.

    Every layer is followed by a sigmoid, so each output component lies in
    ``[0, 1]``. A network built without layer sizes has no topology and
    refuses to compute.
    """

    def __init__(
        self,
        layer_sizes: Sequence[int] = (),
        randomize: bool = True,
        config: Optional[NetworkConfig] = None,
    ) -> None:
        super().__init__()
        sizes = tuple(int(size) for size in layer_sizes)
        if len(sizes) == 1:
            raise ConfigurationError("a network needs at least an input and an output layer")
        if any(size <= 0 for size in sizes):
            raise ConfigurationError("layer sizes must be positive")
        self.config = config or NetworkConfig()
        self._layer_sizes = sizes
        self._rng = np.random.default_rng(self.config.seed)
        self.layers = nn.ModuleList(
            nn.Linear(fan_in, fan_out) for fan_in, fan_out in zip(sizes[:-1], sizes[1:])
        )
        self.requires_grad_(False)
        self._initialise_parameters(randomize)

    def _initialise_parameters(self, randomize: bool) -> None:
        for layer in self.layers:
            fan_out, fan_in = layer.weight.shape
            if randomize:
                limit = math.sqrt(6.0 / (fan_in + fan_out))
                weight = self._rng.uniform(-limit, limit, size=(fan_out, fan_in))
                layer.weight.copy_(torch.as_tensor(weight, dtype=torch.float32))
            else:
                layer.weight.zero_()
            layer.bias.zero_()

    @property
    def has_topology(self) -> bool:
        return len(self._layer_sizes) >= 2

    @property
    def layer_sizes(self) -> Tuple[int, ...]:
        return self._layer_sizes

    @property
    def input_size(self) -> int:
        self._require_topology()
        return self._layer_sizes[0]

    @property
    def output_size(self) -> int:
        self._require_topology()
        return self._layer_sizes[-1]

    def _require_topology(self) -> None:
        if not self.has_topology:
            raise ConfigurationError("network has no layers; configure its layer sizes first")

    def forward(self, inputs: Tensor) -> Tensor:
        hidden = inputs
        for layer in self.layers:
            hidden = torch.sigmoid(layer(hidden))
        return hidden

    @torch.no_grad()
    def compute(self, vector: Tensor | Iterable[float]) -> Tensor:
        """Evaluate the network on a single input vector."""

        self._require_topology()
        inputs = torch.as_tensor(vector, dtype=torch.float32)
        if inputs.shape[-1] != self.input_size:
            raise ConfigurationError(
                f"network expects {self.input_size} inputs, received {inputs.shape[-1]}"
            )
        return self.forward(inputs)

    def random_diff(self) -> NeuralNetworkDiff:
        """Draw a sparse gaussian perturbation for every parameter tensor."""

        self._require_topology()
        deltas = []
        for parameter in self.parameters():
            shape = tuple(parameter.shape)
            mask = self._rng.random(shape) < self.config.mutation_rate
            noise = self._rng.normal(0.0, self.config.mutation_scale, size=shape)
            deltas.append(torch.as_tensor(noise * mask, dtype=torch.float32))
        return NeuralNetworkDiff(layer_sizes=self._layer_sizes, deltas=tuple(deltas))

    @torch.no_grad()
    def modify(self, diff: NeuralNetworkDiff) -> "NeuralNetwork":
        """Add ``diff`` to the parameters in place."""

        if diff.layer_sizes != self._layer_sizes:
            raise ConfigurationError(
                f"diff was drawn for layers {diff.layer_sizes}, network has {self._layer_sizes}"
            )
        parameters = list(self.parameters())
        if len(parameters) != len(diff.deltas):
            raise ConfigurationError("diff does not match the network parameters")
        for parameter, delta in zip(parameters, diff.deltas):
            if parameter.shape != delta.shape:
                raise ConfigurationError("diff does not match the network parameters")
            parameter.add_(delta.to(parameter.dtype))
        return self

    def snapshot(self) -> Dict[str, Tensor]:
        """Return an exact copy of the current parameters."""

        return {name: value.detach().clone() for name, value in self.state_dict().items()}

    def restore(self, snapshot: Dict[str, Tensor]) -> None:
        self.load_state_dict(snapshot)

    @classmethod
    def from_state(
        cls,
        layer_sizes: Sequence[int],
        state: Dict[str, Tensor],
        config: Optional[NetworkConfig] = None,
    ) -> "NeuralNetwork":
        network = cls(layer_sizes, randomize=False, config=config)
        network.restore(state)
        return network

    def extra_repr(self) -> str:
        return f"layer_sizes={self._layer_sizes}"


__all__ = ["NeuralNetwork", "NeuralNetworkDiff"]
