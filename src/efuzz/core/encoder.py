"""Recurrent string encoder folding characters into a fixed-size vector."""

from __future__ import annotations

import copy
import math
from typing import Optional, Sequence, Union

import torch
from torch import Tensor

from ..config import EncoderConfig, NetworkConfig
from ..errors import ConfigurationError
from ..models.network import NeuralNetwork, NeuralNetworkDiff
from ..models.schedules import tapered_layer_sizes
from .bits import BitEncoder


class RecurrentEncoder:
    """Encode strings by threading a hidden vector through a network per character.

    For every character the network receives ``[bits(character), hidden]``
    (width ``W + D``) and returns the next hidden vector (width ``D``). The
    hidden vector is scratch state: it is reset at the start of every
    :meth:`encode` call.

    ``encoding_size`` may be left as ``None``. The dimension is then resolved
    once, either explicitly with :meth:`resolve_encoding_size` or from the
    first network handed to :meth:`set_word_vector_encoder_nn`, and is fixed
    from then on.
    """

    def __init__(
        self,
        text_encoding: str = "utf-8",
        encoding_size: Optional[int] = None,
        network: Optional[NeuralNetwork] = None,
    ) -> None:
        self.bit_encoder = BitEncoder.for_encoding(text_encoding)
        self._dynamic = encoding_size is None
        self._encoding_size: Optional[int] = None
        self._network = NeuralNetwork()
        self._encoding_result: Optional[Tensor] = None
        if encoding_size is not None:
            self.resolve_encoding_size(encoding_size)
        if network is not None:
            self.set_word_vector_encoder_nn(network)

    @classmethod
    def from_config(
        cls,
        config: EncoderConfig,
        network_config: Optional[NetworkConfig] = None,
    ) -> "RecurrentEncoder":
        """Build an encoder with a tapered network topology."""

        if config.encoding_size is None:
            raise ConfigurationError("from_config needs a concrete encoding_size")
        encoder = cls(config.text_encoding, config.encoding_size)
        layer_sizes = tapered_layer_sizes(
            encoder.get_nn_input_size(),
            encoder.get_nn_output_size(),
            config.hidden_layers,
        )
        encoder.set_encoding_nn_layer_sizes(layer_sizes, config.randomize, network_config)
        return encoder

    @property
    def char_width(self) -> int:
        return self.bit_encoder.width

    @property
    def text_encoding(self) -> str:
        return self.bit_encoder.text_encoding

    @property
    def is_dynamic(self) -> bool:
        return self._dynamic

    @property
    def encoding_size(self) -> int:
        if self._encoding_size is None:
            raise ConfigurationError("encoding size is dynamic and has not been resolved yet")
        return self._encoding_size

    def resolve_encoding_size(self, size: int) -> "RecurrentEncoder":
        size = int(size)
        if size <= 0:
            raise ConfigurationError("encoding size must be positive")
        if self._encoding_size is not None:
            if size != self._encoding_size:
                raise ConfigurationError(
                    f"encoding size is fixed at {self._encoding_size}; cannot change it to {size}"
                )
            return self
        self._encoding_size = size
        self.reset_encoding_result()
        return self

    def encode(self, word: Union[str, bytes]) -> Tensor:
        self.reset_encoding_result()
        for letter in self.bit_encoder.characters(word):
            self.encode_letter(letter)
        return self.get_encoding_result()

    def encode_letter(self, letter: int) -> "RecurrentEncoder":
        if not self._network.has_topology:
            raise ConfigurationError(
                "encoder network has no topology; call set_encoding_nn_layer_sizes first"
            )
        if self._encoding_result is None:
            self.reset_encoding_result()
        letter_bits = self.bit_encoder.encode(letter)
        inputs = torch.cat([letter_bits, self._encoding_result])
        self._encoding_result = self._network.compute(inputs)
        return self

    def reset_encoding_result(self) -> "RecurrentEncoder":
        self._encoding_result = torch.zeros(self.encoding_size, dtype=torch.float32)
        return self

    def get_encoding_result(self) -> Tensor:
        if self._encoding_result is None:
            self.reset_encoding_result()
        return self._encoding_result.clone()

    def set_word_vector_encoder_nn(self, network: NeuralNetwork) -> "RecurrentEncoder":
        if network.has_topology:
            if self._encoding_size is None:
                self.resolve_encoding_size(network.output_size)
            self._check_layer_sizes(network.layer_sizes)
        self._network = network
        return self

    def get_word_vector_encoder_nn(self) -> NeuralNetwork:
        return self._network

    def set_encoding_nn_layer_sizes(
        self,
        layer_sizes: Sequence[int],
        randomize: bool = True,
        config: Optional[NetworkConfig] = None,
    ) -> "RecurrentEncoder":
        self._check_layer_sizes(layer_sizes)
        self._network = NeuralNetwork(layer_sizes, randomize, config or self._network.config)
        return self

    def _check_layer_sizes(self, layer_sizes: Sequence[int]) -> None:
        if len(layer_sizes) < 2:
            raise ConfigurationError("layer sizes need at least an input and an output width")
        if layer_sizes[0] != self.get_nn_input_size():
            raise ConfigurationError(
                f"first layer width {layer_sizes[0]} != {self.get_nn_input_size()} "
                f"(character width {self.char_width} + encoding size {self.encoding_size})"
            )
        if layer_sizes[-1] != self.get_nn_output_size():
            raise ConfigurationError(
                f"last layer width {layer_sizes[-1]} != encoding size {self.get_nn_output_size()}"
            )

    def modify(self, diff: NeuralNetworkDiff) -> "RecurrentEncoder":
        self._network.modify(diff)
        return self

    def get_nn_input_size(self) -> int:
        return self.char_width + self.encoding_size

    def get_nn_output_size(self) -> int:
        return self.encoding_size

    def output_norm_max(self) -> float:
        """Largest distance between two outputs whose components lie in ``[0, 1]``."""

        return math.sqrt(self.encoding_size)

    def copy(self) -> "RecurrentEncoder":
        return copy.deepcopy(self)

    def __repr__(self) -> str:
        size = self._encoding_size if self._encoding_size is not None else "dynamic"
        return (
            f"RecurrentEncoder(text_encoding={self.text_encoding!r}, "
            f"encoding_size={size}, layers={self._network.layer_sizes})"
        )


__all__ = ["RecurrentEncoder"]
