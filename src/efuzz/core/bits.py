"""Fixed-width binary encoding of single characters."""

from __future__ import annotations

from typing import Dict, List, Union

import torch
from torch import Tensor

from ..errors import ConfigurationError, InputError

CHARACTER_WIDTHS: Dict[str, int] = {
    "utf-8": 8,
    "utf-16": 16,
    "utf-32": 32,
}

_CODECS: Dict[str, str] = {
    "utf-8": "utf-8",
    "utf-16": "utf-16-le",
}


class BitEncoder:
    """Map character values of a fixed bit width to ``{0, 1}`` vectors.

    Bit ``i`` of the character lands at position ``i`` of the vector, least
    significant bit first.
    """

    def __init__(self, width: int, text_encoding: str = "utf-8") -> None:
        if not 0 < width <= 32:
            raise ConfigurationError("character width must lie in [1, 32]")
        name = text_encoding.lower().replace("_", "-")
        if name not in CHARACTER_WIDTHS:
            known = ", ".join(sorted(CHARACTER_WIDTHS))
            raise ConfigurationError(f"Unknown text encoding {text_encoding!r}; expected one of {known}")
        self.width = width
        self.text_encoding = name
        self._weights = torch.tensor([1 << i for i in range(width)], dtype=torch.int64)

    @classmethod
    def for_encoding(cls, text_encoding: str) -> "BitEncoder":
        name = text_encoding.lower().replace("_", "-")
        return cls(CHARACTER_WIDTHS.get(name, 8), text_encoding=name)

    def characters(self, text: Union[str, bytes]) -> List[int]:
        """Split ``text`` into the code units the encoder consumes."""

        if isinstance(text, (bytes, bytearray)):
            return list(text)
        if self.text_encoding == "utf-32":
            return [ord(char) for char in text]
        try:
            data = text.encode(_CODECS[self.text_encoding])
        except UnicodeEncodeError as exc:
            raise InputError(
                f"cannot split {text!r} into {self.text_encoding} code units: {exc.reason}"
            ) from exc
        if self.text_encoding == "utf-16":
            return [int.from_bytes(data[i : i + 2], "little") for i in range(0, len(data), 2)]
        return list(data)

    def encode(self, character: int) -> Tensor:
        value = int(character)
        if value < 0:
            value %= 1 << self.width
        if value >> self.width:
            raise InputError(f"character {character} does not fit in {self.width} bits")
        bits = torch.bitwise_and(torch.tensor(value, dtype=torch.int64), self._weights)
        return (bits != 0).to(torch.float32)

    __call__ = encode


__all__ = ["BitEncoder", "CHARACTER_WIDTHS"]
