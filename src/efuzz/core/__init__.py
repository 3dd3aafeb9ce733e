"""String to vector encoding."""

from .bits import CHARACTER_WIDTHS, BitEncoder
from .encoder import RecurrentEncoder

__all__ = ["BitEncoder", "CHARACTER_WIDTHS", "RecurrentEncoder"]
