"""Exception types raised by the encoder and trainer."""

from __future__ import annotations


class EfuzzError(Exception):
    """Base class for all errors raised by :mod:`efuzz`."""


class ConfigurationError(EfuzzError, ValueError):
    """The encoder or its network is not configured for the requested operation."""


class InputError(EfuzzError, ValueError):
    """A training call received unusable input (no pairs, missing or tiny dataset)."""


__all__ = ["EfuzzError", "ConfigurationError", "InputError"]
