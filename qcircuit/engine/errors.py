"""Exception taxonomy for the circuit engine and its document codec."""

from __future__ import annotations


class CircuitError(Exception):
    """Base class for every error raised by qcircuit."""


class InvalidConfigurationError(CircuitError, ValueError):
    """An unrecognised gate tag or an invalid constructor argument."""


class UnsupportedTopologyError(CircuitError, ValueError):
    """A known gate type placed on a wire arrangement it does not support."""


class FormatError(CircuitError, ValueError):
    """A persisted circuit document is malformed or inconsistent."""


class IllegalStateError(CircuitError, IndexError):
    """A wire or column index outside the circuit's current bounds."""
