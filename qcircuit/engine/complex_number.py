"""Immutable complex number value type used for qubit amplitudes."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass

PRECISION = 3


def _bits(value: float) -> int:
    return struct.unpack("<q", struct.pack("<d", value))[0]


def _round_half_up(value: float, digits: int = PRECISION) -> float:
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


@dataclass(frozen=True, eq=False)
class Complex:
    """A (real, imaginary) pair of floats.

    Equality compares the IEEE-754 bit patterns of both parts, so
    ``Complex(0.0) != Complex(-0.0)`` and values reached through different
    rounding paths may compare unequal even when mathematically equal.
    Use ``math.isclose`` on the parts when a tolerance is wanted.
    """
    real: float = 0.0
    imaginary: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "real", float(self.real))
        object.__setattr__(self, "imaginary", float(self.imaginary))

    @classmethod
    def from_complex(cls, value: complex) -> Complex:
        value = complex(value)
        return cls(value.real, value.imag)

    def add(self, other: Complex) -> Complex:
        return Complex(self.real + other.real, self.imaginary + other.imaginary)

    def multiply(self, other: Complex) -> Complex:
        return Complex(
            self.real * other.real - self.imaginary * other.imaginary,
            self.imaginary * other.real + self.real * other.imaginary,
        )

    def modulus(self) -> float:
        """Distance from the origin, sqrt(re^2 + im^2)."""
        return math.sqrt(self.real * self.real + self.imaginary * self.imaginary)

    def conjugate(self) -> Complex:
        return Complex(self.real, -self.imaginary)

    __add__ = add
    __mul__ = multiply

    def __complex__(self) -> complex:
        return complex(self.real, self.imaginary)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Complex):
            return NotImplemented
        return (_bits(self.real) == _bits(other.real)
                and _bits(self.imaginary) == _bits(other.imaginary))

    def __hash__(self) -> int:
        return hash((_bits(self.real), _bits(self.imaginary)))

    def __str__(self) -> str:
        real = _round_half_up(self.real)
        if self.imaginary != 0:
            return f"({real} + {_round_half_up(self.imaginary)}i)"
        return str(real)
