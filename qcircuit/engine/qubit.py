"""Single two-level quantum state used as a wire's initial value."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from .complex_number import Complex
from .errors import InvalidConfigurationError


def _as_complex(value) -> Complex:
    if isinstance(value, Complex):
        return value
    return Complex.from_complex(value)


@dataclass(frozen=True)
class Qubit:
    """Amplitude pair (x, y) for |0> and |1>. Defaults to |0>."""
    x: Complex = field(default_factory=lambda: Complex(1.0))
    y: Complex = field(default_factory=Complex)

    def __post_init__(self):
        object.__setattr__(self, "x", _as_complex(self.x))
        object.__setattr__(self, "y", _as_complex(self.y))

    @classmethod
    def from_bit(cls, value: int) -> Qubit:
        """Computational basis qubit: 0 -> |0>, 1 -> |1>."""
        if value == 0:
            return cls(Complex(1.0), Complex(0.0))
        if value == 1:
            return cls(Complex(0.0), Complex(1.0))
        raise InvalidConfigurationError(
            f"Classical qubit value must be 0 or 1, got {value!r}")

    def get_state(self) -> np.ndarray:
        """The ket as a (2, 1) column vector."""
        return np.array([[complex(self.x)], [complex(self.y)]],
                        dtype=np.complex128)

    def norm(self) -> float:
        return math.sqrt(self.x.modulus() ** 2 + self.y.modulus() ** 2)

    def __str__(self) -> str:
        if self == Qubit.from_bit(0):
            return "|0>"
        if self == Qubit.from_bit(1):
            return "|1>"
        return f"{self.x}|0> + {self.y}|1>"
