"""Quantum gate matrix definitions and GateDefinition dataclass."""

from __future__ import annotations

import numpy as np
from dataclasses import dataclass
from typing import Callable
from enum import Enum


class GateKind(Enum):
    FIXED_SINGLE = "fixed_single"
    PARAM_SINGLE = "param_single"
    FIXED_CONTROLLED = "fixed_controlled"
    PARAM_CONTROLLED = "param_controlled"

    @property
    def is_controlled(self) -> bool:
        return self in (GateKind.FIXED_CONTROLLED, GateKind.PARAM_CONTROLLED)

    @property
    def is_parameterized(self) -> bool:
        return self in (GateKind.PARAM_SINGLE, GateKind.PARAM_CONTROLLED)


@dataclass(frozen=True)
class GateDefinition:
    """Immutable catalog entry for a gate tag.

    ``operator_func`` returns the 2x2 operator acting on the target wire;
    it takes the gate parameter for parameterized kinds and nothing
    otherwise.
    """
    name: str
    display_name: str
    kind: GateKind
    operator_func: Callable[..., np.ndarray]
    num_controls: int = 0
    control_state: int = 1
    allows_reversed: bool = False


# --- Fixed single-qubit gate matrices ---

I_MATRIX = np.eye(2, dtype=np.complex128)

X_MATRIX = np.array([[0, 1],
                      [1, 0]], dtype=np.complex128)

Y_MATRIX = np.array([[0, -1j],
                      [1j, 0]], dtype=np.complex128)

Z_MATRIX = np.array([[1, 0],
                      [0, -1]], dtype=np.complex128)

H_MATRIX = np.array([[1, 1],
                      [1, -1]], dtype=np.complex128) / np.sqrt(2)

S_MATRIX = np.array([[1, 0],
                      [0, 1j]], dtype=np.complex128)

T_MATRIX = np.array([[1, 0],
                      [0, np.exp(1j * np.pi / 4)]], dtype=np.complex128)

for _m in (I_MATRIX, X_MATRIX, Y_MATRIX, Z_MATRIX, H_MATRIX, S_MATRIX, T_MATRIX):
    _m.setflags(write=False)


# --- Parameterized single-qubit gate functions ---

def rx_matrix(theta: float) -> np.ndarray:
    c, s = np.cos(theta / 2), np.sin(theta / 2)
    return np.array([[c, -1j * s],
                      [-1j * s, c]], dtype=np.complex128)


def ry_matrix(theta: float) -> np.ndarray:
    c, s = np.cos(theta / 2), np.sin(theta / 2)
    return np.array([[c, -s],
                      [s, c]], dtype=np.complex128)


def rz_matrix(theta: float) -> np.ndarray:
    return np.array([[np.exp(-1j * theta / 2), 0],
                      [0, np.exp(1j * theta / 2)]], dtype=np.complex128)


# --- Controlled embedding ---

def controlled_matrix(operator: np.ndarray, control_offsets: list[int],
                      target_offset: int, span: int,
                      control_state: int = 1) -> np.ndarray:
    """Embed a 2x2 operator in a ``2**span`` square matrix.

    Offsets are wire positions relative to the lowest wire of the span;
    offset 0 is the most significant bit of the row index. Rows whose
    control bits all equal ``control_state`` get ``operator`` on the
    target bit, every other row keeps the identity.
    """
    dim = 2 ** span
    matrix = np.eye(dim, dtype=np.complex128)
    target_bit = 1 << (span - 1 - target_offset)
    control_bits = [span - 1 - c for c in control_offsets]

    for row in range(dim):
        if row & target_bit:
            continue
        if any(((row >> b) & 1) != control_state for b in control_bits):
            continue
        partner = row | target_bit
        matrix[row, row] = operator[0, 0]
        matrix[row, partner] = operator[0, 1]
        matrix[partner, row] = operator[1, 0]
        matrix[partner, partner] = operator[1, 1]
    return matrix


def identity_matrix(span: int = 1) -> np.ndarray:
    return np.eye(2 ** span, dtype=np.complex128)


# --- Lambda wrappers for fixed matrices ---

def _const(matrix: np.ndarray) -> Callable[[], np.ndarray]:
    """Returns a no-arg callable that returns the given matrix."""
    def _fn() -> np.ndarray:
        return matrix
    return _fn
