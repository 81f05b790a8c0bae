"""Core quantum state representation using state vectors."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from .qubit import Qubit


class StateVector:
    """Represents an n-qubit quantum state as a complex numpy array.

    Basis index bits follow wire order: wire 0 is the most significant bit,
    so for two wires the amplitudes are ordered |00>, |01>, |10>, |11>.
    """

    def __init__(self, num_qubits: int):
        if num_qubits < 0 or num_qubits > 16:
            raise ValueError(f"num_qubits must be 0-16, got {num_qubits}")
        self._num_qubits = num_qubits
        self._data = np.zeros(2 ** num_qubits, dtype=np.complex128)
        self._data[0] = 1.0 + 0.0j  # |00...0>

    @property
    def num_qubits(self) -> int:
        return self._num_qubits

    @property
    def data(self) -> np.ndarray:
        return self._data

    @data.setter
    def data(self, value: np.ndarray):
        value = np.asarray(value)
        if value.shape != (2 ** self._num_qubits,):
            raise ValueError(f"Expected shape ({2**self._num_qubits},), got {value.shape}")
        self._data = value.astype(np.complex128)

    @property
    def probabilities(self) -> np.ndarray:
        """Returns |amplitude|^2 for each basis state."""
        return np.abs(self._data) ** 2

    def norm(self) -> float:
        return float(np.sqrt(np.sum(self.probabilities)))

    def qubit_probability(self, wire: int) -> float:
        """Probability of measuring 1 on ``wire``."""
        if wire < 0 or wire >= self._num_qubits:
            raise ValueError(f"Qubit {wire} out of range")
        mask = 1 << (self._num_qubits - 1 - wire)
        probs = self.probabilities
        return float(sum(probs[i] for i in range(len(probs)) if i & mask))

    def qubit_probabilities(self) -> list[float]:
        """P(1) for every wire, in wire order."""
        return [self.qubit_probability(w) for w in range(self._num_qubits)]

    def basis_labels(self) -> list[str]:
        """Ket labels for each amplitude, e.g. ['|00>', '|01>', ...]."""
        if self._num_qubits == 0:
            return ["|>"]
        return [f"|{format(i, f'0{self._num_qubits}b')}>"
                for i in range(2 ** self._num_qubits)]

    def copy(self) -> StateVector:
        """Deep copy of this state vector."""
        sv = StateVector.__new__(StateVector)
        sv._num_qubits = self._num_qubits
        sv._data = self._data.copy()
        return sv

    @classmethod
    def from_data(cls, data: np.ndarray) -> StateVector:
        data = np.asarray(data, dtype=np.complex128).reshape(-1)
        num_qubits = int(round(np.log2(len(data))))
        sv = cls(num_qubits)
        sv.data = data
        return sv

    @classmethod
    def from_qubits(cls, qubits: Iterable[Qubit]) -> StateVector:
        """Tensor product of per-wire kets, first qubit most significant.

        E.g. [|0>, |1>, |0>] creates |010>.
        """
        column = np.ones((1, 1), dtype=np.complex128)
        count = 0
        for qubit in qubits:
            column = np.kron(column, qubit.get_state())
            count += 1
        sv = cls(count)
        sv._data = column.reshape(-1)
        return sv

    def __repr__(self) -> str:
        return f"StateVector(num_qubits={self._num_qubits})"
