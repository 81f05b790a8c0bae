"""Quantum circuit data model and column-by-column state propagation."""

from __future__ import annotations

import logging
from typing import Iterable

import numpy as np

from .errors import IllegalStateError
from .gates import identity_matrix
from .quantum_gate import QuantumGate
from .qubit import Qubit
from .state_cache import StateCache
from .state_vector import StateVector

logger = logging.getLogger(__name__)

MAX_QUBITS = 11


def gates_collide(gate1: QuantumGate, gate2: QuantumGate) -> bool:
    """True if both gates share a column and their wire ranges overlap."""
    if gate1.column != gate2.column:
        return False
    return gate1.max_wire >= gate2.min_wire and gate2.max_wire >= gate1.min_wire


class QuantumWire:
    """A wire of the circuit and the qubit it starts with.

    ``initial`` changes only through ``toggle`` and ``set_initial``, which
    mark the wire dirty so the owning circuit drops its cached states.
    """

    def __init__(self, initial: Qubit | None = None):
        self._initial = initial if initial is not None else Qubit()
        self._dirty = False

    @classmethod
    def from_bit(cls, value: int) -> QuantumWire:
        return cls(Qubit.from_bit(value))

    @property
    def initial(self) -> Qubit:
        return self._initial

    @property
    def dirty(self) -> bool:
        return self._dirty

    def toggle(self) -> None:
        """Flip the starting qubit: |0> becomes |1>, anything else |0>."""
        if self._initial == Qubit.from_bit(0):
            self._initial = Qubit.from_bit(1)
        else:
            self._initial = Qubit.from_bit(0)
        self._dirty = True

    def set_initial(self, qubit: Qubit) -> None:
        self._initial = qubit
        self._dirty = True

    def reset_dirty(self) -> None:
        self._dirty = False

    def __repr__(self) -> str:
        return f"QuantumWire(initial={self._initial!r}, dirty={self._dirty})"


class QuantumCircuit:
    """Ordered wires plus gates on a column grid.

    States are computed lazily per column and memoized; see
    ``StateCache`` for the invalidation rules.
    """

    def __init__(self, num_qubits: int = 0,
                 initial_states: Iterable[int | Qubit] | None = None,
                 max_qubits: int = MAX_QUBITS):
        self._max_qubits = max_qubits
        self._wires: list[QuantumWire] = []
        self._gates: list[QuantumGate] = []
        self._cache = StateCache()

        if initial_states is not None:
            for value in initial_states:
                qubit = value if isinstance(value, Qubit) else Qubit.from_bit(value)
                self.add_wire(QuantumWire(qubit))
        self.set_number_of_qubits(max(num_qubits, len(self._wires)))

    # ---- Wires -------------------------------------------------------------

    @property
    def wires(self) -> tuple[QuantumWire, ...]:
        return tuple(self._wires)

    @property
    def num_qubits(self) -> int:
        return len(self._wires)

    @property
    def max_qubits(self) -> int:
        return self._max_qubits

    @property
    def initial_values(self) -> list[Qubit]:
        return [w.initial for w in self._wires]

    def add_wire(self, wire: QuantumWire | None = None) -> None:
        if len(self._wires) >= self._max_qubits:
            raise IllegalStateError(
                f"Circuit is limited to {self._max_qubits} wires")
        self._wires.append(wire if wire is not None else QuantumWire())
        self._cache.clear()

    def remove_last_wire(self) -> None:
        """Drop the tail wire and every gate that touches it."""
        if not self._wires:
            return
        self._wires.pop()
        removed = [g for g in self._gates if g.max_wire >= len(self._wires)]
        if removed:
            self._gates = [g for g in self._gates if g not in removed]
            logger.debug("Removed %d gate(s) with wire %d",
                         len(removed), len(self._wires))
        self._cache.clear()

    def set_number_of_qubits(self, n: int) -> None:
        """Grow or shrink at the tail, keeping existing wires."""
        if n < 0 or n > self._max_qubits:
            raise IllegalStateError(
                f"num_qubits must be 0-{self._max_qubits}, got {n}")
        while len(self._wires) < n:
            self.add_wire()
        while len(self._wires) > n:
            self.remove_last_wire()

    def wire(self, index: int) -> QuantumWire:
        if index < 0 or index >= len(self._wires):
            raise IllegalStateError(
                f"Wire {index} out of range [0, {len(self._wires) - 1}]")
        return self._wires[index]

    def toggle_wire(self, index: int) -> None:
        """Toggle a wire's initial state between |0> and |1>."""
        self.wire(index).toggle()

    def set_initial_state(self, index: int, qubit: Qubit | int) -> None:
        if not isinstance(qubit, Qubit):
            qubit = Qubit.from_bit(qubit)
        self.wire(index).set_initial(qubit)

    # ---- Gates -------------------------------------------------------------

    @property
    def gates(self) -> list[QuantumGate]:
        return list(self._gates)

    def gates_collide(self, gate1: QuantumGate, gate2: QuantumGate) -> bool:
        return gates_collide(gate1, gate2)

    def set_gate(self, gate: QuantumGate) -> bool:
        """Place a gate, replacing whatever it collides with.

        The gate's matrix is built before anything changes, so a rejected
        gate leaves the circuit untouched. Identity gates only clear their
        cells. A gate more than one column past ``max_column()`` is ignored.

        Returns:
            True if the gate was added to the circuit.
        """
        return self._place(gate, enforce_width=True)

    def restore_gate(self, gate: QuantumGate) -> bool:
        """Place a gate from a saved document.

        Same validation and eviction as ``set_gate`` without the
        ``max_column() + 1`` limit, so gaps in a saved grid survive.
        """
        return self._place(gate, enforce_width=False)

    def _place(self, gate: QuantumGate, enforce_width: bool) -> bool:
        gate.matrix()
        if gate.max_wire >= len(self._wires):
            raise IllegalStateError(
                f"{gate.gate_type} uses wire {gate.max_wire} but the circuit "
                f"has {len(self._wires)} wires")

        self._cache.invalidate_from(gate.column)

        evicted = [g for g in self._gates if gates_collide(g, gate)]
        if evicted:
            self._gates = [g for g in self._gates if g not in evicted]
            logger.debug("Evicted %s at column %d",
                         [g.gate_type for g in evicted], gate.column)

        if gate.is_identity:
            return False
        if enforce_width and gate.column > self.max_column() + 1:
            logger.debug("Ignored %s at column %d beyond grid width %d",
                         gate.gate_type, gate.column, self.max_column() + 1)
            return False
        self._gates.append(gate)
        return True

    def remove_gate(self, gate: QuantumGate) -> None:
        if gate in self._gates:
            self._gates.remove(gate)
            self._cache.invalidate_from(gate.column)

    def get_gate(self, wire: int, column: int) -> QuantumGate | None:
        """The gate at ``column`` whose wire list contains ``wire``."""
        for gate in self._gates:
            if gate.column == column and wire in gate.wires:
                return gate
        return None

    def gates_at(self, column: int) -> list[QuantumGate]:
        return sorted((g for g in self._gates if g.column == column),
                      key=lambda g: g.min_wire)

    def max_column(self) -> int:
        if not self._gates:
            return -1
        return max(g.column for g in self._gates)

    def gate_count(self) -> int:
        return len(self._gates)

    def clear(self) -> None:
        """Remove every gate, keeping the wires."""
        self._gates.clear()
        self._cache.clear()

    # ---- States ------------------------------------------------------------

    def column_operator(self, column: int) -> np.ndarray:
        """Tensor product of the gates at ``column`` with identity fill."""
        operator = np.ones((1, 1), dtype=np.complex128)
        wire = 0
        while wire < len(self._wires):
            gate = self._gate_starting_at(wire, column)
            if gate is None:
                operator = np.kron(operator, identity_matrix())
                wire += 1
                continue
            matrix = gate.matrix()
            width = int(round(np.log2(matrix.shape[0])))
            if width != gate.span:
                raise IllegalStateError(
                    f"{gate.gate_type} matrix covers {width} wires, "
                    f"expected span {gate.span}")
            operator = np.kron(operator, matrix)
            wire += width
        return operator

    def _gate_starting_at(self, wire: int, column: int) -> QuantumGate | None:
        for gate in self._gates:
            if gate.column == column and gate.min_wire == wire:
                return gate
        return None

    def _observe_wires(self) -> None:
        if any(w.dirty for w in self._wires):
            self._cache.clear()
            for w in self._wires:
                w.reset_dirty()

    def get_state(self, column: int) -> np.ndarray:
        """State vector after every gate before ``column`` has been applied.

        Column 0 is the tensor product of the initial kets (wire 0 most
        significant); column c applies the gates placed at column c-1.
        """
        if column < 0:
            raise IllegalStateError(f"Column must be non-negative, got {column}")
        self._observe_wires()

        start = self._cache.latest_before(column)
        if start is None:
            start = 0
            state = self._cache.store(
                0, StateVector.from_qubits(self.initial_values).data)
        else:
            state = self._cache.get(start)

        for c in range(start + 1, column + 1):
            state = self._cache.store(c, self.column_operator(c - 1) @ state)
        return state.copy()

    def get_state_vector(self, column: int) -> StateVector:
        return StateVector.from_data(self.get_state(column))

    def get_qubit_probabilities(self, column: int) -> list[float]:
        """P(1) per wire, listed from the highest wire index to wire 0."""
        return list(reversed(self.get_state_vector(column).qubit_probabilities()))

    # ---- Dict form ---------------------------------------------------------

    def to_dict(self) -> dict:
        return {
            "num_qubits": self.num_qubits,
            "initial_states": [
                [q.x.real, q.x.imaginary, q.y.real, q.y.imaginary]
                for q in self.initial_values
            ],
            "gates": [
                {
                    "type": g.gate_type,
                    "column": g.column,
                    "wires": list(g.wires),
                    "parameter": g.parameter,
                }
                for g in sorted(self._gates, key=QuantumGate.sort_key)
            ],
        }

    @classmethod
    def from_dict(cls, data: dict, max_qubits: int = MAX_QUBITS) -> QuantumCircuit:
        """Rebuild a circuit from ``to_dict`` output.

        ``initial_states`` entries are either ``[xR, xI, yR, yI]`` amplitude
        lists or plain 0/1 bits; when absent every wire starts in |0>.
        """
        circuit = cls(max_qubits=max_qubits)
        num_qubits = data["num_qubits"]
        states = data.get("initial_states") or [0] * num_qubits
        if len(states) != num_qubits:
            raise ValueError(
                f"Expected {num_qubits} initial states, got {len(states)}")
        for entry in states:
            if isinstance(entry, int):
                qubit = Qubit.from_bit(entry)
            else:
                xr, xi, yr, yi = entry
                qubit = Qubit(complex(xr, xi), complex(yr, yi))
            circuit.add_wire(QuantumWire(qubit))
        for g_data in data["gates"]:
            circuit.restore_gate(QuantumGate(
                gate_type=g_data["type"],
                column=g_data["column"],
                wires=tuple(g_data["wires"]),
                parameter=g_data.get("parameter", 0.0),
            ))
        return circuit

    def __repr__(self) -> str:
        return (f"QuantumCircuit(num_qubits={self.num_qubits}, "
                f"gates={len(self._gates)})")
