"""A gate placed on the circuit grid."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np

from .errors import InvalidConfigurationError, UnsupportedTopologyError
from .gate_registry import GateRegistry, IDENTITY_GATE
from .gates import GateDefinition, GateKind, controlled_matrix


def _as_index(value, what: str) -> int:
    """Integral value as an int; bools and fractional floats are rejected."""
    message = f"Gate {what} must be an integer, got {value!r}"
    if isinstance(value, bool):
        raise InvalidConfigurationError(message)
    try:
        index = int(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise InvalidConfigurationError(message) from exc
    if index != value:
        raise InvalidConfigurationError(message)
    return index


@dataclass(frozen=True)
class QuantumGate:
    """Immutable gate placement.

    Attributes:
        gate_type: Catalog tag, e.g. ``"H"``, ``"CNOT"``, ``"CRy"``.
        column: Horizontal position on the grid (zero based).
        wires: Wire indices. For controlled types the last entry is the
            target and the others are controls.
        parameter: Rotation angle for parameterized types; always 0.0
            for the others.
    """
    gate_type: str
    column: int
    wires: tuple[int, ...]
    parameter: float = 0.0

    def __post_init__(self):
        definition = GateRegistry.instance().get(self.gate_type)
        column = _as_index(self.column, "column")
        if column < 0:
            raise InvalidConfigurationError(
                f"Gate column must be non-negative, got {column}")
        wires = tuple(_as_index(w, "wire") for w in self.wires)
        if not wires:
            raise InvalidConfigurationError(
                f"Gate '{self.gate_type}' needs at least one wire")
        object.__setattr__(self, "column", column)
        object.__setattr__(self, "wires", wires)
        if definition.kind.is_parameterized:
            object.__setattr__(self, "parameter", float(self.parameter))
        else:
            object.__setattr__(self, "parameter", 0.0)

    @property
    def definition(self) -> GateDefinition:
        return GateRegistry.instance().get(self.gate_type)

    @property
    def kind(self) -> GateKind:
        return self.definition.kind

    @property
    def is_parameterized(self) -> bool:
        return self.kind.is_parameterized

    @property
    def is_identity(self) -> bool:
        return self.gate_type == IDENTITY_GATE

    @property
    def min_wire(self) -> int:
        return min(self.wires)

    @property
    def max_wire(self) -> int:
        return max(self.wires)

    @property
    def span(self) -> int:
        """Number of consecutive wires covered by the gate's matrix."""
        return self.max_wire - self.min_wire + 1

    @property
    def controls(self) -> tuple[int, ...]:
        return self.wires[:-1] if self.kind.is_controlled else ()

    @property
    def target(self) -> int:
        return self.wires[-1]

    def matrix(self) -> np.ndarray:
        """The ``2**span`` square operator for this placement.

        Raises:
            UnsupportedTopologyError: if the wire arrangement is not one
                the gate type supports.
        """
        return _MATRIX_BUILDERS[self.kind](self, self.definition)

    def sort_key(self) -> tuple[int, int]:
        return (self.column, self.min_wire)

    def __str__(self) -> str:
        return "" if self.is_identity else self.gate_type


# --- Topology checks ---

def _check_non_negative(gate: QuantumGate):
    if gate.min_wire < 0:
        raise UnsupportedTopologyError(
            f"{gate.gate_type} placed on negative wire index: {list(gate.wires)}")


def _check_single(gate: QuantumGate):
    _check_non_negative(gate)
    if len(gate.wires) != 1:
        raise UnsupportedTopologyError(
            f"{gate.gate_type} acts on exactly one wire, got {list(gate.wires)}")


def _check_controlled(gate: QuantumGate, definition: GateDefinition):
    _check_non_negative(gate)
    wires = gate.wires
    expected = definition.num_controls + 1
    if len(wires) != expected:
        raise UnsupportedTopologyError(
            f"{gate.gate_type} expects {expected} wires, got {list(wires)}")
    if len(set(wires)) != len(wires):
        raise UnsupportedTopologyError(
            f"{gate.gate_type} wires must be distinct, got {list(wires)}")

    controls, target = wires[:-1], wires[-1]
    if max(controls) - min(controls) != len(controls) - 1:
        raise UnsupportedTopologyError(
            f"{gate.gate_type} controls must be adjacent, got {list(controls)}")
    if target > max(controls):
        return
    if not definition.allows_reversed:
        raise UnsupportedTopologyError(
            f"{gate.gate_type} target needs a higher wire index than its controls, "
            f"got target {target} with controls {list(controls)}")


# --- Matrix builders, one per GateKind ---

def _fixed_single(gate: QuantumGate, definition: GateDefinition) -> np.ndarray:
    _check_single(gate)
    return definition.operator_func().copy()


def _param_single(gate: QuantumGate, definition: GateDefinition) -> np.ndarray:
    _check_single(gate)
    return definition.operator_func(gate.parameter)


def _embed(gate: QuantumGate, definition: GateDefinition,
           operator: np.ndarray) -> np.ndarray:
    low = gate.min_wire
    return controlled_matrix(
        operator,
        control_offsets=[c - low for c in gate.controls],
        target_offset=gate.target - low,
        span=gate.span,
        control_state=definition.control_state,
    )


def _fixed_controlled(gate: QuantumGate, definition: GateDefinition) -> np.ndarray:
    _check_controlled(gate, definition)
    return _embed(gate, definition, definition.operator_func())


def _param_controlled(gate: QuantumGate, definition: GateDefinition) -> np.ndarray:
    _check_controlled(gate, definition)
    return _embed(gate, definition, definition.operator_func(gate.parameter))


_MATRIX_BUILDERS: dict[GateKind, Callable[[QuantumGate, GateDefinition], np.ndarray]] = {
    GateKind.FIXED_SINGLE: _fixed_single,
    GateKind.PARAM_SINGLE: _param_single,
    GateKind.FIXED_CONTROLLED: _fixed_controlled,
    GateKind.PARAM_CONTROLLED: _param_controlled,
}
