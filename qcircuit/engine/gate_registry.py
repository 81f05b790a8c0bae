"""Read-only gate catalog using the Singleton pattern."""

from __future__ import annotations

from types import MappingProxyType

from .errors import InvalidConfigurationError
from .gates import (
    GateDefinition, GateKind, _const,
    I_MATRIX, X_MATRIX, Y_MATRIX, Z_MATRIX, H_MATRIX, S_MATRIX, T_MATRIX,
    rx_matrix, ry_matrix, rz_matrix,
)

IDENTITY_GATE = "I"

FIXED_SINGLE_GATES = MappingProxyType({
    "I": I_MATRIX,
    "H": H_MATRIX,
    "X": X_MATRIX,
    "Y": Y_MATRIX,
    "Z": Z_MATRIX,
    "S": S_MATRIX,
    "T": T_MATRIX,
})

PARAM_SINGLE_GATES = MappingProxyType({
    "Rx": rx_matrix,
    "Ry": ry_matrix,
    "Rz": rz_matrix,
})

FIXED_CONTROLLED_GATES = (
    "CNOT", "C0NOT", "CCNOT", "CC00NOT", "CH", "C0H", "CCH", "CC00H",
    "CCCNOT", "CCC000NOT",
)

PARAM_CONTROLLED_GATES = ("CRx", "CRy", "CRz", "C0Rx", "C0Ry", "C0Rz")

_CONTROLLED_TARGETS = {"NOT": X_MATRIX, "H": H_MATRIX}

_DISPLAY_NAMES = {
    "I": "Identity", "H": "Hadamard", "X": "Pauli-X", "Y": "Pauli-Y",
    "Z": "Pauli-Z", "S": "S Gate", "T": "T Gate",
    "Rx": "Rotation-X", "Ry": "Rotation-Y", "Rz": "Rotation-Z",
}


def count_controls(gate_type: str) -> int:
    """Number of control wires encoded in a controlled tag ("CC00NOT" -> 2)."""
    return gate_type.count("C")


def _target_name(gate_type: str) -> str:
    return gate_type.replace("C", "").replace("0", "")


class GateRegistry:
    """Singleton mapping gate tags to GateDefinition objects.

    The catalog is fixed: it is populated once from the constant tables
    above and only queried afterwards.
    """

    _instance: GateRegistry | None = None

    def __init__(self):
        self._gates: dict[str, GateDefinition] = {}

    @classmethod
    def instance(cls) -> GateRegistry:
        if cls._instance is None:
            cls._instance = cls()
            cls._instance._register_builtins()
        return cls._instance

    def _register_builtins(self):
        for name, matrix in FIXED_SINGLE_GATES.items():
            self._add(GateDefinition(
                name=name, display_name=_DISPLAY_NAMES[name],
                kind=GateKind.FIXED_SINGLE, operator_func=_const(matrix)))

        for name, func in PARAM_SINGLE_GATES.items():
            self._add(GateDefinition(
                name=name, display_name=_DISPLAY_NAMES[name],
                kind=GateKind.PARAM_SINGLE, operator_func=func))

        # Only CNOT may have its target below the control
        for name in FIXED_CONTROLLED_GATES:
            controls = count_controls(name)
            self._add(GateDefinition(
                name=name,
                display_name=self._controlled_display_name(name),
                kind=GateKind.FIXED_CONTROLLED,
                operator_func=_const(_CONTROLLED_TARGETS[_target_name(name)]),
                num_controls=controls,
                control_state=0 if "0" in name else 1,
                allows_reversed=name == "CNOT"))

        for name in PARAM_CONTROLLED_GATES:
            self._add(GateDefinition(
                name=name,
                display_name=self._controlled_display_name(name),
                kind=GateKind.PARAM_CONTROLLED,
                operator_func=PARAM_SINGLE_GATES[name.lstrip("C0")],
                num_controls=count_controls(name),
                control_state=0 if "0" in name else 1))

    @staticmethod
    def _controlled_display_name(name: str) -> str:
        controls = count_controls(name)
        target = _target_name(name)
        target = "NOT" if target == "NOT" else _DISPLAY_NAMES[target]
        prefix = "Controlled" if controls == 1 else f"{controls}-Controlled"
        suffix = " (on 0)" if "0" in name else ""
        return f"{prefix} {target}{suffix}"

    def _add(self, gate_def: GateDefinition):
        self._gates[gate_def.name] = gate_def

    def get(self, name: str) -> GateDefinition:
        if name not in self._gates:
            raise InvalidConfigurationError(
                f"Gate type '{name}' is not supported")
        return self._gates[name]

    def __contains__(self, name: object) -> bool:
        return name in self._gates

    def all_gates(self) -> list[GateDefinition]:
        return list(self._gates.values())

    def gate_names(self) -> list[str]:
        return list(self._gates.keys())
