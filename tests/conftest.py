"""Shared fixtures for the qcircuit test suite."""

from __future__ import annotations

import pytest

from qcircuit.engine.circuit import QuantumCircuit
from qcircuit.engine.quantum_gate import QuantumGate


@pytest.fixture
def bell_circuit() -> QuantumCircuit:
    """H on wire 0 then CNOT 0 -> 1."""
    circuit = QuantumCircuit(2)
    circuit.set_gate(QuantumGate("H", 0, [0]))
    circuit.set_gate(QuantumGate("CNOT", 1, [0, 1]))
    return circuit


@pytest.fixture
def mixed_circuit() -> QuantumCircuit:
    """Three wires, four gates of different kinds, wire 2 starting in |1>."""
    circuit = QuantumCircuit(initial_states=[0, 0, 1])
    circuit.set_gate(QuantumGate("H", 0, [0]))
    circuit.set_gate(QuantumGate("Ry", 0, [2], 0.75))
    circuit.set_gate(QuantumGate("CNOT", 1, [0, 1]))
    circuit.set_gate(QuantumGate("CRz", 2, [1, 2], 1.25))
    return circuit
