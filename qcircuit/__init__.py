"""State-vector simulator core for a quantum circuit design tool.

Wires hold initial qubits, gates sit on a column grid, and
``QuantumCircuit.get_state(column)`` propagates the state vector column by
column. Circuits persist as XML documents through ``CircuitSerializer``.
"""

from qcircuit.engine.circuit import MAX_QUBITS, QuantumCircuit, QuantumWire, gates_collide
from qcircuit.engine.complex_number import Complex
from qcircuit.engine.errors import (
    CircuitError, FormatError, IllegalStateError, InvalidConfigurationError,
    UnsupportedTopologyError,
)
from qcircuit.engine.gates import GateKind
from qcircuit.engine.quantum_gate import QuantumGate
from qcircuit.engine.qubit import Qubit
from qcircuit.engine.state_vector import StateVector
from qcircuit.core.serialization import CircuitSerializer

__all__ = [
    "MAX_QUBITS", "QuantumCircuit", "QuantumWire", "gates_collide",
    "Complex", "Qubit", "QuantumGate", "GateKind", "StateVector",
    "CircuitError", "FormatError", "IllegalStateError",
    "InvalidConfigurationError", "UnsupportedTopologyError",
    "CircuitSerializer",
]

__version__ = "1.0.0"
