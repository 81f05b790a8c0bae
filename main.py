"""Quantum Circuit Simulator - command-line entry point.

Usage:
    python main.py circuit.xml
    python main.py --demo bell --columns 3 --chart bell.png
    python main.py --demo ghz3 --save ghz3.xml --states-csv states.csv
    python main.py --new
"""

from __future__ import annotations

import argparse
import logging
import sys
import warnings

from qcircuit.core.config import AppConfig
from qcircuit.core.export import CircuitExporter
from qcircuit.core.serialization import CircuitSerializer
from qcircuit.engine.circuit import QuantumCircuit
from qcircuit.engine.errors import CircuitError
from qcircuit.engine.quantum_gate import QuantumGate

logger = logging.getLogger(__name__)

# Filter matplotlib UserWarnings (tight_layout, etc.)
warnings.filterwarnings("ignore", category=UserWarning, module="matplotlib")


# ---- Predefined circuits --------------------------------------------------

def _bell_circuit(max_qubits: int) -> QuantumCircuit:
    c = QuantumCircuit(2, max_qubits=max_qubits)
    c.set_gate(QuantumGate("H", 0, [0]))
    c.set_gate(QuantumGate("CNOT", 1, [0, 1]))
    return c


def _ghz3_circuit(max_qubits: int) -> QuantumCircuit:
    c = QuantumCircuit(3, max_qubits=max_qubits)
    c.set_gate(QuantumGate("H", 0, [0]))
    c.set_gate(QuantumGate("CNOT", 1, [0, 1]))
    c.set_gate(QuantumGate("CNOT", 2, [1, 2]))
    return c


CIRCUITS = {
    "bell": _bell_circuit,
    "ghz3": _ghz3_circuit,
}


def _print_table(rows: list[list[str]]) -> None:
    widths = [max(len(row[i]) for row in rows) for i in range(len(rows[0]))]
    for row in rows:
        print("  ".join(cell.rjust(w) for cell, w in zip(row, widths)))


def _print_gates(circuit: QuantumCircuit) -> None:
    for gate in sorted(circuit.gates, key=QuantumGate.sort_key):
        name = gate.definition.display_name
        if gate.is_parameterized:
            name += f"({gate.parameter:g})"
        print(f"  column {gate.column}: {name} on wires {list(gate.wires)}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compute per-column states of a quantum circuit.")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("circuit", nargs="?", help="Circuit document (.xml, .json, .qsim)")
    source.add_argument("--demo", choices=sorted(CIRCUITS), help="Built-in circuit")
    source.add_argument("--new", action="store_true",
                        help="Empty circuit with the configured default wire count")
    parser.add_argument("--columns", type=int, default=None,
                        help="Columns to report (default: through the last gate)")
    parser.add_argument("--states-csv", help="Write the amplitude table to CSV")
    parser.add_argument("--probabilities-csv", help="Write the P(1) table to CSV")
    parser.add_argument("--chart", help="Write a probability heat map (.png/.svg)")
    parser.add_argument("--save", help="Save the circuit document")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = AppConfig.load()

    try:
        if args.demo:
            circuit = CIRCUITS[args.demo](config.max_qubits)
        elif args.new:
            circuit = QuantumCircuit(config.default_qubits, max_qubits=config.max_qubits)
        else:
            path = config.resolve_document(args.circuit)
            circuit = CircuitSerializer.load(path, config.max_qubits)
            config.remember_document(path)
    except (CircuitError, OSError) as e:
        logger.error("Failed to open circuit: %s", e)
        return 1

    columns = args.columns if args.columns is not None else circuit.max_column() + 2
    columns = max(1, min(columns, config.display_columns))

    print(f"{circuit.num_qubits} wires, {circuit.gate_count()} gates")
    _print_gates(circuit)
    print("\nState amplitudes:")
    _print_table(CircuitExporter.state_table(circuit, columns))
    print("\nP(|1>) per wire:")
    _print_table(CircuitExporter.probability_table(circuit, columns))

    try:
        if args.states_csv:
            CircuitExporter.export_state_csv(circuit, args.states_csv, columns)
        if args.probabilities_csv:
            CircuitExporter.export_probability_csv(circuit, args.probabilities_csv, columns)
        if args.chart:
            CircuitExporter.export_probability_chart(circuit, args.chart, columns)
        if args.save:
            saved = CircuitSerializer.save(circuit, args.save)
            config.remember_document(saved)
    except (CircuitError, OSError) as e:
        logger.error("Failed to write output: %s", e)
        return 1

    try:
        config.save()
    except OSError:
        logger.warning("Could not save config to %s", config.config_path, exc_info=True)
    return 0


if __name__ == '__main__':
    sys.exit(main())
