"""Export of computed states and probabilities as CSV tables and charts."""

from __future__ import annotations

import csv
from pathlib import Path

import numpy as np
from matplotlib.figure import Figure

from qcircuit.engine.circuit import QuantumCircuit
from qcircuit.engine.complex_number import Complex
from qcircuit.engine.errors import IllegalStateError


def _column_count(circuit: QuantumCircuit, columns: int | None) -> int:
    """Default: every column up to the state after the last gate."""
    if columns is None:
        return circuit.max_column() + 2
    return max(1, columns)


class CircuitExporter:
    """Tabulates a circuit's per-column results for display or files."""

    @staticmethod
    def state_table(circuit: QuantumCircuit,
                    columns: int | None = None) -> list[list[str]]:
        """Amplitude table: one row per basis state, one column per step.

        The first row is a header; amplitudes are rendered with
        ``Complex.__str__`` (three decimals).
        """
        count = _column_count(circuit, columns)
        states = [circuit.get_state_vector(c) for c in range(count)]
        rows = [["basis"] + [str(c) for c in range(count)]]
        for i, label in enumerate(states[0].basis_labels()):
            rows.append([label] + [str(Complex.from_complex(sv.data[i]))
                                   for sv in states])
        return rows

    @staticmethod
    def probability_table(circuit: QuantumCircuit,
                          columns: int | None = None) -> list[list[str]]:
        """P(1) table with rows in ``get_qubit_probabilities`` order."""
        count = _column_count(circuit, columns)
        per_column = [circuit.get_qubit_probabilities(c) for c in range(count)]
        n = circuit.num_qubits
        rows = [["wire"] + [str(c) for c in range(count)]]
        for i in range(n):
            rows.append([f"q{n - 1 - i}"] + [str(Complex(probs[i]))
                                             for probs in per_column])
        return rows

    @staticmethod
    def _write_csv(rows: list[list[str]], filepath: str | Path) -> None:
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        with open(filepath, 'w', encoding='utf-8', newline='') as f:
            csv.writer(f).writerows(rows)

    @staticmethod
    def export_state_csv(circuit: QuantumCircuit, filepath: str | Path,
                         columns: int | None = None) -> None:
        CircuitExporter._write_csv(
            CircuitExporter.state_table(circuit, columns), filepath)

    @staticmethod
    def export_probability_csv(circuit: QuantumCircuit, filepath: str | Path,
                               columns: int | None = None) -> None:
        CircuitExporter._write_csv(
            CircuitExporter.probability_table(circuit, columns), filepath)

    @staticmethod
    def export_probability_chart(
        circuit: QuantumCircuit,
        filepath: str | Path,
        columns: int | None = None,
        dpi: int = 100,
    ) -> None:
        """Save a heat map of P(1) per wire (rows) and column (x axis).

        Args:
            circuit: Circuit whose probabilities are plotted.
            filepath: Output path; the suffix picks the format (.png, .svg).
            columns: Number of columns to plot, defaults to one past the
                last gate.
            dpi: Output resolution for raster formats.
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        if circuit.num_qubits == 0:
            raise IllegalStateError("Circuit has no wires to plot")
        count = _column_count(circuit, columns)
        n = circuit.num_qubits
        grid = np.zeros((n, count))
        for c in range(count):
            # Probabilities come highest wire first; rows are drawn wire 0 first
            grid[:, c] = circuit.get_qubit_probabilities(c)[::-1]

        figure = Figure(figsize=(max(4, count * 0.6 + 2), max(2, n * 0.5 + 1)), dpi=dpi)
        ax = figure.add_subplot(111)
        image = ax.imshow(grid, aspect="auto", cmap="viridis", vmin=0.0, vmax=1.0)
        ax.set_xticks(range(count))
        ax.set_yticks(range(n))
        ax.set_yticklabels([f"q{w}" for w in range(n)])
        ax.set_xlabel("Column")
        ax.set_title("P(|1>) per wire")
        figure.colorbar(image, ax=ax, label="Probability")
        figure.tight_layout()
        figure.savefig(filepath)
