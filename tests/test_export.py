"""Tests for table, CSV and chart export."""

from __future__ import annotations

import csv
from pathlib import Path

import pytest

from qcircuit.core.export import CircuitExporter
from qcircuit.engine.circuit import QuantumCircuit
from qcircuit.engine.errors import IllegalStateError


def test_state_table(bell_circuit: QuantumCircuit) -> None:
    rows = CircuitExporter.state_table(bell_circuit)
    assert rows[0] == ["basis", "0", "1", "2"]
    assert [r[0] for r in rows[1:]] == ["|00>", "|01>", "|10>", "|11>"]
    assert rows[1] == ["|00>", "1.0", "0.707", "0.707"]
    assert rows[4] == ["|11>", "0.0", "0.0", "0.707"]


def test_probability_table(bell_circuit: QuantumCircuit) -> None:
    rows = CircuitExporter.probability_table(bell_circuit, columns=3)
    assert rows[0] == ["wire", "0", "1", "2"]
    assert rows[1] == ["q1", "0.0", "0.0", "0.5"]
    assert rows[2] == ["q0", "0.0", "0.5", "0.5"]


def test_explicit_column_count(bell_circuit: QuantumCircuit) -> None:
    assert len(CircuitExporter.state_table(bell_circuit, columns=1)[0]) == 2
    assert len(CircuitExporter.state_table(bell_circuit, columns=0)[0]) == 2


def test_csv_files(bell_circuit: QuantumCircuit, tmp_path: Path) -> None:
    states = tmp_path / "out" / "states.csv"
    probs = tmp_path / "out" / "probs.csv"
    CircuitExporter.export_state_csv(bell_circuit, states)
    CircuitExporter.export_probability_csv(bell_circuit, probs)

    with open(states, newline="", encoding="utf-8") as f:
        assert list(csv.reader(f)) == CircuitExporter.state_table(bell_circuit)
    with open(probs, newline="", encoding="utf-8") as f:
        assert list(csv.reader(f))[1][0] == "q1"


@pytest.mark.parametrize("name", ["chart.png", "chart.svg"])
def test_probability_chart(mixed_circuit: QuantumCircuit, tmp_path: Path,
                           name: str) -> None:
    path = tmp_path / name
    CircuitExporter.export_probability_chart(mixed_circuit, path, dpi=50)
    assert path.stat().st_size > 0


def test_chart_needs_wires(tmp_path: Path) -> None:
    with pytest.raises(IllegalStateError):
        CircuitExporter.export_probability_chart(QuantumCircuit(), tmp_path / "x.png")
