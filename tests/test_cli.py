"""Tests for the command-line entry point."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

import main
from qcircuit.core.serialization import CircuitSerializer


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    return home


def test_demo_prints_tables(capsys: pytest.CaptureFixture[str]) -> None:
    assert main.main(["--demo", "bell"]) == 0
    out = capsys.readouterr().out
    assert "2 wires, 2 gates" in out
    assert "|11>" in out
    assert "q1" in out


def test_demo_writes_outputs(tmp_path: Path, isolated_home: Path) -> None:
    saved = tmp_path / "ghz.xml"
    states = tmp_path / "states.csv"
    probs = tmp_path / "probs.csv"
    chart = tmp_path / "chart.png"
    assert main.main(["--demo", "ghz3", "--save", str(saved),
                      "--states-csv", str(states),
                      "--probabilities-csv", str(probs),
                      "--chart", str(chart)]) == 0
    for path in (saved, states, probs, chart):
        assert path.exists()
    assert CircuitSerializer.load(saved).gate_count() == 3
    assert (isolated_home / ".qcircuit" / "config.json").exists()


def test_load_circuit_file(tmp_path: Path, bell_circuit,
                           capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "bell.json"
    CircuitSerializer.save(bell_circuit, path)
    assert main.main([str(path), "--columns", "2"]) == 0
    out = capsys.readouterr().out
    assert "0.707" in out


def test_bad_circuit_file_fails(tmp_path: Path) -> None:
    path = tmp_path / "bad.xml"
    path.write_text("<Circuit>", encoding="utf-8")
    assert main.main([str(path)]) == 1
    assert main.main([str(tmp_path / "missing.xml")]) == 1


def test_source_is_required() -> None:
    with pytest.raises(SystemExit):
        main.main([])


def _write_config(home: Path, **values) -> None:
    config_dir = home / ".qcircuit"
    config_dir.mkdir(parents=True, exist_ok=True)
    (config_dir / "config.json").write_text(json.dumps(values), encoding="utf-8")


def test_gate_list_uses_display_names(capsys: pytest.CaptureFixture[str]) -> None:
    assert main.main(["--demo", "bell"]) == 0
    out = capsys.readouterr().out
    assert "column 0: Hadamard on wires [0]" in out
    assert "column 1: Controlled NOT on wires [0, 1]" in out


def test_new_circuit_uses_default_qubits(isolated_home: Path,
                                         capsys: pytest.CaptureFixture[str]) -> None:
    _write_config(isolated_home, default_qubits=4)
    assert main.main(["--new"]) == 0
    assert "4 wires, 0 gates" in capsys.readouterr().out


def test_max_qubits_caps_loaded_and_demo_circuits(tmp_path: Path, isolated_home: Path,
                                                  mixed_circuit) -> None:
    path = tmp_path / "mixed.xml"
    CircuitSerializer.save(mixed_circuit, path)
    _write_config(isolated_home, max_qubits=2)
    assert main.main([str(path)]) == 1
    assert main.main(["--demo", "ghz3"]) == 1
    assert main.main(["--demo", "bell"]) == 0


def test_last_directory_tracks_documents(tmp_path: Path, isolated_home: Path,
                                         monkeypatch: pytest.MonkeyPatch,
                                         capsys: pytest.CaptureFixture[str]) -> None:
    docs = tmp_path / "docs"
    docs.mkdir()
    assert main.main(["--demo", "bell", "--save", str(docs / "bell.xml")]) == 0
    saved = json.loads((isolated_home / ".qcircuit" / "config.json").read_text(encoding="utf-8"))
    assert saved["last_directory"] == str(docs.resolve())

    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()
    monkeypatch.chdir(elsewhere)
    capsys.readouterr()
    assert main.main(["bell.xml"]) == 0
    assert "2 wires, 2 gates" in capsys.readouterr().out
