"""Tests for persistent application configuration."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from qcircuit.core.config import AppConfig
from qcircuit.engine.circuit import MAX_QUBITS


def test_defaults(tmp_path: Path) -> None:
    config = AppConfig.load(tmp_path)
    assert config.default_qubits == 3
    assert config.max_qubits == MAX_QUBITS
    assert config.recent_files == []
    assert config.config_path == tmp_path / "config.json"


def test_save_and_load(tmp_path: Path) -> None:
    config = AppConfig.load(tmp_path / "nested")
    config.default_qubits = 5
    config.display_columns = 7
    config.last_directory = "/data"
    config.save()

    loaded = AppConfig.load(tmp_path / "nested")
    assert loaded.default_qubits == 5
    assert loaded.display_columns == 7
    assert loaded.last_directory == "/data"


def test_corrupt_file_falls_back_to_defaults(tmp_path: Path) -> None:
    (tmp_path / "config.json").write_text("{not json", encoding="utf-8")
    config = AppConfig.load(tmp_path)
    assert config.default_qubits == 3


def test_limits_are_clamped(tmp_path: Path) -> None:
    (tmp_path / "config.json").write_text(
        json.dumps({"max_qubits": 40, "default_qubits": 30, "_config_dir": "/x"}),
        encoding="utf-8")
    config = AppConfig.load(tmp_path)
    assert config.max_qubits == MAX_QUBITS
    assert config.default_qubits == MAX_QUBITS
    assert config.config_path == tmp_path / "config.json"


def test_recent_files(tmp_path: Path) -> None:
    config = AppConfig.load(tmp_path)
    for i in range(12):
        config.add_recent_file(f"c{i}.xml")
    config.add_recent_file("c5.xml")
    assert len(config.recent_files) == 10
    assert config.recent_files[0] == "c5.xml"
    assert config.recent_files.count("c5.xml") == 1


@pytest.mark.parametrize("content", [
    '{"max_qubits": "many"}',
    '{"default_qubits": 2.5}',
    '{"display_columns": true}',
    '{"recent_files": "a.xml"}',
    '{"recent_files": [1, 2]}',
    '{"last_directory": 7}',
    '[1, 2, 3]',
])
def test_wrongly_typed_file_falls_back_to_defaults(
        tmp_path: Path, content: str, caplog: pytest.LogCaptureFixture) -> None:
    (tmp_path / "config.json").write_text(content, encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="qcircuit.core.config"):
        config = AppConfig.load(tmp_path)
    assert config.to_dict() == AppConfig(_config_dir=tmp_path).to_dict()
    assert "Ignoring unreadable config file" in caplog.text


def test_partially_bad_file_applies_nothing(tmp_path: Path) -> None:
    (tmp_path / "config.json").write_text(
        json.dumps({"default_qubits": 5, "max_qubits": "x"}), encoding="utf-8")
    assert AppConfig.load(tmp_path).default_qubits == 3


def test_remember_and_resolve_document(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "bell.xml").write_text("<Circuit />", encoding="utf-8")
    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()
    monkeypatch.chdir(elsewhere)

    config = AppConfig.load(tmp_path)
    assert config.resolve_document("bell.xml") == Path("bell.xml")
    config.remember_document(docs / "bell.xml")
    assert config.last_directory == str(docs.resolve())
    assert config.recent_files[0] == str((docs / "bell.xml").resolve())
    assert config.resolve_document("bell.xml") == Path(config.last_directory) / "bell.xml"
    assert config.resolve_document("other.xml") == Path("other.xml")
