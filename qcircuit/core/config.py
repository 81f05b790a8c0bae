"""Settings for the command-line tool, kept as JSON under ``~/.qcircuit``."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from qcircuit.engine.circuit import MAX_QUBITS

logger = logging.getLogger(__name__)

MAX_RECENT_FILES = 10

# Persisted keys and the JSON type each must have
_FIELD_TYPES = {
    "default_qubits": int,
    "max_qubits": int,
    "display_columns": int,
    "recent_files": list,
    "last_directory": str,
}


def _validated(data) -> dict:
    if not isinstance(data, dict):
        raise TypeError(f"config must be a JSON object, got {type(data).__name__}")
    values = {}
    for key, expected in _FIELD_TYPES.items():
        if key not in data:
            continue
        value = data[key]
        if isinstance(value, bool) or not isinstance(value, expected):
            raise TypeError(f"config '{key}' must be {expected.__name__}, got {value!r}")
        if expected is list and not all(isinstance(v, str) for v in value):
            raise TypeError(f"config '{key}' must hold file paths, got {value!r}")
        values[key] = value
    return values


@dataclass
class AppConfig:
    """Persistent command-line settings.

    Attributes:
        default_qubits: Wire count of the empty circuit made by ``--new``.
        max_qubits: Wire cap for every circuit the tool builds or loads.
        display_columns: Most columns shown in the result tables.
        recent_files: Documents opened or saved, newest first.
        last_directory: Directory of the last document opened or saved.
            Relative paths missing from the working directory are looked
            up there.
    """
    default_qubits: int = 3
    max_qubits: int = MAX_QUBITS
    display_columns: int = MAX_QUBITS
    recent_files: list[str] = field(default_factory=list)
    last_directory: str = ""

    _config_dir: Path = field(
        default_factory=lambda: Path.home() / ".qcircuit",
        repr=False)

    @property
    def config_path(self) -> Path:
        return self._config_dir / "config.json"

    def to_dict(self) -> dict:
        return {key: getattr(self, key) for key in _FIELD_TYPES}

    def save(self) -> None:
        self._config_dir.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(
            json.dumps(self.to_dict(), indent=2), encoding="utf-8")

    @classmethod
    def load(cls, config_dir: Path | str | None = None) -> AppConfig:
        """Read the saved settings.

        A missing file gives the defaults; an unreadable or wrongly typed
        one is logged and also gives the defaults. Limits are clamped to
        what the engine supports.
        """
        config = cls() if config_dir is None else cls(_config_dir=Path(config_dir))
        if config.config_path.exists():
            try:
                values = _validated(
                    json.loads(config.config_path.read_text(encoding="utf-8")))
            except (ValueError, TypeError, OSError):
                logger.warning("Ignoring unreadable config file %s",
                               config.config_path, exc_info=True)
            else:
                for key, value in values.items():
                    setattr(config, key, value)

        config.max_qubits = max(1, min(config.max_qubits, MAX_QUBITS))
        config.default_qubits = max(0, min(config.default_qubits, config.max_qubits))
        config.display_columns = max(1, config.display_columns)
        config.recent_files = config.recent_files[:MAX_RECENT_FILES]
        return config

    def add_recent_file(self, filepath: str) -> None:
        if filepath in self.recent_files:
            self.recent_files.remove(filepath)
        self.recent_files.insert(0, filepath)
        del self.recent_files[MAX_RECENT_FILES:]

    def remember_document(self, filepath: Path | str) -> None:
        """Record a document as recent and make its folder the last directory."""
        path = Path(filepath).resolve()
        self.add_recent_file(str(path))
        self.last_directory = str(path.parent)

    def resolve_document(self, filepath: Path | str) -> Path:
        """``filepath`` itself, or under ``last_directory`` when only found there."""
        path = Path(filepath)
        if path.exists() or path.is_absolute() or not self.last_directory:
            return path
        candidate = Path(self.last_directory) / path
        return candidate if candidate.exists() else path
