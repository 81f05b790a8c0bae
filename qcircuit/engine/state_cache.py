"""Per-column memo of computed state vectors.

Invalidation policy:

- ``invalidate_from(column)`` drops every entry at ``column`` and beyond;
  a gate edit at column k only changes states after k, so earlier entries
  stay valid.
- ``clear()`` drops everything; used when the wire count or an initial
  wire value changes, since those alter the column 0 state.
"""

from __future__ import annotations

import logging

import numpy as np

logger = logging.getLogger(__name__)


class StateCache:
    """Maps column index -> read-only state vector."""

    def __init__(self):
        self._states: dict[int, np.ndarray] = {}

    def __contains__(self, column: object) -> bool:
        return column in self._states

    def __len__(self) -> int:
        return len(self._states)

    @property
    def columns(self) -> list[int]:
        return sorted(self._states)

    def get(self, column: int) -> np.ndarray | None:
        return self._states.get(column)

    def store(self, column: int, state: np.ndarray) -> np.ndarray:
        frozen = np.array(state, dtype=np.complex128, copy=True)
        frozen.setflags(write=False)
        self._states[column] = frozen
        return frozen

    def latest_before(self, column: int) -> int | None:
        """Highest cached column that is <= ``column``, if any."""
        candidates = [c for c in self._states if c <= column]
        return max(candidates) if candidates else None

    def invalidate_from(self, column: int) -> None:
        stale = [c for c in self._states if c >= column]
        for c in stale:
            del self._states[c]
        if stale:
            logger.debug("Invalidated cached states for columns %s", sorted(stale))

    def clear(self) -> None:
        if self._states:
            logger.debug("Cleared %d cached states", len(self._states))
        self._states.clear()
