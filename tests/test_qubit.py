"""Tests for Qubit and QuantumWire initial values."""

from __future__ import annotations

import numpy as np
import pytest

from qcircuit.engine.circuit import QuantumWire
from qcircuit.engine.complex_number import Complex
from qcircuit.engine.errors import InvalidConfigurationError
from qcircuit.engine.qubit import Qubit


def test_basis_qubits() -> None:
    assert np.array_equal(Qubit.from_bit(0).get_state(), [[1], [0]])
    assert np.array_equal(Qubit.from_bit(1).get_state(), [[0], [1]])
    assert Qubit.from_bit(0).get_state().shape == (2, 1)
    assert Qubit() == Qubit.from_bit(0)


def test_explicit_amplitudes() -> None:
    h = 1 / np.sqrt(2)
    q = Qubit(Complex(h), Complex(0.0, h))
    assert q.x == Complex(h)
    assert np.allclose(q.get_state().ravel(), [h, 1j * h])
    assert q.norm() == pytest.approx(1.0)


def test_numbers_are_coerced_to_complex() -> None:
    assert Qubit(1, 0) == Qubit.from_bit(0)
    assert Qubit(0j, 1 + 0j) == Qubit.from_bit(1)


@pytest.mark.parametrize("bit", [2, -1, 0.5])
def test_invalid_bit_rejected(bit) -> None:
    with pytest.raises(InvalidConfigurationError):
        Qubit.from_bit(bit)


def test_structural_equality_and_hash() -> None:
    assert Qubit.from_bit(1) == Qubit(Complex(0.0), Complex(1.0))
    assert len({Qubit.from_bit(0), Qubit.from_bit(0), Qubit.from_bit(1)}) == 2


def test_string_rendering() -> None:
    assert str(Qubit.from_bit(0)) == "|0>"
    assert str(Qubit.from_bit(1)) == "|1>"
    assert str(Qubit(0.6, 0.8)) == "0.6|0> + 0.8|1>"


def test_wire_toggle_sets_dirty() -> None:
    wire = QuantumWire()
    assert not wire.dirty
    wire.toggle()
    assert wire.initial == Qubit.from_bit(1)
    assert wire.dirty
    wire.reset_dirty()
    wire.toggle()
    assert wire.initial == Qubit.from_bit(0)
    assert wire.dirty


def test_wire_toggle_from_superposition_resets_to_zero() -> None:
    wire = QuantumWire(Qubit(0.6, 0.8))
    wire.toggle()
    assert wire.initial == Qubit.from_bit(0)


def test_wire_initial_is_read_only() -> None:
    wire = QuantumWire.from_bit(1)
    with pytest.raises(AttributeError):
        wire.initial = Qubit.from_bit(0)
    with pytest.raises(AttributeError):
        wire.dirty = True
    assert wire.initial == Qubit.from_bit(1)
    assert not wire.dirty
