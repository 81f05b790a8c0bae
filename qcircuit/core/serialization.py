"""XML (and JSON) save/load for quantum circuits.

Document layout::

    <Circuit xmlns="https://cberkstresser.name/QuantumWeb">
      <Meta date="2026-01-01T12:00:00+00:00" />
      <InitialState>
        <Qubit wire="0" xR="1.0" xI="0.0" yR="0.0" yI="0.0" />
      </InitialState>
      <Gates>
        <Gate position="0" gateType="CNOT" parameterValue="0.0">
          <Wire>0</Wire>
          <Wire>1</Wire>
        </Gate>
      </Gates>
    </Circuit>

Element lookup ignores namespaces, so documents written with or without
the default namespace both load.
"""

from __future__ import annotations

import json
import logging
import xml.etree.ElementTree as ET
from datetime import datetime
from pathlib import Path

from qcircuit.engine.circuit import MAX_QUBITS, QuantumCircuit, QuantumWire
from qcircuit.engine.complex_number import Complex
from qcircuit.engine.errors import CircuitError, FormatError
from qcircuit.engine.quantum_gate import QuantumGate
from qcircuit.engine.qubit import Qubit

logger = logging.getLogger(__name__)

CIRCUIT_NAMESPACE = "https://cberkstresser.name/QuantumWeb"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="no"?>\n'

ET.register_namespace("", CIRCUIT_NAMESPACE)


def _tag(name: str) -> str:
    return f"{{{CIRCUIT_NAMESPACE}}}{name}"


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _children(parent: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in parent if _local(child.tag) == name]


def _child(parent: ET.Element, name: str) -> ET.Element:
    for child in parent:
        if _local(child.tag) == name:
            return child
    raise FormatError(f"<{_local(parent.tag)}> is missing its <{name}> element")


def _attr(element: ET.Element, name: str) -> str:
    value = element.get(name)
    if value is None:
        raise FormatError(
            f"<{_local(element.tag)}> is missing the '{name}' attribute")
    return value


def _parse_float(text: str, what: str) -> float:
    try:
        return float(text)
    except ValueError as exc:
        raise FormatError(f"{what} is not a number: {text!r}") from exc


def _parse_int(text: str | None, what: str) -> int:
    try:
        return int((text or "").strip())
    except ValueError as exc:
        raise FormatError(f"{what} is not an integer: {text!r}") from exc


class CircuitSerializer:
    """Save/load for quantum circuits.

    ``.json`` and ``.qsim`` paths use the JSON form of
    ``QuantumCircuit.to_dict``; every other path uses the XML document.
    """

    FILE_VERSION = "1.0"
    FILE_EXTENSION = ".xml"
    JSON_EXTENSIONS = (".json", ".qsim")

    # ---- XML -------------------------------------------------------------

    @staticmethod
    def to_element(circuit: QuantumCircuit) -> ET.Element:
        root = ET.Element(_tag("Circuit"))
        ET.SubElement(root, _tag("Meta"),
                      date=datetime.now().astimezone().isoformat())

        initial_state = ET.SubElement(root, _tag("InitialState"))
        for n, qubit in enumerate(circuit.initial_values):
            ET.SubElement(initial_state, _tag("Qubit"), {
                "wire": str(n),
                "xR": repr(qubit.x.real),
                "xI": repr(qubit.x.imaginary),
                "yR": repr(qubit.y.real),
                "yI": repr(qubit.y.imaginary),
            })

        gates = ET.SubElement(root, _tag("Gates"))
        for gate in sorted(circuit.gates, key=QuantumGate.sort_key):
            gate_el = ET.SubElement(gates, _tag("Gate"), {
                "position": str(gate.column),
                "gateType": gate.gate_type,
                "parameterValue": repr(gate.parameter),
            })
            for w in gate.wires:
                ET.SubElement(gate_el, _tag("Wire")).text = str(w)
        return root

    @staticmethod
    def to_xml(circuit: QuantumCircuit) -> str:
        root = CircuitSerializer.to_element(circuit)
        ET.indent(root)
        return XML_DECLARATION + ET.tostring(root, encoding="unicode") + "\n"

    @staticmethod
    def from_xml(text: str | bytes, max_qubits: int = MAX_QUBITS) -> QuantumCircuit:
        """Parse a circuit document into a new circuit.

        Raises:
            FormatError: on malformed XML, missing elements or attributes,
                unparsable numbers, out-of-order wire indices, or gates the
                catalog does not support.
        """
        try:
            root = ET.fromstring(text)
        except ET.ParseError as exc:
            raise FormatError(f"Circuit document is not well-formed XML: {exc}") from exc
        if _local(root.tag) != "Circuit":
            raise FormatError(
                f"Expected a <Circuit> root element, got <{_local(root.tag)}>")

        circuit = QuantumCircuit(max_qubits=max_qubits)

        initial_state = _child(root, "InitialState")
        for ordinal, qubit_el in enumerate(_children(initial_state, "Qubit")):
            wire = _parse_int(_attr(qubit_el, "wire"), "Qubit wire")
            if wire != ordinal:
                raise FormatError(
                    f"Qubit for wire {wire} found at position {ordinal}")
            amplitudes = [
                _parse_float(_attr(qubit_el, name), f"Qubit {wire} {name}")
                for name in ("xR", "xI", "yR", "yI")
            ]
            qubit = Qubit(Complex(amplitudes[0], amplitudes[1]),
                          Complex(amplitudes[2], amplitudes[3]))
            try:
                circuit.add_wire(QuantumWire(qubit))
            except CircuitError as exc:
                raise FormatError(str(exc)) from exc

        for gate_el in _children(_child(root, "Gates"), "Gate"):
            gate_type = _attr(gate_el, "gateType")
            position = _parse_int(_attr(gate_el, "position"), f"{gate_type} position")
            parameter = _parse_float(gate_el.get("parameterValue", "0.0"),
                                     f"{gate_type} parameterValue")
            wires = tuple(_parse_int(w.text, f"{gate_type} wire")
                          for w in _children(gate_el, "Wire"))
            try:
                circuit.restore_gate(QuantumGate(gate_type, position, wires, parameter))
            except CircuitError as exc:
                raise FormatError(
                    f"Invalid {gate_type} gate at position {position}: {exc}") from exc

        return circuit

    # ---- JSON ------------------------------------------------------------

    @staticmethod
    def to_json(circuit: QuantumCircuit) -> str:
        data = {"version": CircuitSerializer.FILE_VERSION, **circuit.to_dict()}
        return json.dumps(data, indent=2, ensure_ascii=False)

    @staticmethod
    def from_json(text: str, max_qubits: int = MAX_QUBITS) -> QuantumCircuit:
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise FormatError(f"Invalid circuit JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise FormatError("Circuit JSON must be an object")
        version = data.get("version", CircuitSerializer.FILE_VERSION)
        if version != CircuitSerializer.FILE_VERSION:
            raise FormatError(f"Unsupported circuit file version: {version!r}")
        try:
            return QuantumCircuit.from_dict(data, max_qubits=max_qubits)
        except (KeyError, TypeError, ValueError, CircuitError) as exc:
            raise FormatError(f"Invalid circuit JSON: {exc}") from exc

    # ---- Files -----------------------------------------------------------

    @staticmethod
    def save(circuit: QuantumCircuit, filepath: Path | str) -> Path:
        """Write ``circuit`` and return the path written.

        A path without a suffix gets ``FILE_EXTENSION`` appended.
        """
        filepath = Path(filepath)
        if not filepath.suffix:
            filepath = filepath.with_suffix(CircuitSerializer.FILE_EXTENSION)
        if filepath.suffix.lower() in CircuitSerializer.JSON_EXTENSIONS:
            content = CircuitSerializer.to_json(circuit)
        else:
            content = CircuitSerializer.to_xml(circuit)
        filepath.write_text(content, encoding="utf-8")
        logger.info("Saved circuit (%d wires, %d gates) to %s",
                    circuit.num_qubits, circuit.gate_count(), filepath)
        return filepath

    @staticmethod
    def load(filepath: Path | str, max_qubits: int = MAX_QUBITS) -> QuantumCircuit:
        """Read a circuit document; ``max_qubits`` caps the loaded wire count."""
        filepath = Path(filepath)
        content = filepath.read_text(encoding="utf-8")
        if filepath.suffix.lower() in CircuitSerializer.JSON_EXTENSIONS:
            circuit = CircuitSerializer.from_json(content, max_qubits)
        else:
            circuit = CircuitSerializer.from_xml(content, max_qubits)
        logger.info("Loaded circuit (%d wires, %d gates) from %s",
                    circuit.num_qubits, circuit.gate_count(), filepath)
        return circuit
