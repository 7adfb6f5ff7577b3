"""Wiring diagrams: boxes, ports and wires."""

from .diagram import WiringDiagram, Box, Wire, Port, INPUT_ID, OUTPUT_ID

__all__ = ['WiringDiagram', 'Box', 'Wire', 'Port', 'INPUT_ID', 'OUTPUT_ID']
