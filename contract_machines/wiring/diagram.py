"""
Directed wiring diagrams of boxes, ports and wires.
"""

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple, Union
import networkx as nx


# Sentinel box ids for the diagram boundary
INPUT_ID = -1
OUTPUT_ID = -2


@dataclass(frozen=True)
class Port:
    """A port of a box, or of the diagram boundary when `box` is a sentinel id."""
    box: int
    port: int

    def __str__(self) -> str:
        if self.box == INPUT_ID:
            return f"in[{self.port}]"
        if self.box == OUTPUT_ID:
            return f"out[{self.port}]"
        return f"{self.box}[{self.port}]"


PortLike = Union[Port, Tuple[int, int]]


def _as_port(value: PortLike) -> Port:
    if isinstance(value, Port):
        return value
    box, port = value
    return Port(box, port)


@dataclass(frozen=True)
class Wire:
    """
    A directed wire from an output port to an input port.

    Internal wires connect two boxes. External input wires start at the
    diagram boundary (`INPUT_ID`) and external output wires end there
    (`OUTPUT_ID`).
    """
    source: Port
    target: Port

    @property
    def is_internal(self) -> bool:
        return self.source.box >= 0 and self.target.box >= 0

    @property
    def is_input(self) -> bool:
        return self.source.box == INPUT_ID

    @property
    def is_output(self) -> bool:
        return self.target.box == OUTPUT_ID

    def __str__(self) -> str:
        return f"Wire({self.source} → {self.target})"


@dataclass(frozen=True)
class Box:
    """
    A component instance in a wiring diagram.

    Port names are ordered; the i-th name is the name of the i-th port.
    """
    name: str
    input_ports: Tuple[str, ...]
    output_ports: Tuple[str, ...]

    @property
    def ninputs(self) -> int:
        return len(self.input_ports)

    @property
    def noutputs(self) -> int:
        return len(self.output_ports)


class WiringDiagram:
    """
    A wiring diagram is a directed hypergraph where:
    - Boxes are components with named, ordered input and output ports
    - Wires connect an output port to an input port
    - The diagram itself has named outer input and output ports

    Boxes are identified by their 0-based position in declaration order.
    A box may stand for a previously composed diagram; the diagram does not
    care what is inside a box.
    """

    def __init__(self, inputs: Sequence[str] = (), outputs: Sequence[str] = ()):
        self.input_ports: Tuple[str, ...] = tuple(inputs)
        self.output_ports: Tuple[str, ...] = tuple(outputs)
        self._boxes: List[Box] = []
        self._wires: List[Wire] = []

    def add_box(self, name: str, inputs: Sequence[str] = (), outputs: Sequence[str] = ()) -> int:
        """Add a box and return its id"""
        self._boxes.append(Box(name, tuple(inputs), tuple(outputs)))
        return len(self._boxes) - 1

    def add_subdiagram(self, name: str, diagram: 'WiringDiagram') -> int:
        """Add a box whose ports are the outer ports of another diagram"""
        return self.add_box(name, diagram.input_ports, diagram.output_ports)

    def add_wire(self, source: PortLike, target: PortLike) -> Wire:
        """
        Add a wire between two ports.

        Raises:
            ValueError: If an endpoint refers to a missing box or the wrong boundary
            IndexError: If a port index is out of range
        """
        source = _as_port(source)
        target = _as_port(target)

        if source.box == OUTPUT_ID:
            raise ValueError("a wire cannot start at the diagram outputs")
        if target.box == INPUT_ID:
            raise ValueError("a wire cannot end at the diagram inputs")
        if source.box == INPUT_ID and target.box == OUTPUT_ID:
            raise ValueError("pass-through wires from inputs to outputs are not supported")

        self._check_port(source, outgoing=True)
        self._check_port(target, outgoing=False)

        wire = Wire(source, target)
        self._wires.append(wire)
        return wire

    def add_wires(self, pairs: Iterable[Tuple[PortLike, PortLike]]):
        """Add several wires given as (source, target) pairs"""
        for source, target in pairs:
            self.add_wire(source, target)

    def _check_port(self, port: Port, outgoing: bool):
        if port.box == INPUT_ID:
            names = self.input_ports
        elif port.box == OUTPUT_ID:
            names = self.output_ports
        elif 0 <= port.box < len(self._boxes):
            box = self._boxes[port.box]
            names = box.output_ports if outgoing else box.input_ports
        else:
            raise ValueError(f"Box id {port.box} not found")

        if not 0 <= port.port < len(names):
            kind = "output" if outgoing else "input"
            raise IndexError(f"{kind} port {port.port} out of range at {port}")

    @property
    def boxes(self) -> List[Box]:
        return list(self._boxes)

    def box(self, box_id: int) -> Box:
        return self._boxes[box_id]

    @property
    def nboxes(self) -> int:
        return len(self._boxes)

    def box_names(self) -> List[str]:
        return [box.name for box in self._boxes]

    def wires(self) -> List[Wire]:
        return list(self._wires)

    def internal_wires(self) -> List[Wire]:
        """Wires from one box to another box"""
        return [w for w in self._wires if w.is_internal]

    def input_wires(self) -> List[Wire]:
        """Wires from the diagram inputs into a box"""
        return [w for w in self._wires if w.is_input]

    def output_wires(self) -> List[Wire]:
        """Wires from a box to the diagram outputs"""
        return [w for w in self._wires if w.is_output]

    def in_wires(self, box_id: int) -> List[Wire]:
        """All wires ending at a box, internal or external"""
        return [w for w in self._wires if w.target.box == box_id]

    def out_wires(self, box_id: int) -> List[Wire]:
        """All wires starting at a box, internal or external"""
        return [w for w in self._wires if w.source.box == box_id]

    def source_port_name(self, wire: Wire) -> str:
        if wire.source.box == INPUT_ID:
            return self.input_ports[wire.source.port]
        return self._boxes[wire.source.box].output_ports[wire.source.port]

    def target_port_name(self, wire: Wire) -> str:
        if wire.target.box == OUTPUT_ID:
            return self.output_ports[wire.target.port]
        return self._boxes[wire.target.box].input_ports[wire.target.port]

    def to_networkx(self) -> nx.MultiDiGraph:
        """
        Directed multigraph of the diagram.

        Box nodes are keyed by id and carry a `name` attribute; the boundary
        is represented by the nodes "input" and "output".
        """
        G = nx.MultiDiGraph()
        for box_id, box in enumerate(self._boxes):
            G.add_node(box_id, name=box.name)
        if self.input_ports:
            G.add_node("input", name="input")
        if self.output_ports:
            G.add_node("output", name="output")

        for wire in self._wires:
            u = "input" if wire.source.box == INPUT_ID else wire.source.box
            v = "output" if wire.target.box == OUTPUT_ID else wire.target.box
            G.add_edge(u, v, port=self.source_port_name(wire))
        return G

    def find_feedback_loops(self) -> List[List[str]]:
        """
        Find groups of boxes that feed back into each other.

        Returns strongly connected components of the internal wiring with at
        least two boxes, or a single box wired to itself, as sorted lists of
        box names (largest first).
        """
        G = nx.DiGraph()
        G.add_nodes_from(range(len(self._boxes)))
        G.add_edges_from((w.source.box, w.target.box) for w in self.internal_wires())

        loops = []
        for scc in nx.strongly_connected_components(G):
            if len(scc) >= 2 or any(G.has_edge(b, b) for b in scc):
                loops.append(sorted(self._boxes[b].name for b in scc))
        loops.sort(key=lambda x: (-len(x), x[0]))
        return loops

    def __str__(self) -> str:
        return f"WiringDiagram({len(self._boxes)} boxes, {len(self._wires)} wires)"

    def detailed_str(self) -> str:
        """Detailed string representation"""
        lines = [f"Wiring diagram with {len(self._boxes)} boxes:"]
        lines.append(f"  Inputs: ({', '.join(self.input_ports)})")
        lines.append(f"  Outputs: ({', '.join(self.output_ports)})")

        for box_id, box in enumerate(self._boxes):
            lines.append(f"  [{box_id}] {box.name}:")
            lines.append(f"    Inputs: ({', '.join(box.input_ports)})")
            lines.append(f"    Outputs: ({', '.join(box.output_ports)})")

        lines.append(f"\nWires ({len(self._wires)}):")
        for wire in self._wires:
            lines.append(f"  {self._endpoint(wire.source, True)} → {self._endpoint(wire.target, False)}")

        loops = self.find_feedback_loops()
        if loops:
            lines.append(f"\nFeedback loops ({len(loops)}):")
            for loop in loops:
                lines.append(f"  {' → '.join(loop)} → {loop[0]}")
        else:
            lines.append("\nNo feedback loops.")

        return "\n".join(lines)

    def _endpoint(self, port: Port, outgoing: bool) -> str:
        if port.box == INPUT_ID:
            return f"input.{self.input_ports[port.port]}"
        if port.box == OUTPUT_ID:
            return f"output.{self.output_ports[port.port]}"
        box = self._boxes[port.box]
        names = box.output_ports if outgoing else box.input_ports
        return f"{box.name}.{names[port.port]}"
