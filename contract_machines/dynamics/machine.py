"""
Dynamical machines and their composition over wiring diagrams.

A machine has a state vector u, an input vector x and an output vector y:
- dynamics(u, x, p, t) gives du/dt (continuous) or the next state (discrete)
- readout(u, p, t) gives y

Composing machines over a diagram concatenates their states in box order.
Each box's input is the sum of the signals on the wires that end at it.
"""

from typing import Callable, List, Sequence
import numpy as np

from ..exceptions import StructuralMismatchError
from ..wiring import WiringDiagram, INPUT_ID


class Machine:
    """
    Base class for machines.

    Attributes:
        ninputs: Number of input ports
        nstates: Length of the state vector
        noutputs: Number of output ports
        dynamics: Function (u, x, p, t) -> state derivative or next state
        readout: Function (u, p, t) -> output vector
    """
    kind = None

    def __init__(self,
                 ninputs: int,
                 nstates: int,
                 noutputs: int,
                 dynamics: Callable,
                 readout: Callable):
        self.ninputs = ninputs
        self.nstates = nstates
        self.noutputs = noutputs
        self.dynamics = dynamics
        self.readout = readout

    def eval_dynamics(self, u, x, p=None, t=0.0) -> np.ndarray:
        return np.asarray(self.dynamics(u, x, p, t), dtype=float).reshape(self.nstates)

    def eval_readout(self, u, p=None, t=0.0) -> np.ndarray:
        return np.asarray(self.readout(u, p, t), dtype=float).reshape(self.noutputs)

    def __str__(self) -> str:
        return (f"{type(self).__name__}(inputs={self.ninputs}, states={self.nstates}, "
                f"outputs={self.noutputs})")

    def __repr__(self) -> str:
        return str(self)


class ContinuousMachine(Machine):
    """Machine whose dynamics give the time derivative of the state."""
    kind = "continuous"


class DiscreteMachine(Machine):
    """Machine whose dynamics give the state at the next step."""
    kind = "discrete"


MACHINE_KINDS = {
    ContinuousMachine.kind: ContinuousMachine,
    DiscreteMachine.kind: DiscreteMachine,
}


def make_machine(kind: str, ninputs: int, nstates: int, noutputs: int,
                 dynamics: Callable, readout: Callable) -> Machine:
    """Build a machine of the given kind ("continuous" or "discrete")"""
    if kind not in MACHINE_KINDS:
        raise ValueError(f"unknown machine kind {kind!r}, expected one of {sorted(MACHINE_KINDS)}")
    return MACHINE_KINDS[kind](ninputs, nstates, noutputs, dynamics, readout)


def state_partition(nstates: Sequence[int]) -> List[slice]:
    """
    Contiguous slice of the composite state vector owned by each box.

    Box i's state immediately follows box i-1's.
    """
    partition = []
    stop = 0
    for n in nstates:
        partition.append(slice(stop, stop + n))
        stop += n
    return partition


def box_inputs(diagram: WiringDiagram, box_id: int, readouts: Sequence[np.ndarray], x) -> np.ndarray:
    """
    Input vector of a box inside a diagram.

    Every wire ending at the box contributes the readout of its source box,
    or the external input for wires from the diagram boundary. Contributions
    to the same port are summed.
    """
    xin = np.zeros(diagram.box(box_id).ninputs)
    for w in diagram.in_wires(box_id):
        if w.source.box == INPUT_ID:
            xin[w.target.port] += x[w.source.port]
        else:
            xin[w.target.port] += readouts[w.source.box][w.source.port]
    return xin


def compose_machines(diagram: WiringDiagram, machines: Sequence[Machine]) -> Machine:
    """
    Compose machines over a wiring diagram.

    Args:
        diagram: The wiring diagram
        machines: One machine per box, in box order, all of the same kind

    Returns:
        A machine of the same kind with the concatenated state, one input per
        diagram input port and one output per diagram output port

    Raises:
        StructuralMismatchError: If the machines do not fit the diagram
    """
    machines = list(machines)
    if diagram.nboxes != len(machines):
        raise StructuralMismatchError(
            f"there are {diagram.nboxes} boxes but {len(machines)} machines"
        )

    kinds = {m.kind for m in machines}
    if len(kinds) > 1:
        raise StructuralMismatchError(f"cannot compose machines of mixed kinds: {sorted(kinds)}")
    kind = kinds.pop() if kinds else ContinuousMachine.kind

    for box_id, (box, m) in enumerate(zip(diagram.boxes, machines)):
        if box.ninputs != m.ninputs or box.noutputs != m.noutputs:
            raise StructuralMismatchError(
                f"number of ports do not match machine at {box.name} (id={box_id})",
                box_name=box.name, box_id=box_id
            )

    partition = state_partition([m.nstates for m in machines])
    nstates = sum(m.nstates for m in machines)

    def readouts(u, p, t):
        return [m.eval_readout(u[s], p, t) for m, s in zip(machines, partition)]

    def dynamics(u, x, p=None, t=0.0):
        u = np.asarray(u, dtype=float)
        outs = readouts(u, p, t)
        du = np.zeros(nstates)
        for box_id, (m, s) in enumerate(zip(machines, partition)):
            du[s] = m.eval_dynamics(u[s], box_inputs(diagram, box_id, outs, x), p, t)
        return du

    def readout(u, p=None, t=0.0):
        outs = readouts(np.asarray(u, dtype=float), p, t)
        y = np.zeros(len(diagram.output_ports))
        for w in diagram.output_wires():
            y[w.target.port] += outs[w.source.box][w.source.port]
        return y

    return make_machine(kind, len(diagram.input_ports), nstates, len(diagram.output_ports),
                        dynamics, readout)
