"""
Contract evaluators.

An evaluator checks, for a state u and an external input x, whether every
port of a machine currently lies in its contract interval.
"""

from abc import ABC, abstractmethod
from typing import Sequence
import numpy as np

from .verdicts import AtomicVerdicts, CompositeVerdicts, PortVerdicts
from ..contracts import StaticContract
from ..dynamics import Machine, box_inputs, state_partition
from ..exceptions import StructuralMismatchError
from ..wiring import WiringDiagram


class Evaluator(ABC):
    """Capability of evaluating a machine's contract at one instant."""

    @abstractmethod
    def __call__(self, u, x, p=None, t: float = 0.0) -> PortVerdicts:
        """
        Evaluate the contract.

        Args:
            u: State vector of the machine
            x: External input vector
            p: Parameters passed through to readouts
            t: Time
        """


class AtomicEvaluator(Evaluator):
    """
    Checks the inputs directly and the outputs through the machine's readout.
    """

    def __init__(self, contract: StaticContract, machine: Machine):
        if contract.ninputs != machine.ninputs or contract.noutputs != machine.noutputs:
            raise StructuralMismatchError(
                f"contract has {contract.ninputs}→{contract.noutputs} ports "
                f"but machine has {machine.ninputs}→{machine.noutputs}"
            )
        self.contract = contract
        self.machine = machine

    def __call__(self, u, x, p=None, t: float = 0.0) -> AtomicVerdicts:
        x = np.asarray(x, dtype=float).reshape(-1)
        if len(x) != self.contract.ninputs:
            raise ValueError(f"expected {self.contract.ninputs} inputs, got {len(x)}")

        y = self.machine.eval_readout(u, p, t)
        return AtomicVerdicts(
            input=[xi in c for xi, c in zip(x, self.contract.inputs)],
            output=[yj in c for yj, c in zip(y, self.contract.outputs)],
        )


class CompositeEvaluator(Evaluator):
    """
    Evaluates every box of a diagram on its own slice of the state.

    Each box's input is rebuilt from the wires ending at it, exactly as the
    composed dynamics build it, and handed to the box's own evaluator.
    """

    def __init__(self, diagram: WiringDiagram, machines: Sequence['ContractMachine']):
        self.diagram = diagram
        self.machines = list(machines)
        self.partition = state_partition([m.nstates for m in self.machines])

    def __call__(self, u, x, p=None, t: float = 0.0) -> CompositeVerdicts:
        u = np.asarray(u, dtype=float)
        x = np.asarray(x, dtype=float).reshape(-1)

        readouts = [m.readout(u[s], p, t) for m, s in zip(self.machines, self.partition)]

        children = {}
        for box_id, (box, m, s) in enumerate(zip(self.diagram.boxes, self.machines, self.partition)):
            xin = box_inputs(self.diagram, box_id, readouts, x)
            result = m.evaluate(u[s], xin, p, t)
            if isinstance(result, AtomicVerdicts):
                result = result.with_ports(box.input_ports, box.output_ports)
            children[box.name] = result

        return CompositeVerdicts(children)
