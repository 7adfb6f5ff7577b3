"""
Contract machines: a dynamical machine together with its static contract.
"""

from typing import Callable, List, Mapping, Optional, Sequence, Union

from .evaluator import Evaluator, AtomicEvaluator, CompositeEvaluator
from .verdicts import PortVerdicts
from ..contracts import StaticContract, compose_contracts, order_by_boxes
from ..contracts.interval import IntervalLike
from ..dynamics import Machine, make_machine, compose_machines, solve, simulate
from ..wiring import WiringDiagram


class ContractMachine:
    """
    A machine whose ports carry interval contracts.

    Attributes:
        contract: The static contract of the machine's ports
        machine: The underlying dynamical machine
        evaluator: Checks the contract at one instant; defaults to checking
            the inputs and the readout of `machine` against `contract`
    """

    def __init__(self, contract: StaticContract, machine: Machine, evaluator: Optional[Evaluator] = None):
        self.contract = contract
        self.machine = machine
        self.evaluator = evaluator if evaluator is not None else AtomicEvaluator(contract, machine)

    @classmethod
    def atomic(cls,
               inputs: Sequence[IntervalLike],
               nstates: int,
               outputs: Sequence[IntervalLike],
               dynamics: Callable,
               readout: Callable,
               kind: str = "continuous") -> 'ContractMachine':
        """
        Build a contract machine from per-port intervals and its dynamics.

        Args:
            inputs: One interval per input port (an Interval or a closed (lo, hi) pair)
            nstates: Length of the state vector
            outputs: One interval per output port
            dynamics: Function (u, x, p, t) -> derivative or next state
            readout: Function (u, p, t) -> outputs
            kind: "continuous" or "discrete"

        Raises:
            ContractDefinitionError: If any interval is empty
        """
        contract = StaticContract(inputs, outputs)
        machine = make_machine(kind, contract.ninputs, nstates, contract.noutputs, dynamics, readout)
        return cls(contract, machine)

    @property
    def ninputs(self) -> int:
        return self.machine.ninputs

    @property
    def nstates(self) -> int:
        return self.machine.nstates

    @property
    def noutputs(self) -> int:
        return self.machine.noutputs

    @property
    def kind(self) -> str:
        return self.machine.kind

    @property
    def parts(self) -> List['ContractMachine']:
        """Contract machines of the boxes this machine was composed from (empty if atomic)"""
        if isinstance(self.evaluator, CompositeEvaluator):
            return list(self.evaluator.machines)
        return []

    def readout(self, u, p=None, t: float = 0.0):
        return self.machine.eval_readout(u, p, t)

    def evaluate(self, u, x, p=None, t: float = 0.0) -> PortVerdicts:
        """Pass/fail of every port for state u and external input x"""
        return self.evaluator(u, x, p, t)

    def solve(self, u0, x, tspan, p=None, **options):
        """Integrate the underlying continuous machine (see `dynamics.solve`)"""
        return solve(self.machine, u0, x, tspan, p, **options)

    def simulate(self, u0, x, nsteps: int, p=None, **options):
        """Iterate the underlying discrete machine (see `dynamics.simulate`)"""
        return simulate(self.machine, u0, x, nsteps, p, **options)

    def __str__(self) -> str:
        return str(self.contract)

    def __repr__(self) -> str:
        return f"ContractMachine({self.contract}, {self.machine})"


def compose(diagram: WiringDiagram,
            machines: Union[Sequence[ContractMachine], Mapping[str, ContractMachine]]) -> ContractMachine:
    """
    Compose contract machines over a wiring diagram.

    Args:
        diagram: The wiring diagram
        machines: One contract machine per box in box order, or a mapping
            from box name to contract machine

    Returns:
        ContractMachine whose contract is the composed static contract, whose
        machine is the composed dynamics, and whose evaluator reports a
        directory of per-box verdicts

    Raises:
        StructuralMismatchError: If the machines do not fit the diagram
        ContractIncompatibilityError: If an internal wire has disjoint intervals
    """
    if isinstance(machines, Mapping):
        machines = order_by_boxes(diagram, machines, kind="machine")
    else:
        machines = list(machines)

    contract = compose_contracts(diagram, [m.contract for m in machines])
    evaluator = CompositeEvaluator(diagram, machines)
    machine = compose_machines(diagram, [m.machine for m in machines])

    return ContractMachine(contract, machine, evaluator=evaluator)
