"""Base scenario class."""

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence, Tuple

from ..dynamics import Trajectory
from ..dynamics.trajectory import ExternalInput
from ..machines import ContractMachine
from ..monitoring import FailureReport, check_contract
from ..wiring import WiringDiagram


@dataclass
class Scenario:
    """
    A scenario defines:
    - Name and description
    - The top-level wiring diagram and its composed contract machine
    - Initial state, external input and time span of the simulation
    - Whether contract violations are expected (for validation)
    """
    name: str
    description: str
    diagram: WiringDiagram
    machine: ContractMachine
    u0: Sequence[float]
    inputs: ExternalInput
    tspan: Tuple[float, float]
    params: Any = None
    expect_violations: bool = False
    solver_options: dict = field(default_factory=dict)

    def solve(self) -> Trajectory:
        """Integrate the composed dynamics over the scenario's time span"""
        return self.machine.solve(self.u0, self.inputs, self.tspan, self.params, **self.solver_options)

    def check(self, trajectory: Optional[Trajectory] = None, out_type: str = "time") -> FailureReport:
        """Monitor the contract along a trajectory (solved on demand)"""
        if trajectory is None:
            trajectory = self.solve()
        return check_contract(trajectory, self.machine, self.inputs, self.params, out_type=out_type)
