"""
Contract monitoring along a trajectory.

The contract of a machine is evaluated at every sample the solver produced,
and the pass/fail signal of every port is reduced to its failure intervals.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple, Union

from .failure import Range, failure_intervals
from ..dynamics import Trajectory, resolve_inputs
from ..dynamics.trajectory import ExternalInput
from ..machines import ContractMachine, PortVerdicts, Path, format_path


PortRanges = Tuple[str, Tuple[Range, ...]]


@dataclass(frozen=True)
class PortFailures:
    """
    Failure intervals of every port of one box.

    Attributes:
        input: (port name, failure ranges) per input port
        output: (port name, failure ranges) per output port
    """
    input: Tuple[PortRanges, ...]
    output: Tuple[PortRanges, ...]

    @property
    def violated(self) -> bool:
        return any(ranges for _, ranges in self.input + self.output)


@dataclass(frozen=True)
class FailureReport:
    """
    Failure intervals for every box of a machine, keyed by box path.

    Attributes:
        entries: Box path -> PortFailures, in evaluation order
        out_type: "time" or "index", the unit of every range
        span: (first, last) sample time of the monitored trajectory
    """
    entries: Dict[Path, PortFailures] = field(default_factory=dict)
    out_type: str = "time"
    span: Tuple[float, float] = (0.0, 0.0)

    def __getitem__(self, path: Union[Path, str]) -> PortFailures:
        if isinstance(path, str):
            path = (path,)
        return self.entries[path]

    def __iter__(self):
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def is_clean(self) -> bool:
        """True if no port ever left its interval"""
        return not any(failures.violated for failures in self.entries.values())

    def violations(self) -> List[Tuple[Path, str, str, Tuple[Range, ...]]]:
        """(path, direction, port, ranges) for every port with at least one failure"""
        found = []
        for path, failures in self.entries.items():
            for direction, ports in (("input", failures.input), ("output", failures.output)):
                for port, ranges in ports:
                    if ranges:
                        found.append((path, direction, port, ranges))
        return found

    def summary(self) -> str:
        violations = self.violations()
        if not violations:
            return "✓ No contract violations"
        lines = [f"✗ {len(violations)} port(s) violated their contract:"]
        for path, direction, port, ranges in violations:
            lines.append(f"  {format_path(path)} {direction} {port}: {len(ranges)} interval(s)")
        return "\n".join(lines)


def evaluate_trajectory(trajectory: Trajectory,
                        machine: ContractMachine,
                        x: ExternalInput,
                        p=None) -> List[PortVerdicts]:
    """Contract verdicts at every sample time of the trajectory"""
    return [machine.evaluate(trajectory(t), resolve_inputs(x, t), p, t) for t in trajectory.t]


def _port_ranges(signals: Sequence[Tuple[str, List[bool]]], times, out_type: str) -> Tuple[PortRanges, ...]:
    return tuple(
        (port, tuple(failure_intervals(signal, times, out_type)))
        for port, signal in signals
    )


def check_contract(trajectory: Trajectory,
                   machine: ContractMachine,
                   x: ExternalInput,
                   p=None,
                   out_type: str = "time") -> FailureReport:
    """
    Find when each port of a machine violates its contract along a trajectory.

    Args:
        trajectory: Solution of the machine's dynamics
        machine: The contract machine that produced the trajectory
        x: External input, constant or a function of time
        p: Parameters passed through to readouts
        out_type: "time" to report time ranges, "index" for sample indices

    Returns:
        FailureReport keyed like the flattened evaluation directory
    """
    if len(trajectory) == 0:
        raise ValueError("cannot check a contract over an empty trajectory")

    directories = [v.flatten() for v in evaluate_trajectory(trajectory, machine, x, p)]
    first = directories[0]

    entries = {}
    for path, leaf in first.items():
        inputs = [
            (port, [d[path].input[i] for d in directories])
            for i, (port, _) in enumerate(leaf.named_input())
        ]
        outputs = [
            (port, [d[path].output[j] for d in directories])
            for j, (port, _) in enumerate(leaf.named_output())
        ]
        entries[path] = PortFailures(
            input=_port_ranges(inputs, trajectory.t, out_type),
            output=_port_ranges(outputs, trajectory.t, out_type),
        )

    return FailureReport(entries=entries, out_type=out_type, span=trajectory.span)
