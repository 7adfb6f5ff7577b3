"""
Static contracts: one operating interval per port.
"""

from dataclasses import dataclass
from typing import Iterable, Tuple
from .interval import Interval, IntervalLike, as_interval
from ..exceptions import ContractDefinitionError


@dataclass(frozen=True)
class StaticContract:
    """
    A static contract C = (I, O) where:
    - I (inputs): the interval each input port is assumed to stay in
    - O (outputs): the interval each output port is guaranteed to stay in

    `inputs[i]` belongs to the i-th input port of the component, and
    `outputs[j]` to its j-th output port.

    Raises:
        ContractDefinitionError: If any interval is empty or backwards
    """
    inputs: Tuple[Interval, ...]
    outputs: Tuple[Interval, ...]

    def __init__(self, inputs: Iterable[IntervalLike] = (), outputs: Iterable[IntervalLike] = ()):
        inputs = tuple(as_interval(i) for i in inputs)
        outputs = tuple(as_interval(o) for o in outputs)

        for interval in inputs + outputs:
            if interval.is_empty():
                raise ContractDefinitionError(interval)

        object.__setattr__(self, 'inputs', inputs)
        object.__setattr__(self, 'outputs', outputs)

    @classmethod
    def unconstrained(cls, ninputs: int, noutputs: int) -> 'StaticContract':
        """Contract with ℝ on every port."""
        return cls([Interval.reals()] * ninputs, [Interval.reals()] * noutputs)

    @property
    def ninputs(self) -> int:
        return len(self.inputs)

    @property
    def noutputs(self) -> int:
        return len(self.outputs)

    def is_unconstrained(self) -> bool:
        """True if every port accepts any real value"""
        return all(i.is_unbounded() for i in self.inputs + self.outputs)

    def __str__(self) -> str:
        product = " × ".join(str(i) for i in self.inputs + self.outputs)
        return f"StaticContract( {product} )"

    def detailed_str(self, input_ports=None, output_ports=None) -> str:
        """Detailed string representation, one port per line"""
        input_ports = input_ports or [str(i + 1) for i in range(self.ninputs)]
        output_ports = output_ports or [str(j + 1) for j in range(self.noutputs)]

        lines = ["StaticContract:"]
        lines.append("  Inputs:")
        if not self.inputs:
            lines.append("    ∅")
        for name, interval in zip(input_ports, self.inputs):
            lines.append(f"    {name} ∈ {interval}")

        lines.append("  Outputs:")
        if not self.outputs:
            lines.append("    ∅")
        for name, interval in zip(output_ports, self.outputs):
            lines.append(f"    {name} ∈ {interval}")

        return "\n".join(lines)
