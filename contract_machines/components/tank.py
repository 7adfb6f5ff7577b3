"""
Gravity-drained tank.

Inputs: inflow
Outputs: outflow, level

Linearised drain: the outflow is proportional to the level,
    A dh/dt = q_in - h / R,    q_out = h / R
"""

from typing import List
from .base import BaseComponent
from ..contracts import Interval


class Tank(BaseComponent):
    """
    Tank with a linear drain.

    Contract: the inflow stays in [0, max_inflow] and the level in
    [0, max_level], hence the outflow stays in [0, max_level / R].
    """

    def __init__(self,
                 name: str,
                 inflow: str,
                 outflow: str,
                 level: str,
                 area: float = 1.0,
                 resistance: float = 1.0,
                 max_inflow: float = 2.0,
                 max_level: float = 3.0):
        super().__init__(name, [inflow], [outflow, level], nstates=1)
        self.area = area
        self.resistance = resistance
        self.max_inflow = max_inflow
        self.max_level = max_level

    def dynamics(self, u, x, p=None, t=0.0) -> List[float]:
        return [(x[0] - u[0] / self.resistance) / self.area]

    def readout(self, u, p=None, t=0.0) -> List[float]:
        return [u[0] / self.resistance, u[0]]

    def input_contracts(self) -> List[Interval]:
        return [Interval.closed(0.0, self.max_inflow)]

    def output_contracts(self) -> List[Interval]:
        return [
            Interval.closed(0.0, self.max_level / self.resistance),
            Interval.closed(0.0, self.max_level),
        ]
