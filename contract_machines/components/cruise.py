"""
Cruise control loop components.

CruiseController: PI controller on the speed error, with actuator lag
    Inputs: v_ref, v        Outputs: force
Vehicle: longitudinal dynamics with linear drag
    Inputs: force           Outputs: v
SpeedSensor: first-order lag on the measured speed
    Inputs: v               Outputs: v_measured
"""

from typing import List
from .base import BaseComponent
from ..contracts import Interval


class CruiseController(BaseComponent):
    """
    PI controller whose force command passes through a first-order lag.

    States: [integral of the speed error, applied force]
    - dz/dt = v_ref - v
    - TAU dF/dt = KP (v_ref - v) + KI z - F
    """

    KP = 200.0   # Proportional gain (N per m/s)
    KI = 20.0    # Integral gain (N per m)
    TAU = 0.5    # Actuator lag (s)
    MAX_FORCE = 3000.0  # Actuator rating (N)
    MAX_SPEED = 45.0    # Highest speed the controller is tuned for (m/s)

    def __init__(self, name: str = "Controller"):
        super().__init__(name, ['v_ref', 'v'], ['force'], nstates=2)

    def dynamics(self, u, x, p=None, t=0.0) -> List[float]:
        error = x[0] - x[1]
        z, force = u
        return [error, (self.KP * error + self.KI * z - force) / self.TAU]

    def readout(self, u, p=None, t=0.0) -> List[float]:
        return [u[1]]

    def input_contracts(self) -> List[Interval]:
        return [Interval.closed(0.0, self.MAX_SPEED), Interval.closed(0.0, self.MAX_SPEED)]

    def output_contracts(self) -> List[Interval]:
        return [Interval.closed(-self.MAX_FORCE, self.MAX_FORCE)]


class Vehicle(BaseComponent):
    """
    Point-mass vehicle: m dv/dt = F - b v
    """

    MASS = 1000.0       # kg
    DRAG = 50.0         # N per m/s
    MAX_FORCE = 5000.0  # Drivetrain rating (N)
    MAX_SPEED = 40.0    # m/s

    def __init__(self, name: str = "Vehicle"):
        super().__init__(name, ['force'], ['v'], nstates=1)

    def dynamics(self, u, x, p=None, t=0.0) -> List[float]:
        return [(x[0] - self.DRAG * u[0]) / self.MASS]

    def readout(self, u, p=None, t=0.0) -> List[float]:
        return [u[0]]

    def input_contracts(self) -> List[Interval]:
        return [Interval.closed(-self.MAX_FORCE, self.MAX_FORCE)]

    def output_contracts(self) -> List[Interval]:
        return [Interval.closed(0.0, self.MAX_SPEED)]


class SpeedSensor(BaseComponent):
    """
    Speed sensor with a first-order lag: TAU dm/dt = v - m
    """

    TAU = 0.2          # s
    MAX_SPEED = 35.0   # Calibrated range (m/s)

    def __init__(self, name: str = "Sensor"):
        super().__init__(name, ['v'], ['v_measured'], nstates=1)

    def dynamics(self, u, x, p=None, t=0.0) -> List[float]:
        return [(x[0] - u[0]) / self.TAU]

    def readout(self, u, p=None, t=0.0) -> List[float]:
        return [u[0]]

    def input_contracts(self) -> List[Interval]:
        return [Interval.closed(0.0, self.MAX_SPEED)]

    def output_contracts(self) -> List[Interval]:
        return [Interval.closed(0.0, self.MAX_SPEED)]
