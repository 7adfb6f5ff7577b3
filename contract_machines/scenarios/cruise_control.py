"""
Cruise Control Scenario - nested diagrams and actuator saturation.

Engineering narrative:
A PI cruise controller drives a vehicle from standstill to 30 m/s. The
controller/vehicle feedback loop is composed first and then used as a
single box ("CruiseLoop") next to a speed sensor.

  - Inside the loop every wire is strictly compatible.
  - The loop guarantees speeds in [0, 40] but the sensor is only
    calibrated for [0, 35]: composing the outer diagram warns about
    undefined behaviour on the "v" wire, and composition proceeds.
  - On the initial 30 m/s step the controller asks for far more force than
    its 3000 N rating before the speed catches up.

Expected outcome:
  - One ContractUndefinedWarning at composition time
  - CruiseLoop.Controller's force output fails over an early interval
  - The speed stays within every speed contract
"""

import numpy as np

from ..components import CruiseController, Vehicle, SpeedSensor
from ..machines import compose
from ..wiring import WiringDiagram, INPUT_ID, OUTPUT_ID
from .base_scenario import Scenario


SPEED_SETPOINT = 30.0


def create_cruise_loop():
    """
    Compose the controller/vehicle feedback loop.

    Returns:
        (diagram, contract machine) of the loop, with input v_ref and output v
    """
    controller = CruiseController()
    vehicle = Vehicle()

    diagram = WiringDiagram(inputs=['v_ref'], outputs=['v'])
    c = controller.add_to(diagram)
    v = vehicle.add_to(diagram)

    diagram.add_wires([
        ((INPUT_ID, 0), (c, 0)),      # v_ref -> Controller
        ((c, 0), (v, 0)),             # Controller.force -> Vehicle
        ((v, 0), (c, 1)),             # Vehicle.v -> Controller (feedback)
        ((v, 0), (OUTPUT_ID, 0)),     # Vehicle.v -> out
    ])

    machine = compose(diagram, [controller.to_contract_machine(), vehicle.to_contract_machine()])
    return diagram, machine


def create_cruise_control_scenario() -> Scenario:
    """
    Create the cruise control scenario.

    Warns:
        ContractUndefinedWarning: On the loop -> sensor wire
    """
    loop_diagram, loop = create_cruise_loop()
    sensor = SpeedSensor()

    diagram = WiringDiagram(inputs=['v_ref'], outputs=['v_measured'])
    cl = diagram.add_subdiagram('CruiseLoop', loop_diagram)
    s = sensor.add_to(diagram)

    diagram.add_wires([
        ((INPUT_ID, 0), (cl, 0)),     # v_ref -> CruiseLoop
        ((cl, 0), (s, 0)),            # CruiseLoop.v -> Sensor
        ((s, 0), (OUTPUT_ID, 0)),     # Sensor.v_measured -> out
    ])

    machine = compose(diagram, {'CruiseLoop': loop, 'Sensor': sensor.to_contract_machine()})

    return Scenario(
        name="CruiseControl",
        description="PI cruise control from standstill; the controller saturates on the initial step",
        diagram=diagram,
        machine=machine,
        u0=np.zeros(machine.nstates),
        inputs=[SPEED_SETPOINT],
        tspan=(0.0, 120.0),
        expect_violations=True,
        solver_options={'max_step': 0.25},
    )
