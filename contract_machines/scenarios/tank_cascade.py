"""
Tank Cascade Scenario - a downstream overflow.

Engineering narrative:
Two tanks drain into each other. The upstream tank is fed with a constant
inflow for 30 s, after which the supply is throttled back.

  - Tank1 guarantees an outflow in [0, 3], which Tank2 accepts in full:
    the wire between them is strictly compatible.
  - Tank2 drains through a smaller outlet (R = 1.5). Its level settles at
    1.8 under the full inflow, above its rated level of 1.5.

Expected outcome:
  - Static composition succeeds without warnings
  - Tank2's level and outflow violate their contracts for one interval,
    which closes once the throttled inflow lets the level drop again
  - Tank1 never violates its contract
"""

import numpy as np

from ..components import Tank
from ..machines import compose
from ..wiring import WiringDiagram, INPUT_ID, OUTPUT_ID
from .base_scenario import Scenario


FULL_INFLOW = 1.2
THROTTLED_INFLOW = 0.3
THROTTLE_TIME = 30.0


def inflow_schedule(t: float):
    """Supply into Tank1: full until THROTTLE_TIME, throttled afterwards"""
    return [FULL_INFLOW if t < THROTTLE_TIME else THROTTLED_INFLOW]


def create_tank_cascade_scenario() -> Scenario:
    """
    Create the tank cascade scenario.
    """
    tank1 = Tank('Tank1', inflow='inflow', outflow='q1', level='level1',
                 area=1.0, resistance=1.0, max_inflow=2.0, max_level=3.0)
    tank2 = Tank('Tank2', inflow='q1', outflow='q2', level='level2',
                 area=1.0, resistance=1.5, max_inflow=3.0, max_level=1.5)

    diagram = WiringDiagram(inputs=['inflow'], outputs=['level1', 'level2', 'drain'])
    t1 = tank1.add_to(diagram)
    t2 = tank2.add_to(diagram)

    diagram.add_wires([
        ((INPUT_ID, 0), (t1, 0)),     # inflow -> Tank1
        ((t1, 0), (t2, 0)),           # Tank1.q1 -> Tank2
        ((t1, 1), (OUTPUT_ID, 0)),    # Tank1.level1
        ((t2, 1), (OUTPUT_ID, 1)),    # Tank2.level2
        ((t2, 0), (OUTPUT_ID, 2)),    # Tank2.q2 -> drain
    ])

    machine = compose(diagram, {
        'Tank1': tank1.to_contract_machine(),
        'Tank2': tank2.to_contract_machine(),
    })

    return Scenario(
        name="TankCascade",
        description="Two tanks in series; the downstream tank overflows its rated level",
        diagram=diagram,
        machine=machine,
        u0=np.zeros(machine.nstates),
        inputs=inflow_schedule,
        tspan=(0.0, 60.0),
        expect_violations=True,
        solver_options={'max_step': 0.5},
    )
