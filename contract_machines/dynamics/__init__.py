"""Dynamical machines, their composition, and trajectories."""

from .machine import (
    Machine,
    ContinuousMachine,
    DiscreteMachine,
    make_machine,
    compose_machines,
    state_partition,
    box_inputs,
)
from .trajectory import Trajectory, solve, simulate, resolve_inputs

__all__ = [
    'Machine', 'ContinuousMachine', 'DiscreteMachine', 'make_machine',
    'compose_machines', 'state_partition', 'box_inputs',
    'Trajectory', 'solve', 'simulate', 'resolve_inputs'
]
