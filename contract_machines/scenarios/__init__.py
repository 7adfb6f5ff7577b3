"""Example systems for contract monitoring."""

from .base_scenario import Scenario
from .tank_cascade import create_tank_cascade_scenario
from .cruise_control import create_cruise_control_scenario, create_cruise_loop

__all__ = ['Scenario', 'create_tank_cascade_scenario', 'create_cruise_control_scenario', 'create_cruise_loop']
