"""Components of the example systems."""

from .base import BaseComponent
from .tank import Tank
from .cruise import CruiseController, Vehicle, SpeedSensor

__all__ = [
    'BaseComponent',
    'Tank',
    'CruiseController',
    'Vehicle',
    'SpeedSensor'
]
