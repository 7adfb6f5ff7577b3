"""Static interval contracts and their composition."""

from .interval import Interval, as_interval, intersect
from .static_contract import StaticContract
from .composition import (
    compose_contracts,
    with_default_contracts,
    order_by_boxes,
    inspect_wire,
    WireCheck,
    CompatibilityChecker,
    ValidationResult,
)

__all__ = [
    'Interval', 'as_interval', 'intersect', 'StaticContract',
    'compose_contracts', 'with_default_contracts', 'order_by_boxes', 'inspect_wire',
    'WireCheck', 'CompatibilityChecker', 'ValidationResult'
]
