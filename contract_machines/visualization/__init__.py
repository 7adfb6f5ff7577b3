"""Visualization tools for wiring diagrams and contract failures."""

from .wiring_diagram import draw_wiring_diagram, violated_boxes
from .failure_timeline import plot_failure_timeline

__all__ = [
    'draw_wiring_diagram',
    'violated_boxes',
    'plot_failure_timeline'
]
