"""Text rendering of contract evaluation results."""

from .tables import render, render_atomic, render_composite, render_failures, print_report

__all__ = ['render', 'render_atomic', 'render_composite', 'render_failures', 'print_report']
