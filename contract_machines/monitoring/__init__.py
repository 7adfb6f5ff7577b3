"""Contract monitoring along trajectories."""

from .failure import failure_intervals
from .monitor import check_contract, evaluate_trajectory, FailureReport, PortFailures

__all__ = ['failure_intervals', 'check_contract', 'evaluate_trajectory', 'FailureReport', 'PortFailures']
