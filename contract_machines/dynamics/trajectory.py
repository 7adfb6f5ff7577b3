"""
Trajectories of machines.

Continuous machines are integrated with scipy's `solve_ivp`; discrete
machines are iterated step by step. Either way the result is a Trajectory
that can be queried at any time in its span and reports the sample times
the solver actually produced.
"""

from typing import Callable, Optional, Sequence, Tuple, Union
import numpy as np
from scipy.integrate import solve_ivp

from .machine import Machine
from ..exceptions import IntegrationFailure


# Solver configuration
DEFAULT_METHOD = "RK45"
DEFAULT_RTOL = 1e-6
DEFAULT_ATOL = 1e-9
MAX_STEP = np.inf

ExternalInput = Union[Sequence[float], Callable[[float], Sequence[float]]]


def resolve_inputs(x: ExternalInput, t: float) -> np.ndarray:
    """External input at time t; `x` is either constant or a function of time."""
    if callable(x):
        return np.asarray(x(t), dtype=float)
    return np.asarray(x, dtype=float)


class Trajectory:
    """
    A sampled solution u(t).

    Attributes:
        t: Sample times reported by the solver, shape (n,)
        y: States at the sample times, shape (nstates, n)
        interpolant: Optional dense output, called with a time and returning a state
    """

    def __init__(self, t, y, interpolant: Optional[Callable] = None):
        self.t = np.asarray(t, dtype=float)
        self.y = np.asarray(y, dtype=float)
        self.interpolant = interpolant

        if self.y.ndim != 2 or self.y.shape[1] != self.t.shape[0]:
            raise ValueError(
                f"states must have shape (nstates, {self.t.shape[0]}), got {self.y.shape}"
            )

    def __call__(self, t: float) -> np.ndarray:
        """State at time t."""
        if self.interpolant is not None:
            return np.asarray(self.interpolant(t), dtype=float)

        # Exact sample times return the stored state
        i = int(np.searchsorted(self.t, t))
        if i < len(self.t) and self.t[i] == t:
            return self.y[:, i].copy()
        return np.array([np.interp(t, self.t, row) for row in self.y])

    def __len__(self) -> int:
        return len(self.t)

    @property
    def span(self) -> Tuple[float, float]:
        return (float(self.t[0]), float(self.t[-1]))

    def samples(self):
        """Iterate over (time, state) pairs at the sample times."""
        for i, t in enumerate(self.t):
            yield t, self.y[:, i]

    def __str__(self) -> str:
        t0, t1 = self.span
        return f"Trajectory({len(self)} samples, t ∈ [{t0:g}, {t1:g}], {self.y.shape[0]} states)"


def solve(machine: Machine,
          u0: Sequence[float],
          x: ExternalInput,
          tspan: Tuple[float, float],
          p=None,
          method: str = DEFAULT_METHOD,
          rtol: float = DEFAULT_RTOL,
          atol: float = DEFAULT_ATOL,
          max_step: float = MAX_STEP,
          **options) -> Trajectory:
    """
    Integrate a continuous machine.

    Args:
        machine: A continuous machine
        u0: Initial state
        x: External input, constant or a function of time
        tspan: (t0, t1)
        p: Parameters passed through to dynamics and readout
        method, rtol, atol, max_step, options: forwarded to `solve_ivp`

    Raises:
        IntegrationFailure: If the solver does not reach the end of the span
    """
    if machine.kind != "continuous":
        raise TypeError(f"solve() integrates continuous machines, got {machine.kind} (use simulate())")

    def fun(t, u):
        return machine.eval_dynamics(u, resolve_inputs(x, t), p, t)

    sol = solve_ivp(fun, tspan, np.asarray(u0, dtype=float), method=method,
                    rtol=rtol, atol=atol, max_step=max_step, dense_output=True, **options)

    if not sol.success:
        raise IntegrationFailure(
            status=sol.status,
            solver_message=sol.message,
            t_reached=float(sol.t[-1]) if len(sol.t) else float(tspan[0]),
            method=method
        )

    return Trajectory(sol.t, sol.y, sol.sol)


def simulate(machine: Machine,
             u0: Sequence[float],
             x: ExternalInput,
             nsteps: int,
             p=None,
             t0: float = 0.0,
             dt: float = 1.0) -> Trajectory:
    """
    Iterate a discrete machine for `nsteps` steps.

    The trajectory holds nsteps + 1 samples at t0, t0 + dt, ...
    """
    if machine.kind != "discrete":
        raise TypeError(f"simulate() iterates discrete machines, got {machine.kind} (use solve())")

    times = t0 + dt * np.arange(nsteps + 1)
    states = np.zeros((machine.nstates, nsteps + 1))
    states[:, 0] = np.asarray(u0, dtype=float)

    for k in range(nsteps):
        t = times[k]
        states[:, k + 1] = machine.eval_dynamics(states[:, k], resolve_inputs(x, t), p, t)

    return Trajectory(times, states)
