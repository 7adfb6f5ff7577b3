"""
Real intervals with open/closed endpoints.

An interval is the operating range a contract declares for a single port.
Unbounded sides are represented by ±inf and are always open, so `(-∞,∞)`
is the unconstrained range ℝ.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple, Union
import math


INF = math.inf


def _format_bound(value: float) -> str:
    if value == INF:
        return "∞"
    if value == -INF:
        return "-∞"
    return f"{value:g}"


@dataclass(frozen=True)
class Interval:
    """
    A single real interval.

    Attributes:
        lower: Lower bound (may be -inf)
        upper: Upper bound (may be +inf)
        left_closed: Whether `lower` itself belongs to the interval
        right_closed: Whether `upper` itself belongs to the interval

    Empty intervals are representable, since they are the result of
    intersecting disjoint ranges; `StaticContract` is what rejects them.
    """
    lower: float
    upper: float
    left_closed: bool = True
    right_closed: bool = True

    def __post_init__(self):
        lower = float(self.lower)
        upper = float(self.upper)
        object.__setattr__(self, 'lower', lower)
        object.__setattr__(self, 'upper', upper)
        # Infinite endpoints are never members
        if math.isinf(lower):
            object.__setattr__(self, 'left_closed', False)
        if math.isinf(upper):
            object.__setattr__(self, 'right_closed', False)

    @classmethod
    def closed(cls, lower: float, upper: float) -> 'Interval':
        """[lower, upper]"""
        return cls(lower, upper, True, True)

    @classmethod
    def open(cls, lower: float, upper: float) -> 'Interval':
        """(lower, upper)"""
        return cls(lower, upper, False, False)

    @classmethod
    def left_open(cls, lower: float, upper: float) -> 'Interval':
        """(lower, upper]"""
        return cls(lower, upper, False, True)

    @classmethod
    def right_open(cls, lower: float, upper: float) -> 'Interval':
        """[lower, upper)"""
        return cls(lower, upper, True, False)

    @classmethod
    def at_least(cls, lower: float) -> 'Interval':
        """[lower, ∞)"""
        return cls(lower, INF, True, False)

    @classmethod
    def at_most(cls, upper: float) -> 'Interval':
        """(-∞, upper]"""
        return cls(-INF, upper, False, True)

    @classmethod
    def reals(cls) -> 'Interval':
        """The unconstrained interval (-∞, ∞)."""
        return cls(-INF, INF, False, False)

    def is_empty(self) -> bool:
        """True if no real number lies in the interval."""
        if math.isnan(self.lower) or math.isnan(self.upper):
            return True
        if self.lower > self.upper:
            return True
        if self.lower == self.upper:
            return not (self.left_closed and self.right_closed)
        return False

    def is_unbounded(self) -> bool:
        """True for ℝ itself."""
        return self.lower == -INF and self.upper == INF

    def contains(self, value: float) -> bool:
        """Membership test honouring open and closed endpoints."""
        x = float(value)
        if math.isnan(x):
            return False
        above = x > self.lower or (self.left_closed and x == self.lower)
        below = x < self.upper or (self.right_closed and x == self.upper)
        return above and below

    def __contains__(self, value: float) -> bool:
        return self.contains(value)

    def intersect(self, other: 'Interval') -> 'Interval':
        """
        Set intersection of two intervals.

        The tighter bound wins on each side and keeps its own inclusivity;
        when both operands share a bound value the flags are AND-ed.
        """
        if self.lower > other.lower:
            lower, left_closed = self.lower, self.left_closed
        elif self.lower < other.lower:
            lower, left_closed = other.lower, other.left_closed
        else:
            lower, left_closed = self.lower, self.left_closed and other.left_closed

        if self.upper < other.upper:
            upper, right_closed = self.upper, self.right_closed
        elif self.upper > other.upper:
            upper, right_closed = other.upper, other.right_closed
        else:
            upper, right_closed = self.upper, self.right_closed and other.right_closed

        return Interval(lower, upper, left_closed, right_closed)

    def __and__(self, other: 'Interval') -> 'Interval':
        return self.intersect(other)

    def issubset(self, other: 'Interval') -> bool:
        """True if every member of this interval is a member of `other`."""
        if self.is_empty():
            return True
        return self.intersect(other) == self

    def __str__(self) -> str:
        if self.is_unbounded():
            return "ℝ"
        left = "[" if self.left_closed else "("
        right = "]" if self.right_closed else ")"
        return f"{left}{_format_bound(self.lower)},{_format_bound(self.upper)}{right}"


IntervalLike = Union[Interval, Tuple[float, float], Sequence[float]]


def as_interval(value: IntervalLike) -> Interval:
    """
    Coerce a value to an Interval.

    A `(lower, upper)` pair becomes the closed interval [lower, upper].
    """
    if isinstance(value, Interval):
        return value
    try:
        lower, upper = value
    except (TypeError, ValueError):
        raise TypeError(f"cannot interpret {value!r} as an interval")
    return Interval.closed(lower, upper)


def intersect(a: Interval, b: Interval) -> Interval:
    """Functional form of `Interval.intersect`."""
    return a.intersect(b)
