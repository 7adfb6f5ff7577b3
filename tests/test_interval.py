"""
Tests for intervals and static contracts.

Validates membership, intersection, emptiness and formatting of intervals,
and that static contracts reject empty intervals.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import math
import pytest
from contract_machines.contracts import Interval, StaticContract, as_interval, intersect
from contract_machines.exceptions import ContractDefinitionError, ContractError


def test_interval_creation():
    """Test closed interval from a pair"""
    interval = as_interval((0, 10))
    assert interval == Interval.closed(0.0, 10.0)
    assert interval.left_closed and interval.right_closed
    assert not interval.is_empty()


def test_infinite_bounds_are_open():
    """Test that ±inf endpoints are never closed"""
    interval = Interval(-math.inf, 5.0, True, True)
    assert not interval.left_closed
    assert interval.right_closed
    assert Interval.reals().is_unbounded()


def test_interval_membership():
    """Test open and closed endpoints"""
    closed = Interval.closed(0.0, 1.0)
    half_open = Interval.right_open(0.0, 1.0)
    assert 0.0 in closed and 1.0 in closed
    assert 0.0 in half_open
    assert 1.0 not in half_open
    assert 2.0 not in closed
    assert float('nan') not in Interval.reals()
    assert 1e300 in Interval.reals()


def test_interval_empty():
    """Test empty interval detection"""
    assert Interval.closed(10.0, 5.0).is_empty()   # lower > upper
    assert Interval.open(1.0, 1.0).is_empty()
    assert Interval.left_open(1.0, 1.0).is_empty()
    assert not Interval.closed(1.0, 1.0).is_empty()
    assert Interval(float('nan'), 1.0).is_empty()


def test_interval_intersection():
    """Test intersection of overlapping intervals"""
    a = Interval.closed(0.0, 10.0)
    b = Interval.closed(5.0, 15.0)
    assert a & b == Interval.closed(5.0, 10.0)
    assert intersect(a, b) == a.intersect(b)


def test_interval_intersection_commutes():
    """Test a ∩ b == b ∩ a, including endpoint flags"""
    pairs = [
        (Interval.closed(0.0, 1.0), Interval.open(0.0, 2.0)),
        (Interval.right_open(-1.0, 1.0), Interval.left_open(0.0, 1.0)),
        (Interval.at_least(3.0), Interval.at_most(4.0)),
        (Interval.closed(0.0, 1.0), Interval.closed(2.0, 3.0)),
    ]
    for a, b in pairs:
        assert a & b == b & a


def test_interval_intersection_shared_bound():
    """Test that a shared bound is closed only if closed on both sides"""
    a = Interval.closed(0.0, 1.0)
    b = Interval.open(0.0, 1.0)
    assert a & b == Interval.open(0.0, 1.0)


def test_interval_no_intersection():
    """Test disjoint and touching intervals"""
    assert (Interval.closed(0.0, 1.0) & Interval.closed(2.0, 3.0)).is_empty()
    assert (Interval.right_open(0.0, 1.0) & Interval.closed(1.0, 2.0)).is_empty()
    assert not (Interval.closed(0.0, 1.0) & Interval.closed(1.0, 2.0)).is_empty()


def test_interval_subset():
    """Test interval subset relation"""
    assert Interval.closed(2.0, 8.0).issubset(Interval.closed(0.0, 10.0))
    assert Interval.open(0.0, 1.0).issubset(Interval.closed(0.0, 1.0))
    assert not Interval.closed(0.0, 1.0).issubset(Interval.open(0.0, 1.0))
    assert Interval.closed(0.0, 1.0).issubset(Interval.reals())


def test_interval_formatting():
    """Test string forms"""
    assert str(Interval.closed(0.0, 1.0)) == "[0,1]"
    assert str(Interval.right_open(0.0, 2.5)) == "[0,2.5)"
    assert str(Interval.at_least(0.0)) == "[0,∞)"
    assert str(Interval.at_most(1.0)) == "(-∞,1]"
    assert str(Interval.reals()) == "ℝ"


def test_as_interval_rejects_garbage():
    """Test that non-pairs are not intervals"""
    with pytest.raises(TypeError):
        as_interval(3.0)
    with pytest.raises(TypeError):
        as_interval((1.0, 2.0, 3.0))


def test_static_contract_creation():
    """Test contract construction from pairs and intervals"""
    contract = StaticContract([(0, 1), Interval.at_least(0.0)], [(-1, 1)])
    assert contract.ninputs == 2
    assert contract.noutputs == 1
    assert contract.inputs[0] == Interval.closed(0.0, 1.0)
    assert str(contract) == "StaticContract( [0,1] × [0,∞) × [-1,1] )"
    assert not contract.is_unconstrained()


def test_static_contract_empty_interval():
    """Test that an empty interval anywhere is rejected"""
    with pytest.raises(ContractDefinitionError) as exc_info:
        StaticContract([(0, 1)], [(5, 2)])
    assert exc_info.value.interval == Interval.closed(5.0, 2.0)
    assert "[5,2]" in str(exc_info.value)

    with pytest.raises(ContractError):
        StaticContract([Interval.open(1.0, 1.0)], [])


def test_static_contract_unconstrained():
    """Test ℝ on every port"""
    contract = StaticContract.unconstrained(2, 3)
    assert contract.ninputs == 2 and contract.noutputs == 3
    assert contract.is_unconstrained()
    assert StaticContract().ninputs == 0


def test_static_contract_detailed_str():
    """Test port-by-port listing"""
    contract = StaticContract([(0, 2)], [(0, 3), (0, 1)])
    text = contract.detailed_str(['inflow'], ['q', 'level'])
    assert "inflow ∈ [0,2]" in text
    assert "level ∈ [0,1]" in text
    assert "1 ∈ [0,2]" in contract.detailed_str()


def test_intersection_membership():
    """Test x ∈ a ∩ b exactly when x ∈ a and x ∈ b"""
    intervals = [
        Interval.closed(0.0, 1.0),
        Interval.open(0.0, 1.0),
        Interval.left_open(0.0, 2.0),
        Interval.right_open(-1.0, 1.0),
        Interval.closed(1.0, 1.0),
        Interval.at_least(1.0),
        Interval.at_most(0.0),
        Interval.reals(),
        Interval.closed(2.0, 3.0),
    ]
    points = [-math.inf, -1.0, -0.5, 0.0, 0.5, 1.0, 1.5, 2.0, 2.5, 3.0, math.inf]

    for a in intervals:
        for b in intervals:
            overlap = a & b
            for x in points:
                assert overlap.contains(x) == (a.contains(x) and b.contains(x)), (a, b, x)
