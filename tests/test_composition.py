"""
Tests for static contract composition over wiring diagrams.

Validates the composite contract, incompatible and undefined wires, and the
structural checks that run before any wire is inspected.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import warnings
import pytest
from contract_machines.contracts import (
    Interval,
    StaticContract,
    CompatibilityChecker,
    WireCheck,
    compose_contracts,
    inspect_wire,
    with_default_contracts,
)
from contract_machines.exceptions import (
    ContractIncompatibilityError,
    ContractUndefinedWarning,
    StructuralMismatchError,
)
from contract_machines.wiring import WiringDiagram, INPUT_ID, OUTPUT_ID


def make_chain(first: str = 'A', second: str = 'B') -> WiringDiagram:
    """in -> A -> B -> out, carrying x then y then z"""
    diagram = WiringDiagram(inputs=['x'], outputs=['z'])
    a = diagram.add_box(first, ['x'], ['y'])
    b = diagram.add_box(second, ['y'], ['z'])
    diagram.add_wires([
        ((INPUT_ID, 0), (a, 0)),
        ((a, 0), (b, 0)),
        ((b, 0), (OUTPUT_ID, 0)),
    ])
    return diagram


def test_unconstrained_composition():
    """Test that unconstrained boxes compose to ℝ on every external wire"""
    diagram = make_chain()
    contracts = [StaticContract.unconstrained(1, 1), StaticContract.unconstrained(1, 1)]

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        composite = compose_contracts(diagram, contracts)

    assert composite.inputs == (Interval.reals(),)
    assert composite.outputs == (Interval.reals(),)


def test_composite_uses_boundary_intervals():
    """Test that the composite exposes the intervals of the boundary ports"""
    diagram = make_chain()
    contracts = [StaticContract([(0, 5)], [(0, 1)]), StaticContract([(-1, 2)], [(3, 4)])]

    composite = compose_contracts(diagram, contracts)

    assert composite.inputs == (Interval.closed(0.0, 5.0),)
    assert composite.outputs == (Interval.closed(3.0, 4.0),)


def test_incompatible_wire():
    """Test that disjoint intervals on an internal wire raise"""
    diagram = make_chain()
    contracts = [StaticContract([(0, 1)], [(0, 1)]), StaticContract([(2, 3)], [(0, 1)])]

    with pytest.raises(ContractIncompatibilityError) as exc_info:
        compose_contracts(diagram, contracts)

    error = exc_info.value
    assert error.source_name == 'A' and error.source_id == 0
    assert error.target_name == 'B' and error.target_id == 1
    assert error.port == 'y'
    assert error.edge == ('A', 'B')
    message = str(error)
    assert "A (id=0)" in message
    assert "B (id=1)" in message
    assert '"y"' in message
    assert "[0,1] ∩ [2,3] = ∅" in message


def test_incompatibility_to_dict():
    """Test exception serialization"""
    diagram = make_chain()
    contracts = [StaticContract([(0, 1)], [(0, 1)]), StaticContract([(2, 3)], [(0, 1)])]

    with pytest.raises(ContractIncompatibilityError) as exc_info:
        compose_contracts(diagram, contracts)

    data = exc_info.value.to_dict()
    assert data['source_interval'] == "[0,1]"
    assert data['target_interval'] == "[2,3]"
    assert data['port'] == 'y'
    report = exc_info.value.format_report()
    assert "INCOMPATIBLE CONTRACT" in report
    assert "Source:       A (id=0)" in report


def test_undefined_wire_warns_once():
    """Test that a partial overlap warns and composition proceeds"""
    diagram = make_chain()
    contracts = [StaticContract([(0, 1)], [(0, 1)]), StaticContract([(0.5, 2)], [(0, 1)])]

    with pytest.warns(ContractUndefinedWarning) as record:
        composite = compose_contracts(diagram, contracts)

    assert len(record) == 1
    assert "[0,1] ∩ [0.5,2] ≠ [0,1]" in str(record[0].message)
    assert composite.inputs == (Interval.closed(0.0, 1.0),)


def test_contained_wire_is_silent():
    """Test that a source interval inside the target interval does not warn"""
    diagram = make_chain()
    contracts = [StaticContract([(0, 1)], [(0, 1)]), StaticContract([(-1, 2)], [(0, 1)])]

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        compose_contracts(diagram, contracts)


def test_duplicate_names_checked_first():
    """Test that duplicate box names raise before any wire is inspected"""
    diagram = make_chain('A', 'A')
    # Disjoint wire intervals would raise ContractIncompatibilityError otherwise
    contracts = [StaticContract([(0, 1)], [(0, 1)]), StaticContract([(2, 3)], [(0, 1)])]

    with pytest.raises(StructuralMismatchError) as exc_info:
        compose_contracts(diagram, contracts)
    assert "unique" in str(exc_info.value)
    assert exc_info.value.box_name == 'A'


def test_single_box_name_never_duplicates():
    """Test that a lone box needs no unique name check"""
    diagram = WiringDiagram(inputs=['x'], outputs=['y'])
    box = diagram.add_box('Only', ['x'], ['y'])
    diagram.add_wires([((INPUT_ID, 0), (box, 0)), ((box, 0), (OUTPUT_ID, 0))])

    composite = compose_contracts(diagram, [StaticContract([(0, 1)], [(2, 3)])])
    assert composite == StaticContract([(0, 1)], [(2, 3)])


def test_contract_count_mismatch():
    """Test that one contract per box is required"""
    with pytest.raises(StructuralMismatchError) as exc_info:
        compose_contracts(make_chain(), [StaticContract.unconstrained(1, 1)])
    assert "2 boxes but 1 contracts" in str(exc_info.value)


def test_port_arity_mismatch():
    """Test that contract arity must match the box ports"""
    contracts = [StaticContract.unconstrained(1, 1), StaticContract.unconstrained(2, 1)]
    with pytest.raises(StructuralMismatchError) as exc_info:
        compose_contracts(make_chain(), contracts)
    assert exc_info.value.box_id == 1
    assert "B (id=1)" in str(exc_info.value)


def test_port_name_mismatch():
    """Test that an internal wire must join ports of the same name"""
    diagram = WiringDiagram(inputs=['x'], outputs=['z'])
    a = diagram.add_box('A', ['x'], ['y'])
    b = diagram.add_box('B', ['w'], ['z'])
    diagram.add_wires([((INPUT_ID, 0), (a, 0)), ((a, 0), (b, 0)), ((b, 0), (OUTPUT_ID, 0))])

    with pytest.raises(StructuralMismatchError) as exc_info:
        compose_contracts(diagram, [StaticContract.unconstrained(1, 1)] * 2)
    assert exc_info.value.wire is not None
    assert '"y"' in str(exc_info.value) and '"w"' in str(exc_info.value)


def test_mapping_matches_sequence():
    """Test that name-keyed contracts compose like positional ones"""
    diagram = make_chain()
    a = StaticContract([(0, 5)], [(0, 1)])
    b = StaticContract([(-1, 2)], [(3, 4)])

    assert compose_contracts(diagram, {'B': b, 'A': a}) == compose_contracts(diagram, [a, b])


def test_mapping_defaults_missing_boxes():
    """Test that boxes missing from a mapping are unconstrained"""
    diagram = make_chain()
    composite = compose_contracts(diagram, {'A': StaticContract([(0, 5)], [(0, 1)])})
    assert composite.inputs == (Interval.closed(0.0, 5.0),)
    assert composite.outputs == (Interval.reals(),)


def test_with_default_contracts_is_pure():
    """Test that filling in defaults leaves the given mapping untouched"""
    diagram = make_chain()
    given = {'A': StaticContract([(0, 5)], [(0, 1)])}

    augmented = with_default_contracts(diagram, given)

    assert list(given) == ['A']
    assert set(augmented) == {'A', 'B'}
    assert augmented['B'].is_unconstrained()
    assert augmented['A'] is given['A']


def test_fan_out_input_contributes_each_wire():
    """Test one composite interval per external wire when an input fans out"""
    diagram = WiringDiagram(inputs=['x'], outputs=['y', 'z'])
    a = diagram.add_box('A', ['x'], ['y'])
    b = diagram.add_box('B', ['x'], ['z'])
    diagram.add_wires([
        ((INPUT_ID, 0), (a, 0)),
        ((INPUT_ID, 0), (b, 0)),
        ((a, 0), (OUTPUT_ID, 0)),
        ((b, 0), (OUTPUT_ID, 1)),
    ])

    composite = compose_contracts(diagram, [StaticContract([(0, 1)], [(0, 1)]),
                                            StaticContract([(0, 2)], [(0, 2)])])

    assert composite.inputs == (Interval.closed(0.0, 1.0), Interval.closed(0.0, 2.0))
    assert composite.noutputs == 2


def test_compatibility_checker_does_not_raise():
    """Test that the checker reports instead of raising"""
    diagram = make_chain()

    incompatible = CompatibilityChecker(diagram).check(
        [StaticContract([(0, 1)], [(0, 1)]), StaticContract([(2, 3)], [(0, 1)])]
    )
    assert not incompatible.passed
    assert len(incompatible.details) == 1
    assert "✗ FAILED" in str(incompatible)

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        undefined = CompatibilityChecker(diagram).check(
            [StaticContract([(0, 1)], [(0, 1)]), StaticContract([(0.5, 2)], [(0, 1)])]
        )
    assert undefined.passed
    assert "undefined" in undefined.message
    assert len(undefined.checks) == 1
    assert not undefined.checks[0].defined

    strict = CompatibilityChecker(diagram).check(
        [StaticContract.unconstrained(1, 1), StaticContract.unconstrained(1, 1)]
    )
    assert strict.passed and not strict.details


def test_inspect_wire():
    """Test the per-wire check of an internal wire"""
    diagram = make_chain()
    contracts = [StaticContract([(0, 1)], [(0, 1)]), StaticContract([(0.5, 2)], [(0, 1)])]
    wire, = diagram.internal_wires()

    check = inspect_wire(diagram, wire, contracts)

    assert isinstance(check, WireCheck)
    assert (check.source_name, check.target_name, check.port) == ('A', 'B', 'y')
    assert check.overlap == Interval.closed(0.5, 1.0)
    assert check.compatible and not check.defined
    assert "undefined contract between A (id=0) and B (id=1)" in check.undefined_message()
