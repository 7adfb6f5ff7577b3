"""
Tests for wiring diagrams and feedback loop detection.
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest
from contract_machines.wiring import WiringDiagram, Wire, Port, INPUT_ID, OUTPUT_ID


def make_loop() -> WiringDiagram:
    """Controller and plant in a feedback loop"""
    diagram = WiringDiagram(inputs=['ref'], outputs=['y'])
    c = diagram.add_box('Controller', ['ref', 'y'], ['u'])
    p = diagram.add_box('Plant', ['u'], ['y'])
    diagram.add_wires([
        ((INPUT_ID, 0), (c, 0)),
        ((c, 0), (p, 0)),
        ((p, 0), (c, 1)),
        ((p, 0), (OUTPUT_ID, 0)),
    ])
    return diagram


def test_box_ids_are_positions():
    """Test that boxes are numbered from zero in declaration order"""
    diagram = WiringDiagram()
    assert diagram.add_box('A', ['x'], ['y']) == 0
    assert diagram.add_box('B', ['y'], ['z']) == 1
    assert diagram.nboxes == 2
    assert diagram.box_names() == ['A', 'B']
    assert diagram.box(1).input_ports == ('y',)


def test_wire_classification():
    """Test internal, input and output wires"""
    diagram = make_loop()
    assert len(diagram.wires()) == 4
    assert len(diagram.internal_wires()) == 2
    assert diagram.input_wires() == [Wire(Port(INPUT_ID, 0), Port(0, 0))]
    assert diagram.output_wires() == [Wire(Port(1, 0), Port(OUTPUT_ID, 0))]
    assert len(diagram.in_wires(0)) == 2
    assert len(diagram.out_wires(1)) == 2


def test_port_names_of_wires():
    """Test port names at both ends of a wire"""
    diagram = make_loop()
    feedback = diagram.internal_wires()[1]
    assert diagram.source_port_name(feedback) == 'y'
    assert diagram.target_port_name(feedback) == 'y'
    assert diagram.source_port_name(diagram.input_wires()[0]) == 'ref'
    assert diagram.target_port_name(diagram.output_wires()[0]) == 'y'


def test_invalid_wires():
    """Test that malformed wires are rejected"""
    diagram = WiringDiagram(inputs=['x'], outputs=['y'])
    a = diagram.add_box('A', ['x'], ['y'])

    with pytest.raises(ValueError):
        diagram.add_wire((a, 0), (5, 0))            # missing box
    with pytest.raises(IndexError):
        diagram.add_wire((a, 1), (OUTPUT_ID, 0))    # no second output port
    with pytest.raises(IndexError):
        diagram.add_wire((INPUT_ID, 3), (a, 0))
    with pytest.raises(ValueError):
        diagram.add_wire((a, 0), (INPUT_ID, 0))
    with pytest.raises(ValueError):
        diagram.add_wire((OUTPUT_ID, 0), (a, 0))
    with pytest.raises(ValueError):
        diagram.add_wire((INPUT_ID, 0), (OUTPUT_ID, 0))
    assert diagram.wires() == []


def test_subdiagram_box_takes_outer_ports():
    """Test that a nested diagram becomes a box with its outer ports"""
    inner = make_loop()
    outer = WiringDiagram(inputs=['ref'], outputs=['y'])
    box_id = outer.add_subdiagram('Loop', inner)
    assert outer.box(box_id).input_ports == ('ref',)
    assert outer.box(box_id).output_ports == ('y',)


def test_feedback_loop_detection():
    """Test that a two-box loop is found and a chain has none"""
    assert make_loop().find_feedback_loops() == [['Controller', 'Plant']]

    chain = WiringDiagram(inputs=['x'], outputs=['z'])
    a = chain.add_box('A', ['x'], ['y'])
    b = chain.add_box('B', ['y'], ['z'])
    chain.add_wire((a, 0), (b, 0))
    assert chain.find_feedback_loops() == []


def test_self_loop_detection():
    """Test that a box wired to itself is a loop"""
    diagram = WiringDiagram()
    a = diagram.add_box('Integrator', ['s'], ['s'])
    diagram.add_wire((a, 0), (a, 0))
    assert diagram.find_feedback_loops() == [['Integrator']]


def test_three_node_cycle_detection():
    """Test that a 3-box cycle is found as one strongly connected component"""
    diagram = WiringDiagram()
    for name in ['A', 'B', 'C']:
        diagram.add_box(name, ['s'], ['s'])
    diagram.add_wires([((0, 0), (1, 0)), ((1, 0), (2, 0)), ((2, 0), (0, 0))])
    assert diagram.find_feedback_loops() == [['A', 'B', 'C']]


def test_to_networkx():
    """Test the graph form of the diagram"""
    G = make_loop().to_networkx()
    assert set(G.nodes()) == {0, 1, 'input', 'output'}
    assert G.nodes[0]['name'] == 'Controller'
    assert G.number_of_edges() == 4
    ports = {(u, v): data['port'] for u, v, data in G.edges(data=True)}
    assert ports[('input', 0)] == 'ref'
    assert ports[(1, 0)] == 'y'


def test_detailed_str():
    """Test the textual summary"""
    text = make_loop().detailed_str()
    assert "Wiring diagram with 2 boxes" in text
    assert "input.ref → Controller.ref" in text
    assert "Plant.y → Controller.y" in text
    assert "Controller → Plant → Controller" in text
