import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from graph import Edge, EdgeState, Graph, validate_node_count
from graph.graph import MAX_NODES


SCENARIO = [(0, 1, 5), (0, 2, 3), (1, 2, 1), (1, 3, 4), (2, 3, 2)]


@pytest.mark.parametrize("bad", [0, 1, -3, "5", 2.5, True, None])
def test_generate_rejects_bad_node_count(bad):
    with pytest.raises(ValueError):
        Graph.generate_random(bad)


def test_node_count_ceiling():
    assert validate_node_count(MAX_NODES) == MAX_NODES
    with pytest.raises(ValueError):
        validate_node_count(MAX_NODES + 1)
    with pytest.raises(ValueError):
        validate_node_count(9, max_nodes=8)
    with pytest.raises(ValueError):
        Graph.generate_random(100000)
    with pytest.raises(ValueError):
        Graph.from_text("0 99999 1")


def test_generate_rejects_bad_probability():
    with pytest.raises(ValueError):
        Graph.generate_random(5, edge_probability=1.5)


@pytest.mark.parametrize("seed", range(25))
def test_generate_random_is_connected_and_well_formed(seed):
    g = Graph.generate_random(10, seed=seed)

    assert g.node_count() == 10
    assert g.is_connected()
    assert g.edge_count() >= 9

    pairs = [(e.u, e.v) for e in g.edges.values()]
    assert len(pairs) == len(set(pairs))
    assert all(u < v for u, v in pairs)
    assert all(1 <= e.weight <= 20 for e in g.edges.values())
    assert all(e.state is EdgeState.UNUSED for e in g.edges.values())

    positions = {(n.x, n.y) for n in g.nodes.values()}
    assert len(positions) == 10


def test_zero_probability_falls_back_to_chain():
    g = Graph.generate_random(6, edge_probability=0.0, seed=3)
    assert [(e.u, e.v) for e in g.edge_list()] == [(0, 1), (1, 2), (2, 3), (3, 4), (4, 5)]
    assert all(1 <= e.weight <= 15 for e in g.edge_list())


def test_full_probability_gives_complete_graph():
    g = Graph.generate_random(7, edge_probability=1.0, seed=1)
    assert g.edge_count() == 21


def test_same_seed_same_graph():
    a = Graph.generate_random(8, seed=42)
    b = Graph.generate_random(8, seed=42)
    assert a.to_dict() == b.to_dict()


def test_edge_count_generator_hits_target():
    g = Graph.generate_with_edge_count(6, 9, seed=5)
    assert g.edge_count() == 9
    assert g.is_connected()


def test_edge_count_generator_clamps():
    assert Graph.generate_with_edge_count(6, 100, seed=1).edge_count() == 15
    low = Graph.generate_with_edge_count(6, 0, seed=1)
    assert low.edge_count() == 5
    assert low.is_connected()


def test_edge_count_generator_rejects_negative():
    with pytest.raises(ValueError):
        Graph.generate_with_edge_count(4, -1)


def test_from_edge_list_keeps_order_and_normalises():
    g = Graph.from_edge_list(4, [(2, 1, 1)] + SCENARIO[:1])
    assert [e.id for e in g.edge_list()] == ["1-2", "0-1"]
    assert g.get_edge_between(2, 1) is g.get_edge("1-2")


@pytest.mark.parametrize("edges", [
    [(0, 1, 5), (1, 0, 2)],     # duplicate pair
    [(1, 1, 3)],                # self-loop
    [(0, 1, 0)],                # non-positive weight
    [(0, 9, 1)],                # unknown node
])
def test_from_edge_list_rejects_invalid(edges):
    with pytest.raises(ValueError):
        Graph.from_edge_list(3, edges)


def test_from_text():
    g = Graph.from_text("0 1 5\n0, 2, 3   # comment\n\n1 2 1\n")
    assert g.node_count() == 3
    assert [e.as_tuple() for e in g.edge_list()] == [(0, 1, 5), (0, 2, 3), (1, 2, 1)]


def test_from_text_rejects_garbage():
    with pytest.raises(ValueError):
        Graph.from_text("0 1\n")
    with pytest.raises(ValueError):
        Graph.from_text("a b c\n")


def test_copy_is_independent():
    g = Graph.from_edge_list(4, SCENARIO)
    clone = g.copy()
    clone.get_edge("0-1").state = EdgeState.SELECTED
    assert g.get_edge("0-1").state is EdgeState.UNUSED
    assert clone.to_dict()["nodes"] == g.to_dict()["nodes"]


def test_reset_states_and_totals():
    g = Graph.from_edge_list(4, SCENARIO)
    g.get_edge("1-2").state = EdgeState.SELECTED
    g.get_edge("2-3").state = EdgeState.SELECTED
    g.get_edge("0-1").state = EdgeState.REJECTED
    assert g.total_weight() == 3

    g.reset_states()
    assert set(g.edge_states().values()) == {"unused"}
    assert g.total_weight() == 0


def test_components_of_disconnected_graph():
    g = Graph.from_edge_list(4, [(0, 1, 1), (2, 3, 1)])
    assert not g.is_connected()
    assert sorted(sorted(c) for c in g.components()) == [[0, 1], [2, 3]]


def test_edge_round_trip_keeps_state():
    e = Edge(3, 1, 7)
    e.state = EdgeState.CONSIDERED
    back = Edge.from_dict(e.to_dict())
    assert (back.u, back.v, back.weight, back.state) == (1, 3, 7, EdgeState.CONSIDERED)
