import os
import sys

import networkx as nx
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from graph import EdgeState, Graph
from algorithms import PrimEngine
from algorithms.prim import PrimFinished, PrimRunning


SCENARIO = [(0, 1, 5), (0, 2, 3), (1, 2, 1), (1, 3, 4), (2, 3, 2)]


def reference_weight(graph: Graph) -> int:
    g = nx.Graph()
    g.add_weighted_edges_from(e.as_tuple() for e in graph.edge_list())
    return int(nx.minimum_spanning_tree(g).size(weight="weight"))


def run(engine, limit=200):
    steps = []
    for _ in range(limit):
        steps.append(engine.step())
        if steps[-1].is_final:
            break
    return steps


def test_first_step_only_seeds_the_tree():
    g = Graph.from_edge_list(4, SCENARIO)
    engine = PrimEngine(g, start=0)

    step = engine.step()

    assert "from node 0" in step.message
    assert step.in_tree == [0]
    assert not step.is_final
    assert isinstance(engine.state, PrimRunning)
    assert set(g.edge_states().values()) == {"unused"}


def test_scenario_first_choice_is_lighter_frontier_edge():
    g = Graph.from_edge_list(4, SCENARIO)
    engine = PrimEngine(g, start=0)
    engine.step()

    step = engine.step()

    assert step.current_edge == "0-2"
    assert step.edge_states["0-1"] == "considered"
    assert step.edge_states["0-2"] == "selected"
    assert step.edge_states["1-2"] == "unused"
    assert step.in_tree == [0, 2]
    assert "smallest edge connecting the MST" in step.message


def test_scenario_runs_to_minimum_weight():
    g = Graph.from_edge_list(4, SCENARIO)
    steps = run(PrimEngine(g, start=0))

    assert len(steps) == 5              # seed + 3 selections + finish
    final = steps[-1]
    assert final.is_final
    assert final.message == "✅ MST complete (Prim)."
    assert final.summary.total_weight == 6
    assert [e[:2] for e in final.summary.edges] == [(0, 2), (1, 2), (2, 3)]
    # frontier edges that lost keep their yellow mark
    assert g.get_edge("0-1").state is EdgeState.CONSIDERED
    assert g.get_edge("1-3").state is EdgeState.CONSIDERED


def test_ties_go_to_first_edge_in_graph_order():
    first = PrimEngine(Graph.from_edge_list(3, [(0, 1, 2), (0, 2, 2), (1, 2, 9)]))
    first.step()
    assert first.step().current_edge == "0-1"

    swapped = PrimEngine(Graph.from_edge_list(3, [(0, 2, 2), (0, 1, 2), (1, 2, 9)]))
    swapped.step()
    assert swapped.step().current_edge == "0-2"


def test_steps_after_finish_change_nothing():
    g = Graph.from_edge_list(4, SCENARIO)
    engine = PrimEngine(g, start=3)
    final = run(engine)[-1]
    states = g.edge_states()
    state = engine.state
    count = engine.steps

    for _ in range(3):
        again = engine.step()
        assert again.is_final
        assert again.summary == final.summary
        assert "already complete" in again.message

    assert g.edge_states() == states
    assert engine.state is state
    assert engine.steps == count
    assert isinstance(engine.state, PrimFinished)


@pytest.mark.parametrize("seed", range(15))
def test_tree_grows_monotonically_and_matches_reference(seed):
    g = Graph.generate_random(9, seed=seed)
    engine = PrimEngine(g, start=seed % 9)

    sizes = []
    for step in run(engine):
        sizes.append(len(step.in_tree))
        if len(step.in_tree) < 9:
            assert not step.is_final

    assert sizes == sorted(sizes)
    assert sizes[-1] == 9
    # full size is only reached on the step that selects the last edge
    assert sizes.index(9) == len(sizes) - 2
    assert len(g.selected_edges()) == 8
    assert engine.summary.total_weight == reference_weight(g)


def test_start_node_must_exist():
    g = Graph.from_edge_list(4, SCENARIO)
    with pytest.raises(ValueError):
        PrimEngine(g, start=4)


def test_disconnected_graph_finishes_without_spanning():
    g = Graph.from_edge_list(4, [(0, 1, 1), (2, 3, 1)])
    final = run(PrimEngine(g))[-1]
    assert final.is_final
    assert final.summary.edge_count == 1
