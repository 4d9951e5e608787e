import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from graph import EdgeState, Graph
from engine import Recorder, compare


SCENARIO = [(0, 1, 5), (0, 2, 3), (1, 2, 1), (1, 3, 4), (2, 3, 2)]


def test_scenario_comparison():
    g = Graph.from_edge_list(4, SCENARIO)
    left, right = Recorder(), Recorder()
    prim = left.run_to_completion(g, "prim", start=0)
    kruskal = right.run_to_completion(g, "kruskal")

    assert prim.total_weight == kruskal.total_weight == 6
    assert prim.start_node == 0
    assert kruskal.start_node is None
    assert prim.edges_considered == 2          # 0-1 and 1-3 lost on the frontier
    assert kruskal.edges_rejected == 0

    comp = compare(left, right)
    assert comp.weights_match
    assert comp.fewer_steps == "tie"


def test_live_graph_is_untouched():
    g = Graph.from_edge_list(4, SCENARIO)
    g.get_edge("0-1").state = EdgeState.SELECTED
    before = g.edge_states()

    Recorder().run_to_completion(g, "kruskal")

    assert g.edge_states() == before


@pytest.mark.parametrize("seed", range(5))
def test_random_graphs_span(seed):
    g = Graph.generate_random(8, seed=seed)
    left, right = Recorder(), Recorder()
    assert left.run_to_completion(g, "prim").spanning
    assert right.run_to_completion(g, "kruskal").spanning
    assert compare(left, right).weights_match


def test_export():
    rec = Recorder()
    metrics = rec.run_to_completion(Graph.from_edge_list(4, SCENARIO), "prim")
    data = rec.export()
    assert data["algo_key"] == "prim"
    assert len(data["steps"]) == metrics.total_steps == 5
    assert data["steps"][-1]["is_final"] is True
    assert data["metrics"]["mst_edges"] == [(0, 2, 3), (1, 2, 1), (2, 3, 2)]


def test_unknown_algorithm():
    with pytest.raises(ValueError):
        Recorder().run_to_completion(Graph.from_edge_list(4, SCENARIO), "boruvka")
