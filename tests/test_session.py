import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from graph import Graph
from engine import MstSession


SCENARIO = [(0, 1, 5), (0, 2, 3), (1, 2, 1), (1, 3, 4), (2, 3, 2)]


@pytest.fixture
def session():
    s = MstSession()
    s.load_graph(Graph.from_edge_list(4, SCENARIO))
    return s


def finish(s: MstSession, limit: int = 50):
    for _ in range(limit):
        if s.step_once().is_final:
            return
    raise AssertionError("engine did not finish")


def test_generate_logs_and_installs_graph():
    s = MstSession()
    g = s.generate(5, seed=1)
    assert s.graph is g
    assert s.log == [f"🧩 Graph generated with 5 nodes and {g.edge_count()} edges."]


@pytest.mark.parametrize("bad", [1, "x", None, True])
def test_invalid_generate_leaves_session_untouched(session, bad):
    graph, log, epoch = session.graph, list(session.log), session.epoch
    with pytest.raises(ValueError):
        session.generate(bad)
    assert session.graph is graph
    assert session.log == log
    assert session.epoch == epoch


def test_generate_with_edge_count(session):
    g = session.generate(6, edge_count=8, seed=2)
    assert g.edge_count() == 8


def test_step_without_graph():
    with pytest.raises(RuntimeError):
        MstSession().step_once()


def test_dispatches_to_selected_engine(session):
    assert "Prim" in session.step_once().message
    session.select_algorithm("kruskal")
    assert session.step_once().message == "🔹 Started Kruskal's algorithm."
    session.select_algorithm("prim")
    # Prim keeps its own progress
    assert session.step_once().current_edge == "0-2"


def test_unknown_algorithm(session):
    with pytest.raises(ValueError):
        session.select_algorithm("dijkstra")


def test_start_node(session):
    session.set_start_node(3)
    assert session.step_once().message.endswith("from node 3")
    with pytest.raises(ValueError):
        session.set_start_node(4)


def test_result_is_stored_on_finish(session):
    session.select_algorithm("kruskal")
    finish(session)
    assert session.is_finished
    assert session.result.total_weight == 6
    assert session.log[-1] == "✅ MST complete (Kruskal)."


def test_reset_behaves_like_fresh_graph(session):
    finish(session)
    session.request_stop()
    epoch = session.epoch

    session.reset()

    assert set(session.graph.edge_states().values()) == {"unused"}
    assert session.engine is None
    assert session.result is None
    assert session.last_step is None
    assert session.log == ["🔄 Reset done."]
    assert not session.is_cancelled
    assert session.epoch == epoch + 1
    assert "Started Prim" in session.step_once().message


def test_request_stop(session):
    session.request_stop()
    assert session.is_cancelled
    assert session.log[-1] == "🛑 Algorithm stopped."


def test_new_graph_clears_progress_and_flags(session):
    session.step_once()
    session.step_once()
    session.request_stop()

    session.generate(5, seed=9)

    assert session.engine is None
    assert not session.is_cancelled
    assert len(session.log) == 1


def test_to_dict(session):
    session.step_once()
    data = session.to_dict()
    assert data["algorithm"] == "prim"
    assert data["last_step"]["in_tree"] == [0]
    assert data["auto_running"] is False
    assert data["step_count"] == session.step_count == 1


def test_step_with_stale_epoch_is_skipped(session):
    epoch = session.epoch
    session.reset()

    assert session.step_once(expected_epoch=epoch) is None
    assert session.engine is None
    assert session.log == ["🔄 Reset done."]
    assert session.step_once(expected_epoch=session.epoch) is not None


def test_node_cap():
    s = MstSession(max_nodes=8)
    s.generate(8, seed=1)
    graph = s.graph
    with pytest.raises(ValueError):
        s.generate(9)
    with pytest.raises(ValueError):
        s.load_graph(Graph.from_edge_list(9, [(0, 8, 1)]))
    assert s.graph is graph
