import os
import sys
import threading
import time

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from graph import Graph
from engine import AutoRun, AutoRunActive, AutoRunOutcome, MstSession, run_auto


SCENARIO = [(0, 1, 5), (0, 2, 3), (1, 2, 1), (1, 3, 4), (2, 3, 2)]


@pytest.fixture
def session():
    s = MstSession()
    s.load_graph(Graph.from_edge_list(4, SCENARIO))
    return s


@pytest.mark.parametrize("algo", ["prim", "kruskal"])
def test_runs_to_completion(session, algo):
    session.select_algorithm(algo)
    seen = []

    outcome = run_auto(session, delay=0, on_step=seen.append)

    assert outcome is AutoRunOutcome.COMPLETED
    assert seen[-1].is_final
    assert session.is_finished
    assert session.result.total_weight == 6
    assert session.log[-1] == "⏹ Auto-run finished."
    assert not session.auto_running


def test_stop_is_seen_at_next_boundary(session):
    def stop_after_first(step):
        if step.step_number == 0:
            session.request_stop()

    outcome = run_auto(session, delay=0, on_step=stop_after_first)

    assert outcome is AutoRunOutcome.CANCELLED
    assert not session.is_finished
    assert session.log[-1] == "🛑 Auto-run stopped by user."
    assert not session.auto_running


def test_stale_stop_does_not_cancel_new_run(session):
    session.request_stop()
    assert run_auto(session, delay=0) is AutoRunOutcome.COMPLETED


def test_only_one_run_at_a_time(session):
    first = AutoRun(session, delay=0)
    first.claim()
    with pytest.raises(AutoRunActive):
        AutoRun(session, delay=0).claim()
    with pytest.raises(AutoRunActive):
        run_auto(session, delay=0)

    assert first.execute() is AutoRunOutcome.COMPLETED
    # slot released: a new run is accepted again
    assert run_auto(session, delay=0) is AutoRunOutcome.COMPLETED


def test_reset_mid_run_invalidates(session):
    def reset_after_first(step):
        if step.step_number == 0:
            session.reset()

    outcome = run_auto(session, delay=0, on_step=reset_after_first)

    assert outcome is AutoRunOutcome.INVALIDATED
    assert session.log == ["🔄 Reset done.", "🔄 Auto-run abandoned: graph was reset."]
    assert set(session.graph.edge_states().values()) == {"unused"}


def test_ceiling_stops_a_run_that_cannot_finish():
    s = MstSession("kruskal")
    s.load_graph(Graph.from_edge_list(4, [(0, 1, 1), (2, 3, 2)]))
    run = AutoRun(s, delay=0)
    assert run.ceiling() == 4

    assert run.execute() is AutoRunOutcome.CEILING
    assert s.log[-1] == "⚠ Auto-run stopped after 4 steps."
    assert not s.auto_running


def test_background_run_wakes_on_stop(session):
    run = AutoRun(session, delay=5.0)
    run.claim()
    worker = threading.Thread(target=run.execute, daemon=True)
    worker.start()

    deadline = time.monotonic() + 2
    while session.last_step is None and time.monotonic() < deadline:
        time.sleep(0.01)
    session.request_stop()
    worker.join(timeout=2)

    assert not worker.is_alive()
    assert run.outcome is AutoRunOutcome.CANCELLED
    assert not session.auto_running


def test_reset_winning_the_lock_before_a_step_leaves_no_progress(session, monkeypatch):
    session.select_algorithm("kruskal")
    real_step_once = session.step_once
    calls = []

    def reset_just_before_third_step(*args, **kwargs):
        calls.append(1)
        if len(calls) == 3:
            session.reset()
        return real_step_once(*args, **kwargs)

    monkeypatch.setattr(session, "step_once", reset_just_before_third_step)

    outcome = run_auto(session, delay=0)

    assert outcome is AutoRunOutcome.INVALIDATED
    assert session.log == ["🔄 Reset done.", "🔄 Auto-run abandoned: graph was reset."]
    assert session.engine is None
    assert session.last_step is None
    assert set(session.graph.edge_states().values()) == {"unused"}
