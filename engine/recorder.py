"""
recorder.py — Run Recorder & Comparison
========================================
Runs one engine to completion on a COPY of a graph, keeps every Step,
and computes the numbers the analytics / comparison panel shows.

Usage:
    rec = Recorder()
    metrics = rec.run_to_completion(graph, "kruskal")
    rec.export()                       # serialisable snapshot

Comparison:
    left  = Recorder().run_to_completion(graph, "prim", start=0)
    right = Recorder().run_to_completion(graph, "kruskal")
    compare(left, right).weights_match   # → True on any connected graph

The live graph is never touched, so comparing does not disturb a
step-through the learner has in progress.
"""

import logging
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from graph import Graph
from algorithms import Step, create_engine, get_algorithm


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass — what the analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:          str   = ""
    algo_label:        str   = ""
    start_node:        Optional[int] = None
    total_steps:       int   = 0        # step() calls until the final Step
    edges_considered:  int   = 0        # edges left CONSIDERED (Prim's frontier history)
    edges_selected:    int   = 0
    edges_rejected:    int   = 0
    total_weight:      int   = 0
    mst_edges:         List[Tuple[int, int, int]] = field(default_factory=list)
    spanning:          bool  = False    # selected edges == n - 1
    wall_time_ms:      float = 0.0


@dataclass
class ComparisonResult:
    left:          RunMetrics = field(default_factory=RunMetrics)
    right:         RunMetrics = field(default_factory=RunMetrics)
    weights_match: bool = False
    fewer_steps:   str  = ""    # label of the algo that needed fewer steps, or "tie"


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        steps   : Every Step from the run (the final one included).
        metrics : RunMetrics, available after run_to_completion().
        graph   : The private copy the engine mutated.
    """

    def __init__(self):
        self.steps:   List[Step]           = []
        self.metrics: Optional[RunMetrics] = None
        self.graph:   Optional[Graph]      = None
        self._algo_key: str                = ""

    def run_to_completion(self, graph: Graph, algo_key: str, start: int = 0) -> RunMetrics:
        info = get_algorithm(algo_key)
        if info is None:
            raise ValueError(f"Unknown algorithm: {algo_key}")

        self.graph = graph.copy()
        self.graph.reset_states()
        self._algo_key = algo_key
        self.steps = []
        engine = create_engine(algo_key, self.graph, start=start)

        # every engine ends within init + one step per edge + finish
        limit = self.graph.edge_count() + 2
        t0 = time.monotonic()
        for _ in range(limit):
            step = engine.step()
            self.steps.append(step)
            if step.is_final:
                break
        wall_ms = (time.monotonic() - t0) * 1000

        self.metrics = self._compute_metrics(wall_ms, start if info.uses_start_node else None)
        logger.debug("Recorded %s: %d steps, weight %d",
                     algo_key, self.metrics.total_steps, self.metrics.total_weight)
        return self.metrics

    def export(self) -> Dict[str, Any]:
        return {
            "algo_key": self._algo_key,
            "graph":    self.graph.to_dict() if self.graph else {},
            "metrics":  asdict(self.metrics) if self.metrics else {},
            "steps":    [s.to_dict() for s in self.steps],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float, start: Optional[int]) -> RunMetrics:
        info = get_algorithm(self._algo_key)
        g = self.graph
        last = self.steps[-1] if self.steps else None
        states = last.edge_states if last else {}

        def count(state: str) -> int:
            return sum(1 for s in states.values() if s == state)

        mst = [e.as_tuple() for e in g.selected_edges()] if g else []
        return RunMetrics(
            algo_key=self._algo_key,
            algo_label=info.label if info else "",
            start_node=start,
            total_steps=len(self.steps),
            edges_considered=count("considered"),
            edges_selected=count("selected"),
            edges_rejected=count("rejected"),
            total_weight=sum(w for _, _, w in mst),
            mst_edges=mst,
            spanning=bool(g) and len(mst) == g.node_count() - 1,
            wall_time_ms=round(wall_ms, 3),
        )


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: Recorder, right: Recorder) -> ComparisonResult:
    """Given two completed Recorders on the same graph, produce a ComparisonResult."""
    l = left.metrics  or RunMetrics()
    r = right.metrics or RunMetrics()

    if l.total_steps == r.total_steps:
        fewer = "tie"
    else:
        fewer = l.algo_label if l.total_steps < r.total_steps else r.algo_label

    return ComparisonResult(
        left=l,
        right=r,
        weights_match=l.total_weight == r.total_weight,
        fewer_steps=fewer,
    )
