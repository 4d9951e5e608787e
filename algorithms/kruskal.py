"""
kruskal.py — Kruskal's Minimum Spanning Tree (step engine)
===========================================================
Walks all edges from lightest to heaviest and keeps every edge that joins
two different components.  Every call to `step()` makes one decision:

  1. First call        →  snapshot the edges sorted by weight (stable, so
                          equal weights keep graph order) and give every
                          node its own set.
  2. Accepted n-1 yet? →  finished; emit the summary.  This check runs at
                          the START of a step, so finishing takes one extra
                          call after the last acceptance.
  3. Otherwise         →  pop the next edge; SELECTED if its endpoints are
                          in different sets (and merge them), else REJECTED.
  4. Queue empty       →  nothing left to examine; no-op.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Union

from graph import Graph, Edge, EdgeState
from algorithms.step import (
    DECISION_REJECTED,
    DECISION_SELECTED,
    MstSummary,
    Step,
    Uninitialized,
)
from algorithms.union_find import DisjointSet


logger = logging.getLogger(__name__)

LABEL = "Kruskal's"


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Kruskal(graph):",                         # 0
    "    edges ← sort(E, by=weight)",              # 1
    "    dsu ← DisjointSet(V); accepted ← 0",      # 2
    "    while accepted < |V| - 1:",               # 3
    "        (u, v, w) ← edges.pop_front()",       # 4
    "        if dsu.find(u) != dsu.find(v):",      # 5
    "            dsu.union(u, v)",                 # 6
    "            mark SELECTED; accepted += 1",    # 7
    "        else: mark REJECTED  # cycle",        # 8
    "    return MST",                              # 9
]


# ---------------------------------------------------------------------------
# Progress states
# ---------------------------------------------------------------------------
@dataclass
class KruskalRunning:
    pending:  Deque[Edge]
    forest:   DisjointSet
    accepted: int = 0


@dataclass
class KruskalFinished:
    forest:  DisjointSet
    summary: MstSummary


KruskalState = Union[Uninitialized, KruskalRunning, KruskalFinished]


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
class KruskalEngine:
    """
    Attributes:
        graph : Graph whose edge states this engine mutates.
        state : Uninitialized | KruskalRunning | KruskalFinished.
        steps : Number of step() calls that advanced the engine.
    """

    key = "kruskal"

    def __init__(self, graph: Graph):
        self.graph: Graph        = graph
        self.state: KruskalState = Uninitialized()
        self.steps: int          = 0

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def is_finished(self) -> bool:
        return isinstance(self.state, KruskalFinished)

    @property
    def accepted(self) -> int:
        if isinstance(self.state, KruskalRunning):
            return self.state.accepted
        if isinstance(self.state, KruskalFinished):
            return self.state.summary.edge_count
        return 0

    @property
    def forest(self) -> Optional[DisjointSet]:
        if isinstance(self.state, Uninitialized):
            return None
        return self.state.forest

    @property
    def summary(self) -> Optional[MstSummary]:
        if isinstance(self.state, KruskalFinished):
            return self.state.summary
        return None

    # ------------------------------------------------------------------
    # One decision
    # ------------------------------------------------------------------
    def step(self) -> Step:
        state = self.state
        needed = self.graph.node_count() - 1

        if isinstance(state, KruskalFinished):
            return self._emit(
                f"✅ {LABEL} MST already complete.",
                pseudocode_line=9,
                summary=state.summary,
                is_final=True,
                count=False,
            )

        if isinstance(state, Uninitialized):
            ordered = sorted(self.graph.edges.values(), key=lambda e: e.weight)
            self.state = KruskalRunning(
                pending=deque(ordered),
                forest=DisjointSet(self.graph.node_count()),
            )
            logger.debug("Kruskal: %d edges queued", len(ordered))
            return self._emit(f"🔹 Started {LABEL} algorithm.", pseudocode_line=2)

        if state.accepted == needed:
            summary = MstSummary.from_graph(LABEL, self.graph)
            self.state = KruskalFinished(forest=state.forest, summary=summary)
            logger.debug("Kruskal: finished, total weight %d", summary.total_weight)
            return self._emit(
                "✅ MST complete (Kruskal).",
                pseudocode_line=9,
                summary=summary,
                is_final=True,
            )

        if not state.pending:
            return self._emit("⚠ No edges left to examine.", pseudocode_line=3, count=False)

        edge = state.pending.popleft()
        if state.forest.union(edge.u, edge.v):
            edge.state = EdgeState.SELECTED
            state.accepted += 1
            logger.debug("Kruskal: accepted %s", edge)
            return self._emit(
                f"🟢 Selected edge {edge.describe()} — connects two components",
                pseudocode_line=7,
                current_edge=edge.id,
                decision=DECISION_SELECTED,
            )

        edge.state = EdgeState.REJECTED
        logger.debug("Kruskal: rejected %s", edge)
        return self._emit(
            f"❌ Rejected edge {edge.describe()} — forms a cycle",
            pseudocode_line=8,
            current_edge=edge.id,
            decision=DECISION_REJECTED,
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _emit(
        self,
        message: str,
        pseudocode_line: int,
        current_edge: Optional[str] = None,
        decision: Optional[str] = None,
        summary: Optional[MstSummary] = None,
        is_final: bool = False,
        count: bool = True,
    ) -> Step:
        forest = self.forest
        step = Step(
            step_number=self.steps,
            algorithm=self.key,
            message=message,
            current_edge=current_edge,
            decision=decision,
            edge_states=self.graph.edge_states(),
            components=forest.components() if forest else None,
            pseudocode_line=pseudocode_line,
            summary=summary,
            is_final=is_final,
        )
        if count:
            self.steps += 1
        return step
