"""
prim.py — Prim's Minimum Spanning Tree (step engine)
=====================================================
Grows one tree outward from a start node.  Every call to `step()` makes
exactly one decision:

  1. First call           →  put the start node in the tree.
  2. Each following call  →  paint every frontier edge CONSIDERED, select
                             the lightest one, pull its far end into the tree.
  3. No frontier left     →  finished; emit the summary.
  4. Any call after that  →  no-op (returns the final Step again).

Frontier edge = exactly one endpoint in the tree.  Ties go to whichever
edge comes first in the graph's edge order.

CONSIDERED marks are never cleared: an edge that sat on the frontier and
lost stays yellow, so the picture keeps the history of every comparison.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

from graph import Graph, Edge, EdgeState
from algorithms.step import (
    DECISION_SELECTED,
    MstSummary,
    Step,
    Uninitialized,
)


logger = logging.getLogger(__name__)

LABEL = "Prim's"


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Prim(graph, start):",                               # 0
    "    in_tree ← {start}",                                 # 1
    "    while True:",                                       # 2
    "        frontier ← [e for e in E if e crosses the cut]",# 3
    "        mark every e in frontier CONSIDERED",           # 4
    "        if frontier is empty: return MST",              # 5
    "        e ← lightest edge in frontier",                 # 6
    "        mark e SELECTED",                               # 7
    "        in_tree ← in_tree ∪ endpoints(e)",              # 8
]


# ---------------------------------------------------------------------------
# Progress states
# ---------------------------------------------------------------------------
@dataclass
class PrimRunning:
    in_tree: List[bool]


@dataclass
class PrimFinished:
    in_tree: List[bool]
    summary: MstSummary


PrimState = Union[Uninitialized, PrimRunning, PrimFinished]


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------
class PrimEngine:
    """
    Attributes:
        graph   : Graph whose edge states this engine mutates.
        start   : Node index the tree grows from.
        state   : Uninitialized | PrimRunning | PrimFinished.
        steps   : Number of step() calls made so far.
    """

    key = "prim"

    def __init__(self, graph: Graph, start: int = 0):
        if start not in graph.nodes:
            raise ValueError(f"Start node {start} is not in the graph (0..{graph.node_count() - 1})")
        self.graph: Graph     = graph
        self.start: int       = start
        self.state: PrimState = Uninitialized()
        self.steps: int       = 0

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def is_finished(self) -> bool:
        return isinstance(self.state, PrimFinished)

    @property
    def in_tree(self) -> List[int]:
        if isinstance(self.state, Uninitialized):
            return []
        return [i for i, flag in enumerate(self.state.in_tree) if flag]

    @property
    def summary(self) -> Optional[MstSummary]:
        if isinstance(self.state, PrimFinished):
            return self.state.summary
        return None

    # ------------------------------------------------------------------
    # One decision
    # ------------------------------------------------------------------
    def step(self) -> Step:
        state = self.state

        if isinstance(state, PrimFinished):
            return self._emit(
                f"✅ {LABEL} MST already complete.",
                pseudocode_line=5,
                summary=state.summary,
                is_final=True,
                count=False,
            )

        if isinstance(state, Uninitialized):
            in_tree = [False] * self.graph.node_count()
            in_tree[self.start] = True
            self.state = PrimRunning(in_tree=in_tree)
            logger.debug("Prim: start node %d", self.start)
            return self._emit(
                f"🔹 Started {LABEL} algorithm from node {self.start}",
                pseudocode_line=1,
            )

        best = self._scan_frontier(state.in_tree)

        if best is None:
            summary = MstSummary.from_graph(LABEL, self.graph)
            self.state = PrimFinished(in_tree=state.in_tree, summary=summary)
            logger.debug("Prim: finished, total weight %d", summary.total_weight)
            return self._emit(
                "✅ MST complete (Prim).",
                pseudocode_line=5,
                summary=summary,
                is_final=True,
            )

        best.state = EdgeState.SELECTED
        state.in_tree[best.u] = True
        state.in_tree[best.v] = True
        logger.debug("Prim: selected %s", best)
        return self._emit(
            f"🟢 Selected edge {best.describe()} — smallest edge connecting the MST",
            pseudocode_line=8,
            current_edge=best.id,
            decision=DECISION_SELECTED,
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _scan_frontier(self, in_tree: List[bool]) -> Optional[Edge]:
        best: Optional[Edge] = None
        for edge in self.graph.edges.values():
            if in_tree[edge.u] != in_tree[edge.v]:
                edge.state = EdgeState.CONSIDERED
                if best is None or edge.weight < best.weight:
                    best = edge
        return best

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
        step = Step(
            step_number=self.steps,
            algorithm=self.key,
            message=message,
            current_edge=current_edge,
            decision=decision,
            edge_states=self.graph.edge_states(),
            in_tree=self.in_tree,
            pseudocode_line=pseudocode_line,
            summary=summary,
            is_final=is_final,
        )
        if count:
            self.steps += 1
        return step
