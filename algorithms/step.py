"""
step.py — Algorithm Step Snapshot
==================================
Every call to an engine's `step()` returns one Step: a frozen picture of
everything the visualizer needs to render that frame.

    • The log line for this decision (what happened and why)
    • Which edge was looked at and what was decided about it
    • A copy of every edge's state (edge_id → "unused" / "considered" / …)
    • Prim: the nodes already in the tree.  Kruskal: components left.
    • Which line of pseudocode just ran
    • The completion summary, once the tree is finished

Design decisions:
  - Step is a plain frozen dataclass.  The engine is the only writer of
    graph state; the session, recorder and renderer only read Steps.
  - `edge_states` is copied out of the graph, so a Step taken mid-run stays
    valid while later steps keep mutating the live edges.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from graph import Graph


# ---------------------------------------------------------------------------
# Decisions an engine can report for the current edge
# ---------------------------------------------------------------------------
DECISION_SELECTED = "selected"
DECISION_REJECTED = "rejected"


# ---------------------------------------------------------------------------
# Tagged progress states shared by both engines
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Uninitialized:
    """No step has run since the graph was generated or reset."""


# ---------------------------------------------------------------------------
# MST summary — what the results panel renders
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class MstSummary:
    algorithm:    str
    total_weight: int
    edges:        Tuple[Tuple[int, int, int], ...] = ()

    @classmethod
    def from_graph(cls, algorithm: str, graph: Graph) -> "MstSummary":
        selected = graph.selected_edges()
        return cls(
            algorithm=algorithm,
            total_weight=graph.total_weight(),
            edges=tuple(e.as_tuple() for e in selected),
        )

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def edge_list_text(self) -> str:
        return ", ".join(f"({u}, {v})={w}" for u, v, w in self.edges)

    def to_dict(self) -> dict:
        return {
            "algorithm":    self.algorithm,
            "total_weight": self.total_weight,
            "edges":        [list(e) for e in self.edges],
        }


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number     : 0-based index of this step within the engine's run.
        algorithm       : Registry key ("prim" / "kruskal").
        message         : Log line emitted by this step.
        current_edge    : ID of the edge decided on this step (or None).
        decision        : DECISION_SELECTED / DECISION_REJECTED / None.
        edge_states     : {edge_id: state_string} for EVERY edge, after the step.
        in_tree         : Prim only — node indices already in the tree.
        components      : Kruskal only — number of disjoint sets left.
        pseudocode_line : 0-based index of the pseudocode line just executed.
        summary         : Filled on the finishing step (and any step after it).
        is_final        : True once the engine has finished.
    """

    step_number:      int                         = 0
    algorithm:        str                         = ""
    message:          str                         = ""
    current_edge:     Optional[str]               = None
    decision:         Optional[str]               = None
    edge_states:      Dict[str, str]              = field(default_factory=dict)
    in_tree:          List[int]                   = field(default_factory=list)
    components:       Optional[int]               = None
    pseudocode_line:  int                         = 0
    summary:          Optional[MstSummary]        = None
    is_final:         bool                        = False

    def to_dict(self) -> dict:
        return {
            "step_number":     self.step_number,
            "algorithm":       self.algorithm,
            "message":         self.message,
            "current_edge":    self.current_edge,
            "decision":        self.decision,
            "edge_states":     dict(self.edge_states),
            "in_tree":         list(self.in_tree),
            "components":      self.components,
            "pseudocode_line": self.pseudocode_line,
            "summary":         self.summary.to_dict() if self.summary else None,
            "is_final":        self.is_final,
        }
