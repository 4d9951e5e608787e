"""
edge.py — Graph Edge
====================
Undirected, weighted edge between two node indices.  Carries its own
visual state so the renderer can colour-code it exactly as the MST
engines touch it.

Design decisions:
  - Endpoints are normalised so `u < v`; the id is the string "u-v".
    One pair → one id → one Edge object for the lifetime of a graph.
  - `state` is the only mutable field.  Engines write it, renderers read it.
"""

from enum import Enum
from typing import Tuple


# ---------------------------------------------------------------------------
# Edge State Enum — visual encoding for the renderer
# ---------------------------------------------------------------------------
class EdgeState(Enum):
    UNUSED     = "unused"       # thin grey: not looked at yet
    CONSIDERED = "considered"   # yellow: was on Prim's frontier at some point
    SELECTED   = "selected"     # lime, thick: part of the spanning tree
    REJECTED   = "rejected"     # red: Kruskal found it would close a cycle


def edge_id(u: int, v: int) -> str:
    a, b = (u, v) if u < v else (v, u)
    return f"{a}-{b}"


# ---------------------------------------------------------------------------
# Edge
# ---------------------------------------------------------------------------
class Edge:
    """
    Attributes:
        id     : "u-v" with u < v.
        u, v   : Endpoint node indices (u < v).
        weight : Positive integer cost.
        state  : EdgeState for visual encoding.
    """

    __slots__ = ("id", "u", "v", "weight", "state")

    def __init__(self, u: int, v: int, weight: int = 1):
        if u == v:
            raise ValueError(f"Self-loop on node {u} is not allowed")
        if weight <= 0:
            raise ValueError(f"Edge ({u}, {v}) must have a positive weight, got {weight}")
        a, b = (u, v) if u < v else (v, u)
        self.id:     str       = edge_id(a, b)
        self.u:      int       = a
        self.v:      int       = b
        self.weight: int       = weight
        self.state:  EdgeState = EdgeState.UNUSED

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def reset(self) -> None:
        self.state = EdgeState.UNUSED

    def as_tuple(self) -> Tuple[int, int, int]:
        return self.u, self.v, self.weight

    def describe(self) -> str:
        return f"({self.u}, {self.v}) = {self.weight}"

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "id":     self.id,
            "u":      self.u,
            "v":      self.v,
            "weight": self.weight,
            "state":  self.state.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        edge = cls(u=int(data["u"]), v=int(data["v"]), weight=int(data["weight"]))
        edge.state = EdgeState(data.get("state", EdgeState.UNUSED.value))
        return edge

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Edge({self.u} ↔ {self.v}, w={self.weight}, state={self.state.value})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Edge) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
