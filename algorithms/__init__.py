"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every MST engine the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm, create_engine

AlgoInfo is a lightweight dataclass.  The session, recorder and UI all
consume it, so adding an engine means: write the class, add one entry here.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Union

from graph import Graph
from algorithms.step import MstSummary, Step, Uninitialized
from algorithms.union_find import DisjointSet
from algorithms.prim    import PrimEngine,    PSEUDOCODE as _prim_pc
from algorithms.kruskal import KruskalEngine, PSEUDOCODE as _kruskal_pc


Engine = Union[PrimEngine, KruskalEngine]


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                    # registry key, e.g. "prim"
    label:            str                    # human label, e.g. "Prim's Algorithm"
    engine:           Callable[..., Engine]  # engine class
    pseudocode:       List[str]              # lines for the side-panel
    uses_start_node:  bool     = False       # expose the start-node picker?
    complexity_time:  str      = ""
    complexity_space: str      = ""
    description:      str      = ""


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "prim": AlgoInfo(
        key="prim", label="Prim's Algorithm", engine=PrimEngine, pseudocode=_prim_pc,
        uses_start_node=True,
        complexity_time="O(V · E)", complexity_space="O(V)",
        description="Grows one tree from a start node, always taking the lightest edge leaving it.",
    ),

    "kruskal": AlgoInfo(
        key="kruskal", label="Kruskal's Algorithm", engine=KruskalEngine, pseudocode=_kruskal_pc,
        complexity_time="O(E log E)", complexity_space="O(V + E)",
        description="Takes edges lightest-first, skipping any that would close a cycle.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def create_engine(key: str, graph: Graph, start: int = 0) -> Engine:
    info = get_algorithm(key)
    if info is None:
        raise ValueError(f"Unknown algorithm: {key}")
    if info.uses_start_node:
        return info.engine(graph, start=start)
    return info.engine(graph)


__all__ = [
    "AlgoInfo",
    "DisjointSet",
    "Engine",
    "KruskalEngine",
    "MstSummary",
    "PrimEngine",
    "REGISTRY",
    "Step",
    "Uninitialized",
    "create_engine",
    "get_algorithm",
    "list_algorithms",
]
