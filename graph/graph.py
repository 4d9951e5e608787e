"""
graph.py — Graph Container & Generator
=======================================
Single source of truth for the graph.  Both MST engines and the renderer
talk to this object.

Responsibilities:
  1. Node / edge storage and lookup            (add / get / between)
  2. Graph-generation factory methods          (probabilistic, fixed edge count)
  3. Import from an explicit edge list / text  (tests, import route)
  4. Serialisation round-trip                  (to_dict / from_dict / copy)
  5. Reset helper                              (every edge back to UNUSED)

Design decisions:
  - Nodes & edges live in plain dicts; insertion order IS the edge order
    that Prim's tie-break and Kruskal's stable sort rely on.
  - `_adj[node] → [(neighbour, edge_id)]` is kept in step with `edges`
    so connectivity checks are O(V + E).
  - Generators take a `seed` and use a private Random instance, so a seeded
    graph is reproducible without touching the global RNG.
"""

import logging
import math
import random
from collections import deque
from typing import Dict, List, Optional, Sequence, Set, Tuple

from graph.edge import Edge, EdgeState, edge_id
from graph.node import Node


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Generation defaults
# ---------------------------------------------------------------------------
DEFAULT_EDGE_PROBABILITY: float          = 0.65      # ≈ 35 % of pairs skipped "to reduce clutter"
WEIGHT_RANGE:             Tuple[int, int] = (1, 20)  # sampled edges
FALLBACK_WEIGHT_RANGE:    Tuple[int, int] = (1, 15)  # chain edges added to reconnect the graph
MIN_NODES:                int            = 2
MAX_NODES:                int            = 40        # more nodes no longer fit on the circle layout


def validate_node_count(num_nodes, max_nodes: int = MAX_NODES) -> int:
    """Reject anything that is not an integer in [2, max_nodes] (bools included)."""
    if isinstance(num_nodes, bool) or not isinstance(num_nodes, int):
        raise ValueError(f"Node count must be an integer, got {num_nodes!r}")
    if num_nodes < MIN_NODES:
        raise ValueError(f"Please enter at least {MIN_NODES} nodes (got {num_nodes}).")
    if num_nodes > max_nodes:
        raise ValueError(f"Please enter at most {max_nodes} nodes (got {num_nodes}).")
    return num_nodes


def max_edges(num_nodes: int) -> int:
    return num_nodes * (num_nodes - 1) // 2


class Graph:
    """
    Attributes:
        nodes : {node_index: Node}
        edges : {edge_id: Edge}   (insertion ordered)
        _adj  : {node_index: [(neighbour_index, edge_id), …]}
    """

    def __init__(self):
        self.nodes: Dict[int, Node] = {}
        self.edges: Dict[str, Edge] = {}
        self._adj:  Dict[int, List[Tuple[int, str]]] = {}

    # ==================================================================
    # NODES
    # ==================================================================
    def add_node(self, node: Node) -> Node:
        self.nodes[node.id] = node
        self._adj.setdefault(node.id, [])
        return node

    def create_node(self, node_id: int, x: float, y: float) -> Node:
        return self.add_node(Node(node_id, x=x, y=y))

    def get_node(self, node_id: int) -> Optional[Node]:
        return self.nodes.get(node_id)

    # ==================================================================
    # EDGES
    # ==================================================================
    def add_edge(self, edge: Edge) -> Edge:
        if edge.u not in self.nodes or edge.v not in self.nodes:
            raise ValueError(f"Edge {edge.describe()} references an unknown node")
        if edge.id in self.edges:
            raise ValueError(f"Duplicate edge ({edge.u}, {edge.v})")
        self.edges[edge.id] = edge
        self._adj[edge.u].append((edge.v, edge.id))
        self._adj[edge.v].append((edge.u, edge.id))
        return edge

    def create_edge(self, u: int, v: int, weight: int) -> Edge:
        return self.add_edge(Edge(u, v, weight))

    def get_edge(self, eid: str) -> Optional[Edge]:
        return self.edges.get(eid)

    def get_edge_between(self, a: int, b: int) -> Optional[Edge]:
        if a == b:
            return None
        return self.edges.get(edge_id(a, b))

    def edge_list(self) -> List[Edge]:
        """Edges in their stable insertion order."""
        return list(self.edges.values())

    # ==================================================================
    # STATE QUERIES / RESET
    # ==================================================================
    def reset_states(self) -> None:
        for edge in self.edges.values():
            edge.reset()

    def edges_in_state(self, state: EdgeState) -> List[Edge]:
        return [e for e in self.edges.values() if e.state is state]

    def selected_edges(self) -> List[Edge]:
        return self.edges_in_state(EdgeState.SELECTED)

    def total_weight(self) -> int:
        return sum(e.weight for e in self.selected_edges())

    def edge_states(self) -> Dict[str, str]:
        return {eid: e.state.value for eid, e in self.edges.items()}

    # ==================================================================
    # CONNECTIVITY
    # ==================================================================
    def components(self) -> List[Set[int]]:
        """Connected components via BFS over the adjacency lists."""
        seen: Set[int] = set()
        result: List[Set[int]] = []
        for start in self.nodes:
            if start in seen:
                continue
            comp = {start}
            queue = deque([start])
            seen.add(start)
            while queue:
                cur = queue.popleft()
                for nbr, _ in self._adj.get(cur, []):
                    if nbr not in seen:
                        seen.add(nbr)
                        comp.add(nbr)
                        queue.append(nbr)
            result.append(comp)
        return result

    def is_connected(self) -> bool:
        return len(self.components()) <= 1

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes.values()],
            "edges": [e.to_dict() for e in self.edges.values()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        g = cls()
        for nd in data.get("nodes", []):
            g.add_node(Node.from_dict(nd))
        for ed in data.get("edges", []):
            g.add_edge(Edge.from_dict(ed))
        return g

    def copy(self) -> "Graph":
        """Deep copy (positions, weights and edge states) with fresh objects."""
        return Graph.from_dict(self.to_dict())

    # ==================================================================
    # GENERATORS — Factory class-methods
    # ==================================================================
    @staticmethod
    def circle_layout(
        num_nodes: int,
        canvas_w: float = 800,
        canvas_h: float = 500,
    ) -> List[Tuple[float, float]]:
        """Evenly spaced points on a circle centred on the canvas."""
        cx, cy = canvas_w / 2, canvas_h / 2
        radius = min(canvas_w, canvas_h) / 2.5
        points = []
        for i in range(num_nodes):
            angle = 2 * math.pi * i / num_nodes
            points.append((round(cx + radius * math.cos(angle), 2),
                           round(cy + radius * math.sin(angle), 2)))
        return points

    @classmethod
    def _with_circle_nodes(cls, num_nodes: int, canvas_w: float, canvas_h: float) -> "Graph":
        g = cls()
        for i, (x, y) in enumerate(cls.circle_layout(num_nodes, canvas_w, canvas_h)):
            g.create_node(i, x, y)
        return g

    # ---------- Probabilistic (every pair is a coin flip) ----------
    @classmethod
    def generate_random(
        cls,
        num_nodes: int = 6,
        edge_probability: float = DEFAULT_EDGE_PROBABILITY,
        weight_range: Tuple[int, int] = WEIGHT_RANGE,
        seed: Optional[int] = None,
        canvas_w: float = 800,
        canvas_h: float = 500,
    ) -> "Graph":
        """
        Each of the C(n,2) pairs (i < j, lexicographic order) is kept with
        probability `edge_probability` and given a weight from `weight_range`.

        If the sample leaves the graph disconnected, the chain
        (0,1), (1,2), … (n-2,n-1) is walked and every missing chain edge that
        joins two different components is added, so the result is always
        connected and never holds a duplicate pair.
        """
        validate_node_count(num_nodes)
        if not 0.0 <= edge_probability <= 1.0:
            raise ValueError(f"Edge probability must be within [0, 1], got {edge_probability}")

        rng = random.Random(seed)
        g = cls._with_circle_nodes(num_nodes, canvas_w, canvas_h)

        for i in range(num_nodes):
            for j in range(i + 1, num_nodes):
                if rng.random() < edge_probability:
                    g.create_edge(i, j, rng.randint(*weight_range))

        if not g.is_connected():
            g._connect_with_chain(rng)

        return g

    def _connect_with_chain(self, rng: random.Random) -> None:
        label = {}
        for idx, comp in enumerate(self.components()):
            for nid in comp:
                label[nid] = idx

        added = 0
        for k in range(len(self.nodes) - 1):
            a, b = k, k + 1
            if label[a] == label[b] or self.get_edge_between(a, b):
                continue
            self.create_edge(a, b, rng.randint(*FALLBACK_WEIGHT_RANGE))
            old, new = label[b], label[a]
            for nid, lab in label.items():
                if lab == old:
                    label[nid] = new
            added += 1
        logger.debug("Under-connected sample: added %d chain edge(s)", added)

    # ---------- Fixed edge count ----------
    @classmethod
    def generate_with_edge_count(
        cls,
        num_nodes: int = 6,
        edge_count: int = 9,
        weight_range: Tuple[int, int] = WEIGHT_RANGE,
        seed: Optional[int] = None,
        canvas_w: float = 800,
        canvas_h: float = 500,
    ) -> "Graph":
        """
        Exactly `edge_count` distinct pairs, clamped to [n-1, C(n,2)].
        A random spanning tree is drawn first so the graph is connected,
        then the remaining pairs are sampled without replacement.
        """
        validate_node_count(num_nodes)
        if isinstance(edge_count, bool) or not isinstance(edge_count, int) or edge_count < 0:
            raise ValueError(f"Edge count must be a non-negative integer, got {edge_count!r}")

        rng = random.Random(seed)
        target = max(num_nodes - 1, min(edge_count, max_edges(num_nodes)))

        order = list(range(num_nodes))
        rng.shuffle(order)
        chosen: Set[Tuple[int, int]] = set()
        for k in range(1, num_nodes):
            a, b = order[k], order[rng.randrange(k)]
            chosen.add((min(a, b), max(a, b)))

        remaining = [
            (i, j)
            for i in range(num_nodes)
            for j in range(i + 1, num_nodes)
            if (i, j) not in chosen
        ]
        chosen.update(rng.sample(remaining, target - len(chosen)))

        g = cls._with_circle_nodes(num_nodes, canvas_w, canvas_h)
        for u, v in sorted(chosen):
            g.create_edge(u, v, rng.randint(*weight_range))
        return g

    # ---------- Explicit edge list ----------
    @classmethod
    def from_edge_list(
        cls,
        num_nodes: int,
        edges: Sequence[Tuple[int, int, int]],
        canvas_w: float = 800,
        canvas_h: float = 500,
    ) -> "Graph":
        """Build a graph from (u, v, w) triples, keeping the given order."""
        validate_node_count(num_nodes)
        g = cls._with_circle_nodes(num_nodes, canvas_w, canvas_h)
        for u, v, w in edges:
            g.create_edge(int(u), int(v), int(w))
        return g

    @classmethod
    def from_text(
        cls,
        text: str,
        num_nodes: Optional[int] = None,
        canvas_w: float = 800,
        canvas_h: float = 500,
    ) -> "Graph":
        """
        Parse one edge per line:

            0 1 5
            0, 2, 3      # commas are fine
            # comments and blank lines are skipped

        `num_nodes` defaults to the highest index seen + 1.
        """
        triples: List[Tuple[int, int, int]] = []
        for lineno, raw in enumerate(text.strip().splitlines(), start=1):
            line = raw.split("#", 1)[0].strip()
            if not line:
                continue
            tokens = line.replace(",", " ").split()
            if len(tokens) != 3:
                raise ValueError(f"Line {lineno}: expected 'u v weight', got {raw.strip()!r}")
            try:
                u, v, w = (int(t) for t in tokens)
            except ValueError:
                raise ValueError(f"Line {lineno}: values must be integers, got {raw.strip()!r}") from None
            triples.append((u, v, w))

        if num_nodes is None:
            num_nodes = max((max(u, v) for u, v, _ in triples), default=-1) + 1
        for u, v, _ in triples:
            if not (0 <= u < num_nodes and 0 <= v < num_nodes):
                raise ValueError(f"Edge ({u}, {v}) is outside nodes 0..{num_nodes - 1}")
        return cls.from_edge_list(num_nodes, triples, canvas_w, canvas_h)

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def node_ids(self) -> List[int]:
        return list(self.nodes.keys())

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()})"
