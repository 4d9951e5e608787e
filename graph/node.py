"""
node.py — Graph Node
====================
A node is just an integer index plus a canvas position.  Nothing an
algorithm does ever changes a node: "in the tree" membership lives in the
Prim engine, component membership lives in Kruskal's union-find.
"""


class Node:
    """
    Attributes:
        id    : Integer index 0..n-1 (also the label drawn on the canvas).
        x, y  : Canvas coordinates in pixels.
    """

    __slots__ = ("_id", "_x", "_y")

    def __init__(self, node_id: int, x: float = 0.0, y: float = 0.0):
        self._id: int  = node_id
        self._x: float = x
        self._y: float = y

    @property
    def id(self) -> int:
        return self._id

    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    @property
    def label(self) -> str:
        return str(self._id)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {"id": self._id, "x": self._x, "y": self._y}

    @classmethod
    def from_dict(cls, data: dict) -> "Node":
        return cls(node_id=int(data["id"]), x=data.get("x", 0.0), y=data.get("y", 0.0))

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Node(id={self._id}, pos=({self._x:.2f},{self._y:.2f}))"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)
