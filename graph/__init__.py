"""
graph/
-----
Core data layer.  Public API:

    from graph import Graph, Node, Edge, EdgeState
"""

from graph.node  import Node
from graph.edge  import Edge, EdgeState, edge_id
from graph.graph import Graph, validate_node_count, max_edges

__all__ = [
    "Node",
    "Edge",      "EdgeState",   "edge_id",
    "Graph",     "validate_node_count", "max_edges",
]
