"""
union_find.py — Disjoint-Set Forest
====================================
Tracks which nodes already share a component so Kruskal can tell an edge
that merges two trees from one that would close a cycle.

`find` compresses paths; `union` simply hangs one root under the other
(no rank / size balancing).
"""

from typing import Dict, List


class DisjointSet:

    def __init__(self, size: int):
        self.parent: List[int] = list(range(size))

    def find(self, x: int) -> int:
        root = x
        while self.parent[root] != root:
            root = self.parent[root]
        # second pass: point everything on the walk straight at the root
        while self.parent[x] != root:
            self.parent[x], x = root, self.parent[x]
        return root

    def union(self, a: int, b: int) -> bool:
        """Attach a's root under b's root.  False if already in one set."""
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return False
        self.parent[ra] = rb
        return True

    def components(self) -> int:
        return sum(1 for i, p in enumerate(self.parent) if i == p)

    def groups(self) -> Dict[int, List[int]]:
        out: Dict[int, List[int]] = {}
        for i in range(len(self.parent)):
            out.setdefault(self.find(i), []).append(i)
        return out

    def __len__(self) -> int:
        return len(self.parent)

    def __repr__(self) -> str:
        return f"DisjointSet(size={len(self.parent)}, components={self.components()})"
