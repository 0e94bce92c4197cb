"""Read-only adjacency view and label-vector checks shared by the balance algorithms.

Vertices are dense integers 1..N. Each vertex stores its neighbors as an
ascending tuple, which lets triangle enumeration intersect neighborhoods with a
linear merge and lets ``has_edge`` use binary search.
"""

from __future__ import annotations

from bisect import bisect_left
from numbers import Integral
from typing import Iterable, List, Sequence, Tuple

import networkx as nx


class AdjacencyError(ValueError):
    """Raised when a graph does not satisfy the adjacency preconditions."""


class LabelError(ValueError):
    """Raised when a label vector does not match the graph or category range."""


class AdjacencyView:
    """Sorted neighbor lists for an undirected simple graph on vertices 1..N."""

    __slots__ = ("_neighbors", "_edge_count")

    def __init__(self, neighbor_lists: Sequence[Iterable[int]]):
        n = len(neighbor_lists)
        neighbors: List[Tuple[int, ...]] = []
        half_degree_sum = 0
        for idx, raw in enumerate(neighbor_lists):
            v = idx + 1
            nbrs = tuple(raw)
            for i, w in enumerate(nbrs):
                if not isinstance(w, Integral) or isinstance(w, bool):
                    raise AdjacencyError(f"Vertex {v}: neighbor id {w!r} is not an integer")
                if w < 1 or w > n:
                    raise AdjacencyError(f"Vertex {v}: neighbor {w} outside 1..{n}")
                if w == v:
                    raise AdjacencyError(f"Vertex {v}: self-loops are not allowed")
                if i > 0 and nbrs[i - 1] >= w:
                    raise AdjacencyError(
                        f"Vertex {v}: neighbors must be strictly ascending, got {nbrs[i - 1]} before {w}"
                    )
            neighbors.append(tuple(int(w) for w in nbrs))
            half_degree_sum += len(nbrs)
        self._neighbors = neighbors

        # Symmetry: every listed edge must appear in both endpoint lists.
        for idx, nbrs in enumerate(neighbors):
            v = idx + 1
            for w in nbrs:
                if not self.has_edge(w, v):
                    raise AdjacencyError(f"Edge ({v}, {w}) is not symmetric")
        self._edge_count = half_degree_sum // 2

    @classmethod
    def from_networkx(cls, G: nx.Graph) -> "AdjacencyView":
        """Build a view from a NetworkX graph whose nodes are exactly 1..N."""
        if G.is_directed():
            raise AdjacencyError("Structural balance needs an undirected graph")
        if G.is_multigraph():
            raise AdjacencyError("Multigraphs are not supported")
        n = G.number_of_nodes()
        if set(G.nodes()) != set(range(1, n + 1)):
            raise AdjacencyError("Graph nodes must be the dense integer ids 1..N")
        return cls([sorted(G.neighbors(v)) for v in range(1, n + 1)])

    def vertex_count(self) -> int:
        return len(self._neighbors)

    def edge_count(self) -> int:
        return self._edge_count

    def vertices(self) -> range:
        return range(1, len(self._neighbors) + 1)

    def neighbors(self, v: int) -> Tuple[int, ...]:
        return self._neighbors[v - 1]

    def degree(self, v: int) -> int:
        return len(self._neighbors[v - 1])

    def has_edge(self, x: int, y: int) -> bool:
        nbrs = self._neighbors[x - 1]
        i = bisect_left(nbrs, y)
        return i < len(nbrs) and nbrs[i] == y

    def to_networkx(self) -> nx.Graph:
        G = nx.Graph()
        G.add_nodes_from(self.vertices())
        for u in self.vertices():
            G.add_edges_from((u, v) for v in self.neighbors(u) if v > u)
        return G

    def __getstate__(self):
        return (self._neighbors, self._edge_count)

    def __setstate__(self, state):
        self._neighbors, self._edge_count = state

    def __repr__(self) -> str:
        return f"AdjacencyView(n={self.vertex_count()}, m={self.edge_count()})"


def as_adjacency(graph) -> AdjacencyView:
    """Accept either an AdjacencyView or a NetworkX graph on nodes 1..N."""
    if isinstance(graph, AdjacencyView):
        return graph
    if isinstance(graph, nx.Graph):
        return AdjacencyView.from_networkx(graph)
    raise TypeError(f"Unsupported graph type {type(graph).__name__}")


def validate_labels(
    labels: Sequence[int],
    vertex_count: int,
    num_categories: int | None = None,
) -> List[int]:
    """Check a label vector against the graph and return it as a list.

    Codes must be integers in 1..num_categories (or >= 1 when the number of
    categories is not given).
    """
    codes = list(labels)
    if len(codes) != vertex_count:
        raise LabelError(
            f"Label vector has length {len(codes)} but the graph has {vertex_count} vertices"
        )
    for idx, code in enumerate(codes):
        if not isinstance(code, Integral) or isinstance(code, bool):
            raise LabelError(f"Vertex {idx + 1}: label code {code!r} is not an integer")
        if code < 1 or (num_categories is not None and code > num_categories):
            upper = num_categories if num_categories is not None else "K"
            raise LabelError(f"Vertex {idx + 1}: label code {code} outside 1..{upper}")
    return [int(code) for code in codes]
