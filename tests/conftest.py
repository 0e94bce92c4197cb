from __future__ import annotations

import networkx as nx
import pytest

from netbalance.utils.adjacency import AdjacencyView


def graph_from_edges(n, edges) -> nx.Graph:
    G = nx.Graph()
    G.add_nodes_from(range(1, n + 1))
    G.add_edges_from(edges)
    return G


@pytest.fixture
def small_graph() -> nx.Graph:
    """Triangle 1-2-3 with a pendant vertex 4 on 3."""
    return graph_from_edges(4, [(1, 2), (2, 3), (1, 3), (3, 4)])


@pytest.fixture
def small_adjacency(small_graph) -> AdjacencyView:
    return AdjacencyView.from_networkx(small_graph)


@pytest.fixture
def two_triangles() -> nx.Graph:
    """Triangles {1,2,3} and {4,5,6} joined by the bridge 3-4."""
    return graph_from_edges(
        6, [(1, 2), (2, 3), (1, 3), (4, 5), (5, 6), (4, 6), (3, 4)]
    )


@pytest.fixture
def matched_cliques() -> nx.Graph:
    """Two 5-cliques (1..5 and 6..10) joined by the perfect matching i <-> i+5."""
    G = nx.Graph()
    G.add_nodes_from(range(1, 11))
    for block in (range(1, 6), range(6, 11)):
        members = list(block)
        for i, u in enumerate(members):
            for v in members[i + 1 :]:
                G.add_edge(u, v)
    for i in range(1, 6):
        G.add_edge(i, i + 5)
    return G
