from __future__ import annotations

from typing import Dict

import networkx as nx


def describe_graph(G: nx.Graph) -> Dict[str, object]:
    """Basic size, closure and bridge statistics of an undirected graph."""
    n = G.number_of_nodes()
    m = G.number_of_edges()
    n_bridges = sum(1 for _ in nx.bridges(G)) if m else 0
    return {
        "n": n,
        "m": m,
        "density": (2 * m / (n * (n - 1))) if n > 1 else 0.0,
        # fraction of connected triples that are closed
        "transitivity": nx.transitivity(G),
        "average_clustering": nx.average_clustering(G) if n else 0.0,
        "bridges": n_bridges,
        "bridge_percentage": (n_bridges / m * 100) if m else None,
        "components": nx.number_connected_components(G) if n else 0,
    }
