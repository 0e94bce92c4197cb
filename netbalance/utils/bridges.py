"""Structural bridges: bridge edges, edge betweenness and cross-community connectors."""

from __future__ import annotations

from typing import Callable, Iterable, List, Sequence, Set

import networkx as nx
import pandas as pd


CommunityMethod = Callable[..., Iterable[Set[int]]]


def resolve_community_method() -> CommunityMethod:
    """Pick the community detection routine once, at startup.

    Louvain is used when the installed NetworkX provides it; older releases
    fall back to asynchronous label propagation.
    """
    louvain = getattr(nx.community, "louvain_communities", None)
    if louvain is not None:
        return louvain
    print("[WARN] louvain_communities not available; using label propagation", flush=True)
    return nx.community.asyn_lpa_communities


def community_labels(
    G: nx.Graph, method: CommunityMethod, seed: int | None = None
) -> List[int]:
    """Community code per vertex (index v - 1), codes 1..C, largest community first."""
    communities = sorted(method(G, seed=seed), key=lambda c: (-len(c), min(c)))
    codes = [0] * G.number_of_nodes()
    for code, members in enumerate(communities, start=1):
        for v in members:
            codes[v - 1] = code
    return codes


def edge_betweenness(G: nx.Graph) -> pd.DataFrame:
    bc = nx.edge_betweenness_centrality(G)
    rows = [{"src": u, "dst": v, "betweenness": score} for (u, v), score in bc.items()]
    return pd.DataFrame(rows, columns=["src", "dst", "betweenness"])


def bridge_edges(G: nx.Graph) -> pd.DataFrame:
    """Edges whose removal increases the number of connected components."""
    rows = [{"src": u, "dst": v} for u, v in nx.bridges(G)]
    return pd.DataFrame(rows, columns=["src", "dst"])


def participation_coefficients(G: nx.Graph, communities: Sequence[int]) -> List[float]:
    """1 - sum_c (k_ic / k_i)^2 per vertex; isolated vertices score 1.0."""
    scores: List[float] = []
    for v in range(1, G.number_of_nodes() + 1):
        per_comm: dict = {}
        for u in G.neighbors(v):
            c = communities[u - 1]
            per_comm[c] = per_comm.get(c, 0) + 1
        deg = max(G.degree(v), 1)
        scores.append(1.0 - sum((k / deg) ** 2 for k in per_comm.values()))
    return scores


def _zscore(s: pd.Series) -> pd.Series:
    std = s.std()  # sample std (ddof=1)
    if pd.isna(std) or std == 0:
        return s * 0.0
    return (s - s.mean()) / std


def bridging_nodes(
    G: nx.Graph, communities: Sequence[int], top_n: int = 10
) -> pd.DataFrame:
    """Rank vertices by z(betweenness) + z(participation).

    High betweenness together with neighbors spread over many communities
    marks a cross-community connector.
    """
    n = G.number_of_nodes()
    bc = nx.betweenness_centrality(G)
    df = pd.DataFrame(
        {
            "node": list(range(1, n + 1)),
            "betweenness": [bc[v] for v in range(1, n + 1)],
            "participation": participation_coefficients(G, communities),
        }
    )
    df["bridge_score"] = _zscore(df["betweenness"]) + _zscore(df["participation"])
    return df.sort_values("bridge_score", ascending=False).head(top_n).reset_index(drop=True)
