"""Label homophily: mixing matrix, Newman assortativity and node-level shares.

Labels are category codes 1..K indexed by vertex (``labels[v - 1]``), the same
convention as the balance algorithms.
"""

from __future__ import annotations

import statistics
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Sequence

import networkx as nx
import pandas as pd


@dataclass(frozen=True)
class HomophilySummary:
    edge_homophily: float | None  # observed share of same-label edges
    chance: float  # sum of p_k^2, random-mixing baseline
    ratio: float | None
    assortativity: float
    node_homophily_mean: float | None
    node_homophily_median: float | None
    per_category: Dict[int, float | None]  # share of a category's edge ends that stay inside it
    frequencies: Dict[int, float]


def categorical_mixing_matrix(
    G: nx.Graph, labels: Sequence[int], num_categories: int
) -> pd.DataFrame:
    """Symmetric K x K edge-end mixing matrix normalized to sum 1.

    A same-label edge adds 2 to its diagonal cell; a cross edge adds 1 to each
    off-diagonal cell. With no edges the zero matrix is returned.
    """
    cats = list(range(1, num_categories + 1))
    counts = {(a, b): 0.0 for a in cats for b in cats}
    for u, v in G.edges():
        lu = labels[u - 1]
        lv = labels[v - 1]
        if lu == lv:
            counts[(lu, lv)] += 2.0
        else:
            counts[(lu, lv)] += 1.0
            counts[(lv, lu)] += 1.0
    M = pd.DataFrame(
        [[counts[(a, b)] for b in cats] for a in cats], index=cats, columns=cats
    )
    total = M.to_numpy().sum()
    return M / total if total > 0 else M


def categorical_assortativity(
    G: nx.Graph, labels: Sequence[int], num_categories: int
) -> float:
    """Newman's r = (tr e - sum a_k^2) / (1 - sum a_k^2); 0.0 when the denominator vanishes."""
    e = categorical_mixing_matrix(G, labels, num_categories)
    a = e.sum(axis=1)
    tr_e = float(sum(e.iat[i, i] for i in range(num_categories)))
    a2 = float((a**2).sum())
    denom = 1.0 - a2
    return 0.0 if denom == 0 else (tr_e - a2) / denom


def chance_homophily(labels: Sequence[int], num_categories: int) -> float:
    n = len(labels)
    if n == 0:
        return 0.0
    counts = Counter(labels)
    return sum((counts.get(k, 0) / n) ** 2 for k in range(1, num_categories + 1))


def observed_homophily(G: nx.Graph, labels: Sequence[int]) -> float | None:
    total = 0
    matching = 0
    for u, v in G.edges():
        total += 1
        if labels[u - 1] == labels[v - 1]:
            matching += 1
    return matching / total if total else None


def node_homophily(G: nx.Graph, labels: Sequence[int]) -> List[float | None]:
    """Per vertex, the share of neighbors with the same label (None if isolated)."""
    shares: List[float | None] = []
    for v in range(1, G.number_of_nodes() + 1):
        nbrs = list(G.neighbors(v))
        if not nbrs:
            shares.append(None)
            continue
        same = sum(1 for u in nbrs if labels[u - 1] == labels[v - 1])
        shares.append(same / len(nbrs))
    return shares


def summarize_homophily(
    G: nx.Graph, labels: Sequence[int], num_categories: int
) -> HomophilySummary:
    e = categorical_mixing_matrix(G, labels, num_categories)
    edge_h = observed_homophily(G, labels)
    base = chance_homophily(labels, num_categories)
    r = categorical_assortativity(G, labels, num_categories)

    shares = [h for h in node_homophily(G, labels) if h is not None]

    per_category: Dict[int, float | None] = {}
    for k in range(1, num_categories + 1):
        row = float(e.loc[k].sum())
        per_category[k] = float(e.at[k, k]) / row if row > 0 else None

    n = len(labels)
    counts = Counter(labels)
    freqs = {k: (counts.get(k, 0) / n if n else 0.0) for k in range(1, num_categories + 1)}

    return HomophilySummary(
        edge_homophily=edge_h,
        chance=base,
        ratio=(edge_h / base) if (edge_h is not None and base > 0) else None,
        assortativity=r,
        node_homophily_mean=statistics.mean(shares) if shares else None,
        node_homophily_median=statistics.median(shares) if shares else None,
        per_category=per_category,
        frequencies=freqs,
    )
