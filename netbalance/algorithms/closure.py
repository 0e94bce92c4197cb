"""Friend-of-friend positive closure.

A qualifying wedge is a center ``a`` with two neighbors ``b`` and ``c`` where all
three share a label (both ties are positive). The wedge is closed when the edge
b-c exists and is itself positive. The closure rate is closed / wedges.

Cost is O(sum of deg(a)^2) in the worst case, so high-degree hubs dominate the
running time. Only same-label neighbors of each center are paired.
"""

from __future__ import annotations

from itertools import combinations
from typing import NamedTuple, Sequence

from netbalance.utils.adjacency import AdjacencyView

__all__ = ["ClosureResult", "wedge_closure"]


class ClosureResult(NamedTuple):
    rate: float | None  # None when there are no qualifying wedges
    closed: int
    wedges: int


def wedge_closure(adjacency: AdjacencyView, labels: Sequence[int]) -> ClosureResult:
    """Count same-label wedges and how many of them close positively.

    ``labels[v - 1]`` is the category code of vertex v. Any label vector of the
    right length works, so the null model can pass permuted copies.
    """
    wedges = 0
    closed = 0
    for a in adjacency.vertices():
        la = labels[a - 1]
        same = [b for b in adjacency.neighbors(a) if labels[b - 1] == la]
        m = len(same)
        if m < 2:
            continue
        wedges += m * (m - 1) // 2
        for b, c in combinations(same, 2):
            # b and c both carry label la here, so a present edge is positive.
            if adjacency.has_edge(b, c):
                closed += 1
    if wedges == 0:
        return ClosureResult(None, 0, 0)
    return ClosureResult(closed / wedges, closed, wedges)
