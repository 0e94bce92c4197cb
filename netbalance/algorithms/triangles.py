"""Signed triangle enumeration and structural-balance ratio.

Each edge of a labeled graph gets a sign: +1 when both endpoints share a label,
-1 otherwise. A triangle (triad) is balanced when the product of its three
signs is positive, i.e. it has zero or two negative edges (Heider / Cartwright-
Harary balance).

Enumeration follows the classic ordered-neighborhood scheme:

    for u in V (ascending):
        for v in N(u) with v > u:
            for w in N(u) ∩ N(v) with w > v:
                emit (u, v, w)

The intersection is a two-pointer merge over the sorted neighbor tuples, so each
(u, v) step costs O(deg(u) + deg(v)) and every triangle is produced exactly once.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, NamedTuple, Sequence, Tuple

from netbalance.utils.adjacency import AdjacencyView

__all__ = [
    "Triad",
    "SIGN_CONFIGURATIONS",
    "edge_sign",
    "enumerate_triads",
    "count_triangles",
    "is_balanced",
    "count_balanced",
    "balance_ratio",
    "sign_census",
]


Signs = Tuple[int, int, int]


class Triad(NamedTuple):
    u: int
    v: int
    w: int
    signs: Signs  # (sign(u,v), sign(v,w), sign(u,w))


# Keyed by the number of negative edges in the triad.
SIGN_CONFIGURATIONS: Tuple[str, ...] = ("+++", "++-", "+--", "---")


def edge_sign(x: int, y: int, labels: Sequence[int]) -> int:
    return 1 if labels[x - 1] == labels[y - 1] else -1


def _common_neighbors_above(
    nu: Tuple[int, ...], nv: Tuple[int, ...], u: int, v: int
) -> Iterator[int]:
    """Merge two sorted neighbor tuples, yielding common neighbors w > v."""
    i = j = 0
    len_u, len_v = len(nu), len(nv)
    while i < len_u and j < len_v:
        wu = nu[i]
        wv = nv[j]
        if wu == v:
            i += 1
            continue
        if wv == u:
            j += 1
            continue
        if wu == wv:
            if wu > v:
                yield wu
            i += 1
            j += 1
        elif wu < wv:
            i += 1
        else:
            j += 1


def _iter_triangles(adjacency: AdjacencyView) -> Iterator[Tuple[int, int, int]]:
    for u in adjacency.vertices():
        nu = adjacency.neighbors(u)
        for v in nu:
            if v <= u:
                continue
            for w in _common_neighbors_above(nu, adjacency.neighbors(v), u, v):
                yield u, v, w


def enumerate_triads(adjacency: AdjacencyView, labels: Sequence[int]) -> Iterator[Triad]:
    """Yield every triangle once, as (u, v, w) with u < v < w, with its edge signs.

    ``labels[v - 1]`` is the category code of vertex v. Graphs with no
    triangles (including graphs with fewer than three vertices) yield nothing.
    """
    for u, v, w in _iter_triangles(adjacency):
        lu, lv, lw = labels[u - 1], labels[v - 1], labels[w - 1]
        yield Triad(
            u,
            v,
            w,
            (
                1 if lu == lv else -1,
                1 if lv == lw else -1,
                1 if lu == lw else -1,
            ),
        )


def count_triangles(adjacency: AdjacencyView) -> int:
    return sum(1 for _ in _iter_triangles(adjacency))


def _signs_of(triad) -> Signs:
    return triad.signs if isinstance(triad, Triad) else triad


def is_balanced(signs: Signs) -> bool:
    a, b, c = signs
    return a * b * c > 0


def count_balanced(triads: Iterable) -> Tuple[int, int]:
    """Return (balanced, total) for a stream of triads or bare sign tuples."""
    balanced = 0
    total = 0
    for t in triads:
        total += 1
        if is_balanced(_signs_of(t)):
            balanced += 1
    return balanced, total


def balance_ratio(triads: Iterable) -> float | None:
    """Fraction of balanced triads, or None when there are no triads at all.

    None keeps "no triangles" distinct from a fully unbalanced network (0.0).
    """
    balanced, total = count_balanced(triads)
    if total == 0:
        return None
    return balanced / total


def sign_census(triads: Iterable) -> Dict[str, int]:
    census = {label: 0 for label in SIGN_CONFIGURATIONS}
    for t in triads:
        negatives = sum(1 for s in _signs_of(t) if s < 0)
        census[SIGN_CONFIGURATIONS[negatives]] += 1
    return census
