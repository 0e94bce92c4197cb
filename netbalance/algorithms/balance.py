"""Structural balance summary: signed triangles plus friend-of-friend closure.

``analyze`` is the single entry point used by the experiment scripts. It is a
pure computation given the seed: nothing is printed or written, and every
statistic that cannot be computed (no triangles, no wedges, no baseline, zero
spread) is reported as None rather than NaN or 0.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Dict, Sequence, Tuple

from netbalance.algorithms.closure import wedge_closure
from netbalance.algorithms.null_model import (
    parallel_sample_closure_rates,
    sample_closure_rates,
    summarize_baseline,
)
from netbalance.algorithms.triangles import (
    balance_ratio,
    enumerate_triads,
    sign_census,
)
from netbalance.config import DEFAULT_TRIALS
from netbalance.utils.adjacency import as_adjacency, validate_labels

__all__ = ["BalanceReport", "lift", "z_score", "analyze"]


@dataclass(frozen=True)
class BalanceReport:
    triangles: int
    balance_ratio: float | None
    wedges: int
    closed_wedges: int
    closure_rate: float | None
    baseline_mean: float | None
    baseline_std: float | None
    lift: float | None
    z_score: float | None
    trials: int = 0
    baseline_defined: int = 0
    triad_census: Dict[str, int] = field(default_factory=dict)
    baseline_rates: Tuple[float | None, ...] = field(default=(), repr=False)

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


def lift(observed: float | None, baseline_mean: float | None) -> float | None:
    if observed is None or baseline_mean is None or baseline_mean == 0:
        return None
    return observed / baseline_mean


def z_score(
    observed: float | None,
    baseline_mean: float | None,
    baseline_std: float | None,
) -> float | None:
    if observed is None or baseline_mean is None or baseline_std is None:
        return None
    if baseline_std == 0:
        return None
    return (observed - baseline_mean) / baseline_std


def analyze(
    graph,
    labels: Sequence[int],
    trial_count: int = DEFAULT_TRIALS,
    rng_seed: int | None = None,
    num_categories: int | None = None,
    max_workers: int = 1,
) -> BalanceReport:
    """Run the full structural balance analysis.

    Args:
        graph: AdjacencyView, or an undirected networkx.Graph on nodes 1..N
        labels: category code per vertex, ``labels[v - 1]`` for vertex v, codes in 1..K
        trial_count: number of label permutations for the closure baseline
        rng_seed: seed for the permutation trials (None: nondeterministic)
        num_categories: K, enables the upper-bound check on label codes
        max_workers: worker processes for the permutation trials

    Raises:
        AdjacencyError: graph violates the adjacency preconditions
        LabelError: label vector does not fit the graph
        ValueError: negative trial_count
    """
    if trial_count < 0:
        raise ValueError(f"trial_count must be >= 0, got {trial_count}")
    adjacency = as_adjacency(graph)
    codes = validate_labels(labels, adjacency.vertex_count(), num_categories)

    triads = [t.signs for t in enumerate_triads(adjacency, codes)]
    b_ratio = balance_ratio(triads)

    observed = wedge_closure(adjacency, codes)

    if max_workers > 1:
        rates = parallel_sample_closure_rates(
            adjacency, codes, trial_count, seed=rng_seed, num_cores=max_workers
        )
    else:
        rates = sample_closure_rates(adjacency, codes, trial_count, seed=rng_seed)
    baseline = summarize_baseline(rates)

    return BalanceReport(
        triangles=len(triads),
        balance_ratio=b_ratio,
        wedges=observed.wedges,
        closed_wedges=observed.closed,
        closure_rate=observed.rate,
        baseline_mean=baseline.mean,
        baseline_std=baseline.std,
        lift=lift(observed.rate, baseline.mean),
        z_score=z_score(observed.rate, baseline.mean, baseline.std),
        trials=baseline.trials,
        baseline_defined=baseline.defined,
        triad_census=sign_census(triads),
        baseline_rates=tuple(rates),
    )
