"""Label-permutation null model for friend-of-friend positive closure.

Each trial shuffles the observed label vector across vertices (a relabeling
that keeps every category's frequency) and recomputes the closure rate on the
unchanged graph. The observed rate is then judged against the mean and sample
standard deviation of the trial rates.

Trials whose permuted labels produce no qualifying wedge have no closure rate.
They are dropped before the mean and standard deviation are taken. When no
trial yields a rate (including trial_count == 0) the baseline is undefined
(None).
"""

from __future__ import annotations

import os
import random
import statistics
from dataclasses import dataclass
from multiprocessing import Pool
from typing import Callable, List, Sequence

from netbalance.algorithms.closure import wedge_closure
from netbalance.utils.adjacency import AdjacencyView
from netbalance.utils.randomize import draw_trial_seeds, permute_labels

__all__ = [
    "BaselineSummary",
    "closure_trial",
    "sample_closure_rates",
    "parallel_sample_closure_rates",
    "summarize_baseline",
]


@dataclass(frozen=True)
class BaselineSummary:
    mean: float | None
    std: float | None
    trials: int
    defined: int  # trials that produced a closure rate

    @property
    def undefined(self) -> int:
        return self.trials - self.defined


def closure_trial(
    adjacency: AdjacencyView, labels: Sequence[int], trial_seed: int
) -> float | None:
    """Closure rate for one shuffled copy of ``labels``; None if no wedge qualifies."""
    permuted = permute_labels(labels, random.Random(trial_seed))
    return wedge_closure(adjacency, permuted).rate


def _closure_trial_chunk(
    adjacency: AdjacencyView, labels: Sequence[int], trial_seeds: Sequence[int]
) -> List[float | None]:
    return [closure_trial(adjacency, labels, s) for s in trial_seeds]


def _closure_trial_chunk_star(args) -> List[float | None]:
    return _closure_trial_chunk(*args)


def sample_closure_rates(
    adjacency: AdjacencyView,
    labels: Sequence[int],
    trial_count: int = 100,
    seed: int | None = None,
) -> List[float | None]:
    """Run the permutation trials sequentially, returning one observation per trial."""
    trial_seeds = draw_trial_seeds(trial_count, seed)
    return _closure_trial_chunk(adjacency, labels, trial_seeds)


def parallel_sample_closure_rates(
    adjacency: AdjacencyView,
    labels: Sequence[int],
    trial_count: int = 100,
    seed: int | None = None,
    num_cores: int | None = None,
    progress_callback: Callable[[int, int], None] | None = None,
) -> List[float | None]:
    """Distribute permutation trials across worker processes.

    Trial seeds are drawn up front from ``seed``, so the returned observations
    (in trial order) match ``sample_closure_rates`` exactly.

    Args:
        adjacency: graph view shared read-only by all workers
        labels: original label vector (never mutated)
        trial_count: number of permutations
        seed: master seed for the per-trial generators
        num_cores: worker processes (default: cpu_count - 2)
        progress_callback: optional function(completed_chunks, total_chunks)
    """
    if num_cores is None:
        num_cores = max(1, (os.cpu_count() or 4) - 2)

    trial_seeds = draw_trial_seeds(trial_count, seed)

    # Too few trials to pay for process start-up
    if num_cores <= 1 or trial_count < num_cores * 2:
        return _closure_trial_chunk(adjacency, labels, trial_seeds)

    # 4x more chunks than cores so faster workers pick up the slack
    num_chunks = min(num_cores * 4, trial_count)
    chunk_size = max(1, (trial_count + num_chunks - 1) // num_chunks)
    seed_chunks = [
        trial_seeds[i : i + chunk_size] for i in range(0, trial_count, chunk_size)
    ]
    labels = list(labels)

    rates: List[float | None] = []
    with Pool(processes=num_cores) as pool:
        worker_args = [(adjacency, labels, chunk) for chunk in seed_chunks]
        # imap keeps chunk order, so rates stay in trial order
        for completed, chunk_rates in enumerate(
            pool.imap(_closure_trial_chunk_star, worker_args), start=1
        ):
            rates.extend(chunk_rates)
            if progress_callback is not None:
                progress_callback(completed, len(seed_chunks))
    return rates


def summarize_baseline(rates: Sequence[float | None]) -> BaselineSummary:
    """Mean and sample standard deviation over the defined observations."""
    defined = [r for r in rates if r is not None]
    if not defined:
        return BaselineSummary(mean=None, std=None, trials=len(rates), defined=0)
    mean = statistics.mean(defined)
    # stdev uses N-1; a single observation has no spread estimate
    std = statistics.stdev(defined) if len(defined) > 1 else None
    return BaselineSummary(mean=mean, std=std, trials=len(rates), defined=len(defined))
