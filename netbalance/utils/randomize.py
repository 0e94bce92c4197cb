from __future__ import annotations

from collections import Counter
from typing import Dict, List, Sequence
import random


def permute_labels(labels: Sequence[int], rng: random.Random) -> List[int]:
    """Return a uniformly random relabeling of the vertices.

    The existing label values are shuffled across vertices (Fisher-Yates via
    ``rng.shuffle``), so every category keeps exactly its original count. The
    input sequence is never modified.
    """
    shuffled = list(labels)
    rng.shuffle(shuffled)
    return shuffled


def label_counts(labels: Sequence[int]) -> Dict[int, int]:
    return dict(Counter(labels))


def draw_trial_seeds(trial_count: int, seed: int | None = None) -> List[int]:
    """Draw one independent seed per trial from a master generator.

    Seeding each trial separately keeps the sequence of null-model draws the
    same no matter how trials are split across worker processes.
    """
    if trial_count < 0:
        raise ValueError(f"trial_count must be >= 0, got {trial_count}")
    master = random.Random(seed)
    return [master.getrandbits(63) for _ in range(trial_count)]
