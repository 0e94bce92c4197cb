from __future__ import annotations

from pathlib import Path
from typing import Sequence, Tuple

import matplotlib.pyplot as plt
import pandas as pd


PALETTE = [
    "#4C78A8",
    "#F58518",
    "#E45756",
    "#72B7B2",
    "#54A24B",
]


def plot_baseline_distribution(
    rates: Sequence[float | None],
    observed: float | None,
    title: str,
    out_path: Path,
    bins: int = 30,
    figsize: Tuple[int, int] = (8, 5),
) -> bool:
    """Histogram of null-model closure rates with the observed rate marked.

    Returns False (and writes nothing) when no trial produced a rate.
    """
    values = [r for r in rates if r is not None]
    if not values:
        return False
    plt.figure(figsize=figsize)
    plt.hist(values, bins=bins, color=PALETTE[0], alpha=0.85, label="Permuted labels")
    if observed is not None:
        plt.axvline(observed, color=PALETTE[2], linewidth=2, label=f"Observed = {observed:.4f}")
    plt.xlabel("Friend-of-friend positive closure rate")
    plt.ylabel("Trials")
    plt.title(title)
    plt.legend()
    plt.tight_layout()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(out_path, dpi=160)
    plt.close()
    return True


def plot_mixing_matrix(
    mixing: pd.DataFrame,
    levels: Sequence[str],
    title: str,
    out_path: Path,
    figsize: Tuple[int, int] = (7, 6),
) -> None:
    if mixing.empty:
        return
    plt.figure(figsize=figsize)
    plt.imshow(mixing.to_numpy(), cmap="Blues")
    plt.colorbar(label="Share of edge ends")
    ticks = list(range(len(levels)))
    plt.xticks(ticks, levels, rotation=45, ha="right")
    plt.yticks(ticks, levels)
    for i in ticks:
        for j in ticks:
            plt.text(j, i, f"{mixing.iat[i, j]:.3f}", ha="center", va="center", fontsize=8)
    plt.title(title)
    plt.tight_layout()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(out_path, dpi=160)
    plt.close()
