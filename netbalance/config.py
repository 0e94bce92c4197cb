from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Tuple


DEFAULT_TRIALS = 100
DEFAULT_SEED = 42
DEFAULT_TOP_N = 10
UNKNOWN_LABEL = "Unknown"


@dataclass(frozen=True)
class DatasetConfig:
    edges_filename: str
    targets_filename: str
    description: str
    label_column: str | None = None  # None: resolve from the target table's columns


DATASETS: Dict[str, DatasetConfig] = {
    "facebook": DatasetConfig(
        edges_filename="musae_facebook_edges.csv",
        targets_filename="musae_facebook_target.csv",
        description="Facebook page-page network, labeled by page_type (MUSAE)",
        label_column="page_type",
    ),
    "github": DatasetConfig(
        edges_filename="musae_git_edges.csv",
        targets_filename="musae_git_target.csv",
        description="GitHub developer network, labeled by ml_target (MUSAE)",
        label_column="ml_target",
    ),
}


def resolve_data_paths(data_dir: Path, dataset_key: str) -> Tuple[Path, Path]:
    if dataset_key not in DATASETS:
        raise KeyError(
            f"Unknown dataset '{dataset_key}'. Available: {sorted(DATASETS.keys())}"
        )
    cfg = DATASETS[dataset_key]
    base = Path(data_dir)
    return (base / cfg.edges_filename).resolve(), (base / cfg.targets_filename).resolve()
