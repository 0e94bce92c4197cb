from __future__ import annotations

import argparse
import json
import time
from dataclasses import asdict
from pathlib import Path
from typing import Dict

import pandas as pd

from netbalance.algorithms.balance import BalanceReport, analyze
from netbalance.config import (
    DATASETS,
    DEFAULT_SEED,
    DEFAULT_TOP_N,
    DEFAULT_TRIALS,
    resolve_data_paths,
)
from netbalance.utils.bridges import (
    bridge_edges,
    bridging_nodes,
    community_labels,
    edge_betweenness,
    resolve_community_method,
)
from netbalance.utils.describe import describe_graph
from netbalance.utils.homophily import categorical_mixing_matrix, summarize_homophily
from netbalance.utils.io import LabeledGraph, preprocess
from netbalance.utils.report import (
    fmt_stat,
    format_balance_report,
    format_bridge_summary,
    format_homophily_summary,
)
from netbalance.utils.visualize import plot_baseline_distribution, plot_mixing_matrix


def _save_balance_outputs(report: BalanceReport, subdir: Path) -> Dict[str, Path]:
    report_path = subdir / "report.json"
    payload = report.to_dict()
    payload.pop("baseline_rates", None)
    with open(report_path, "w") as f:
        json.dump(payload, f, indent=2)

    baseline_path = subdir / "baseline.csv"
    pd.DataFrame(
        {
            "trial": list(range(1, len(report.baseline_rates) + 1)),
            "closure_rate": list(report.baseline_rates),
        }
    ).to_csv(baseline_path, index=False)
    return {"report": report_path, "baseline": baseline_path}


def run_structural_balance(
    dataset: str,
    data_dir: Path,
    output_dir: Path,
    trials: int = DEFAULT_TRIALS,
    seed: int | None = DEFAULT_SEED,
    max_workers: int = 1,
    with_homophily: bool = True,
    with_bridges: bool = False,
    top_n: int = DEFAULT_TOP_N,
    emit_plot: bool = True,
) -> Dict[str, object]:
    """Load a labeled dataset, run the balance analysis and persist artifacts.

    Args:
        dataset: Dataset key from config
        data_dir: Directory containing the edge and target CSVs
        output_dir: Root results directory (results land in output_dir/dataset)
        trials: Label permutations for the closure baseline
        seed: Seed for the permutations (also used for community detection)
        max_workers: Worker processes for the permutation trials
        with_homophily: Also compute the homophily summary
        with_bridges: Also compute communities, betweenness and bridging nodes (slow)
        top_n: Number of bridging nodes to keep
        emit_plot: Write the baseline histogram and mixing-matrix heatmap
    """
    cfg = DATASETS.get(dataset)
    if cfg is None:
        raise SystemExit(f"Unknown dataset key {dataset}")
    edges_path, targets_path = resolve_data_paths(data_dir, dataset)

    t0 = time.time()
    data: LabeledGraph = preprocess(edges_path, targets_path, label_column=cfg.label_column)
    G = data.graph
    enc = data.encoding
    print(
        f"[phase.load] {dataset}: n={G.number_of_nodes()} m={G.number_of_edges()} "
        f"K={enc.num_categories} took {time.time() - t0:.2f}s",
        flush=True,
    )

    subdir = output_dir / dataset
    subdir.mkdir(parents=True, exist_ok=True)

    stats = describe_graph(G)
    print(
        f"[phase.describe] transitivity={stats['transitivity']:.4f} "
        f"bridges={stats['bridges']} components={stats['components']}",
        flush=True,
    )

    t1 = time.time()
    report = analyze(
        G,
        enc.codes,
        trial_count=trials,
        rng_seed=seed,
        num_categories=enc.num_categories,
        max_workers=max_workers,
    )
    print(
        f"[phase.balance] triangles={report.triangles} wedges={report.wedges} "
        f"trials={trials} took {time.time() - t1:.2f}s",
        flush=True,
    )
    if report.trials and report.baseline_defined < report.trials:
        print(
            f"[WARN] {report.trials - report.baseline_defined} of {report.trials} permutations "
            f"had no qualifying wedge and were excluded from the baseline",
            flush=True,
        )
    paths = _save_balance_outputs(report, subdir)

    summary_blocks = [format_balance_report(report)]
    print("\n" + summary_blocks[0] + "\n", flush=True)

    if with_homophily:
        homophily = summarize_homophily(G, enc.codes, enc.num_categories)
        block = format_homophily_summary(homophily, enc.levels)
        summary_blocks.append(block)
        print(block + "\n", flush=True)
        homophily_path = subdir / "homophily.json"
        payload = asdict(homophily)
        payload["levels"] = enc.levels
        with open(homophily_path, "w") as f:
            json.dump(payload, f, indent=2)
        paths["homophily"] = homophily_path
        if emit_plot:
            heatmap_path = subdir / "mixing_matrix.png"
            plot_mixing_matrix(
                categorical_mixing_matrix(G, enc.codes, enc.num_categories),
                enc.levels,
                title=f"{dataset}: label mixing matrix",
                out_path=heatmap_path,
            )
            paths["mixing_plot"] = heatmap_path

    if with_bridges:
        t2 = time.time()
        method = resolve_community_method()
        communities = community_labels(G, method, seed=seed)
        top = bridging_nodes(G, communities, top_n=top_n)
        meta_cols = [c for c in ("page_name", "page_type") if c in data.targets.columns]
        if meta_cols:
            id_col = "id" if "id" in data.targets.columns else data.targets.columns[0]
            meta = data.targets[[id_col] + meta_cols].copy()
            meta["node"] = meta[id_col].map(data.id2idx)
            top = top.merge(meta[["node"] + meta_cols], on="node", how="left")
        bridging_path = subdir / "bridging_nodes.csv"
        top.to_csv(bridging_path, index=False)
        paths["bridging_nodes"] = bridging_path
        eb = edge_betweenness(G).sort_values("betweenness", ascending=False)
        eb_path = subdir / "edge_betweenness.csv"
        eb.to_csv(eb_path, index=False)
        paths["edge_betweenness"] = eb_path
        be = bridge_edges(G)
        be_path = subdir / "bridge_edges.csv"
        be.to_csv(be_path, index=False)
        paths["bridge_edges"] = be_path

        eb_mean = float(eb["betweenness"].mean()) if len(eb) else None
        eb_max = float(eb["betweenness"].max()) if len(eb) else None
        n_communities = max(communities, default=0)
        print(
            f"[phase.bridges] communities={n_communities} edges={len(eb)} "
            f"bridge_edges={len(be)} betweenness_mean={fmt_stat(eb_mean)} "
            f"betweenness_max={fmt_stat(eb_max)} took {time.time() - t2:.2f}s",
            flush=True,
        )
        block = format_bridge_summary(n_communities, len(be), len(eb), eb_mean, eb_max)
        summary_blocks.append(block)
        print(block + "\n", flush=True)

    if emit_plot:
        plot_path = subdir / "baseline_distribution.png"
        if plot_baseline_distribution(
            report.baseline_rates,
            report.closure_rate,
            title=f"{dataset}: closure rate under label permutation ({trials} trials)",
            out_path=plot_path,
        ):
            paths["baseline_plot"] = plot_path

    summary_path = subdir / "summary.txt"
    with open(summary_path, "w") as fsum:
        fsum.write(f"Dataset={dataset} ({cfg.description})\n")
        fsum.write(f"trials={trials} seed={seed}\n\n")
        fsum.write("\n\n".join(summary_blocks) + "\n")
    paths["summary"] = summary_path

    return {"report": report, "describe": stats, "paths": paths}


def main():
    parser = argparse.ArgumentParser(
        description="Structural balance and friend-of-friend closure on a labeled network"
    )
    parser.add_argument("--data-dir", type=Path, default=Path("data"))
    parser.add_argument("--dataset", type=str, required=True, choices=sorted(DATASETS.keys()))
    parser.add_argument("--output-dir", type=Path, default=Path("results"))
    parser.add_argument(
        "--trials",
        type=int,
        default=DEFAULT_TRIALS,
        help=f"Label permutations for the closure baseline (default: {DEFAULT_TRIALS})",
    )
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED)
    parser.add_argument("--max-workers", type=int, default=1, help="Worker processes for the permutation trials")
    parser.add_argument("--skip-homophily", action="store_true")
    parser.add_argument("--bridges", action="store_true", help="Also rank bridging nodes and edges (betweenness is slow)")
    parser.add_argument("--top-n", type=int, default=DEFAULT_TOP_N)
    parser.add_argument("--no-plot", action="store_true")

    args = parser.parse_args()
    args.output_dir = args.output_dir.resolve()
    args.output_dir.mkdir(parents=True, exist_ok=True)

    try:
        result = run_structural_balance(
            dataset=args.dataset,
            data_dir=args.data_dir,
            output_dir=args.output_dir,
            trials=args.trials,
            seed=args.seed,
            max_workers=args.max_workers,
            with_homophily=not args.skip_homophily,
            with_bridges=args.bridges,
            top_n=args.top_n,
            emit_plot=not args.no_plot,
        )
    except (FileNotFoundError, KeyError) as e:
        print(f"[ERROR] {e}", flush=True)
        raise SystemExit(1)
    print(f"Saved structural balance results: {result['paths']['summary'].parent}")


if __name__ == "__main__":
    main()
