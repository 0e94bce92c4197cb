"""Plain-text rendering of the analysis results.

Undefined statistics (None) are shown as ``undefined`` so they are never read
as a real zero.
"""

from __future__ import annotations

from typing import List, Sequence

from netbalance.algorithms.balance import BalanceReport
from netbalance.utils.homophily import HomophilySummary


def fmt_stat(value: float | None, digits: int = 4) -> str:
    if value is None:
        return "undefined"
    return f"{value:.{digits}f}"


def format_balance_report(report: BalanceReport) -> str:
    lines: List[str] = [
        "====== STRUCTURAL BALANCE SUMMARY ======",
        f"Triangles (closed triads):            {report.triangles}",
        f"Balanced triads ratio:                {fmt_stat(report.balance_ratio)}",
    ]
    if report.triad_census:
        census = "  ".join(f"{k}={v}" for k, v in report.triad_census.items())
        lines.append(f"Triad sign census:                    {census}")
    lines += [
        "",
        "Friend-of-friend positive closure:",
        f"  Qualifying wedges (A-B, A-C +pos):  {report.wedges}",
        f"  Closed positive wedges (B-C +pos):  {report.closed_wedges}",
        f"  Closure rate (observed):            {fmt_stat(report.closure_rate)}",
        "",
        f"Label-permutation baseline ({report.baseline_defined}/{report.trials} trials defined):",
        f"  Baseline mean:                      {fmt_stat(report.baseline_mean)}",
        f"  Baseline std:                       {fmt_stat(report.baseline_std)}",
        f"  Lift (observed / baseline):         {fmt_stat(report.lift)}",
        f"  Z-score:                            {fmt_stat(report.z_score, digits=2)}",
    ]
    return "\n".join(lines)


def format_homophily_summary(
    summary: HomophilySummary, levels: Sequence[str] | None = None
) -> str:
    lines: List[str] = [
        "====== HOMOPHILY SUMMARY ======",
        f"Same-label edge share (observed):     {fmt_stat(summary.edge_homophily)}",
        f"Random-mixing baseline (sum p_k^2):   {fmt_stat(summary.chance)}",
        f"Observed / baseline:                  {fmt_stat(summary.ratio)}",
        f"Categorical assortativity r:          {fmt_stat(summary.assortativity)}",
        f"Node homophily mean / median:         "
        f"{fmt_stat(summary.node_homophily_mean)} / {fmt_stat(summary.node_homophily_median)}",
        "",
        "Per category (frequency, internal edge share):",
    ]
    for k, freq in summary.frequencies.items():
        name = levels[k - 1] if levels is not None else str(k)
        lines.append(f"  {name:<24} {freq:.4f}  {fmt_stat(summary.per_category.get(k))}")
    return "\n".join(lines)


def format_bridge_summary(
    communities: int,
    bridges: int,
    edges: int,
    mean_betweenness: float | None,
    max_betweenness: float | None,
) -> str:
    return "\n".join(
        [
            "====== BRIDGES SUMMARY ======",
            f"Communities:                          {communities}",
            f"Bridge edges / edges:                 {bridges} / {edges}",
            f"Edge betweenness mean / max:          "
            f"{fmt_stat(mean_betweenness)} / {fmt_stat(max_betweenness)}",
        ]
    )
