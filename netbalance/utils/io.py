from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple

import networkx as nx
import pandas as pd

from netbalance.config import UNKNOWN_LABEL


@dataclass(frozen=True)
class LabelEncoding:
    labels: List[str]  # label string per vertex (index v - 1)
    codes: List[int]  # category code per vertex, 1..K
    levels: List[str]  # levels[k - 1] is the name of code k

    @property
    def num_categories(self) -> int:
        return len(self.levels)


@dataclass(frozen=True)
class LabeledGraph:
    graph: nx.Graph  # nodes 1..N
    encoding: LabelEncoding
    all_ids: List[int]  # all_ids[v - 1] is the raw id of vertex v
    id2idx: Dict[int, int]
    targets: pd.DataFrame


def load_raw(edges_path: Path, targets_path: Path) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Read the edge list and node target tables (CSV, optionally compressed)."""
    edges_df = pd.read_csv(edges_path)
    targets_df = pd.read_csv(targets_path)
    return edges_df, targets_df


def resolve_edge_columns(edges_df: pd.DataFrame) -> Tuple[str, str]:
    """Pick the source/target columns: id_1/id_2, then source/target, then the first two."""
    cols = list(edges_df.columns)
    if len(cols) < 2:
        raise ValueError(f"Edge table needs at least two columns, got {cols}")
    src_col = "id_1" if "id_1" in cols else ("source" if "source" in cols else cols[0])
    dst_col = "id_2" if "id_2" in cols else ("target" if "target" in cols else cols[1])
    return src_col, dst_col


def resolve_target_columns(
    targets_df: pd.DataFrame, label_column: str | None = None
) -> Tuple[str, str]:
    """Pick the node id column and the label column of the target table."""
    cols = list(targets_df.columns)
    if len(cols) < 2:
        raise ValueError(f"Target table needs at least two columns, got {cols}")
    id_col = "id" if "id" in cols else cols[0]
    if label_column is not None:
        if label_column not in cols:
            raise KeyError(f"Label column '{label_column}' not in target table columns {cols}")
        return id_col, label_column
    if "page_type" in cols:
        label_col = "page_type"
    elif "target" in cols:
        label_col = "target"
    else:
        label_col = cols[1]
    return id_col, label_col


def build_index(
    edges_df: pd.DataFrame, src_col: str, dst_col: str
) -> Tuple[List[int], Dict[int, int]]:
    """Map the raw node ids that appear in the edge list to dense indices 1..N."""
    all_ids = sorted(
        set(int(x) for x in edges_df[src_col]) | set(int(x) for x in edges_df[dst_col])
    )
    id2idx = {node_id: i for i, node_id in enumerate(all_ids, start=1)}
    return all_ids, id2idx


def build_graph(
    edges_df: pd.DataFrame, id2idx: Dict[int, int], src_col: str, dst_col: str
) -> nx.Graph:
    """Undirected simple graph on 1..N; self-loops dropped, duplicates collapsed by NX."""
    G = nx.Graph()
    G.add_nodes_from(range(1, len(id2idx) + 1))
    for u_raw, v_raw in zip(edges_df[src_col], edges_df[dst_col]):
        u = id2idx[int(u_raw)]
        v = id2idx[int(v_raw)]
        if u != v:
            G.add_edge(u, v)
    return G


def build_labels(
    targets_df: pd.DataFrame,
    all_ids: List[int],
    id_col: str,
    label_col: str,
    unknown: str = UNKNOWN_LABEL,
) -> LabelEncoding:
    """Encode the label column as category codes 1..K (levels sorted).

    Nodes missing from the target table, or with an empty label, get ``unknown``.
    """
    lab_map = {
        int(node_id): str(label)
        for node_id, label in zip(targets_df[id_col], targets_df[label_col])
        if not pd.isna(label)
    }
    labels_str = [lab_map.get(node_id, unknown) for node_id in all_ids]
    cat = pd.Categorical(labels_str)
    levels = [str(level) for level in cat.categories]
    codes = [int(c) + 1 for c in cat.codes]
    return LabelEncoding(labels=labels_str, codes=codes, levels=levels)


def preprocess(
    edges_path: Path, targets_path: Path, label_column: str | None = None
) -> LabeledGraph:
    """One-shot load: read tables, index nodes, build the graph and encode labels."""
    edges_df, targets_df = load_raw(Path(edges_path), Path(targets_path))
    src_col, dst_col = resolve_edge_columns(edges_df)
    id_col, label_col = resolve_target_columns(targets_df, label_column)

    all_ids, id2idx = build_index(edges_df, src_col, dst_col)
    G = build_graph(edges_df, id2idx, src_col, dst_col)
    encoding = build_labels(targets_df, all_ids, id_col, label_col)

    return LabeledGraph(
        graph=G,
        encoding=encoding,
        all_ids=all_ids,
        id2idx=id2idx,
        targets=targets_df,
    )
