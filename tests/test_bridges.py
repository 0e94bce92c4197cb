"""Tests for bridge detection, bridging-node ranking and descriptive stats."""

import networkx as nx
import pytest

from netbalance.utils.bridges import (
    bridge_edges,
    bridging_nodes,
    community_labels,
    edge_betweenness,
    participation_coefficients,
    resolve_community_method,
)
from netbalance.utils.describe import describe_graph


class TestBridges:
    def test_bridge_edges(self, two_triangles) -> None:
        df = bridge_edges(two_triangles)
        assert len(df) == 1
        assert sorted(df.iloc[0][["src", "dst"]].tolist()) == [3, 4]

    def test_edge_betweenness_covers_all_edges(self, two_triangles) -> None:
        df = edge_betweenness(two_triangles)
        assert len(df) == two_triangles.number_of_edges()
        top = df.sort_values("betweenness", ascending=False).iloc[0]
        assert sorted([top["src"], top["dst"]]) == [3, 4]

    def test_participation(self, two_triangles) -> None:
        scores = participation_coefficients(two_triangles, [1, 1, 1, 2, 2, 2])
        assert scores[0] == 0.0
        assert scores[2] == pytest.approx(4 / 9)

    def test_bridging_nodes_ranks_connectors_first(self, two_triangles) -> None:
        top = bridging_nodes(two_triangles, [1, 1, 1, 2, 2, 2], top_n=2)
        assert list(top.columns) == ["node", "betweenness", "participation", "bridge_score"]
        assert set(top["node"]) == {3, 4}

    def test_community_labels_cover_all_vertices(self, two_triangles) -> None:
        method = resolve_community_method()
        codes = community_labels(two_triangles, method, seed=1)
        assert len(codes) == 6
        assert min(codes) >= 1
        assert set(codes) == set(range(1, max(codes) + 1))


class TestDescribe:
    def test_describe(self, two_triangles) -> None:
        stats = describe_graph(two_triangles)
        assert stats["n"] == 6
        assert stats["m"] == 7
        assert stats["bridges"] == 1
        assert stats["bridge_percentage"] == pytest.approx(100 / 7)
        assert stats["transitivity"] == pytest.approx(nx.transitivity(two_triangles))
        assert stats["components"] == 1

    def test_describe_empty(self) -> None:
        stats = describe_graph(nx.Graph())
        assert stats["n"] == 0
        assert stats["bridge_percentage"] is None
