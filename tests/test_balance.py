"""End-to-end tests for the structural balance summary."""

import math

import networkx as nx
import pytest

from netbalance.algorithms.balance import BalanceReport, analyze, lift, z_score
from netbalance.algorithms.triangles import balance_ratio, enumerate_triads
from netbalance.utils.adjacency import AdjacencyError, AdjacencyView, LabelError


class TestLiftAndZScore:
    def test_lift(self) -> None:
        assert lift(0.6, 0.3) == pytest.approx(2.0)

    def test_lift_undefined(self) -> None:
        assert lift(None, 0.3) is None
        assert lift(0.6, None) is None
        assert lift(0.6, 0.0) is None

    def test_z_score(self) -> None:
        assert z_score(0.6, 0.4, 0.1) == pytest.approx(2.0)

    def test_z_score_undefined(self) -> None:
        assert z_score(None, 0.4, 0.1) is None
        assert z_score(0.6, None, 0.1) is None
        assert z_score(0.6, 0.4, None) is None
        assert z_score(0.6, 0.4, 0.0) is None

    def test_zero_observed_is_a_real_value(self) -> None:
        assert lift(0.0, 0.5) == 0.0
        assert z_score(0.0, 0.5, 0.25) == pytest.approx(-2.0)


class TestAnalyze:
    def test_small_graph_example(self, small_graph) -> None:
        report = analyze(small_graph, [1, 1, 1, 2], trial_count=50, rng_seed=1)
        assert isinstance(report, BalanceReport)
        assert report.triangles == 1
        assert report.balance_ratio == 1.0
        assert report.triad_census == {"+++": 1, "++-": 0, "+--": 0, "---": 0}
        assert report.wedges == 3
        assert report.closed_wedges == 3
        assert report.closure_rate == 1.0
        assert report.trials == 50
        assert len(report.baseline_rates) == 50
        assert report.baseline_defined == sum(r is not None for r in report.baseline_rates)

    def test_accepts_adjacency_view(self, small_graph) -> None:
        adj = AdjacencyView.from_networkx(small_graph)
        a = analyze(adj, [1, 1, 1, 2], trial_count=10, rng_seed=3)
        b = analyze(small_graph, [1, 1, 1, 2], trial_count=10, rng_seed=3)
        assert a == b

    def test_deterministic_given_seed(self, matched_cliques) -> None:
        labels = [1] * 5 + [2] * 5
        a = analyze(matched_cliques, labels, trial_count=40, rng_seed=9)
        b = analyze(matched_cliques, labels, trial_count=40, rng_seed=9)
        assert a.baseline_rates == b.baseline_rates
        assert (a.baseline_mean, a.baseline_std) == (b.baseline_mean, b.baseline_std)

    def test_homophilous_graph_has_lift_above_one(self, matched_cliques) -> None:
        labels = [1] * 5 + [2] * 5
        report = analyze(matched_cliques, labels, trial_count=1000, rng_seed=2024)
        assert report.closure_rate == 1.0
        assert report.baseline_mean < 1.0
        assert report.lift > 1.0
        assert report.z_score > 0

    def test_zero_trials_leaves_baseline_undefined(self, small_graph) -> None:
        report = analyze(small_graph, [1, 1, 1, 2], trial_count=0, rng_seed=1)
        assert report.baseline_mean is None
        assert report.baseline_std is None
        assert report.lift is None
        assert report.z_score is None
        assert report.closure_rate == 1.0

    def test_no_triangles(self) -> None:
        G = nx.path_graph([1, 2, 3])
        report = analyze(G, [1, 1, 1], trial_count=20, rng_seed=0)
        assert report.triangles == 0
        assert report.balance_ratio is None
        assert report.wedges == 1
        assert report.closure_rate == 0.0
        # every permutation of a single-label vector is identical
        assert report.baseline_mean == 0.0
        assert report.baseline_std == 0.0
        assert report.lift is None
        assert report.z_score is None

    def test_no_wedges_propagates_undefined(self) -> None:
        G = nx.path_graph([1, 2, 3])
        report = analyze(G, [1, 2, 3], trial_count=20, rng_seed=0)
        assert report.closure_rate is None
        assert report.wedges == 0
        assert report.baseline_mean is None
        assert report.baseline_defined == 0
        assert report.lift is None
        assert report.z_score is None

    def test_no_nan_in_report(self) -> None:
        G = nx.path_graph([1, 2, 3])
        report = analyze(G, [1, 2, 3], trial_count=5, rng_seed=0)
        for value in report.to_dict().values():
            if isinstance(value, float):
                assert not math.isnan(value)

    def test_to_dict(self, small_graph) -> None:
        d = analyze(small_graph, [1, 1, 1, 2], trial_count=2, rng_seed=0).to_dict()
        for key in (
            "triangles",
            "balance_ratio",
            "wedges",
            "closed_wedges",
            "closure_rate",
            "baseline_mean",
            "baseline_std",
            "lift",
            "z_score",
        ):
            assert key in d

    def test_parallel_workers_match_sequential(self, matched_cliques) -> None:
        labels = [1] * 5 + [2] * 5
        a = analyze(matched_cliques, labels, trial_count=20, rng_seed=5, max_workers=1)
        b = analyze(matched_cliques, labels, trial_count=20, rng_seed=5, max_workers=2)
        assert a == b

    def test_does_not_mutate_labels(self, small_graph) -> None:
        labels = [1, 1, 1, 2]
        analyze(small_graph, labels, trial_count=10, rng_seed=0)
        assert labels == [1, 1, 1, 2]


    def test_balance_ratio_matches_triad_stream(self) -> None:
        G = nx.complete_graph(range(1, 5))
        labels = [1, 2, 3, 3]
        report = analyze(G, labels, trial_count=0)
        triads = list(enumerate_triads(AdjacencyView.from_networkx(G), labels))
        assert report.triangles == len(triads) == 4
        assert report.balance_ratio == balance_ratio(triads) == 0.5
        assert report.triad_census == {"+++": 0, "++-": 0, "+--": 2, "---": 2}

class TestPreconditions:
    def test_label_length_mismatch(self, small_graph) -> None:
        with pytest.raises(LabelError):
            analyze(small_graph, [1, 1, 1], trial_count=1)

    def test_label_out_of_range(self, small_graph) -> None:
        with pytest.raises(LabelError):
            analyze(small_graph, [1, 1, 3, 2], trial_count=1, num_categories=2)

    def test_negative_trials(self, small_graph) -> None:
        with pytest.raises(ValueError):
            analyze(small_graph, [1, 1, 1, 2], trial_count=-1)

    def test_directed_graph(self) -> None:
        with pytest.raises(AdjacencyError):
            analyze(nx.DiGraph([(1, 2), (2, 3)]), [1, 1, 1], trial_count=1)
