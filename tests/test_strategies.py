"""Tests for the search strategies and their shared machinery."""

from itertools import combinations

import numpy as np
import pytest

from simeval.core import ConfigurationError, Corpus, Pair, StrategyError, build_gold_standard
from simeval.core.base import BaseStrategy, PairwiseComparator
from simeval.core.metrics import total_pairs
from simeval.core.similarity import CosineSimilarity
from simeval.strategies import (
    STRATEGY_REGISTRY,
    CentroidClusteringStrategy,
    DensityClusteringStrategy,
    EntropyBucketStrategy,
    ExhaustiveStrategy,
    GradientStrategy,
    HierarchicalEntropyStrategy,
    RandomSamplingStrategy,
    create_strategies,
    create_strategy,
)
from simeval.strategies.pruning import equal_width_buckets, group_by_label, window_bounds
from simeval.strategies.sampling import unrank_pairs

SCENARIO_MIN_SCORE = 0.95
ALL_KINDS = sorted(STRATEGY_REGISTRY)


class TestComparator:
    def test_repeated_pairs_are_counted_once(self, scenario_corpus):
        comparator = PairwiseComparator(scenario_corpus, CosineSimilarity(), 0.95)
        comparator.compare(0, [1, 2, 1])
        comparator.compare(1, [0])
        assert comparator.similarity_comparisons == 2
        assert comparator.n_candidates == 1

    def test_self_comparison_is_skipped(self, scenario_corpus):
        comparator = PairwiseComparator(scenario_corpus, CosineSimilarity(), 0.95)
        scores = comparator.compare(2, [2, 3])
        assert np.isnan(scores[0])
        assert scores[1] > 0.95
        assert comparator.comparisons == 1

    def test_structure_work_is_added(self, scenario_corpus):
        comparator = PairwiseComparator(scenario_corpus, CosineSimilarity(), 0.95)
        comparator.count_structure(5)
        comparator.compare_pair(0, 1)
        result = comparator.result()
        assert result.comparisons == 6
        assert result.details["structure_comparisons"] == 5
        assert result.candidates == {Pair("d1", "d2")}

    def test_compare_between(self, scenario_corpus):
        comparator = PairwiseComparator(scenario_corpus, CosineSimilarity(), 0.95)
        comparator.compare_between([0, 1], [2, 3])
        assert comparator.comparisons == 4
        assert comparator.n_candidates == 0


@pytest.mark.parametrize("kind", ALL_KINDS)
class TestContract:
    def test_candidates_are_true_pairs(self, kind, synthetic_corpus, synthetic_gold):
        result = create_strategy(kind).find(synthetic_corpus, 0.8)
        assert result.candidates <= synthetic_gold.pairs()
        for pair in result.candidates:
            assert pair.score >= 0.8

    def test_deterministic(self, kind, synthetic_corpus):
        first = create_strategy(kind).find(synthetic_corpus, 0.8)
        second = create_strategy(kind).find(synthetic_corpus, 0.8)
        assert first.candidates == second.candidates
        assert first.comparisons == second.comparisons
        assert first.clusters == second.clusters

    def test_comparisons_bounded(self, kind, synthetic_corpus):
        result = create_strategy(kind).find(synthetic_corpus, 0.8)
        possible = total_pairs(len(synthetic_corpus))
        assert 0 <= result.comparisons <= 2 * possible
        assert result.details["similarity_comparisons"] <= possible

    def test_clusters_only_for_clustering_strategies(self, kind, synthetic_corpus):
        strategy = create_strategy(kind)
        result = strategy.find(synthetic_corpus, 0.8)
        if not strategy.clustered:
            assert result.clusters == 0

    def test_tiny_corpus_short_circuits(self, kind):
        result = create_strategy(kind).find(Corpus.from_vectors([[0.3, 0.7]]), 0.5)
        assert result.candidates == frozenset()
        assert result.comparisons == 0
        assert result.clusters == 0

    def test_does_not_modify_corpus(self, kind, synthetic_corpus):
        before = synthetic_corpus.matrix.copy()
        create_strategy(kind).find(synthetic_corpus, 0.8)
        np.testing.assert_array_equal(synthetic_corpus.matrix, before)


class TestExhaustive:
    def test_reproduces_gold_standard(self, synthetic_corpus, synthetic_gold):
        result = ExhaustiveStrategy().find(synthetic_corpus, 0.8)
        assert result.candidates == synthetic_gold.pairs()
        assert result.comparisons == total_pairs(len(synthetic_corpus))


class TestGradient:
    def test_decaying_window_on_scenario(self, scenario_corpus, scenario_gold):
        result = GradientStrategy(decay=0.5).find(scenario_corpus, SCENARIO_MIN_SCORE)
        assert result.comparisons == 4
        assert result.candidates == scenario_gold.pairs()
        assert result.details["early_stops"] == 2

    def test_decay_one_scans_everything(self, scenario_corpus, scenario_gold):
        result = GradientStrategy(decay=1.0).find(scenario_corpus, SCENARIO_MIN_SCORE)
        assert result.comparisons == 6
        assert result.candidates == scenario_gold.pairs()

    def test_scan_stops_at_first_neighbour_below_floor(self):
        # a and c are similar but b sits between them in the ordering
        corpus = Corpus.from_vectors(
            [[0.5, 0.49, 0.01], [0.52, 0.0, 0.48], [0.6, 0.39, 0.01]], ids=["a", "b", "c"]
        )
        pruned = GradientStrategy(decay=0.2).find(corpus, 0.95)
        assert pruned.comparisons == 2
        assert pruned.candidates == frozenset()

        full = GradientStrategy(decay=1.0).find(corpus, 0.95)
        assert full.comparisons == 3
        assert full.candidates == {Pair("a", "c")}

    @pytest.mark.parametrize("decay", [0.0, -0.5, 1.5])
    def test_invalid_decay(self, decay):
        with pytest.raises(ConfigurationError, match="decay"):
            GradientStrategy(decay=decay)


class TestEntropy:
    def test_single_bucket_is_exhaustive(self, scenario_corpus, scenario_gold):
        result = EntropyBucketStrategy(bucket_count=1).find(scenario_corpus, SCENARIO_MIN_SCORE)
        assert result.comparisons == 6
        assert result.candidates == scenario_gold.pairs()

    def test_more_buckets_never_cost_more(self, synthetic_corpus):
        coarse = EntropyBucketStrategy(bucket_count=2).find(synthetic_corpus, 0.8)
        fine = EntropyBucketStrategy(bucket_count=20).find(synthetic_corpus, 0.8)
        assert fine.comparisons <= coarse.comparisons

    def test_invalid_bucket_count(self):
        with pytest.raises(ConfigurationError):
            EntropyBucketStrategy(bucket_count=0)


class TestHierarchicalEntropy:
    def test_level_resolutions(self):
        assert HierarchicalEntropyStrategy(levels=3).level_resolutions(12) == [4, 8, 12]
        assert HierarchicalEntropyStrategy(levels=1).level_resolutions(12) == [12]
        assert HierarchicalEntropyStrategy(levels=4).level_resolutions(2) == [2, 2, 2, 2]

    def test_reports_leaves(self, synthetic_corpus):
        result = HierarchicalEntropyStrategy(levels=2, branching=3).find(synthetic_corpus, 0.8)
        assert result.details["leaves"] >= 1
        assert result.comparisons <= total_pairs(len(synthetic_corpus))

    @pytest.mark.parametrize("params", [{"levels": 0}, {"branching": 1}])
    def test_invalid_parameters(self, params):
        with pytest.raises(ConfigurationError):
            HierarchicalEntropyStrategy(**params)


class TestCentroid:
    def test_two_clusters_on_scenario(self, scenario_corpus, scenario_gold):
        result = CentroidClusteringStrategy(k=2).find(scenario_corpus, SCENARIO_MIN_SCORE)
        assert result.clusters == 2
        assert result.comparisons == 2
        assert result.candidates == scenario_gold.pairs()
        assert result.details["converged"]

    def test_k_larger_than_corpus_degrades(self, scenario_corpus):
        result = CentroidClusteringStrategy(k=10).find(scenario_corpus, SCENARIO_MIN_SCORE)
        assert not result.partial
        assert result.clusters == len(scenario_corpus)

    def test_reports_effective_k_with_duplicate_documents(self):
        corpus = Corpus.from_vectors([[0.5, 0.5]] * 6 + [[0.9, 0.1]] * 3)
        gold = build_gold_standard(corpus, 0.99)
        result = CentroidClusteringStrategy(k=5).find(corpus, 0.99)
        assert result.clusters == 5
        assert result.details["non_empty_clusters"] == 2
        assert result.candidates == gold.pairs()
        assert result.comparisons == 18

    def test_non_convergence_keeps_last_assignment(self, synthetic_corpus, synthetic_gold, capsys):
        result = CentroidClusteringStrategy(k=8, max_iter=1).find(synthetic_corpus, 0.8)
        assert result.details["converged"] is False
        assert result.details["iterations"] == 1
        assert result.partial is False
        assert result.comparisons > 0
        assert result.clusters == 8
        assert result.candidates <= synthetic_gold.pairs()
        assert "No convergence after 1 iterations" in capsys.readouterr().out

    def test_seed_changes_nothing_on_repeat(self, synthetic_corpus):
        strategy = CentroidClusteringStrategy(k=5, seed=3)
        assert strategy.find(synthetic_corpus, 0.8).candidates == strategy.find(synthetic_corpus, 0.8).candidates

    @pytest.mark.parametrize("params", [{"k": 0}, {"max_iter": 0}])
    def test_invalid_parameters(self, params):
        with pytest.raises(ConfigurationError):
            CentroidClusteringStrategy(**params)


class TestDensity:
    def test_two_clusters_on_scenario(self, scenario_corpus, scenario_gold):
        strategy = DensityClusteringStrategy(eps=0.15, min_samples=2)
        result = strategy.find(scenario_corpus, SCENARIO_MIN_SCORE)
        assert result.clusters == 2
        assert result.details["structure_comparisons"] == 2
        assert result.comparisons == 4
        assert result.candidates == scenario_gold.pairs()
        assert result.details["noise"] == 0

    def test_all_noise_when_min_samples_exceeds_corpus(self, scenario_corpus):
        strategy = DensityClusteringStrategy(eps=0.15, min_samples=10)
        result = strategy.find(scenario_corpus, SCENARIO_MIN_SCORE)
        assert result.clusters == 0
        assert result.candidates == frozenset()
        assert result.details["similarity_comparisons"] == 0
        assert result.details["noise"] == 4

    def test_radius_graph_matches_brute_force(self, synthetic_corpus):
        strategy = DensityClusteringStrategy(eps=0.3, min_samples=2)
        comparator = PairwiseComparator(synthetic_corpus, CosineSimilarity(), 0.8)
        graph = strategy.radius_graph(synthetic_corpus.matrix, comparator)

        embedded = np.sqrt(synthetic_corpus.matrix)
        expected = set()
        for i, j in combinations(range(len(synthetic_corpus)), 2):
            if np.linalg.norm(embedded[i] - embedded[j]) / np.sqrt(2) <= 0.3 - 1e-9:
                expected.add((i, j))
        rows, cols = graph.nonzero()
        found = {(int(i), int(j)) for i, j in zip(rows, cols) if i < j}
        assert expected <= found

    @pytest.mark.parametrize("params", [{"eps": 0.0}, {"eps": 1.5}, {"min_samples": 0}])
    def test_invalid_parameters(self, params):
        with pytest.raises(ConfigurationError):
            DensityClusteringStrategy(**params)


class TestRandomSampling:
    def test_unrank_covers_all_pairs(self):
        i, j = unrank_pairs(np.arange(10), 5)
        assert set(zip(i.tolist(), j.tolist())) == set(combinations(range(5), 2))

    def test_exact_sample_size(self, scenario_corpus):
        result = RandomSamplingStrategy(sample_size=3).find(scenario_corpus, SCENARIO_MIN_SCORE)
        assert result.comparisons == 3

    def test_sample_capped_at_all_pairs(self, scenario_corpus, scenario_gold):
        result = RandomSamplingStrategy(sample_size=100).find(scenario_corpus, SCENARIO_MIN_SCORE)
        assert result.comparisons == 6
        assert result.candidates == scenario_gold.pairs()

    def test_zero_sample(self, scenario_corpus):
        result = RandomSamplingStrategy(sample_size=0).find(scenario_corpus, SCENARIO_MIN_SCORE)
        assert result.comparisons == 0
        assert result.candidates == frozenset()

    def test_seed_controls_sample(self):
        first = RandomSamplingStrategy(sample_size=20, seed=1).sample_pairs(30)
        again = RandomSamplingStrategy(sample_size=20, seed=1).sample_pairs(30)
        other = RandomSamplingStrategy(sample_size=20, seed=2).sample_pairs(30)
        np.testing.assert_array_equal(first[0], again[0])
        np.testing.assert_array_equal(first[1], again[1])
        assert not (np.array_equal(first[0], other[0]) and np.array_equal(first[1], other[1]))

    def test_negative_sample_size(self):
        with pytest.raises(ConfigurationError):
            RandomSamplingStrategy(sample_size=-1)


class _FailingStrategy(BaseStrategy):
    kind = "failing"

    def _search(self, corpus, comparator):
        comparator.compare_pair(0, 1)
        raise StrategyError("index exhausted")


class TestPartialResults:
    def test_strategy_error_returns_partial_result(self, scenario_corpus):
        result = _FailingStrategy().find(scenario_corpus, SCENARIO_MIN_SCORE)
        assert result.partial
        assert result.comparisons == 1
        assert result.candidates == {Pair("d1", "d2")}
        assert result.details["error"] == "index exhausted"

    def test_invalid_threshold_raises(self, scenario_corpus):
        with pytest.raises(ConfigurationError):
            ExhaustiveStrategy().find(scenario_corpus, 2.0)


class TestPruning:
    def test_equal_width_buckets(self):
        labels = equal_width_buckets(np.array([0.0, 0.5, 1.0]), 2)
        assert labels.tolist() == [0, 1, 1]
        assert equal_width_buckets(np.array([0.3, 0.3]), 5).tolist() == [0, 0]

    def test_group_by_label_is_sorted(self):
        groups = group_by_label(np.arange(4), np.array([2, 0, 2, 0]))
        assert list(groups) == [0, 2]
        assert groups[2].tolist() == [0, 2]

    def test_window_bounds(self):
        keys = np.array([0.0, 0.1, 0.2, 0.5])
        assert window_bounds(keys, 0, 0.2) == 3
        assert window_bounds(keys, 3, 0.2) == 4


class TestFactory:
    def test_seed_is_injected(self):
        assert create_strategy("centroid", seed=7).seed == 7
        assert create_strategy("random", seed=7).seed == 7

    def test_name_defaults_to_kind(self):
        assert create_strategy("gradient").name == "gradient"
        assert create_strategy("gradient", name="g-fast", decay=0.5).name == "g-fast"

    def test_unknown_kind(self):
        with pytest.raises(ConfigurationError, match="Unknown strategy kind"):
            create_strategy("lsh")

    def test_unexpected_parameter(self):
        with pytest.raises(ConfigurationError, match="Invalid parameters"):
            create_strategy("gradient", bucket_count=3)

    def test_create_strategies_from_specs(self):
        strategies = create_strategies(
            {"e": {"kind": "entropy", "params": {"bucket_count": 4}}, "x": {"kind": "exhaustive"}},
            seed=1,
        )
        assert strategies["e"].bucket_count == 4
        assert isinstance(strategies["x"], ExhaustiveStrategy)

    def test_spec_without_kind(self):
        with pytest.raises(ConfigurationError, match="no 'kind'"):
            create_strategies({"x": {"params": {}}})
