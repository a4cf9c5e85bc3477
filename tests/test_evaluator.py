"""Tests for simeval.evaluation.evaluator and simeval.core.metrics."""

import pytest

from simeval.core import ConfigurationError, metrics
from simeval.core.gold_standard import build_gold_standard
from simeval.evaluation import evaluate
from simeval.strategies import (
    STRATEGY_REGISTRY,
    CentroidClusteringStrategy,
    ExhaustiveStrategy,
    RandomSamplingStrategy,
    create_strategy,
)


def _evaluate(corpus, gold, strategy):
    return evaluate(len(corpus), corpus.n_topics, gold.min_score, corpus, gold, strategy)


class TestMetricFunctions:
    def test_zero_denominators(self):
        assert metrics.precision(0, 0) == 0.0
        assert metrics.recall(0, 0) == 0.0
        assert metrics.f_measure(0.0, 0.0) == 0.0

    def test_f_measure(self):
        assert metrics.f_measure(0.5, 1.0) == pytest.approx(2 / 3)

    def test_total_pairs(self):
        assert metrics.total_pairs(0) == 0
        assert metrics.total_pairs(1) == 0
        assert metrics.total_pairs(4) == 6

    def test_efficiency_is_clamped(self):
        assert metrics.efficiency(0, 6) == 1.0
        assert metrics.efficiency(6, 6) == 0.0
        assert metrics.efficiency(9, 6) == 0.0
        assert metrics.efficiency(0, 0) == 0.0

    def test_confusion_counts(self, scenario_gold):
        gold_pairs = scenario_gold.pairs()
        candidates = {next(iter(gold_pairs))}
        assert metrics.confusion_counts(candidates, gold_pairs) == (1, 0, 1)


class TestScenario:
    def test_exhaustive(self, scenario_corpus, scenario_gold):
        record = _evaluate(scenario_corpus, scenario_gold, ExhaustiveStrategy())
        assert record.true_positives == 2
        assert record.false_positives == 0
        assert record.false_negatives == 0
        assert record.precision == 1.0
        assert record.recall == 1.0
        assert record.f_measure == 1.0
        assert record.efficiency == 0.0
        assert record.effectiveness == 0.0
        assert record.total_pairs == 6

    def test_centroid_two_clusters(self, scenario_corpus, scenario_gold):
        record = _evaluate(scenario_corpus, scenario_gold, CentroidClusteringStrategy(k=2))
        assert record.true_positives == 2
        assert record.comparisons == 2
        assert record.clusters == 2
        assert record.efficiency == pytest.approx(1 - 2 / 6)
        assert record.effectiveness == pytest.approx(1 - 2 / 6)

    def test_empty_sample(self, scenario_corpus, scenario_gold):
        record = _evaluate(scenario_corpus, scenario_gold, RandomSamplingStrategy(sample_size=0))
        assert record.comparisons == 0
        assert record.efficiency == 1.0
        assert record.precision == 0.0
        assert record.recall == 0.0
        assert record.f_measure == 0.0
        assert record.effectiveness == 0.0

    def test_random_efficiency(self, synthetic_corpus, synthetic_gold):
        record = _evaluate(synthetic_corpus, synthetic_gold, RandomSamplingStrategy(sample_size=500))
        possible = metrics.total_pairs(len(synthetic_corpus))
        assert record.comparisons == 500
        assert record.efficiency == pytest.approx(1 - 500 / possible)

    def test_record_identifies_run(self, scenario_corpus, scenario_gold):
        record = _evaluate(scenario_corpus, scenario_gold, ExhaustiveStrategy(name="scan"))
        assert record.strategy == "scan"
        assert record.corpus_size == 4
        assert record.topic_count == 2
        assert record.min_score == 0.95
        assert record.elapsed >= 0.0
        assert "scan@4" in str(record)


@pytest.mark.parametrize("kind", sorted(STRATEGY_REGISTRY))
def test_metrics_are_bounded(kind, synthetic_corpus, synthetic_gold):
    record = _evaluate(synthetic_corpus, synthetic_gold, create_strategy(kind))
    for value in (record.precision, record.recall, record.f_measure, record.efficiency, record.effectiveness):
        assert 0.0 <= value <= 1.0
    assert record.effectiveness == pytest.approx(record.f_measure * record.efficiency)
    assert record.false_positives == 0


def test_threshold_mismatch_raises(scenario_corpus, scenario_gold):
    with pytest.raises(ConfigurationError, match="does not match"):
        evaluate(4, 2, 0.9, scenario_corpus, scenario_gold, ExhaustiveStrategy())


def test_corpus_size_mismatch_raises(scenario_corpus, scenario_gold):
    with pytest.raises(ConfigurationError, match="corpus length"):
        evaluate(10, 2, 0.95, scenario_corpus, scenario_gold, ExhaustiveStrategy())


def test_uses_gold_standard_similarity(scenario_corpus):
    gold = build_gold_standard(scenario_corpus, 0.95, similarity="jensen_shannon")
    record = _evaluate(scenario_corpus, gold, ExhaustiveStrategy())
    assert record.recall == 1.0
    assert record.precision == 1.0
