"""Evaluate one strategy run against the gold standard.

The strategy is timed around find(), its candidate pairs are compared with
the gold pairs, and the counts are turned into a MetricsRecord.
"""

import time
from typing import Optional

from simeval.core import metrics
from simeval.core.base import BaseStrategy
from simeval.core.errors import ConfigurationError
from simeval.core.gold_standard import GoldStandard
from simeval.core.types import MetricsRecord, as_corpus


def evaluate(
    corpus_size: int,
    topic_count: int,
    min_score: float,
    corpus,
    gold_standard: GoldStandard,
    strategy: BaseStrategy,
    name: Optional[str] = None,
) -> MetricsRecord:
    """Run a strategy once and score it.

    Args:
        corpus_size: Number of documents (N).
        topic_count: Vector length (D).
        min_score: Similarity threshold; must match the gold standard's.
        corpus: Corpus the gold standard was built on.
        gold_standard: Exhaustive reference relation.
        strategy: Strategy to evaluate.
        name: Name for the record (defaults to strategy.name).

    Returns:
        MetricsRecord for this (strategy, corpus size).

    Raises:
        ConfigurationError: If min_score differs from the gold standard's,
            or corpus_size differs from the corpus length.
    """
    if min_score != gold_standard.min_score:
        raise ConfigurationError(
            f"min_score {min_score} does not match gold standard threshold {gold_standard.min_score}"
        )
    corpus = as_corpus(corpus)
    if corpus_size != len(corpus):
        raise ConfigurationError(
            f"corpus_size {corpus_size} does not match corpus length {len(corpus)}"
        )

    start_time = time.perf_counter()
    result = strategy.find(corpus, min_score, similarity=gold_standard.similarity)
    elapsed = time.perf_counter() - start_time

    tp, fp, fn = metrics.confusion_counts(result.candidates, gold_standard.pairs())
    precision = metrics.precision(tp, fp)
    recall = metrics.recall(tp, fn)
    f_measure = metrics.f_measure(precision, recall)
    possible = metrics.total_pairs(corpus_size)
    efficiency = metrics.efficiency(result.comparisons, possible)

    return MetricsRecord(
        strategy=name or strategy.name,
        corpus_size=corpus_size,
        topic_count=topic_count,
        min_score=min_score,
        elapsed=elapsed,
        comparisons=result.comparisons,
        total_pairs=possible,
        efficiency=efficiency,
        precision=precision,
        recall=recall,
        f_measure=f_measure,
        clusters=result.clusters,
        effectiveness=metrics.effectiveness(f_measure, efficiency),
        true_positives=tp,
        false_positives=fp,
        false_negatives=fn,
        partial=result.partial,
    )
