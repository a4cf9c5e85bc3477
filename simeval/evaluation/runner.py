"""Benchmark sweep over corpus sizes.

For each corpus size:
1. Build the corpus (prefix of a full corpus, or from a factory)
2. Build the gold standard once
3. Evaluate every strategy against the same corpus and gold standard
4. Collect one MetricsRecord per strategy

Strategies run sequentially by default so timings are uncontended. With
n_workers > 1 the strategies of one size run in separate processes, each
with its own pickled copy of the corpus and gold standard.
"""

import time
from concurrent.futures import ProcessPoolExecutor
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Union

from simeval.analysis.results import BenchmarkResults
from simeval.config import get_suite
from simeval.core.base import BaseStrategy, validate_min_score
from simeval.core.errors import ConfigurationError
from simeval.core.gold_standard import build_gold_standard
from simeval.core.similarity import SimilarityFunction, get_similarity
from simeval.core.types import Corpus, MetricsRecord
from simeval.evaluation.evaluator import evaluate
from simeval.strategies.factory import create_strategies

CorpusSource = Union[Corpus, Callable[[int], Corpus]]


def _evaluate_task(args) -> MetricsRecord:
    """Worker entry point (module-level so it can be pickled)."""
    return evaluate(*args)


class BenchmarkRunner:
    """Runs a set of strategies over a sweep of corpus sizes."""

    def __init__(
        self,
        strategies: Mapping[str, BaseStrategy],
        min_score: float,
        similarity: Union[str, SimilarityFunction, None] = None,
        n_workers: int = 1,
        verbose: bool = True,
    ):
        """Initialize runner.

        Args:
            strategies: Dict of name -> strategy instance.
            min_score: Similarity threshold shared by gold standard and strategies.
            similarity: Similarity function or registry name.
            n_workers: Worker processes per corpus size (1 = sequential).
            verbose: Print progress.
        """
        if not strategies:
            raise ConfigurationError("At least one strategy is required")
        if n_workers < 1:
            raise ConfigurationError(f"n_workers must be >= 1, got {n_workers}")
        self.strategies = dict(sorted(strategies.items()))
        self.min_score = validate_min_score(min_score)
        self.similarity = get_similarity(similarity)
        self.n_workers = n_workers
        self.verbose = verbose

    def corpus_for_size(self, source: CorpusSource, size: int) -> Corpus:
        """Materialise the corpus for one size.

        Raises:
            ConfigurationError: If the source cannot supply `size` documents.
        """
        if isinstance(source, Corpus):
            if size > len(source):
                raise ConfigurationError(
                    f"Requested size {size} but corpus has only {len(source)} documents"
                )
            return source.head(size)
        corpus = source(size)
        if not isinstance(corpus, Corpus):
            corpus = Corpus(corpus)
        return corpus

    def run_size(self, corpus: Corpus) -> List[MetricsRecord]:
        """Evaluate every strategy on one corpus."""
        size = len(corpus)
        topic_count = corpus.n_topics

        start_time = time.time()
        gold = build_gold_standard(corpus, self.min_score, self.similarity)
        if self.verbose:
            print(
                f"[Gold] size={size}: {gold.n_pairs} similar pairs "
                f"in {time.time() - start_time:.2f}s"
            )

        tasks = [
            (size, topic_count, self.min_score, corpus, gold, strategy, name)
            for name, strategy in self.strategies.items()
        ]

        if self.n_workers > 1:
            with ProcessPoolExecutor(max_workers=self.n_workers) as executor:
                records = list(executor.map(_evaluate_task, tasks))
        else:
            records = [_evaluate_task(task) for task in tasks]

        if self.verbose:
            for record in records:
                print(f"[Benchmark]   {record}")
        return records

    def run(self, corpus: CorpusSource, sizes: Sequence[int]) -> BenchmarkResults:
        """Run the full sweep.

        A ConfigurationError for one size aborts that size only; it is
        recorded in results.failures and the sweep moves on.

        Args:
            corpus: Full corpus (prefixes are used) or factory size -> corpus.
            sizes: Corpus sizes to evaluate.

        Returns:
            BenchmarkResults with one record per (strategy, size).
        """
        results = BenchmarkResults()
        if self.verbose:
            print("=" * 60)
            print(f"BENCHMARK: {len(self.strategies)} strategies, sizes={list(sizes)}")
            print(f"Similarity: {self.similarity.name}, min_score={self.min_score}")
            print("=" * 60)

        for size in sizes:
            if self.verbose:
                print(f"\n[Benchmark] Corpus size {size}")
            try:
                sized_corpus = self.corpus_for_size(corpus, size)
                results.extend(self.run_size(sized_corpus))
            except ConfigurationError as e:
                if self.verbose:
                    print(f"[Benchmark] Skipping size {size}: {e}")
                results.record_failure(size, str(e))

        return results


def run_benchmark(
    corpus: CorpusSource,
    sizes: Sequence[int],
    min_score: float,
    strategies: Union[Mapping[str, BaseStrategy], Mapping[str, Mapping], str],
    seed: int = 42,
    similarity: Union[str, SimilarityFunction, None] = None,
    n_workers: int = 1,
    verbose: bool = True,
) -> BenchmarkResults:
    """Single entry call: run strategies over corpus sizes.

    Args:
        corpus: Full corpus or factory size -> corpus.
        sizes: Corpus sizes to evaluate.
        min_score: Similarity threshold.
        strategies: Strategy instances by name, spec dictionaries by name, or
            the name of a suite from simeval.config.
        seed: Seed injected into seeded strategies built from specs.
        similarity: Similarity function or registry name.
        n_workers: Worker processes per corpus size.
        verbose: Print progress.

    Returns:
        BenchmarkResults.
    """
    return BenchmarkRunner(
        strategies=resolve_strategies(strategies, seed),
        min_score=min_score,
        similarity=similarity,
        n_workers=n_workers,
        verbose=verbose,
    ).run(corpus, sizes)


def resolve_strategies(strategies, seed: Optional[int] = None) -> Dict[str, BaseStrategy]:
    """Turn a suite name, spec mapping or instance mapping into instances."""
    if isinstance(strategies, str):
        strategies = get_suite(strategies)

    resolved, specs = {}, {}
    for name, item in strategies.items():
        if isinstance(item, BaseStrategy):
            resolved[name] = item
        else:
            specs[name] = item
    resolved.update(create_strategies(specs, seed=seed))
    return resolved


def run_from_config(config, corpus: CorpusSource) -> BenchmarkResults:
    """Run the sweep described by a BenchmarkConfig."""
    config.validate()
    return run_benchmark(
        corpus=corpus,
        sizes=config.sizes,
        min_score=config.min_score,
        strategies=config.resolve_strategies(),
        seed=config.random_seed,
        similarity=config.similarity,
        n_workers=config.n_workers,
        verbose=config.verbose,
    )
