"""simeval - benchmark approximate similar-pair detection over topic distributions."""

from simeval.core import (
    ConfigurationError,
    Corpus,
    Distribution,
    GoldStandard,
    MetricsRecord,
    NumericDegeneracyError,
    Pair,
    SearchResult,
    StrategyError,
    build_gold_standard,
    get_similarity,
)
from simeval.analysis import BenchmarkResults
from simeval.config import BenchmarkConfig, get_suite
from simeval.evaluation import BenchmarkRunner, evaluate, run_benchmark, run_from_config
from simeval.strategies import STRATEGY_REGISTRY, create_strategy

__version__ = "0.1.0"

__all__ = [
    "BenchmarkConfig",
    "BenchmarkResults",
    "BenchmarkRunner",
    "ConfigurationError",
    "Corpus",
    "Distribution",
    "GoldStandard",
    "MetricsRecord",
    "NumericDegeneracyError",
    "Pair",
    "STRATEGY_REGISTRY",
    "SearchResult",
    "StrategyError",
    "build_gold_standard",
    "create_strategy",
    "evaluate",
    "get_similarity",
    "get_suite",
    "run_benchmark",
    "run_from_config",
]
