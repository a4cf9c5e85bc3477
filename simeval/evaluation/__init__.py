"""Evaluation: single-run evaluator and the corpus-size sweep."""

from .evaluator import evaluate
from .runner import BenchmarkRunner, resolve_strategies, run_benchmark, run_from_config

__all__ = [
    "BenchmarkRunner",
    "evaluate",
    "resolve_strategies",
    "run_benchmark",
    "run_from_config",
]
