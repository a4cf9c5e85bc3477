"""Analysis of benchmark results."""

from .results import METRIC_COLUMNS, BenchmarkResults

__all__ = ["BenchmarkResults", "METRIC_COLUMNS"]
