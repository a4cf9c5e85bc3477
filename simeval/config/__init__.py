from .benchmark import BenchmarkConfig
from .suites import STRATEGY_SUITES, get_suite

__all__ = [
    "BenchmarkConfig",
    "STRATEGY_SUITES",
    "get_suite",
]
