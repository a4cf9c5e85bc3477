"""Base classes for the benchmark.

This module provides the strategy contract and the comparison accounting
every strategy shares.
"""

from simeval.core.base.comparator import PairwiseComparator
from simeval.core.base.strategy import BaseStrategy, validate_min_score

__all__ = [
    "BaseStrategy",
    "PairwiseComparator",
    "validate_min_score",
]
