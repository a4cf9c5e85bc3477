"""Core module: Shared base classes, types, and utilities.

This module provides foundational components used across the codebase:
- Base classes (BaseStrategy, PairwiseComparator)
- Shared types (Distribution, Corpus, Pair, SearchResult, MetricsRecord)
- Similarity functions and the exhaustive gold standard
- Metrics (precision, recall, F-measure, efficiency, effectiveness)

Example usage:
    from simeval.core import Corpus, build_gold_standard
    from simeval.core.base import BaseStrategy
    from simeval.core.metrics import precision, recall
"""

# Errors
from simeval.core.errors import (
    SimEvalError,
    ConfigurationError,
    NumericDegeneracyError,
    StrategyError,
)

# Types
from simeval.core.types import (
    SUM_TOLERANCE,
    Distribution,
    Corpus,
    Pair,
    SearchResult,
    MetricsRecord,
    as_corpus,
)

# Similarity
from simeval.core.similarity import (
    DEFAULT_SIMILARITY,
    SIMILARITY_REGISTRY,
    SimilarityFunction,
    CosineSimilarity,
    JensenShannonSimilarity,
    get_similarity,
)

# Base classes
from simeval.core.base import BaseStrategy, PairwiseComparator

# Gold standard
from simeval.core.gold_standard import GoldStandard, build_gold_standard

__all__ = [
    # Errors
    "SimEvalError",
    "ConfigurationError",
    "NumericDegeneracyError",
    "StrategyError",
    # Types
    "SUM_TOLERANCE",
    "Distribution",
    "Corpus",
    "Pair",
    "SearchResult",
    "MetricsRecord",
    "as_corpus",
    # Similarity
    "DEFAULT_SIMILARITY",
    "SIMILARITY_REGISTRY",
    "SimilarityFunction",
    "CosineSimilarity",
    "JensenShannonSimilarity",
    "get_similarity",
    # Base classes
    "BaseStrategy",
    "PairwiseComparator",
    # Gold standard
    "GoldStandard",
    "build_gold_standard",
]
