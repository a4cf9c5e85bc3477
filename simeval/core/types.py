"""Shared data types used across the codebase.

This module contains the types every component exchanges:
- Distribution: Per-document topic-proportion vector
- Corpus: Ordered, fixed-dimensionality collection of distributions
- Pair: Unordered pair of similar documents with its score
- SearchResult: What a strategy returns from find()
- MetricsRecord: One evaluated (strategy, corpus size) run
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, FrozenSet, Hashable, Iterable, Iterator, Optional, Sequence

import numpy as np

from simeval.core.errors import ConfigurationError, NumericDegeneracyError


# Maximum allowed |sum(vector) - 1| before a vector is rejected.
SUM_TOLERANCE = 1e-4


def normalize_vector(vector, tolerance: float = SUM_TOLERANCE) -> np.ndarray:
    """Validate a probability vector and renormalise floating drift.

    Args:
        vector: Sequence of non-negative weights.
        tolerance: Allowed deviation of the sum from 1.

    Returns:
        Read-only float64 array summing to 1.

    Raises:
        NumericDegeneracyError: If a component is negative or non-finite, or
            the sum is off by more than `tolerance`.
    """
    arr = np.array(vector, dtype=np.float64)
    if arr.ndim != 1:
        raise NumericDegeneracyError(f"Expected a 1-D vector, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise NumericDegeneracyError("Vector contains non-finite components")
    if np.any(arr < 0):
        raise NumericDegeneracyError(f"Vector contains negative components (min={arr.min()})")

    total = float(arr.sum())
    if abs(total - 1.0) > tolerance:
        raise NumericDegeneracyError(
            f"Vector sums to {total:.6f}, outside tolerance {tolerance} of 1.0"
        )

    arr = arr / total
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class Distribution:
    """A document's topic distribution.

    Attributes:
        id: Identifier, stable within a corpus (positional index by default).
        vector: Read-only weights summing to 1.
    """
    id: Hashable
    vector: np.ndarray

    def __post_init__(self):
        object.__setattr__(self, "vector", normalize_vector(self.vector))

    @property
    def n_topics(self) -> int:
        return int(self.vector.shape[0])

    def __repr__(self) -> str:
        """Concise representation for debugging (avoids printing full arrays)."""
        return f"Distribution(id={self.id!r}, n_topics={self.n_topics})"


class Corpus:
    """Immutable ordered collection of distributions of equal length.

    The (N, D) matrix is built once and shared read-only with the gold
    standard builder and every strategy.
    """

    def __init__(self, distributions: Iterable[Distribution]):
        """Validate and index the distributions.

        Args:
            distributions: Distributions in corpus order.

        Raises:
            ConfigurationError: If vector lengths differ or ids repeat.
        """
        self._distributions = tuple(distributions)
        self.ids = tuple(d.id for d in self._distributions)

        if len(set(self.ids)) != len(self.ids):
            raise ConfigurationError("Corpus contains duplicate document ids")

        dims = {d.n_topics for d in self._distributions}
        if len(dims) > 1:
            raise ConfigurationError(
                f"Corpus vectors have inconsistent dimensionality: {sorted(dims)}"
            )

        if self._distributions:
            matrix = np.vstack([d.vector for d in self._distributions])
        else:
            matrix = np.empty((0, 0), dtype=np.float64)
        matrix.setflags(write=False)
        self.matrix = matrix

    @classmethod
    def from_vectors(
        cls,
        vectors: Sequence[Sequence[float]],
        ids: Optional[Sequence[Hashable]] = None,
    ) -> "Corpus":
        """Build a corpus from raw vectors (ids default to positions)."""
        if ids is None:
            ids = range(len(vectors))
        elif len(ids) != len(vectors):
            raise ConfigurationError(
                f"Got {len(ids)} ids for {len(vectors)} vectors"
            )
        return cls(Distribution(doc_id, vec) for doc_id, vec in zip(ids, vectors))

    @property
    def n_topics(self) -> int:
        return int(self.matrix.shape[1]) if len(self) else 0

    def head(self, n: int) -> "Corpus":
        """First `n` documents as a new corpus."""
        return Corpus(self._distributions[:n])

    def pair(self, i: int, j: int, score: float) -> "Pair":
        """Pair for two positions, carrying the evaluated score."""
        return Pair(self.ids[i], self.ids[j], score)

    def __len__(self) -> int:
        return len(self._distributions)

    def __iter__(self) -> Iterator[Distribution]:
        return iter(self._distributions)

    def __getitem__(self, position: int) -> Distribution:
        return self._distributions[position]

    def __repr__(self) -> str:
        return f"Corpus(size={len(self)}, n_topics={self.n_topics})"


def as_corpus(corpus) -> Corpus:
    """Coerce any sequence of distributions into a Corpus."""
    if isinstance(corpus, Corpus):
        return corpus
    return Corpus(corpus)


@dataclass(frozen=True, eq=False)
class Pair:
    """Unordered pair of distinct document ids.

    Equality and hashing ignore order and score, so Pair(a, b) == Pair(b, a).

    Attributes:
        first: One document id.
        second: The other document id.
        score: Similarity evaluated for the pair (NaN if unknown).
    """
    first: Hashable
    second: Hashable
    score: float = float("nan")

    def __post_init__(self):
        if self.first == self.second:
            raise ValueError(f"A pair needs two distinct ids, got {self.first!r} twice")

    @property
    def members(self) -> FrozenSet[Hashable]:
        return frozenset((self.first, self.second))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Pair):
            return NotImplemented
        return self.members == other.members

    def __hash__(self) -> int:
        return hash(self.members)

    def __repr__(self) -> str:
        return f"Pair({self.first!r}, {self.second!r}, score={self.score:.4f})"


@dataclass(frozen=True)
class SearchResult:
    """Output of a strategy search.

    Attributes:
        candidates: Pairs evaluated with the similarity function and passing
            the threshold.
        comparisons: Pairwise evaluations actually performed, including
            structure-building work.
        clusters: Clusters produced (0 for non-clustering strategies).
        partial: True if the search aborted and these are partial results.
        details: Strategy-specific diagnostics (convergence, bucket counts).
    """
    candidates: FrozenSet[Pair] = frozenset()
    comparisons: int = 0
    clusters: int = 0
    partial: bool = False
    details: Dict[str, Any] = field(default_factory=dict)

    def __iter__(self):
        """Unpack as (candidates, comparisons, clusters)."""
        return iter((self.candidates, self.comparisons, self.clusters))


@dataclass(frozen=True)
class MetricsRecord:
    """Metrics for one strategy run against one corpus size.

    Created by the evaluator and never mutated afterwards.
    """
    strategy: str
    corpus_size: int
    topic_count: int
    min_score: float
    elapsed: float
    comparisons: int
    total_pairs: int
    efficiency: float
    precision: float
    recall: float
    f_measure: float
    clusters: int
    effectiveness: float
    true_positives: int = 0
    false_positives: int = 0
    false_negatives: int = 0
    partial: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def __str__(self) -> str:
        return (
            f"{self.strategy}@{self.corpus_size}: "
            f"P={self.precision:.3f} R={self.recall:.3f} F={self.f_measure:.3f} "
            f"eff={self.efficiency:.3f} effect={self.effectiveness:.3f} "
            f"pairs={self.comparisons}/{self.total_pairs} "
            f"clusters={self.clusters} time={self.elapsed:.3f}s"
        )
