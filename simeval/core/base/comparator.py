"""Pairwise comparison accounting shared by all strategies.

PairwiseComparator is the only way a strategy evaluates the similarity
function. It guarantees that:
- every reported candidate was evaluated and passed the threshold
- every fresh evaluation is counted exactly once
- a pair already evaluated is served from cache and not counted again
"""

from typing import Any, Dict, Iterable, Optional, Sequence, Set

import numpy as np

from simeval.core.similarity import SimilarityFunction
from simeval.core.types import Corpus, Pair, SearchResult


class PairwiseComparator:
    """Evaluates, counts and collects document pairs for one search.

    Usage:
        comparator = PairwiseComparator(corpus, similarity, min_score=0.8)
        scores = comparator.compare(0, [1, 2, 3])
        comparator.compare_all(bucket_positions)
        result = comparator.result()
    """

    def __init__(self, corpus: Corpus, similarity: SimilarityFunction, min_score: float):
        """Initialize the comparator.

        Args:
            corpus: Corpus being searched (read-only).
            similarity: Similarity function shared with the gold standard.
            min_score: Threshold a pair must reach to become a candidate.
        """
        self.corpus = corpus
        self.similarity = similarity
        self.min_score = min_score
        self._matrix = corpus.matrix
        self._n = len(corpus)

        self._scores: Dict[int, float] = {}
        self._candidates: Set[Pair] = set()
        self.similarity_comparisons = 0
        self.structure_comparisons = 0
        self.clusters = 0
        self.notes: Dict[str, Any] = {}

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return (
            f"PairwiseComparator(comparisons={self.comparisons}, "
            f"candidates={len(self._candidates)}, clusters={self.clusters})"
        )

    @property
    def comparisons(self) -> int:
        """Total pairwise work: similarity evaluations plus structure work."""
        return self.similarity_comparisons + self.structure_comparisons

    @property
    def n_candidates(self) -> int:
        return len(self._candidates)

    def _key(self, i: int, j: int) -> int:
        if i > j:
            i, j = j, i
        return i * self._n + j

    def compare(self, anchor: int, others: Sequence[int]) -> np.ndarray:
        """Score one position against many, evaluating only unseen pairs.

        Args:
            anchor: Position of the anchor document.
            others: Positions to compare against (the anchor itself is skipped).

        Returns:
            Scores aligned with `others` (NaN where other == anchor).
        """
        others = np.asarray(others, dtype=np.intp).reshape(-1)
        scores = np.full(others.shape[0], np.nan, dtype=np.float64)
        if others.size == 0:
            return scores

        fresh_idx = []
        for idx, other in enumerate(others):
            other = int(other)
            if other == anchor:
                continue
            cached = self._scores.get(self._key(anchor, other))
            if cached is None:
                fresh_idx.append(idx)
            else:
                scores[idx] = cached

        if fresh_idx:
            fresh_idx = np.asarray(fresh_idx, dtype=np.intp)
            # Duplicated positions in `others` must only be evaluated once
            fresh_positions = np.unique(others[fresh_idx])
            fresh_scores = self.similarity.one_to_many(
                self._matrix[anchor], self._matrix[fresh_positions]
            )
            self.similarity_comparisons += int(fresh_positions.size)

            for other, score in zip(fresh_positions, fresh_scores):
                other = int(other)
                score = float(score)
                self._scores[self._key(anchor, other)] = score
                if score >= self.min_score:
                    self._candidates.add(self.corpus.pair(min(anchor, other), max(anchor, other), score))

            lookup = dict(zip(fresh_positions.tolist(), fresh_scores.tolist()))
            for idx in fresh_idx:
                scores[idx] = lookup[int(others[idx])]

        return scores

    def compare_pair(self, i: int, j: int) -> float:
        """Score a single pair."""
        return float(self.compare(i, [j])[0])

    def compare_all(self, positions: Iterable[int]) -> None:
        """Compare every unordered pair within a group of positions."""
        positions = np.asarray(list(positions), dtype=np.intp)
        for idx in range(positions.size - 1):
            self.compare(int(positions[idx]), positions[idx + 1:])

    def compare_between(self, left: Iterable[int], right: Iterable[int]) -> None:
        """Compare every position of one group against every position of another."""
        right = np.asarray(list(right), dtype=np.intp)
        if right.size == 0:
            return
        for anchor in left:
            self.compare(int(anchor), right)

    def count_structure(self, n: int) -> None:
        """Account for pairwise work done with a measure other than the similarity.

        Args:
            n: Number of document-document evaluations performed.
        """
        self.structure_comparisons += int(n)

    def record_clusters(self, n_clusters: int) -> None:
        self.clusters = int(n_clusters)

    def get_statistics(self) -> Dict[str, Any]:
        return {
            "similarity_comparisons": self.similarity_comparisons,
            "structure_comparisons": self.structure_comparisons,
            "candidates": len(self._candidates),
            "clusters": self.clusters,
        }

    def result(self, partial: bool = False, details: Optional[Dict[str, Any]] = None) -> SearchResult:
        """Freeze the gathered state into a SearchResult."""
        merged = dict(self.get_statistics())
        merged.update(self.notes)
        if details:
            merged.update(details)
        return SearchResult(
            candidates=frozenset(self._candidates),
            comparisons=self.comparisons,
            clusters=self.clusters,
            partial=partial,
            details=merged,
        )
