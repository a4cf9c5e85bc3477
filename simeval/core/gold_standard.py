"""Exhaustive ground-truth similarity relation.

build_gold_standard() scores every unordered pair of a corpus with the
benchmark's similarity function. The resulting GoldStandard is symmetric,
irreflexive and remembers the function and threshold it was built with, so
strategies are always judged under the same similarity semantics.
"""

from collections.abc import Mapping
from typing import Dict, FrozenSet, Hashable, Iterator, Optional, Union

import numpy as np

from simeval.core.base.strategy import validate_min_score
from simeval.core.similarity import SimilarityFunction, get_similarity
from simeval.core.types import Pair, as_corpus


class GoldStandard(Mapping):
    """Read-only mapping of document id -> ids it is truly similar to.

    Attributes:
        min_score: Threshold used to build the relation.
        similarity: Similarity function used to build the relation.
        comparisons: Pairs evaluated while building (always C(N, 2)).
    """

    def __init__(
        self,
        neighbors: Dict[Hashable, FrozenSet[Hashable]],
        pairs: FrozenSet[Pair],
        min_score: float,
        similarity: SimilarityFunction,
        comparisons: int = 0,
    ):
        self._neighbors = neighbors
        self._pairs = pairs
        self.min_score = min_score
        self.similarity = similarity
        self.comparisons = comparisons

    def __getitem__(self, doc_id: Hashable) -> FrozenSet[Hashable]:
        return self._neighbors[doc_id]

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._neighbors)

    def __len__(self) -> int:
        return len(self._neighbors)

    def pairs(self) -> FrozenSet[Pair]:
        """All truly similar pairs."""
        return self._pairs

    @property
    def n_pairs(self) -> int:
        return len(self._pairs)

    def is_symmetric(self) -> bool:
        """Check j in gold[i] <=> i in gold[j] and i not in gold[i]."""
        for doc_id, similar in self._neighbors.items():
            if doc_id in similar:
                return False
            for other in similar:
                if doc_id not in self._neighbors.get(other, ()):
                    return False
        return True

    def __repr__(self) -> str:
        return (
            f"GoldStandard(documents={len(self)}, pairs={self.n_pairs}, "
            f"min_score={self.min_score}, similarity={self.similarity.name})"
        )


def build_gold_standard(
    corpus,
    min_score: float,
    similarity: Union[str, SimilarityFunction, None] = None,
    verbose: bool = False,
) -> GoldStandard:
    """Exhaustively compute the similar-pair relation.

    Every pair (i, j) with i < j is scored in corpus order; no pruning and no
    randomness are involved.

    Args:
        corpus: Corpus or sequence of Distribution.
        min_score: Similarity threshold in [0, 1].
        similarity: Similarity function or registry name (default cosine).
        verbose: Print a one-line summary.

    Returns:
        GoldStandard relation.

    Raises:
        ConfigurationError: If vector lengths differ or min_score is invalid.
    """
    corpus = as_corpus(corpus)
    min_score = validate_min_score(min_score)
    similarity = get_similarity(similarity)

    matrix = corpus.matrix
    ids = corpus.ids
    n = len(corpus)

    neighbors = {doc_id: set() for doc_id in ids}
    pairs = set()
    comparisons = 0

    for i in range(n - 1):
        scores = similarity.one_to_many(matrix[i], matrix[i + 1:])
        comparisons += scores.shape[0]
        for offset in np.flatnonzero(scores >= min_score):
            j = i + 1 + int(offset)
            neighbors[ids[i]].add(ids[j])
            neighbors[ids[j]].add(ids[i])
            pairs.add(Pair(ids[i], ids[j], float(scores[offset])))

    gold = GoldStandard(
        neighbors={doc_id: frozenset(similar) for doc_id, similar in neighbors.items()},
        pairs=frozenset(pairs),
        min_score=min_score,
        similarity=similarity,
        comparisons=comparisons,
    )

    if verbose:
        print(f"[Gold] {n} documents, {comparisons} comparisons, {gold.n_pairs} similar pairs")

    return gold
