"""Base class for similar-pair search strategies.

A strategy receives a corpus and a threshold and returns the pairs it found,
together with the number of pairwise evaluations it actually performed.
Subclasses implement _search() against a PairwiseComparator; find() handles
validation, short-circuits tiny corpora and degrades StrategyError into a
partial result.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Union

from simeval.core.base.comparator import PairwiseComparator
from simeval.core.errors import ConfigurationError, StrategyError
from simeval.core.similarity import SimilarityFunction, get_similarity
from simeval.core.types import Corpus, SearchResult, as_corpus


def validate_min_score(min_score: float) -> float:
    """Check a similarity threshold lies in [0, 1]."""
    if not 0.0 <= min_score <= 1.0:
        raise ConfigurationError(f"min_score must be in [0, 1], got {min_score}")
    return float(min_score)


class BaseStrategy(ABC):
    """Abstract base class for pair search strategies.

    Strategies hold only their hyperparameters (and seed, for sampled ones);
    they keep no state between find() calls and never mutate the corpus.

    Subclasses must implement:
    - _search(): Evaluate candidate pairs through the comparator
    """

    kind: str = "base"
    clustered: bool = False

    def __init__(self, name: Optional[str] = None):
        """Initialize strategy with an optional display name.

        Args:
            name: Identifier used in logs and metrics (defaults to kind).
        """
        self.name = name or self.kind

    def find(
        self,
        corpus,
        min_score: float,
        similarity: Union[str, SimilarityFunction, None] = None,
    ) -> SearchResult:
        """Search a corpus for pairs scoring at least `min_score`.

        Args:
            corpus: Corpus or sequence of Distribution.
            min_score: Similarity threshold in [0, 1].
            similarity: Similarity function (or registry name) to evaluate
                pairs with; must be the one the gold standard used.

        Returns:
            SearchResult with candidates, comparisons and clusters.
        """
        corpus = as_corpus(corpus)
        min_score = validate_min_score(min_score)
        comparator = PairwiseComparator(corpus, get_similarity(similarity), min_score)

        if len(corpus) < 2:
            return comparator.result()

        try:
            self._search(corpus, comparator)
        except StrategyError as e:
            print(
                f"[{self.name}] Search aborted: {e}. Keeping {comparator.n_candidates} "
                f"candidates after {comparator.comparisons} comparisons"
            )
            return comparator.result(partial=True, details={"error": str(e)})

        return comparator.result()

    @abstractmethod
    def _search(self, corpus: Corpus, comparator: PairwiseComparator) -> None:
        """Evaluate candidate pairs.

        Args:
            corpus: Validated corpus with at least 2 documents.
            comparator: Accounting helper; all similarity evaluations go
                through it.
        """
        pass

    def get_params(self) -> Dict[str, Any]:
        """Hyperparameters, for logging and result tables."""
        return {}

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={v!r}" for k, v in self.get_params().items())
        return f"{type(self).__name__}(name={self.name!r}{', ' if params else ''}{params})"
