"""Random pair sampling baseline.

Draws `sample_size` distinct pairs uniformly from the C(N, 2) possible pairs
and evaluates only those. A fresh generator is seeded on every find() call,
so repeated runs evaluate the same pairs.
"""

import numpy as np

from simeval.core.base import BaseStrategy
from simeval.core.errors import ConfigurationError
from simeval.core.metrics import total_pairs


def unrank_pairs(indices: np.ndarray, n: int):
    """Map linear upper-triangle indices to (i, j) positions with i < j.

    Index 0 is (0, 1), index 1 is (0, 2), ..., index C(n, 2) - 1 is
    (n - 2, n - 1).

    Args:
        indices: Linear indices in [0, C(n, 2)).
        n: Number of documents.

    Returns:
        Tuple of arrays (i, j).
    """
    k = np.asarray(indices, dtype=np.int64)
    i = n - 2 - np.floor(np.sqrt(-8.0 * k + 4.0 * n * (n - 1) - 7.0) / 2.0 - 0.5).astype(np.int64)
    j = k + i + 1 - n * (n - 1) // 2 + (n - i) * ((n - i) - 1) // 2
    return i, j


class RandomSamplingStrategy(BaseStrategy):
    """Evaluate a uniform random sample of pairs."""

    kind = "random"

    def __init__(self, sample_size: int = 1000, seed: int = 42, name: str = None):
        """Initialize random sampling.

        Args:
            sample_size: Pairs to draw (>= 0); capped at C(N, 2).
            seed: Seed for the per-run generator.
            name: Optional display name.
        """
        super().__init__(name)
        if sample_size < 0:
            raise ConfigurationError(f"sample_size must be >= 0, got {sample_size}")
        self.sample_size = int(sample_size)
        self.seed = seed

    def get_params(self):
        return {"sample_size": self.sample_size, "seed": self.seed}

    def sample_pairs(self, n: int):
        """Draw the (i, j) positions this strategy will evaluate."""
        possible = total_pairs(n)
        size = min(self.sample_size, possible)
        if size == 0:
            empty = np.zeros(0, dtype=np.int64)
            return empty, empty
        rng = np.random.default_rng(self.seed)
        flat = np.sort(rng.choice(possible, size=size, replace=False))
        return unrank_pairs(flat, n)

    def _search(self, corpus, comparator):
        rows, cols = self.sample_pairs(len(corpus))
        # Sorted linear indices keep pairs grouped by their first position
        for anchor in np.unique(rows):
            comparator.compare(int(anchor), cols[rows == anchor])
