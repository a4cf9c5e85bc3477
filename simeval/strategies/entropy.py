"""Entropy-based bucketing strategies.

EntropyBucketStrategy:
- Shannon entropy of each document
- bucket_count equal-width ranges over the observed entropy span
- Compare within a bucket and with the next bucket

HierarchicalEntropyStrategy:
- Level l buckets by the entropy of the distribution coarsened to a
  resolution that grows with l (the last level uses every topic)
- Each node splits its own members into `branching` equal-width ranges
- Leaves are compared within themselves and with their adjacent sibling
"""

import numpy as np

from simeval.core.base import BaseStrategy
from simeval.core.errors import ConfigurationError
from simeval.core.simplex import coarsen, entropy
from simeval.strategies.pruning import (
    compare_within_and_adjacent,
    equal_width_buckets,
    group_by_label,
)


class EntropyBucketStrategy(BaseStrategy):
    """Flat equal-width entropy buckets."""

    kind = "entropy"

    def __init__(self, bucket_count: int = 10, name: str = None):
        """Initialize entropy bucketing.

        Args:
            bucket_count: Number of equal-width entropy ranges (>= 1).
            name: Optional display name.
        """
        super().__init__(name)
        if bucket_count < 1:
            raise ConfigurationError(f"bucket_count must be >= 1, got {bucket_count}")
        self.bucket_count = int(bucket_count)

    def get_params(self):
        return {"bucket_count": self.bucket_count}

    def _search(self, corpus, comparator):
        positions = np.arange(len(corpus))
        labels = equal_width_buckets(entropy(corpus.matrix), self.bucket_count)
        groups = group_by_label(positions, labels)
        comparator.notes["buckets"] = len(groups)
        compare_within_and_adjacent(groups, comparator)


class HierarchicalEntropyStrategy(BaseStrategy):
    """Top-down refinement of entropy buckets across resolutions."""

    kind = "hierarchical_entropy"

    def __init__(self, levels: int = 3, branching: int = 4, name: str = None):
        """Initialize hierarchical entropy bucketing.

        Args:
            levels: Number of refinement levels (>= 1).
            branching: Buckets each node is split into (>= 2).
            name: Optional display name.
        """
        super().__init__(name)
        if levels < 1:
            raise ConfigurationError(f"levels must be >= 1, got {levels}")
        if branching < 2:
            raise ConfigurationError(f"branching must be >= 2, got {branching}")
        self.levels = int(levels)
        self.branching = int(branching)

    def get_params(self):
        return {"levels": self.levels, "branching": self.branching}

    def level_resolutions(self, n_topics: int):
        """Number of coarse topics used at each level, ending at n_topics."""
        resolutions = []
        for level in range(self.levels):
            groups = int(round(n_topics * (level + 1) / self.levels))
            resolutions.append(min(n_topics, max(2, groups)))
        resolutions[-1] = n_topics
        return resolutions

    def _search(self, corpus, comparator):
        matrix = corpus.matrix
        features = [
            entropy(coarsen(matrix, resolution))
            for resolution in self.level_resolutions(corpus.n_topics)
        ]
        leaves = self._descend(np.arange(len(corpus)), 0, features, comparator)
        comparator.notes["leaves"] = leaves

    def _descend(self, members, level, features, comparator) -> int:
        """Split `members` at `level` and recurse; returns the leaf count."""
        if members.size < 2:
            return 1

        labels = equal_width_buckets(features[level][members], self.branching)
        groups = group_by_label(members, labels)

        if level == self.levels - 1:
            compare_within_and_adjacent(groups, comparator)
            return len(groups)

        return sum(
            self._descend(children, level + 1, features, comparator)
            for children in groups.values()
        )
