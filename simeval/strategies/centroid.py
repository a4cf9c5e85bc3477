"""Centroid (k-means) clustering strategy under KL divergence.

- k-means++ seeding on the Hellinger embedding (scikit-learn), seeded
- Lloyd refinement: assign each document to argmin_c KL(x || c), move each
  centroid to the arithmetic mean of its members (the Bregman centroid for
  this divergence)
- Compare only pairs inside the same cluster

Point-to-centroid divergences are not document pairs and are not counted as
comparisons. If refinement does not converge within max_iter, the last
assignment is used. The reported cluster count is the effective k
(min(k, N)), empty clusters included.
"""

from collections import defaultdict

import numpy as np
from sklearn.cluster import kmeans_plusplus

from simeval.core.base import BaseStrategy
from simeval.core.errors import ConfigurationError
from simeval.core.simplex import hellinger_embedding, kl_divergence


class CentroidClusteringStrategy(BaseStrategy):
    """Partition the corpus into k clusters and compare within clusters."""

    kind = "centroid"
    clustered = True

    def __init__(self, k: int = 20, max_iter: int = 100, seed: int = 42, name: str = None):
        """Initialize centroid clustering.

        Args:
            k: Number of clusters (>= 1); capped at the corpus size.
            max_iter: Maximum refinement iterations (>= 1).
            seed: Seed for k-means++ initialization.
            name: Optional display name.
        """
        super().__init__(name)
        if k < 1:
            raise ConfigurationError(f"k must be >= 1, got {k}")
        if max_iter < 1:
            raise ConfigurationError(f"max_iter must be >= 1, got {max_iter}")
        self.k = int(k)
        self.max_iter = int(max_iter)
        self.seed = seed

    def get_params(self):
        return {"k": self.k, "max_iter": self.max_iter, "seed": self.seed}

    def initial_centroids(self, matrix: np.ndarray, k: int) -> np.ndarray:
        """Pick k documents as initial centroids with k-means++."""
        _, indices = kmeans_plusplus(
            hellinger_embedding(matrix), n_clusters=k, random_state=self.seed
        )
        return matrix[indices].copy()

    def assign(self, matrix: np.ndarray, centroids: np.ndarray) -> np.ndarray:
        """Label each document with its closest centroid under KL(x || c)."""
        divergences = np.column_stack([kl_divergence(matrix, c) for c in centroids])
        return np.argmin(divergences, axis=1)

    def cluster(self, matrix: np.ndarray):
        """Run seeding and refinement.

        Returns:
            labels: Cluster index per document.
            iterations: Refinement iterations performed.
            converged: Whether assignments stabilised before max_iter.
        """
        k = min(self.k, matrix.shape[0])
        centroids = self.initial_centroids(matrix, k)
        labels = None
        converged = False
        iterations = 0

        for iterations in range(1, self.max_iter + 1):
            new_labels = self.assign(matrix, centroids)
            if labels is not None and np.array_equal(new_labels, labels):
                converged = True
                break
            labels = new_labels
            for c in range(k):
                members = labels == c
                # Empty clusters keep their previous centroid
                if members.any():
                    centroids[c] = matrix[members].mean(axis=0)

        return labels, iterations, converged

    def _search(self, corpus, comparator):
        labels, iterations, converged = self.cluster(corpus.matrix)
        comparator.notes["iterations"] = iterations
        comparator.notes["converged"] = converged
        if not converged:
            print(f"[{self.name}] No convergence after {self.max_iter} iterations, using last assignment")

        clusters = defaultdict(list)
        for position, label in enumerate(labels):
            clusters[int(label)].append(position)

        comparator.record_clusters(min(self.k, len(labels)))
        comparator.notes["non_empty_clusters"] = len(clusters)
        for members in clusters.values():
            comparator.compare_all(members)
