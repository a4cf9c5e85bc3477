"""Density (DBSCAN) clustering strategy under the Hellinger distance.

- Neighbourhood graph: for each document, all documents within Hellinger
  radius `eps`. Since |sqrt(p_k) - sqrt(q_k)| <= sqrt(2) * H(p, q) for any
  topic k, candidates are pruned exactly with a sorted window on the embedded
  coordinate of largest variance. Every distance evaluated is counted.
- Clusters: scikit-learn DBSCAN on the sparse radius graph
  (metric="precomputed")
- Compare all pairs inside each cluster; noise documents are never compared
  to one another
"""

from collections import defaultdict

import numpy as np
from scipy import sparse
from sklearn.cluster import DBSCAN

from simeval.core.base import BaseStrategy
from simeval.core.errors import ConfigurationError
from simeval.core.simplex import hellinger_distance, hellinger_embedding
from simeval.strategies.pruning import window_bounds

# Sparse graph entries of exactly 0 can be dropped by scipy; duplicates
# are stored with this distance instead.
_MIN_STORED_DISTANCE = 1e-12


class DensityClusteringStrategy(BaseStrategy):
    """Group density-connected documents and compare within groups."""

    kind = "density"
    clustered = True

    def __init__(self, eps: float = 0.2, min_samples: int = 5, name: str = None):
        """Initialize density clustering.

        Args:
            eps: Hellinger radius in (0, 1].
            min_samples: Neighbours (including the point) for a core point.
            name: Optional display name.
        """
        super().__init__(name)
        if not 0 < eps <= 1:
            raise ConfigurationError(f"eps must be in (0, 1], got {eps}")
        if min_samples < 1:
            raise ConfigurationError(f"min_samples must be >= 1, got {min_samples}")
        self.eps = float(eps)
        self.min_samples = int(min_samples)

    def get_params(self):
        return {"eps": self.eps, "min_samples": self.min_samples}

    def radius_graph(self, matrix: np.ndarray, comparator) -> sparse.csr_matrix:
        """Build the symmetric eps-neighbourhood graph, counting evaluations."""
        n = matrix.shape[0]
        embedded = hellinger_embedding(matrix)
        axis = int(np.argmax(embedded.var(axis=0)))
        order = np.argsort(embedded[:, axis], kind="stable")
        keys = embedded[order, axis]
        radius = self.eps * np.sqrt(2.0)

        rows, cols, data = [], [], []
        for rank in range(n - 1):
            end = window_bounds(keys, rank, radius)
            window = order[rank + 1:end]
            if window.size == 0:
                continue
            anchor = int(order[rank])
            distances = hellinger_distance(embedded[anchor], embedded[window])
            comparator.count_structure(window.size)

            close = distances <= self.eps
            for other, distance in zip(window[close], distances[close]):
                distance = max(float(distance), _MIN_STORED_DISTANCE)
                rows.extend((anchor, int(other)))
                cols.extend((int(other), anchor))
                data.extend((distance, distance))

        return sparse.csr_matrix((data, (rows, cols)), shape=(n, n))

    def _search(self, corpus, comparator):
        graph = self.radius_graph(corpus.matrix, comparator)
        comparator.notes["graph_edges"] = graph.nnz // 2

        labels = DBSCAN(
            eps=self.eps,
            min_samples=self.min_samples,
            metric="precomputed",
        ).fit_predict(graph)

        clusters = defaultdict(list)
        for position, label in enumerate(labels):
            if label != -1:
                clusters[int(label)].append(position)

        comparator.record_clusters(len(clusters))
        comparator.notes["noise"] = int(np.sum(labels == -1))
        for members in clusters.values():
            comparator.compare_all(members)
