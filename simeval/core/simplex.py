"""Math utilities on the probability simplex.

Entropy, Hellinger embedding/distance, Kullback-Leibler divergence and topic
coarsening. All functions take rows of an (N, D) matrix of distributions.
"""

import numpy as np

EPSILON = 1e-12


def entropy(matrix: np.ndarray) -> np.ndarray:
    """Shannon entropy (nats) of each row, with 0 * log 0 = 0."""
    matrix = np.atleast_2d(matrix)
    with np.errstate(divide="ignore", invalid="ignore"):
        terms = np.where(matrix > 0, matrix * np.log(matrix), 0.0)
    return -terms.sum(axis=1)


def hellinger_embedding(matrix: np.ndarray) -> np.ndarray:
    """Map distributions to the unit sphere where Hellinger is Euclidean."""
    return np.sqrt(matrix)


def hellinger_distance(x_embedded: np.ndarray, Y_embedded: np.ndarray) -> np.ndarray:
    """Hellinger distance in [0, 1] between one embedded row and many.

    H(p, q) = ||sqrt(p) - sqrt(q)||_2 / sqrt(2)
    """
    diff = np.atleast_2d(Y_embedded) - x_embedded
    return np.sqrt((diff * diff).sum(axis=1)) / np.sqrt(2.0)


def kl_divergence(matrix: np.ndarray, reference: np.ndarray) -> np.ndarray:
    """KL(row || reference) for each row; reference is clipped away from 0."""
    matrix = np.atleast_2d(matrix)
    ref = np.clip(reference, EPSILON, None)
    with np.errstate(divide="ignore", invalid="ignore"):
        terms = np.where(matrix > 0, matrix * np.log(matrix / ref), 0.0)
    return terms.sum(axis=1)


def coarsen(matrix: np.ndarray, n_groups: int) -> np.ndarray:
    """Sum contiguous blocks of topics into `n_groups` coarser topics.

    Args:
        matrix: (N, D) distributions.
        n_groups: Target resolution, clipped to [1, D].

    Returns:
        (N, n_groups) distributions (rows still sum to 1).
    """
    n_topics = matrix.shape[1]
    n_groups = int(min(max(n_groups, 1), n_topics))
    if n_groups == n_topics:
        return matrix
    starts = np.unique(np.linspace(0, n_topics, n_groups + 1).astype(int)[:-1])
    return np.add.reduceat(matrix, starts, axis=1)
