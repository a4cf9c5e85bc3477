"""Pruning primitives shared by the indexing strategies.

- equal_width_buckets / group_by_label: partition positions by a scalar key
- compare_within_and_adjacent: compare inside buckets and with the next one
- dominant_topic_projection: scalar ordering key for gradient scans
- window_bounds: sorted-key range lookup for exact radius pruning
"""

from typing import Dict

import numpy as np

from simeval.core.base import PairwiseComparator


def equal_width_buckets(values: np.ndarray, n_buckets: int) -> np.ndarray:
    """Assign each value to one of `n_buckets` equal-width ranges.

    The ranges span [min(values), max(values)]; the maximum falls in the last
    bucket. A constant input maps everything to bucket 0.

    Args:
        values: (N,) scalar keys.
        n_buckets: Number of ranges (>= 1).

    Returns:
        (N,) integer labels in [0, n_buckets).
    """
    values = np.asarray(values, dtype=np.float64)
    if values.size == 0:
        return np.zeros(0, dtype=np.intp)
    low, high = values.min(), values.max()
    width = high - low
    if width <= 0 or n_buckets <= 1:
        return np.zeros(values.size, dtype=np.intp)
    labels = np.floor((values - low) / width * n_buckets).astype(np.intp)
    return np.clip(labels, 0, n_buckets - 1)


def group_by_label(positions: np.ndarray, labels: np.ndarray) -> Dict[int, np.ndarray]:
    """Group positions by label; groups keep the input order of positions."""
    groups: Dict[int, list] = {}
    for position, label in zip(positions, labels):
        groups.setdefault(int(label), []).append(int(position))
    return {label: np.asarray(members, dtype=np.intp) for label, members in sorted(groups.items())}


def compare_within_and_adjacent(
    groups: Dict[int, np.ndarray],
    comparator: PairwiseComparator,
) -> None:
    """Compare all pairs inside each bucket and across neighbouring buckets.

    Bucket b is compared with itself and with bucket b + 1, so every pair of
    adjacent buckets is visited exactly once.
    """
    for label, members in groups.items():
        comparator.compare_all(members)
        neighbour = groups.get(label + 1)
        if neighbour is not None:
            comparator.compare_between(members, neighbour)


def dominant_topic_projection(matrix: np.ndarray) -> np.ndarray:
    """Scalar key: dominant topic index plus its weight.

    Sorting by this key groups documents by dominant topic, ordered by how
    strongly they express it.
    """
    return np.argmax(matrix, axis=1) + np.max(matrix, axis=1)


def window_bounds(sorted_keys: np.ndarray, rank: int, radius: float) -> int:
    """End (exclusive) of the forward window of keys within `radius` of rank."""
    return int(np.searchsorted(sorted_keys, sorted_keys[rank] + radius, side="right"))
