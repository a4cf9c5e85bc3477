"""Named strategy suites.

Each suite maps a display name to a strategy spec: {"kind": ..., "params": {...}}.
The "default" suite is the full comparison set
(one gradient scan, three entropy bucketings, three hierarchical bucketings,
three k-means, four density clusterings and a random baseline).
"""

from typing import Any, Dict


STRATEGY_SUITES: Dict[str, Dict[str, Dict[str, Any]]] = {
    "default": {
        "gradient": {"kind": "gradient", "params": {"decay": 0.99}},
        "entropy-10": {"kind": "entropy", "params": {"bucket_count": 10}},
        "entropy-50": {"kind": "entropy", "params": {"bucket_count": 50}},
        "entropy-100": {"kind": "entropy", "params": {"bucket_count": 100}},
        "hentropy-2": {"kind": "hierarchical_entropy", "params": {"levels": 2, "branching": 8}},
        "hentropy-3": {"kind": "hierarchical_entropy", "params": {"levels": 3, "branching": 6}},
        "hentropy-4": {"kind": "hierarchical_entropy", "params": {"levels": 4, "branching": 4}},
        "kmeans-20": {"kind": "centroid", "params": {"k": 20}},
        "kmeans-50": {"kind": "centroid", "params": {"k": 50}},
        "kmeans-100": {"kind": "centroid", "params": {"k": 100}},
        "dbscan-10": {"kind": "density", "params": {"eps": 0.2, "min_samples": 10}},
        "dbscan-50": {"kind": "density", "params": {"eps": 0.2, "min_samples": 50}},
        "dbscan-100": {"kind": "density", "params": {"eps": 0.2, "min_samples": 100}},
        "dbscan-200": {"kind": "density", "params": {"eps": 0.2, "min_samples": 200}},
        "random": {"kind": "random", "params": {"sample_size": 1000}},
    },
    "quick": {
        "gradient": {"kind": "gradient", "params": {"decay": 0.9}},
        "entropy-10": {"kind": "entropy", "params": {"bucket_count": 10}},
        "hentropy-2": {"kind": "hierarchical_entropy", "params": {"levels": 2, "branching": 4}},
        "kmeans-10": {"kind": "centroid", "params": {"k": 10}},
        "dbscan-5": {"kind": "density", "params": {"eps": 0.2, "min_samples": 5}},
        "random": {"kind": "random", "params": {"sample_size": 200}},
    },
    "baselines": {
        "exhaustive": {"kind": "exhaustive", "params": {}},
        "random": {"kind": "random", "params": {"sample_size": 1000}},
    },
}


def get_suite(name: str) -> Dict[str, Dict[str, Any]]:
    """Get a strategy suite by name.

    Args:
        name: Suite name (default, quick, baselines).

    Returns:
        Dict of strategy name -> spec (a copy, safe to modify).

    Raises:
        KeyError: If suite name is unknown.
    """
    if name not in STRATEGY_SUITES:
        raise KeyError(f"Unknown suite '{name}'. Available: {list(STRATEGY_SUITES.keys())}")
    return {
        strategy: {"kind": spec["kind"], "params": dict(spec["params"])}
        for strategy, spec in STRATEGY_SUITES[name].items()
    }
