"""Similar-pair search strategies.

Each strategy trades recall and precision against the number of pairwise
comparisons it performs:

- exhaustive: every pair (reference baseline)
- gradient: dominant-topic ordering with a geometrically decaying window
- entropy / hierarchical_entropy: entropy buckets, flat or refined top-down
- centroid: k-means under KL divergence, compare within clusters
- density: DBSCAN under Hellinger distance, compare within clusters
- random: uniform sample of pairs
"""

from .centroid import CentroidClusteringStrategy
from .density import DensityClusteringStrategy
from .entropy import EntropyBucketStrategy, HierarchicalEntropyStrategy
from .exhaustive import ExhaustiveStrategy
from .factory import STRATEGY_REGISTRY, create_strategies, create_strategy
from .gradient import GradientStrategy
from .sampling import RandomSamplingStrategy

__all__ = [
    "CentroidClusteringStrategy",
    "DensityClusteringStrategy",
    "EntropyBucketStrategy",
    "ExhaustiveStrategy",
    "GradientStrategy",
    "HierarchicalEntropyStrategy",
    "RandomSamplingStrategy",
    "STRATEGY_REGISTRY",
    "create_strategies",
    "create_strategy",
]
