"""Factory functions for creating strategies.

Provides:
- STRATEGY_REGISTRY: Mapping of strategy kinds to classes
- create_strategy(): Create a single strategy from a kind and parameters
- create_strategies(): Build a named set from spec dictionaries
"""

from typing import Any, Dict, Mapping, Optional, Type

from simeval.core.base import BaseStrategy
from simeval.core.errors import ConfigurationError

from .centroid import CentroidClusteringStrategy
from .density import DensityClusteringStrategy
from .entropy import EntropyBucketStrategy, HierarchicalEntropyStrategy
from .exhaustive import ExhaustiveStrategy
from .gradient import GradientStrategy
from .sampling import RandomSamplingStrategy


STRATEGY_REGISTRY: Dict[str, Type[BaseStrategy]] = {
    "exhaustive": ExhaustiveStrategy,
    "gradient": GradientStrategy,
    "entropy": EntropyBucketStrategy,
    "hierarchical_entropy": HierarchicalEntropyStrategy,
    "centroid": CentroidClusteringStrategy,
    "density": DensityClusteringStrategy,
    "random": RandomSamplingStrategy,
}

# Strategies whose constructor takes a random seed
SEEDED_KINDS = {"centroid", "random"}


def create_strategy(
    kind: str,
    name: Optional[str] = None,
    seed: Optional[int] = None,
    **params,
) -> BaseStrategy:
    """Create a single strategy instance.

    Args:
        kind: Key from STRATEGY_REGISTRY.
        name: Display name (defaults to kind).
        seed: Run seed, injected into seeded strategies unless `params`
            already sets one.
        **params: Hyperparameters for the strategy constructor.

    Returns:
        Configured strategy.

    Raises:
        ConfigurationError: If the kind is unknown or a parameter is invalid.
    """
    if kind not in STRATEGY_REGISTRY:
        raise ConfigurationError(
            f"Unknown strategy kind: {kind}. Available: {list(STRATEGY_REGISTRY.keys())}"
        )

    if kind in SEEDED_KINDS and seed is not None:
        params.setdefault("seed", seed)

    strategy_class = STRATEGY_REGISTRY[kind]
    try:
        return strategy_class(name=name or kind, **params)
    except TypeError as e:
        raise ConfigurationError(f"Invalid parameters for '{kind}': {e}") from e


def create_strategies(
    specs: Mapping[str, Mapping[str, Any]],
    seed: Optional[int] = None,
) -> Dict[str, BaseStrategy]:
    """Build named strategies from spec dictionaries.

    Args:
        specs: Mapping of name -> {"kind": ..., "params": {...}}.
        seed: Run seed for seeded strategies.

    Returns:
        Dict of name -> strategy instance.
    """
    strategies = {}
    for name, spec in specs.items():
        if "kind" not in spec:
            raise ConfigurationError(f"Strategy spec '{name}' has no 'kind'")
        strategies[name] = create_strategy(
            spec["kind"], name=name, seed=seed, **dict(spec.get("params", {}))
        )
    return strategies
