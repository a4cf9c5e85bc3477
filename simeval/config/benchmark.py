"""Benchmark configuration."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from simeval.core.errors import ConfigurationError
from simeval.core.similarity import SIMILARITY_REGISTRY

from .suites import STRATEGY_SUITES, get_suite


@dataclass
class BenchmarkConfig:
    """Configuration for a benchmark sweep.

    Groups related parameters:
    - Sweep: corpus sizes, threshold, similarity function
    - Strategies: a named suite, or explicit specs overriding it
    - Execution: seed, worker processes, verbosity
    """

    sizes: List[int] = field(default_factory=lambda: [200, 300, 400, 500, 600, 700, 800, 900, 1000])
    min_score: float = 0.83
    similarity: str = "cosine"

    suite: str = "default"
    strategies: Optional[Dict[str, Dict[str, Any]]] = None  # name -> {"kind", "params"}

    random_seed: int = 42
    n_workers: int = 1
    verbose: bool = True

    def validate(self):
        if not self.sizes:
            raise ConfigurationError("sizes must not be empty")
        if any(size < 2 for size in self.sizes):
            raise ConfigurationError(f"every size must be >= 2, got {self.sizes}")
        if not 0.0 <= self.min_score <= 1.0:
            raise ConfigurationError(f"min_score must be in [0, 1], got {self.min_score}")
        if self.similarity not in SIMILARITY_REGISTRY:
            raise ConfigurationError(
                f"Unknown similarity '{self.similarity}'. Available: {list(SIMILARITY_REGISTRY.keys())}"
            )
        if self.strategies is None and self.suite not in STRATEGY_SUITES:
            raise ConfigurationError(
                f"Unknown suite '{self.suite}'. Available: {list(STRATEGY_SUITES.keys())}"
            )
        if self.n_workers < 1:
            raise ConfigurationError(f"n_workers must be >= 1, got {self.n_workers}")

    def resolve_strategies(self) -> Dict[str, Dict[str, Any]]:
        """Strategy specs to run: explicit ones if given, else the suite's."""
        if self.strategies is not None:
            return dict(self.strategies)
        return get_suite(self.suite)
