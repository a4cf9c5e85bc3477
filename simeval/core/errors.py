"""Exception hierarchy for the benchmark.

- ConfigurationError: malformed corpus or out-of-range hyperparameters
- NumericDegeneracyError: a vector that is not a probability distribution
- StrategyError: a strategy aborted its own search (results kept as partial)
"""


class SimEvalError(Exception):
    """Base class for all benchmark errors."""


class ConfigurationError(SimEvalError, ValueError):
    """Inconsistent corpus or invalid strategy/benchmark parameter."""


class NumericDegeneracyError(SimEvalError, ValueError):
    """Vector components are negative, non-finite, or do not sum to 1."""


class StrategyError(SimEvalError, RuntimeError):
    """Raised inside a strategy search when it cannot continue.

    BaseStrategy.find() catches it and returns whatever candidates and
    comparisons were gathered before the failure.
    """
