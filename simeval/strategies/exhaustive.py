"""Exhaustive scan baseline: compares every pair (efficiency 0)."""

import numpy as np

from simeval.core.base import BaseStrategy


class ExhaustiveStrategy(BaseStrategy):
    """Compare every unordered pair; reproduces the gold standard exactly."""

    kind = "exhaustive"

    def _search(self, corpus, comparator):
        comparator.compare_all(np.arange(len(corpus)))
