"""Gradient-pruned scan.

Documents are ordered by their dominant-topic projection. Each anchor is
compared forward against its neighbours in that order; at step s the running
similarity floor is

    floor(s) = min_score * (1 - decay ** s)

so near neighbours are tolerated even when dissimilar while far ones must
score close to the threshold. The floor is the neighbour window: its
tolerance decay ** s shrinks geometrically per step outward, and the scan for
an anchor stops at the first neighbour scoring below it. There is no separate
step cap. decay = 1 keeps the floor at 0 and scans every pair.
"""

import numpy as np

from simeval.core.base import BaseStrategy
from simeval.core.errors import ConfigurationError
from simeval.strategies.pruning import dominant_topic_projection


class GradientStrategy(BaseStrategy):
    """Windowed scan over the dominant-topic ordering with a decaying window."""

    kind = "gradient"

    def __init__(self, decay: float = 0.99, name: str = None):
        """Initialize gradient scan.

        Args:
            decay: Geometric decay in (0, 1]; smaller values stop earlier.
            name: Optional display name.
        """
        super().__init__(name)
        if not 0 < decay <= 1:
            raise ConfigurationError(f"decay must be in (0, 1], got {decay}")
        self.decay = decay

    def get_params(self):
        return {"decay": self.decay}

    def _search(self, corpus, comparator):
        order = np.argsort(dominant_topic_projection(corpus.matrix), kind="stable")
        n = order.size
        min_score = comparator.min_score
        stops = 0

        for rank in range(n - 1):
            anchor = int(order[rank])
            tolerance = 1.0
            for other in order[rank + 1:]:
                tolerance *= self.decay
                score = comparator.compare_pair(anchor, int(other))
                if score < min_score * (1.0 - tolerance):
                    stops += 1
                    break

        comparator.notes["early_stops"] = stops
