"""Uniform parent selection, the classic MAP-Elites choice."""

import numpy as np

from mome.population import Population


def uniform_selection():
    """Create a selector that picks any archived individual with equal probability.

    Returns:
        A ParentSelector callable.

    Example:
        >>> selector = uniform_selection()
        >>> parent_idx = selector(pool, rng)
    """

    def selector(pool: Population, rng: np.random.Generator) -> int:
        n = len(pool)
        if n == 0:
            raise ValueError("cannot select from an empty pool")
        return int(rng.integers(0, n))

    return selector
