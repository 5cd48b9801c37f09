"""Objective-sum tournament selection for multi-objective MAP-Elites."""

import numpy as np

from mome.population import Population


def objective_sum_tournament(tournament_size: int = 5):
    """Create a best-of-k tournament selector scored by the objective sum.

    Each tournament draws k = min(tournament_size, len(pool)) candidates
    uniformly with replacement and keeps the one with the lowest sum of
    objectives. The pressure is global: it ignores which cell a candidate
    lives in.

    Args:
        tournament_size: Maximum number of competitors per tournament (default: 5).

    Returns:
        A ParentSelector callable returning the index of the winner.

    Raises:
        ValueError: If tournament_size is not positive.

    Example:
        >>> selector = objective_sum_tournament(tournament_size=3)
        >>> parent_idx = selector(pool, rng)
    """
    if tournament_size < 1:
        raise ValueError(f"tournament_size must be positive, got {tournament_size}")

    def selector(pool: Population, rng: np.random.Generator) -> int:
        """Select one parent index from the pool.

        Raises:
            ValueError: If the pool is empty or has no objectives.
        """
        if pool.objectives is None:
            raise ValueError("objective-sum tournament requires objectives in the pool")
        n = len(pool)
        if n == 0:
            raise ValueError("cannot select from an empty pool")

        k = min(tournament_size, n)
        candidates = rng.integers(0, n, size=k)
        scores = pool.objectives[candidates].sum(axis=1)

        # argmin keeps the first drawn candidate on ties
        return int(candidates[np.argmin(scores)])

    return selector
