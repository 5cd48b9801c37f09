"""Crowding-distance pruning of over-capacity cells."""

import numpy as np

from mome.primitives import crowding_distance


def crowding_pruning(recompute: bool = True):
    """Create a pruner that drops the most crowded members of a cell.

    Members are scored with NSGA-II crowding distance in objective space and
    the lowest-scoring member is removed until the cell fits its capacity.
    Boundary members score +inf, so the extremes of a cell's front go last.
    Ties go to the lowest index, i.e. the member that entered the cell first.

    Args:
        recompute: If True (default), scores are recomputed after every
            removal, so neighbours of a removed member are rescored.
            If False, scores are computed once and the lowest members are
            dropped in one pass.

    Returns:
        A CellPruner callable returning the sorted indices of the members to
        keep.

    Example:
        >>> pruner = crowding_pruning()
        >>> objs = np.array([[0.0, 1.0], [0.4, 0.6], [0.5, 0.5], [1.0, 0.0]])
        >>> pruner(objs, capacity=3)
        array([0, 2, 3])
    """

    def pruner(objectives: np.ndarray, capacity: int) -> np.ndarray:
        """Select which members of a cell survive.

        Args:
            objectives: Objective vectors of the cell members, shape (n, n_obj).
            capacity: Number of members to keep.

        Returns:
            Sorted index array of length min(n, capacity).

        Raises:
            ValueError: If capacity is less than 1.
        """
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")

        n = objectives.shape[0]
        if n <= capacity:
            return np.arange(n)

        if not recompute:
            scores = crowding_distance(objectives)
            removed = np.argsort(scores, kind="stable")[: n - capacity]
            return np.setdiff1d(np.arange(n), removed)

        remaining = np.arange(n)
        while len(remaining) > capacity:
            scores = crowding_distance(objectives[remaining])
            remaining = np.delete(remaining, int(np.argmin(scores)))
        return remaining

    return pruner
