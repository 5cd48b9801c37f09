"""Pareto and grid primitives for multi-objective MAP-Elites.

This module provides the pure functions the archive is built on:
- dominates: scalar Pareto dominance check
- dominates_matrix: vectorized pairwise dominance
- non_dominated_mask: members of a set not dominated by any other member
- crowding_distance: diversity metric for members of a non-dominated set
- bin_index: map a descriptor value onto a grid bin
- cell_of: map a decision vector onto a 2D grid cell
"""

import numpy as np

Cell = tuple[int, int]


def dominates(a: np.ndarray, b: np.ndarray) -> bool:
    """Check if solution a Pareto-dominates solution b (minimization).

    A solution a dominates b if and only if:
      - a[i] <= b[i] for ALL objectives (a is at least as good everywhere)
      - a[i] < b[i] for AT LEAST ONE objective (a is strictly better somewhere)

    Args:
        a: Objective values for solution a. Shape (n_obj,).
        b: Objective values for solution b. Shape (n_obj,).

    Returns:
        True if a dominates b, False otherwise.

    Examples:
        >>> dominates(np.array([1.0, 2.0]), np.array([2.0, 3.0]))
        True
        >>> dominates(np.array([1.0, 3.0]), np.array([2.0, 2.0]))
        False
    """
    return bool(np.all(a <= b) and np.any(a < b))


def dominates_matrix(objectives: np.ndarray) -> np.ndarray:
    """Compute pairwise dominance for all individuals (vectorized).

    Args:
        objectives: Objective values for all individuals. Shape (n, n_obj).

    Returns:
        Boolean array of shape (n, n) where result[i, j] = True iff
        individual i dominates individual j.

    Examples:
        >>> objs = np.array([[1.0, 1.0], [2.0, 2.0], [1.0, 2.0]])
        >>> dom = dominates_matrix(objs)
        >>> dom[0, 1]
        True
        >>> dom[1, 0]
        False
    """
    a = objectives[:, np.newaxis, :]  # (n, 1, n_obj)
    b = objectives[np.newaxis, :, :]  # (1, n, n_obj)

    all_leq = np.all(a <= b, axis=2)
    any_lt = np.any(a < b, axis=2)

    return all_leq & any_lt


def non_dominated_mask(objectives: np.ndarray) -> np.ndarray:
    """Flag the members of a set that no other member dominates.

    This is the O(n^2) filter used for global front extraction. Duplicated
    objective vectors do not dominate each other, so all copies are kept.

    Args:
        objectives: Objective values for all individuals. Shape (n, n_obj).

    Returns:
        Boolean array of shape (n,), True for non-dominated individuals.

    Examples:
        >>> objs = np.array([[1.0, 3.0], [2.0, 2.0], [2.0, 3.0]])
        >>> non_dominated_mask(objs)
        array([ True,  True, False])
    """
    if objectives.shape[0] == 0:
        return np.array([], dtype=bool)
    return ~dominates_matrix(objectives).any(axis=0)


def crowding_distance(objectives: np.ndarray) -> np.ndarray:
    """Compute crowding distance for the members of a non-dominated set.

    Crowding distance measures how isolated a solution is in objective space.
    Lower values mean a more crowded neighbourhood.

    Boundary solutions (with min/max values for any objective) receive
    infinite distance. Interior solutions receive the sum of normalized
    neighbor distances across all objectives. An objective whose range is
    zero contributes nothing to interior members. Ranges are taken over the
    finite values, so a member next to an infinite value is infinitely
    isolated on that objective.

    Args:
        objectives: Objective values for the set. Shape (n, n_obj).

    Returns:
        Array of shape (n,) containing crowding distances.

    Examples:
        >>> objs = np.array([[1.0, 4.0], [2.0, 3.0], [3.0, 2.0], [4.0, 1.0]])
        >>> cd = crowding_distance(objs)
        >>> np.isinf(cd[0]) and np.isinf(cd[-1])
        True
    """
    n = objectives.shape[0]

    if n == 0:
        return np.array([], dtype=np.float64)

    if n <= 2:
        # Every member is both a min and a max somewhere
        return np.full(n, np.inf)

    n_obj = objectives.shape[1]
    distances = np.zeros(n, dtype=np.float64)

    for m in range(n_obj):
        # Stable sort keeps ties in insertion order
        sorted_indices = np.argsort(objectives[:, m], kind="stable")
        values = objectives[sorted_indices, m]

        # Normalize by the finite span; infinite entries would make it inf
        finite = values[np.isfinite(values)]
        obj_range = finite[-1] - finite[0] if finite.size else 0.0

        distances[sorted_indices[0]] = np.inf
        distances[sorted_indices[-1]] = np.inf

        if obj_range > 0:
            with np.errstate(invalid="ignore"):
                gaps = values[2:] - values[:-2]
            # inf - inf: both neighbours share the same infinite value
            gaps = np.where(np.isnan(gaps), 0.0, gaps)
            distances[sorted_indices[1:-1]] += gaps / obj_range

    return distances


def bin_index(value: float, lower: float, upper: float, bins: int) -> int:
    """Map a descriptor value to a bin index in [0, bins - 1].

    Bins have width (upper - lower) / bins. Values at or beyond the bounds
    fall into the boundary bins instead of raising.

    Args:
        value: Descriptor value.
        lower: Lower bound of the descriptor range.
        upper: Upper bound of the descriptor range.
        bins: Number of bins along this axis.

    Returns:
        Integer bin index.

    Examples:
        >>> bin_index(0.5, 0.0, 1.0, 4)
        2
        >>> bin_index(1.0, 0.0, 1.0, 4)
        3
        >>> bin_index(-7.0, 0.0, 1.0, 4)
        0
    """
    width = (upper - lower) / bins
    idx = np.floor((value - lower) / width)
    return int(np.clip(idx, 0, bins - 1))


def cell_of(x: np.ndarray, lower: float, upper: float, bins: int) -> Cell:
    """Compute the grid cell of a decision vector.

    The descriptor is (x[0], x[1]). One-dimensional decision vectors use a
    constant 0.0 on the second axis, which collapses the grid to one row.

    Args:
        x: Decision vector. Shape (n_vars,).
        lower: Lower bound shared by both descriptor axes.
        upper: Upper bound shared by both descriptor axes.
        bins: Bins per descriptor axis.

    Returns:
        Tuple (bx, by) of bin indices.
    """
    gx = x[0]
    gy = x[1] if len(x) > 1 else 0.0
    return (bin_index(gx, lower, upper, bins), bin_index(gy, lower, upper, bins))
