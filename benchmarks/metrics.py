"""Performance metrics for multi-objective optimization.

This module provides metrics for evaluating the quality of Pareto front
approximations against a reference front:

- igd: Inverted generational distance (coverage of the reference front)
- gd: Generational distance (convergence of the approximation)
- hypervolume: Dominated volume up to a reference point, via pymoo
"""

import numpy as np
from pymoo.indicators.hv import HV


def _nearest_distances(points: np.ndarray, targets: np.ndarray) -> np.ndarray:
    """Euclidean distance from each point to its nearest target."""
    diff = points[:, None, :] - targets[None, :, :]
    return np.sqrt((diff**2).sum(axis=2)).min(axis=1)


def igd(reference: np.ndarray, approx: np.ndarray) -> float:
    """Compute the inverted generational distance.

    Mean distance from each reference point to its nearest approximation
    point. Lower is better.

    Returns:
        IGD value, or inf if either front is empty.
    """
    if len(reference) == 0 or len(approx) == 0:
        return float("inf")
    return float(np.mean(_nearest_distances(reference, approx)))


def gd(approx: np.ndarray, reference: np.ndarray) -> float:
    """Compute the generational distance.

    Mean distance from each approximation point to its nearest reference
    point. Lower is better.

    Returns:
        GD value, or inf if either front is empty.
    """
    if len(reference) == 0 or len(approx) == 0:
        return float("inf")
    return float(np.mean(_nearest_distances(approx, reference)))


def hypervolume(objectives: np.ndarray, ref_point: np.ndarray) -> float:
    """Compute hypervolume indicator.

    The hypervolume (or S-metric) measures the volume of objective space
    dominated by the Pareto front approximation and bounded by a reference point.
    Higher values indicate better convergence and diversity.

    Args:
        objectives: (n, n_obj) objective values of the Pareto front approximation
        ref_point: Reference point, slightly worse than the nadir of the
            reference front.

    Returns:
        Hypervolume value (higher is better for minimization problems)

    Raises:
        ValueError: If objectives array is empty or has wrong shape
    """
    if objectives.size == 0:
        raise ValueError("objectives array cannot be empty")

    if objectives.ndim != 2:
        raise ValueError(f"objectives must be 2D array, got shape {objectives.shape}")

    indicator = HV(ref_point=ref_point)
    return float(indicator(objectives))


def reference_point(reference: np.ndarray, margin: float = 0.1) -> np.ndarray:
    """Nadir of the reference front pushed out by a relative margin."""
    nadir = reference.max(axis=0)
    ideal = reference.min(axis=0)
    return nadir + margin * np.maximum(nadir - ideal, 1e-12)
