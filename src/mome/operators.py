"""Variation operators for MOME.

This module provides the operators that create new candidate solutions:

- uniform_init: Sample a decision vector uniformly inside the bounds
- random_individual: Sample an unevaluated Individual
- gaussian_mutation: Bounded isotropic Gaussian mutation

Operators take the run's random number generator as an argument instead of
owning one, so a single seed reproduces a whole run.
"""

from collections.abc import Callable

import numpy as np

from mome.population import Individual

Bounds = tuple[float, float]
"""Lower and upper bound shared by every decision variable."""


def uniform_init(n_vars: int, bounds: Bounds) -> Callable[[np.random.Generator], np.ndarray]:
    """Create an initializer drawing decision vectors uniformly in bounds.

    Args:
        n_vars: Number of decision variables.
        bounds: Lower and upper bound for every variable.

    Returns:
        A function with signature (rng) -> (n_vars,).

    Raises:
        ValueError: If n_vars is not positive or the bounds are inverted.

    Example:
        >>> init = uniform_init(3, (0.0, 1.0))
        >>> init(np.random.default_rng(0)).shape
        (3,)
    """
    if n_vars < 1:
        raise ValueError(f"n_vars must be positive, got {n_vars}")
    lower, upper = bounds
    if not lower < upper:
        raise ValueError(f"bounds must satisfy lower < upper, got {bounds}")

    def init(rng: np.random.Generator) -> np.ndarray:
        return rng.uniform(lower, upper, size=n_vars)

    return init


def random_individual(rng: np.random.Generator, n_vars: int, bounds: Bounds, n_obj: int) -> Individual:
    """Sample an unevaluated individual uniformly inside the bounds."""
    return Individual.unevaluated(uniform_init(n_vars, bounds)(rng), n_obj)


def gaussian_mutation(
    sigma: float,
    bounds: Bounds = (0.0, 1.0),
) -> Callable[[np.ndarray, np.random.Generator], np.ndarray]:
    """Create a Gaussian mutation operator.

    Every variable receives independent noise drawn from N(0, sigma) and the
    result is clipped back into the bounds. A sigma of 0 returns a copy of the
    parent.

    Args:
        sigma: Standard deviation of the noise. Must be non-negative.
        bounds: Lower and upper bounds for decision variables (default (0.0, 1.0)).

    Returns:
        A mutation function with signature (x, rng) -> x'.

    Raises:
        ValueError: If sigma is negative.

    Example:
        >>> mutate = gaussian_mutation(sigma=0.05, bounds=(0.0, 1.0))
        >>> child = mutate(np.array([0.5, 0.5]), np.random.default_rng(0))
        >>> bool(np.all((child >= 0.0) & (child <= 1.0)))
        True
    """
    if sigma < 0:
        raise ValueError(f"sigma must be non-negative, got {sigma}")
    lower, upper = bounds

    def mutate(x: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        """Apply Gaussian mutation to a decision vector."""
        noise = rng.standard_normal(len(x)) * sigma
        return np.clip(x + noise, lower, upper)

    return mutate
