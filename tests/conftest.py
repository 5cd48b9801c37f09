"""Shared test fixtures for mome tests.

This module provides common fixtures used across test modules:
- rng: Seeded random number generator
- make_individual: Factory for evaluated individuals
- corner_config: Small 2x2 grid configuration used by end-to-end tests
- Objective functions of different shapes
"""

import numpy as np
import pytest

from mome import Archive, Individual, MOMEConfig


@pytest.fixture
def rng() -> np.random.Generator:
    """Provide a seeded random number generator for deterministic tests."""
    return np.random.default_rng(42)


@pytest.fixture
def make_individual():
    """Factory building an evaluated individual from plain lists."""

    def make(x: list[float], objectives: list[float]) -> Individual:
        return Individual(x=np.array(x, dtype=float), objectives=np.array(objectives, dtype=float))

    return make


@pytest.fixture
def archive() -> Archive:
    """Empty 2x2 archive on [0, 1] with room for 3 members per cell."""
    return Archive(bins_per_dim=2, bounds=(0.0, 1.0), max_per_cell=3)


@pytest.fixture
def corner_config() -> MOMEConfig:
    """Configuration of the small 2x2 corner scenario."""
    return MOMEConfig(
        n_vars=2,
        n_obj=2,
        bins_per_dim=2,
        lower=0.0,
        upper=1.0,
        evaluations_per_generation=10,
        generations=1,
        initial_random=10,
        mutation_sigma=0.1,
        max_per_cell=2,
    )


@pytest.fixture
def corner_objective():
    """f(x) = [x0, x1]: both minimized, independent axes."""

    def evaluate(x: np.ndarray) -> np.ndarray:
        return np.array([x[0], x[1]])

    return evaluate


@pytest.fixture
def tradeoff_objective():
    """Bi-objective problem whose objectives conflict along x0.

    - f1 = x0
    - f2 = 1 - x0 + mean(x[1:])
    """

    def evaluate(x: np.ndarray) -> np.ndarray:
        return np.array([x[0], 1.0 - x[0] + np.mean(x[1:])])

    return evaluate


@pytest.fixture
def zdt1_objective():
    """ZDT1 multi-objective test problem with a convex Pareto front."""

    def evaluate(x: np.ndarray) -> np.ndarray:
        f1 = x[0]
        g = 1 + 9 * np.mean(x[1:])
        f2 = g * (1 - np.sqrt(f1 / g))
        return np.array([f1, f2])

    return evaluate
