"""Bi-objective test problems for MOME benchmarking.

Every problem minimizes two objectives. The suite goes from easy to hard:

- Schaffer N.1 (1 variable) and Fonseca-Fleming (3 variables)
- ZDT1 (convex front) and Kursawe (non-convex, disconnected)
- ZDT3 (discontinuous front) and ZDT6 (non-uniform density)

References:
    Zitzler, E., Deb, K., & Thiele, L. (2000). Comparison of multiobjective
    evolutionary algorithms: Empirical results. Evolutionary computation, 8(2), 173-195.
"""

from collections.abc import Callable
from dataclasses import dataclass

import numpy as np


def schaffer_n1(x: np.ndarray) -> np.ndarray:
    """Schaffer N.1: f1 = x^2, f2 = (x - 2)^2.

    The Pareto set is x in [0, 2].
    """
    return np.array([x[0] ** 2, (x[0] - 2.0) ** 2])


def fonseca_fleming(x: np.ndarray) -> np.ndarray:
    """Fonseca-Fleming: concave front, optimal when all x_i share one value in [-1/sqrt(n), 1/sqrt(n)]."""
    shift = 1.0 / np.sqrt(len(x))
    f1 = 1.0 - np.exp(-np.sum((x - shift) ** 2))
    f2 = 1.0 - np.exp(-np.sum((x + shift) ** 2))
    return np.array([f1, f2])


def zdt1(x: np.ndarray) -> np.ndarray:
    """ZDT1: Convex Pareto front.

    The Pareto-optimal front is formed by x_i = 0 for i > 1,
    resulting in f2 = 1 - sqrt(f1).

    Args:
        x: Decision variables (n_vars,), all in [0, 1]

    Returns:
        Objectives (2,) to minimize
    """
    n = len(x)
    f1 = x[0]
    g = 1 + 9 * np.sum(x[1:]) / (n - 1)
    f2 = g * (1 - np.sqrt(f1 / g))
    return np.array([f1, f2])


def kursawe(x: np.ndarray) -> np.ndarray:
    """Kursawe: non-convex, disconnected front. Typical bounds are [-5, 5]."""
    f1 = np.sum(-10.0 * np.exp(-0.2 * np.sqrt(x[:-1] ** 2 + x[1:] ** 2)))
    f2 = np.sum(np.abs(x) ** 0.8 + 5.0 * np.sin(x**3))
    return np.array([f1, f2])


def zdt3(x: np.ndarray) -> np.ndarray:
    """ZDT3: Discontinuous Pareto front of five segments.

    The Pareto-optimal front is formed by x_i = 0 for i > 1,
    resulting in f2 = 1 - sqrt(f1) - f1 * sin(10 * pi * f1).
    """
    n = len(x)
    f1 = x[0]
    g = 1 + 9 * np.sum(x[1:]) / (n - 1)
    f2 = g * (1 - np.sqrt(f1 / g) - (f1 / g) * np.sin(10 * np.pi * f1))
    return np.array([f1, f2])


def zdt6(x: np.ndarray) -> np.ndarray:
    """ZDT6: Non-convex front with a non-uniform density of solutions.

    The Pareto-optimal front is formed by x_i = 0 for i > 1,
    resulting in f2 = 1 - f1^2.
    """
    n = len(x)
    f1 = 1 - np.exp(-4 * x[0]) * np.sin(6 * np.pi * x[0]) ** 6
    g = 1 + 9 * (np.sum(x[1:]) / (n - 1)) ** 0.25
    f2 = g * (1 - (f1 / g) ** 2)
    return np.array([f1, f2])


@dataclass(frozen=True)
class Problem:
    """A benchmark problem with its typical decision space.

    Attributes:
        evaluate: Objective function (n_vars,) -> (2,).
        n_vars: Number of decision variables.
        bounds: Lower and upper bound shared by every variable.
    """

    evaluate: Callable[[np.ndarray], np.ndarray]
    n_vars: int
    bounds: tuple[float, float]


PROBLEMS: dict[str, Problem] = {
    "schaffer_n1": Problem(schaffer_n1, n_vars=1, bounds=(-100.0, 100.0)),
    "fonseca_fleming": Problem(fonseca_fleming, n_vars=3, bounds=(-4.0, 4.0)),
    "zdt1": Problem(zdt1, n_vars=30, bounds=(0.0, 1.0)),
    "kursawe": Problem(kursawe, n_vars=3, bounds=(-5.0, 5.0)),
    "zdt3": Problem(zdt3, n_vars=30, bounds=(0.0, 1.0)),
    "zdt6": Problem(zdt6, n_vars=10, bounds=(0.0, 1.0)),
}
