"""Reference Pareto fronts for the benchmark problems.

Analytic fronts are sampled on a regular grid. Kursawe has no closed form,
so its front is approximated by random sampling followed by a global
non-dominated filter.
"""

from collections.abc import Callable

import numpy as np

from benchmarks.problems import kursawe

# f1 ranges of the five ZDT3 front segments
ZDT3_SEGMENTS: tuple[tuple[float, float], ...] = (
    (0.0, 0.0830015349),
    (0.1822287280, 0.2577623634),
    (0.4093136748, 0.4538821041),
    (0.6183967944, 0.6525117038),
    (0.8233317983, 0.8518328654),
)


def zdt1_front(n_points: int = 400) -> np.ndarray:
    """ZDT1 true front: f2 = 1 - sqrt(f1), f1 in [0, 1]."""
    f1 = np.linspace(0.0, 1.0, n_points)
    return np.column_stack([f1, 1.0 - np.sqrt(f1)])


def zdt3_front(points_per_segment: int = 200) -> np.ndarray:
    """ZDT3 true front, sampled on each of its five f1 segments."""
    f1 = np.concatenate([np.linspace(lo, hi, points_per_segment) for lo, hi in ZDT3_SEGMENTS])
    return np.column_stack([f1, 1.0 - np.sqrt(f1) - f1 * np.sin(10 * np.pi * f1)])


def zdt6_front(n_points: int = 400) -> np.ndarray:
    """ZDT6 true front: f2 = 1 - f1^2.

    Only f1 in [0.2807753191, 1] is reachable; the curve is sampled over
    [0, 1] like the other ZDT fronts.
    """
    f1 = np.linspace(0.0, 1.0, n_points)
    return np.column_stack([f1, 1.0 - f1**2])


def schaffer_n1_front(n_points: int = 400) -> np.ndarray:
    """Schaffer N.1 true front, the image of x in [0, 2]."""
    x = np.linspace(0.0, 2.0, n_points)
    return np.column_stack([x**2, (x - 2.0) ** 2])


def fonseca_fleming_front(n_points: int = 400, n_vars: int = 3) -> np.ndarray:
    """Fonseca-Fleming true front, the image of x_i = t for t in [-1/sqrt(n), 1/sqrt(n)]."""
    shift = 1.0 / np.sqrt(n_vars)
    t = np.linspace(-shift, shift, n_points)
    f1 = 1.0 - np.exp(-n_vars * (t - shift) ** 2)
    f2 = 1.0 - np.exp(-n_vars * (t + shift) ** 2)
    return np.column_stack([f1, f2])


def non_dominated_2d(points: np.ndarray) -> np.ndarray:
    """Filter a bi-objective point set down to its non-dominated points.

    Points are sorted by f1, then f2, and a point is kept only if its f2 is
    strictly below every f2 seen before it. Runs in O(n log n) time and O(n)
    memory. Exact duplicates are reduced to one copy.

    Returns:
        Non-dominated points sorted by f1.
    """
    if len(points) == 0:
        return points.reshape(0, 2)
    order = np.lexsort((points[:, 1], points[:, 0]))
    ordered = points[order]
    best_before = np.concatenate([[np.inf], np.minimum.accumulate(ordered[:-1, 1])])
    return ordered[ordered[:, 1] < best_before]


def kursawe_front(n_vars: int = 3, samples: int = 200_000, seed: int = 42, chunk: int = 20_000) -> np.ndarray:
    """Approximate the Kursawe front by sampling [-5, 5]^n_vars.

    Samples are drawn and filtered chunk by chunk and merged with the running
    front, so memory grows with chunk and front size, not with samples.

    Returns:
        Non-dominated objective vectors sorted by f1.
    """
    rng = np.random.default_rng(seed)
    front = np.empty((0, 2))
    remaining = samples
    while remaining > 0:
        size = min(chunk, remaining)
        x = rng.uniform(-5.0, 5.0, size=(size, n_vars))
        objectives = np.array([kursawe(xi) for xi in x])
        front = non_dominated_2d(np.vstack([front, objectives]))
        remaining -= size
    return front


FRONTS: dict[str, Callable[[], np.ndarray]] = {
    "schaffer_n1": schaffer_n1_front,
    "fonseca_fleming": fonseca_fleming_front,
    "zdt1": zdt1_front,
    "kursawe": kursawe_front,
    "zdt3": zdt3_front,
    "zdt6": zdt6_front,
}
