"""Run configuration for multi-objective MAP-Elites.

MOMEConfig gathers every option a run needs. It validates on construction so
that a malformed configuration is rejected before any evaluation happens.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

logger = logging.getLogger(__name__)

_INT_FIELDS = (
    "n_vars",
    "n_obj",
    "bins_per_dim",
    "evaluations_per_generation",
    "generations",
    "initial_random",
    "max_per_cell",
)


@dataclass(frozen=True)
class MOMEConfig:
    """Immutable configuration of a MOME run.

    Attributes:
        n_vars: Number of decision variables D (>= 1).
        n_obj: Number of objectives M (>= 1).
        bins_per_dim: Grid resolution per descriptor axis (>= 1).
        lower: Lower bound shared by every decision variable.
        upper: Upper bound shared by every decision variable (> lower).
        evaluations_per_generation: Offspring evaluated per generation (>= 0).
        generations: Number of generations (>= 0).
        initial_random: Random individuals used to seed the archive (>= 0).
        mutation_sigma: Standard deviation of Gaussian mutation (>= 0).
        max_per_cell: Capacity of each cell's Pareto set. Values below 1
            are coerced to 1.

    Example:
        >>> config = MOMEConfig(
        ...     n_vars=2, n_obj=2, bins_per_dim=2, lower=0.0, upper=1.0,
        ...     evaluations_per_generation=10, generations=1, initial_random=10,
        ...     mutation_sigma=0.05, max_per_cell=2,
        ... )
        >>> config.bounds
        (0.0, 1.0)
    """

    n_vars: int
    n_obj: int
    bins_per_dim: int
    lower: float
    upper: float
    evaluations_per_generation: int
    generations: int
    initial_random: int
    mutation_sigma: float
    max_per_cell: int

    def __post_init__(self) -> None:
        """Validate field values and coerce max_per_cell.

        Raises:
            TypeError: If an integer option is not an integer.
            ValueError: If an option is out of range.
        """
        for name in _INT_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be an integer, got {type(value).__name__}")

        if self.n_vars < 1:
            raise ValueError(f"n_vars must be at least 1, got {self.n_vars}")
        if self.n_obj < 1:
            raise ValueError(f"n_obj must be at least 1, got {self.n_obj}")
        if self.bins_per_dim < 1:
            raise ValueError(f"bins_per_dim must be at least 1, got {self.bins_per_dim}")
        if not self.lower < self.upper:
            raise ValueError(f"lower must be less than upper, got lower={self.lower}, upper={self.upper}")
        if self.evaluations_per_generation < 0:
            raise ValueError(
                f"evaluations_per_generation must be non-negative, got {self.evaluations_per_generation}"
            )
        if self.generations < 0:
            raise ValueError(f"generations must be non-negative, got {self.generations}")
        if self.initial_random < 0:
            raise ValueError(f"initial_random must be non-negative, got {self.initial_random}")
        if self.mutation_sigma < 0:
            raise ValueError(f"mutation_sigma must be non-negative, got {self.mutation_sigma}")

        if self.max_per_cell < 1:
            logger.warning("max_per_cell=%d coerced to 1", self.max_per_cell)
            object.__setattr__(self, "max_per_cell", 1)

        object.__setattr__(self, "lower", float(self.lower))
        object.__setattr__(self, "upper", float(self.upper))
        object.__setattr__(self, "mutation_sigma", float(self.mutation_sigma))

    @property
    def bounds(self) -> tuple[float, float]:
        return (self.lower, self.upper)

    @property
    def total_evaluations(self) -> int:
        """Evaluations a full run performs, seeding included."""
        return max(1, self.initial_random) + self.generations * self.evaluations_per_generation

    @classmethod
    def from_dict(cls, options: Mapping[str, Any]) -> "MOMEConfig":
        """Build a configuration from a mapping of option names.

        Raises:
            ValueError: If the mapping has unknown or missing keys.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ValueError(f"Unknown configuration options: {', '.join(unknown)}")
        missing = sorted(known - set(options))
        if missing:
            raise ValueError(f"Missing configuration options: {', '.join(missing)}")
        return cls(**options)
