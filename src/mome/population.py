"""Individual and population data structures.

This module provides the value types that flow through the archive:

- Individual: One decision vector with its objective vector
- Population: A struct-of-arrays snapshot of many individuals

Both classes are immutable (frozen dataclasses). Arrays are copied on
construction so an individual stored in the archive can never be changed
through a reference held elsewhere.
"""

from dataclasses import dataclass

import numpy as np


def _frozen_copy(arr: np.ndarray) -> np.ndarray:
    out = np.array(arr, dtype=np.float64, copy=True)
    out.setflags(write=False)
    return out


@dataclass(frozen=True, eq=False)
class Individual:
    """A single candidate solution.

    Objectives are minimized. An individual that has not been evaluated yet
    carries +inf in every objective and evaluated=False. An evaluated
    individual may still hold +inf entries, which are worse than any finite
    value.

    Attributes:
        x: Decision variables, shape (n_vars,).
        objectives: Objective values, shape (n_obj,).
        evaluated: Whether objectives came from the objective function.

    Example:
        >>> ind = Individual.unevaluated(np.array([0.2, 0.4]), n_obj=2)
        >>> ind.is_evaluated
        False
        >>> ind.with_objectives(np.array([0.2, 0.4])).is_evaluated
        True
    """

    x: np.ndarray
    objectives: np.ndarray
    evaluated: bool = True

    def __post_init__(self) -> None:
        """Validate shapes and store read-only copies.

        Raises:
            TypeError: If x or objectives is not a numpy array.
            ValueError: If x or objectives is not 1D or is empty.
        """
        if not isinstance(self.x, np.ndarray):
            raise TypeError(f"x must be a numpy array, got {type(self.x).__name__}")
        if self.x.ndim != 1 or self.x.shape[0] == 0:
            raise ValueError(f"x must be a non-empty 1D array, got shape {self.x.shape}")
        if not isinstance(self.objectives, np.ndarray):
            raise TypeError(f"objectives must be a numpy array, got {type(self.objectives).__name__}")
        if self.objectives.ndim != 1 or self.objectives.shape[0] == 0:
            raise ValueError(f"objectives must be a non-empty 1D array, got shape {self.objectives.shape}")

        object.__setattr__(self, "x", _frozen_copy(self.x))
        object.__setattr__(self, "objectives", _frozen_copy(self.objectives))

    @classmethod
    def unevaluated(cls, x: np.ndarray, n_obj: int) -> "Individual":
        """Create an individual whose objectives are all +inf."""
        return cls(x=x, objectives=np.full(n_obj, np.inf), evaluated=False)

    def with_objectives(self, objectives: np.ndarray) -> "Individual":
        """Return a copy of this individual carrying the given objectives.

        Raises:
            ValueError: If the number of objectives changes.
        """
        objectives = np.asarray(objectives, dtype=np.float64)
        if objectives.shape != self.objectives.shape:
            raise ValueError(
                f"objectives has shape {objectives.shape}, expected {self.objectives.shape}"
            )
        return Individual(x=self.x, objectives=objectives)

    @property
    def is_evaluated(self) -> bool:
        return self.evaluated

    @property
    def n_vars(self) -> int:
        return self.x.shape[0]

    @property
    def n_obj(self) -> int:
        return self.objectives.shape[0]


@dataclass(frozen=True)
class Population:
    """Immutable struct-of-arrays representation of a set of individuals.

    The archive hands out populations as read-only snapshots: the selection
    pool and the global front are both Populations.

    Attributes:
        x: Decision variables for all individuals, shape (n, n_vars).
        objectives: Objective values, shape (n, n_obj), or None if not evaluated.

    Example:
        >>> x = np.array([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])
        >>> obj = np.array([[0.5, 0.5], [0.3, 0.7], [0.4, 0.6]])
        >>> pop = Population(x=x, objectives=obj)
        >>> len(pop)
        3
        >>> pop.n_obj
        2
    """

    x: np.ndarray
    objectives: np.ndarray | None = None

    def __post_init__(self) -> None:
        """Validate shapes and copy arrays for immutability.

        Raises:
            TypeError: If x is not a numpy array.
            ValueError: If array shapes are inconsistent or invalid.
        """
        if not isinstance(self.x, np.ndarray):
            raise TypeError(f"x must be a numpy array, got {type(self.x).__name__}")
        if self.x.ndim != 2:
            raise ValueError(f"x must be 2D, got shape {self.x.shape}")

        n = self.x.shape[0]
        object.__setattr__(self, "x", _frozen_copy(self.x))

        if self.objectives is not None:
            if not isinstance(self.objectives, np.ndarray):
                raise TypeError(f"objectives must be a numpy array, got {type(self.objectives).__name__}")
            if self.objectives.ndim != 2:
                raise ValueError(f"objectives must be 2D, got shape {self.objectives.shape}")
            if self.objectives.shape[0] != n:
                raise ValueError(f"objectives has {self.objectives.shape[0]} individuals, expected {n} to match x")
            object.__setattr__(self, "objectives", _frozen_copy(self.objectives))

    @classmethod
    def from_individuals(cls, individuals: list[Individual], n_vars: int, n_obj: int) -> "Population":
        """Stack individuals into a population.

        The shape hints are used when the list is empty, so an empty archive
        still yields arrays of shape (0, n_vars) and (0, n_obj).
        """
        if not individuals:
            return cls(x=np.empty((0, n_vars)), objectives=np.empty((0, n_obj)))
        return cls(
            x=np.stack([ind.x for ind in individuals]),
            objectives=np.stack([ind.objectives for ind in individuals]),
        )

    def __len__(self) -> int:
        return self.x.shape[0]

    def __getitem__(self, idx: int) -> Individual:
        """Get a single individual.

        Args:
            idx: Index of the individual (supports negative indexing).

        Returns:
            Individual holding copies of row idx.

        Raises:
            TypeError: If idx is not an integer.
            IndexError: If idx is out of bounds.
            ValueError: If the population has no objectives.
        """
        if not isinstance(idx, (int, np.integer)):
            raise TypeError(f"indices must be integers, got {type(idx).__name__}")

        n = len(self)
        original_idx = idx
        if idx < 0:
            idx = n + idx
        if idx < 0 or idx >= n:
            raise IndexError(f"index {original_idx} is out of bounds for population with {n} individuals")
        if self.objectives is None:
            raise ValueError("Population has no objectives; cannot build an Individual")

        return Individual(x=self.x[idx], objectives=self.objectives[idx])

    @property
    def n_vars(self) -> int:
        return self.x.shape[1]

    @property
    def n_obj(self) -> int | None:
        if self.objectives is None:
            return None
        return self.objectives.shape[1]
