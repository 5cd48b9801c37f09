"""Protocol definitions for the pluggable parts of MOME.

Three seams are pluggable:

1. **Objective function**: maps a decision vector to an objective vector.
   Every objective is minimized. This is the only external collaborator the
   search loop needs.

2. **Parent selection**: picks one individual from the archive pool to be
   mutated. The default is a best-of-k tournament on the objective sum.

3. **Cell pruning**: shrinks an over-capacity cell back to its capacity.
   The default removes the most crowded members in objective space.

Example usage:
    ```python
    parent_idx = selector(pool, rng)
    keep = pruner(cell_objectives, capacity)
    ```
"""

from typing import Protocol, runtime_checkable

import numpy as np

from mome.population import Population


@runtime_checkable
class ObjectiveFunction(Protocol):
    """Protocol for objective functions.

    Parameters:
        x: Decision vector, shape (n_vars,), inside the configured bounds.

    Returns:
        Objective vector, shape (n_obj,). Lower is better for every entry.
        The function must be total over the bounds.

    Example:
        ```python
        def corner(x: np.ndarray) -> np.ndarray:
            return np.array([x[0], x[1]])
        ```
    """

    def __call__(self, x: np.ndarray) -> np.ndarray: ...


@runtime_checkable
class ParentSelector(Protocol):
    """Protocol for parent selection strategies.

    Parameters:
        pool: Every individual currently held by the archive, as a Population
            with objectives. Never empty when a selector is called.
        rng: NumPy random number generator shared with the rest of the run.

    Returns:
        Index into the pool of the selected parent.

    Example:
        ```python
        def random_selector(pool: Population, rng: np.random.Generator) -> int:
            return int(rng.integers(len(pool)))
        ```
    """

    def __call__(self, pool: Population, rng: np.random.Generator) -> int: ...


@runtime_checkable
class CellPruner(Protocol):
    """Protocol for cell pruning strategies.

    Parameters:
        objectives: Objective vectors of the members of one cell, shape
            (n, n_obj). The members form a non-dominated set.
        capacity: Number of members to keep, 1 <= capacity < n.

    Returns:
        Sorted array of shape (capacity,) with the indices of the members to
        keep. Indices refer to rows of `objectives`.

    Example:
        ```python
        def keep_first(objectives: np.ndarray, capacity: int) -> np.ndarray:
            return np.arange(capacity)
        ```
    """

    def __call__(self, objectives: np.ndarray, capacity: int) -> np.ndarray: ...
