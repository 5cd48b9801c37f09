"""Grid archive of per-cell Pareto sets.

The archive maps each cell of a 2D behaviour grid to a small set of
individuals. Within a cell no member dominates another, and a cell never
holds more than max_per_cell members. Insertion is the only way the archive
changes, and it only touches the cell of the inserted individual.
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

import numpy as np

import mome.pruning  # noqa: F401  (registers built-in pruners)
from mome.population import Individual, Population
from mome.primitives import Cell, cell_of, dominates, non_dominated_mask
from mome.protocols import CellPruner
from mome.registry import PruningRegistry

logger = logging.getLogger(__name__)


class InsertOutcome(Enum):
    """Result of offering an individual to the archive."""

    ADDED = "added"
    """Stored; the cell stayed within capacity."""
    PRUNED = "pruned"
    """Stored; another member was pruned to restore capacity."""
    DISCARDED = "discarded"
    """Not dominated, but pruned away itself; the cell is unchanged."""
    REJECTED = "rejected"
    """Dominated by a member of its cell; the cell is unchanged."""

    @property
    def accepted(self) -> bool:
        return self in (InsertOutcome.ADDED, InsertOutcome.PRUNED)


@dataclass(frozen=True)
class ArchiveSummary:
    """Occupancy statistics of an archive.

    Attributes:
        n_cells: Number of occupied cells.
        n_individuals: Total number of stored individuals.
        mean_cell_size: Mean Pareto set size over occupied cells (0.0 if none).
        max_cell_size: Largest Pareto set size (0 if none).
        coverage: Fraction of grid cells that are occupied.
    """

    n_cells: int
    n_individuals: int
    mean_cell_size: float
    max_cell_size: int
    coverage: float

    def __str__(self) -> str:
        return (
            f"Filled cells: {self.n_cells} ({self.coverage:.1%} coverage)\n"
            f"Avg per-cell Pareto set size: {self.mean_cell_size:.2f} (max: {self.max_cell_size})"
        )


class Archive:
    """Mapping from grid cell to a bounded, non-dominated set of individuals.

    Args:
        bins_per_dim: Grid resolution along each descriptor axis.
        bounds: Lower and upper bound of the descriptor axes.
        max_per_cell: Capacity of each cell. Values below 1 are coerced to 1.
        prune: Pruning strategy used when a cell exceeds its capacity. Either
            the name of a registered strategy or a CellPruner callable.

    Raises:
        ValueError: If bins_per_dim is not positive or the bounds are inverted.
        KeyError: If a strategy name is not registered.

    Example:
        >>> archive = Archive(bins_per_dim=2, bounds=(0.0, 1.0), max_per_cell=2)
        >>> ind = Individual(x=np.array([0.1, 0.1]), objectives=np.array([0.1, 0.1]))
        >>> archive.insert(ind)
        <InsertOutcome.ADDED: 'added'>
        >>> archive.cells()
        [(0, 0)]
    """

    def __init__(
        self,
        bins_per_dim: int,
        bounds: tuple[float, float],
        max_per_cell: int,
        prune: str | CellPruner = "crowding",
    ) -> None:
        if bins_per_dim < 1:
            raise ValueError(f"bins_per_dim must be at least 1, got {bins_per_dim}")
        lower, upper = bounds
        if not lower < upper:
            raise ValueError(f"bounds must satisfy lower < upper, got {bounds}")
        if max_per_cell < 1:
            logger.warning("max_per_cell=%d coerced to 1", max_per_cell)

        self.bins_per_dim = bins_per_dim
        self.lower = float(lower)
        self.upper = float(upper)
        self.max_per_cell = max(1, max_per_cell)
        self._pruner = PruningRegistry.get(prune) if isinstance(prune, str) else prune
        self._cells: dict[Cell, list[Individual]] = {}
        self._n_vars: int | None = None
        self._n_obj: int | None = None

    def cell_of(self, x: np.ndarray) -> Cell:
        """Return the grid cell of a decision vector."""
        return cell_of(x, self.lower, self.upper, self.bins_per_dim)

    def insert(self, individual: Individual) -> InsertOutcome:
        """Offer an evaluated individual to its cell.

        The candidate is rejected if a member of its cell dominates it.
        Otherwise members it dominates are dropped, it is appended, and the
        cell is pruned back to max_per_cell if needed.

        Args:
            individual: Evaluated individual.

        Returns:
            The InsertOutcome describing what happened.

        Raises:
            ValueError: If the individual is unevaluated, has NaN objectives,
                or its shape differs from previously inserted individuals.
        """
        if not individual.is_evaluated:
            raise ValueError("Only evaluated individuals can be inserted into the archive")
        if np.isnan(individual.objectives).any():
            raise ValueError("Individuals with NaN objectives cannot be inserted into the archive")
        self._check_shape(individual)

        cell = self.cell_of(individual.x)
        members = self._cells.get(cell, [])

        for member in members:
            if dominates(member.objectives, individual.objectives):
                return InsertOutcome.REJECTED

        survivors = [m for m in members if not dominates(individual.objectives, m.objectives)]
        survivors.append(individual)

        outcome = InsertOutcome.ADDED
        if len(survivors) > self.max_per_cell:
            keep = self._prune(survivors)
            candidate_kept = len(survivors) - 1 in keep
            survivors = [survivors[i] for i in keep]
            outcome = InsertOutcome.PRUNED if candidate_kept else InsertOutcome.DISCARDED
            logger.debug("Pruned cell %s to %d members (%s)", cell, len(survivors), outcome.value)

        self._cells[cell] = survivors
        return outcome

    def _prune(self, members: list[Individual]) -> list[int]:
        objectives = np.stack([m.objectives for m in members])
        keep = np.asarray(self._pruner(objectives, self.max_per_cell))
        if keep.shape != (self.max_per_cell,) or len(np.unique(keep)) != self.max_per_cell:
            raise ValueError(
                f"pruner must return {self.max_per_cell} distinct indices, got {keep.tolist()}"
            )
        return sorted(int(i) for i in keep)

    def _check_shape(self, individual: Individual) -> None:
        if self._n_vars is None:
            self._n_vars, self._n_obj = individual.n_vars, individual.n_obj
            return
        if individual.n_vars != self._n_vars or individual.n_obj != self._n_obj:
            raise ValueError(
                f"individual has {individual.n_vars} variables and {individual.n_obj} objectives, "
                f"archive holds {self._n_vars} and {self._n_obj}"
            )

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    def cell(self, key: Cell) -> list[Individual]:
        """Return a copy of a cell's members; empty if the cell is unoccupied."""
        return list(self._cells.get(key, []))

    def cells(self) -> list[Cell]:
        """Return the occupied cells in sorted order."""
        return sorted(k for k, v in self._cells.items() if v)

    def items(self) -> Iterator[tuple[Cell, list[Individual]]]:
        """Iterate over (cell, members) for occupied cells in sorted order."""
        for key in self.cells():
            yield key, self.cell(key)

    def individuals(self) -> list[Individual]:
        """Return every stored individual, grouped by cell in sorted order."""
        return [ind for key in self.cells() for ind in self._cells[key]]

    def __len__(self) -> int:
        return sum(len(v) for v in self._cells.values())

    def __contains__(self, key: object) -> bool:
        return bool(self._cells.get(key))  # type: ignore[call-overload]

    @property
    def n_cells(self) -> int:
        return len(self.cells())

    @property
    def is_empty(self) -> bool:
        return len(self) == 0

    @property
    def coverage(self) -> float:
        """Fraction of grid cells holding at least one individual."""
        return self.n_cells / self.bins_per_dim**2

    def to_population(self) -> Population:
        """Snapshot every stored individual as a Population."""
        return Population.from_individuals(self.individuals(), self._n_vars or 0, self._n_obj or 0)

    def summary(self) -> ArchiveSummary:
        """Compute occupancy statistics."""
        sizes = [len(self._cells[key]) for key in self.cells()]
        return ArchiveSummary(
            n_cells=len(sizes),
            n_individuals=sum(sizes),
            mean_cell_size=float(np.mean(sizes)) if sizes else 0.0,
            max_cell_size=max(sizes, default=0),
            coverage=self.coverage,
        )

    def describe(self) -> str:
        """Render every occupied cell and its members, one member per line.

        Example:
            === MOME archive (detailed) ===
            Cell (0, 1), count=2
              x=[0.1, 0.9] objectives=[1.0, 2.0]
              x=[0.2, 0.8] objectives=[2.0, 1.0]
        """
        lines = ["=== MOME archive (detailed) ==="]
        for (bx, by), members in self.items():
            lines.append(f"Cell ({bx}, {by}), count={len(members)}")
            lines.extend(f"  x={ind.x.tolist()} objectives={ind.objectives.tolist()}" for ind in members)
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.describe()

    def global_front(self) -> Population:
        """Extract the individuals not dominated by any other archived individual.

        The result ignores cell boundaries and is a read-only snapshot; later
        insertions do not change it.
        """
        pop = self.to_population()
        assert pop.objectives is not None  # from_individuals always sets objectives
        mask = non_dominated_mask(pop.objectives)
        return Population(x=pop.x[mask], objectives=pop.objectives[mask])
