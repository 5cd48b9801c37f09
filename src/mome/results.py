"""Result type returned by a MOME run.

MOMEResult bundles the final archive with run metadata and derives the
reported artifacts from it: the global Pareto front and the archive summary.
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from mome.archive import Archive, ArchiveSummary, InsertOutcome
from mome.population import Population


class Phase(Enum):
    """Phases of the evolutionary loop, in the order they are visited."""

    SEEDING = "seeding"
    EVOLVING = "evolving"
    DONE = "done"


@dataclass(frozen=True)
class MOMEResult:
    """Results from a multi-objective MAP-Elites run.

    Attributes:
        archive: The archive at the end of the run. The loop no longer
            touches it once the result is returned.
        phase: Phase the run ended in (Phase.DONE for a completed run).
        generations: Number of generations completed.
        evaluations: Total number of objective function evaluations.
        outcomes: Count of each InsertOutcome over the run.

    Example:
        >>> result = mome(evaluate, config, seed=42)
        >>> front = result.global_front
        >>> print(result.summary)
        Filled cells: 3 (75.0% coverage)
        Avg per-cell Pareto set size: 1.67 (max: 2)
    """

    archive: Archive
    phase: Phase
    generations: int
    evaluations: int
    outcomes: Counter[InsertOutcome] = field(default_factory=Counter)

    def __post_init__(self) -> None:
        """Validate counters and copy the outcome counts.

        Raises:
            ValueError: If generations or evaluations are negative.
        """
        if self.generations < 0:
            raise ValueError(f"generations must be non-negative, got {self.generations}")
        if self.evaluations < 0:
            raise ValueError(f"evaluations must be non-negative, got {self.evaluations}")
        object.__setattr__(self, "outcomes", Counter(self.outcomes))

    @property
    def global_front(self) -> Population:
        """Individuals not dominated by any other archived individual."""
        return self.archive.global_front()

    @property
    def pareto_objectives(self) -> np.ndarray:
        """Objective vectors of the global front, shape (n, n_obj), read-only.

        This is the artifact consumed by quality metrics, plotting and export.
        """
        objectives = self.global_front.objectives
        assert objectives is not None  # archive populations always carry objectives
        return objectives

    @property
    def summary(self) -> ArchiveSummary:
        return self.archive.summary()

    @property
    def acceptance_rate(self) -> float:
        """Fraction of evaluated individuals that entered the archive."""
        total = sum(self.outcomes.values())
        if total == 0:
            return 0.0
        accepted = sum(n for outcome, n in self.outcomes.items() if outcome.accepted)
        return accepted / total
