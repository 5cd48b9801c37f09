"""mome: Multi-Objective MAP-Elites in numpy.

MAP-Elites over a 2D behaviour grid where each cell keeps a small Pareto set
instead of a single elite. The descriptor of a solution is its first two
decision variables; every objective is minimized.

Example:
    >>> from mome import MOMEConfig, mome
    >>> import numpy as np
    >>> def evaluate(x): return np.array([x[0], 1.0 - x[0] + x[1]])
    >>> config = MOMEConfig(
    ...     n_vars=3, n_obj=2, bins_per_dim=5, lower=0.0, upper=1.0,
    ...     evaluations_per_generation=50, generations=10, initial_random=20,
    ...     mutation_sigma=0.05, max_per_cell=4,
    ... )
    >>> result = mome(evaluate, config, seed=42)
    >>> result.evaluations
    520
"""

from mome.algorithm import mome
from mome.archive import Archive, ArchiveSummary, InsertOutcome
from mome.config import MOMEConfig
from mome.operators import gaussian_mutation, random_individual, uniform_init
from mome.population import Individual, Population
from mome.primitives import (
    Cell,
    bin_index,
    cell_of,
    crowding_distance,
    dominates,
    dominates_matrix,
    non_dominated_mask,
)
from mome.pruning import crowding_pruning
from mome.registry import (
    PruningRegistry,
    SelectionRegistry,
    list_prunings,
    list_selections,
)
from mome.results import MOMEResult, Phase
from mome.selection import objective_sum_tournament, select_parent, uniform_selection

__all__ = [
    # Algorithm
    "mome",
    "MOMEConfig",
    # Archive
    "Archive",
    "ArchiveSummary",
    "InsertOutcome",
    # Selection strategies
    "objective_sum_tournament",
    "uniform_selection",
    "select_parent",
    # Pruning strategies
    "crowding_pruning",
    # Variation operators
    "uniform_init",
    "random_individual",
    "gaussian_mutation",
    # Primitives
    "Cell",
    "dominates",
    "dominates_matrix",
    "non_dominated_mask",
    "crowding_distance",
    "bin_index",
    "cell_of",
    # Registry system
    "SelectionRegistry",
    "PruningRegistry",
    "list_selections",
    "list_prunings",
    # Data structures
    "Individual",
    "Population",
    # Result types
    "MOMEResult",
    "Phase",
]
