"""Multi-objective MAP-Elites main loop.

The loop fills an Archive in two phases:

1. **Seeding**: random individuals are evaluated and inserted.
2. **Evolving**: for a fixed number of generations, parents are selected
   from the archive, mutated, evaluated and offered back to the archive.

There is no early termination; a run always spends its full evaluation
budget. All randomness comes from one generator created from the seed and
passed explicitly to selection and mutation, so a run is reproducible for a
fixed seed and a deterministic objective function.

Example:
    >>> from mome import MOMEConfig, mome
    >>>
    >>> def evaluate(x):
    ...     return np.array([x[0], x[1]])
    >>>
    >>> config = MOMEConfig(
    ...     n_vars=2, n_obj=2, bins_per_dim=2, lower=0.0, upper=1.0,
    ...     evaluations_per_generation=10, generations=1, initial_random=10,
    ...     mutation_sigma=0.1, max_per_cell=2,
    ... )
    >>> result = mome(evaluate, config, seed=42)
    >>> front = result.pareto_objectives
"""

import logging
from collections import Counter
from collections.abc import Callable

import numpy as np

import mome.selection  # noqa: F401  (registers built-in selectors)
from mome.archive import Archive, InsertOutcome
from mome.config import MOMEConfig
from mome.operators import gaussian_mutation, random_individual
from mome.population import Individual
from mome.protocols import CellPruner, ObjectiveFunction, ParentSelector
from mome.registry import SelectionRegistry
from mome.results import MOMEResult, Phase
from mome.selection.parent import select_parent

logger = logging.getLogger(__name__)


def _evaluate(evaluate: ObjectiveFunction, individual: Individual) -> Individual:
    objectives = np.asarray(evaluate(individual.x), dtype=np.float64)
    if objectives.shape != (individual.n_obj,):
        raise ValueError(
            f"evaluate returned shape {objectives.shape}, expected ({individual.n_obj},)"
        )
    if np.isnan(objectives).any():
        raise ValueError(f"evaluate returned NaN objectives {objectives.tolist()} for x={individual.x.tolist()}")
    return individual.with_objectives(objectives)


def mome(
    evaluate: ObjectiveFunction,
    config: MOMEConfig,
    seed: int | None = None,
    select: str | ParentSelector = "tournament",
    prune: str | CellPruner = "crowding",
    callback: Callable[[Archive, int], None] | None = None,
) -> MOMEResult:
    """Run multi-objective MAP-Elites.

    Args:
        evaluate: Evaluate one decision vector.
            Signature: (n_vars,) -> (n_obj,). Every objective is minimized.
        config: Run configuration.
        seed: Random seed for reproducibility. If None, uses system entropy.
        select: Parent selection strategy. Can be:
            - String: Name of registered strategy ("tournament", "uniform")
            - ParentSelector: Direct callable following the ParentSelector protocol
        prune: Cell pruning strategy. Can be:
            - String: Name of registered strategy ("crowding", "crowding_static")
            - CellPruner: Direct callable following the CellPruner protocol
        callback: Optional callback called after every generation with the
            archive and the index of the generation that just finished. Meant
            for progress reporting; it must not insert into the archive.

    Returns:
        MOMEResult containing:
        - archive: The final archive
        - phase: Phase.DONE
        - generations: Number of generations completed
        - evaluations: Total number of function evaluations
        - outcomes: Count of each insertion outcome

    Raises:
        KeyError: If string strategy names are not found in registries.
        ValueError: If evaluate returns a vector of the wrong length or
            containing NaN. Infinite objectives are accepted.

    Algorithm Flow:
        1. Resolve strategies and create the random generator
        2. Seed the archive with max(1, initial_random) random individuals
        3. For each generation, evaluations_per_generation times:
           a. Select a parent (random individual if the archive is empty)
           b. Mutate it with Gaussian noise, clipped to bounds
           c. Evaluate the child
           d. Offer it to the archive
        4. Return MOMEResult
    """
    parent_selector = SelectionRegistry.get(select) if isinstance(select, str) else select
    archive = Archive(config.bins_per_dim, config.bounds, config.max_per_cell, prune=prune)
    mutate = gaussian_mutation(config.mutation_sigma, config.bounds)

    rng = np.random.default_rng(seed)
    outcomes: Counter[InsertOutcome] = Counter()
    total_evaluations = 0

    # Seeding: at least one seed so selection never starts from an empty archive
    phase = Phase.SEEDING
    n_seeds = max(1, config.initial_random)
    logger.info("Phase %s: %d random individuals", phase.value, n_seeds)
    for _ in range(n_seeds):
        individual = random_individual(rng, config.n_vars, config.bounds, config.n_obj)
        outcomes[archive.insert(_evaluate(evaluate, individual))] += 1
        total_evaluations += 1

    phase = Phase.EVOLVING
    logger.info(
        "Phase %s: %d generations x %d evaluations",
        phase.value,
        config.generations,
        config.evaluations_per_generation,
    )
    generations_completed = 0
    for gen in range(config.generations):
        for _ in range(config.evaluations_per_generation):
            parent = select_parent(archive, parent_selector, rng, config.n_vars, config.bounds, config.n_obj)
            child = Individual.unevaluated(mutate(parent.x, rng), config.n_obj)
            outcomes[archive.insert(_evaluate(evaluate, child))] += 1
            total_evaluations += 1

        generations_completed += 1
        if logger.isEnabledFor(logging.DEBUG):
            summary = archive.summary()
            logger.debug(
                "Generation %d: %d cells, %d individuals, max cell size %d",
                gen,
                summary.n_cells,
                summary.n_individuals,
                summary.max_cell_size,
            )
        if callback is not None:
            callback(archive, gen)

    phase = Phase.DONE
    result = MOMEResult(
        archive=archive,
        phase=phase,
        generations=generations_completed,
        evaluations=total_evaluations,
        outcomes=outcomes,
    )
    summary = result.summary
    logger.info(
        "Phase %s: %d evaluations, %d cells, %d individuals, acceptance rate %.3f",
        phase.value,
        total_evaluations,
        summary.n_cells,
        summary.n_individuals,
        result.acceptance_rate,
    )
    return result
