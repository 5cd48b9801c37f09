"""Parent selection against the archive, with the empty-archive fallback."""

import logging

import numpy as np

from mome.archive import Archive
from mome.operators import Bounds, random_individual
from mome.population import Individual
from mome.protocols import ParentSelector

logger = logging.getLogger(__name__)


def select_parent(
    archive: Archive,
    selector: ParentSelector,
    rng: np.random.Generator,
    n_vars: int,
    bounds: Bounds,
    n_obj: int,
) -> Individual:
    """Pick the parent of the next offspring.

    The pool is every individual in the archive, regardless of cell. When the
    archive holds nobody a fresh random individual is returned instead, so
    the loop never stalls.

    Args:
        archive: Archive to draw from.
        selector: Strategy choosing an index into the pool.
        rng: Random number generator of the run.
        n_vars: Number of decision variables, used by the fallback.
        bounds: Variable bounds, used by the fallback.
        n_obj: Number of objectives, used by the fallback.

    Returns:
        The selected individual (evaluated), or an unevaluated random one.
    """
    if archive.is_empty:
        logger.debug("Archive is empty; falling back to a random parent")
        return random_individual(rng, n_vars, bounds, n_obj)

    pool = archive.to_population()
    return pool[selector(pool, rng)]
