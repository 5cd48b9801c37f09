"""Cell pruning strategies for the archive."""

from mome.pruning.crowding import crowding_pruning
from mome.registry import PruningRegistry

# Register built-in pruning strategies
PruningRegistry.register("crowding", crowding_pruning)
PruningRegistry.register("crowding_static", lambda: crowding_pruning(recompute=False))

__all__ = ["crowding_pruning"]
