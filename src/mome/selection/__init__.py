"""Parent selection strategies for the evolutionary loop."""

from mome.registry import SelectionRegistry
from mome.selection.parent import select_parent
from mome.selection.tournament import objective_sum_tournament
from mome.selection.uniform import uniform_selection

# Register built-in selection strategies
SelectionRegistry.register("tournament", objective_sum_tournament)
SelectionRegistry.register("uniform", uniform_selection)

__all__ = ["objective_sum_tournament", "select_parent", "uniform_selection"]
