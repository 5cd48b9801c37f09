"""Registry system for parent selection and cell pruning strategies.

Strategies are registered as factories under a name and built on retrieval,
so a run can be configured with plain strings:

    ```python
    from mome.registry import SelectionRegistry, list_selections

    selector = SelectionRegistry.get("tournament", tournament_size=3)
    available = list_selections()  # ["tournament", "uniform"]
    ```

There are two independent registries:
1. **SelectionRegistry**: parent selection strategies (ParentSelector protocol)
2. **PruningRegistry**: cell pruning strategies (CellPruner protocol)
"""

from collections.abc import Callable

from mome.protocols import CellPruner, ParentSelector


class SelectionRegistry:
    """Registry for parent selection strategies.

    Class Attributes:
        _registry: Dictionary mapping strategy names to factory functions
            that return ParentSelector instances.

    Example:
        ```python
        def random_factory():
            def selector(pool, rng):
                return int(rng.integers(len(pool)))
            return selector

        SelectionRegistry.register("random", random_factory)
        selector = SelectionRegistry.get("random")
        ```
    """

    _registry: dict[str, Callable[..., ParentSelector]] = {}

    @classmethod
    def register(cls, name: str, factory: Callable[..., ParentSelector]) -> None:
        """Register a parent selection strategy factory.

        Args:
            name: Unique name for the strategy. Will overwrite if already exists.
            factory: Callable that returns a ParentSelector. Should accept
                keyword arguments for configuration.
        """
        cls._registry[name] = factory

    @classmethod
    def get(cls, name: str, **kwargs) -> ParentSelector:
        """Get a configured parent selector by name.

        Args:
            name: Name of the registered strategy.
            **kwargs: Configuration parameters passed to the factory function.

        Returns:
            A configured ParentSelector callable.

        Raises:
            KeyError: If the strategy name is not registered. Error message
                includes list of available strategies.
        """
        if name not in cls._registry:
            available = ", ".join(sorted(cls._registry.keys())) or "none"
            raise KeyError(f"Selection strategy '{name}' not found. Available strategies: {available}")
        factory = cls._registry[name]
        return factory(**kwargs)

    @classmethod
    def list(cls) -> list[str]:
        """Return sorted list of registered strategy names."""
        return sorted(cls._registry.keys())


class PruningRegistry:
    """Registry for cell pruning strategies.

    Class Attributes:
        _registry: Dictionary mapping strategy names to factory functions
            that return CellPruner instances.

    Example:
        ```python
        PruningRegistry.register(
            "keep_first",
            lambda: lambda objectives, capacity: np.arange(capacity),
        )
        pruner = PruningRegistry.get("keep_first")
        ```
    """

    _registry: dict[str, Callable[..., CellPruner]] = {}

    @classmethod
    def register(cls, name: str, factory: Callable[..., CellPruner]) -> None:
        """Register a cell pruning strategy factory.

        Args:
            name: Unique name for the strategy. Will overwrite if already exists.
            factory: Callable that returns a CellPruner.
        """
        cls._registry[name] = factory

    @classmethod
    def get(cls, name: str, **kwargs) -> CellPruner:
        """Get a configured cell pruner by name.

        Raises:
            KeyError: If the strategy name is not registered.
        """
        if name not in cls._registry:
            available = ", ".join(sorted(cls._registry.keys())) or "none"
            raise KeyError(f"Pruning strategy '{name}' not found. Available strategies: {available}")
        factory = cls._registry[name]
        return factory(**kwargs)

    @classmethod
    def list(cls) -> list[str]:
        """Return sorted list of registered strategy names."""
        return sorted(cls._registry.keys())


def list_selections() -> list[str]:
    """List all registered parent selection strategies."""
    return SelectionRegistry.list()


def list_prunings() -> list[str]:
    """List all registered cell pruning strategies."""
    return PruningRegistry.list()
