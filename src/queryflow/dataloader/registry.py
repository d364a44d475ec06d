"""Registry of data loaders for a single execution.

A registry groups the batching data loaders an execution engine uses while
resolving fields, so that all pending loads can be dispatched together.
Loaders are opaque to the registry; the only capability it relies on is an
optional ``dispatch()`` method.

Create a new registry (and new loaders) for each execution. A registry
shared by two in-flight executions mixes their batches and produces
incorrect results.
"""

from typing import Any, Callable, Dict, List, Optional

from queryflow.common.exceptions import validation_error
from queryflow.logging import get_logger


logger = get_logger(__name__)


class DataLoaderRegistry:
    """Per-execution collection of named data loaders.

    Example:
        >>> registry = DataLoaderRegistry()
        >>> registry.register("characters", character_loader).register("planets", planet_loader)
        >>> registry.get_data_loader("characters") is character_loader
        True
        >>> registry.dispatch_all()
    """

    def __init__(self) -> None:
        self._data_loaders: Dict[str, Any] = {}

    def register(self, key: str, data_loader: Any) -> "DataLoaderRegistry":
        """Register a data loader under ``key``, replacing any previous one.

        Args:
            key: Name the execution engine looks the loader up by
            data_loader: The loader instance

        Returns:
            This registry for chaining

        Raises:
            QueryFlowError: If ``key`` is not a non-empty string
        """
        if not isinstance(key, str) or not key:
            raise validation_error(
                "data loader key must be a non-empty string",
                field="key",
                value=key,
            )
        self._data_loaders[key] = data_loader
        logger.debug(f"Registered data loader: {key} -> {type(data_loader).__name__}")
        return self

    def compute_if_absent(self, key: str, factory: Callable[[str], Any]) -> Any:
        """Return the loader registered under ``key``, creating it if missing.

        Args:
            key: Loader name
            factory: Called with ``key`` when no loader is registered yet

        Returns:
            The existing or newly registered loader
        """
        if key not in self._data_loaders:
            self.register(key, factory(key))
        return self._data_loaders[key]

    def unregister(self, key: str) -> "DataLoaderRegistry":
        """Remove the loader registered under ``key``. Unknown keys are ignored."""
        if self._data_loaders.pop(key, None) is not None:
            logger.debug(f"Unregistered data loader: {key}")
        return self

    def get_data_loader(self, key: str) -> Optional[Any]:
        return self._data_loaders.get(key)

    def get_keys(self) -> List[str]:
        return list(self._data_loaders.keys())

    def get_data_loaders(self) -> List[Any]:
        return list(self._data_loaders.values())

    def combine(self, other: "DataLoaderRegistry") -> "DataLoaderRegistry":
        """Return a new registry holding the loaders of both registries.

        Neither operand is modified. Loaders from ``other`` win on key clashes.

        Args:
            other: Registry to merge in

        Returns:
            A new DataLoaderRegistry
        """
        combined = DataLoaderRegistry()
        combined._data_loaders.update(self._data_loaders)
        combined._data_loaders.update(other._data_loaders)
        return combined

    def dispatch_all(self) -> None:
        """Call ``dispatch()`` on every registered loader that provides it."""
        for key, data_loader in self._data_loaders.items():
            dispatch = getattr(data_loader, "dispatch", None)
            if callable(dispatch):
                logger.debug(f"Dispatching data loader: {key}")
                dispatch()

    def __len__(self) -> int:
        return len(self._data_loaders)

    def __contains__(self, key: object) -> bool:
        return key in self._data_loaders

    def __repr__(self) -> str:
        return f"DataLoaderRegistry(keys={self.get_keys()!r})"
