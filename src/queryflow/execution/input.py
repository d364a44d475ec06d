"""Execution input definitions.

This module defines the immutable ``ExecutionInput`` handed to a query
execution engine, and the ``ExecutionInputBuilder`` used to stage its
fields. An input says what to execute and with which inputs; it never
parses, validates or runs the query itself.

Inputs are never changed in place. Deriving a modified input goes through
``ExecutionInput.transform``, which seeds a builder with the current values,
lets the caller override some of them and builds a new input. Collaborators
(context, root, variables, data loader registry) are carried over by
reference, not copied.
"""

import logging
from types import MappingProxyType
from typing import Annotated, Any, Callable, Dict, Mapping, Optional

from pydantic import ConfigDict, Field, SkipValidation

from queryflow.common.exceptions import invalid_argument_error
from queryflow.dataloader.registry import DataLoaderRegistry
from queryflow.logging import get_logger
from queryflow.settings import get_settings
from queryflow.types.base import QueryFlowBaseModel


logger = get_logger(__name__)

_EMPTY_VARIABLES: Mapping[str, Any] = MappingProxyType({})


def _empty_variables() -> Mapping[str, Any]:
    return _EMPTY_VARIABLES


class ExecutionInput(QueryFlowBaseModel):
    """The values a single query execution runs with.

    Attributes:
        query: The query text
        operation_name: Name of the operation to run; None selects the
            document's single operation
        context: Context object passed to all data fetchers
        root: Root object the execution starts on
        variables: Variables referenced via ``$name`` in the query
        data_loader_registry: Data loaders used by this execution. Must be a
            new registry for every execution.
        validate_query: Whether the engine validates the query before running it

    Example:
        >>> execution_input = (
        ...     ExecutionInput.new_execution_input("query Hero($id: ID!) { hero(id: $id) { name } }")
        ...     .variables({"id": 42})
        ...     .build()
        ... )
        >>> next_input = execution_input.transform(lambda builder: builder.variables({"id": 43}))
    """
    model_config = ConfigDict(frozen=True)

    query: Optional[str] = Field(default=None)
    operation_name: Optional[str] = Field(default=None)
    context: Any = Field(default=None)
    root: Any = Field(default=None)
    # Stored by reference; validation would copy the mapping
    variables: Annotated[Mapping[str, Any], SkipValidation] = Field(default_factory=_empty_variables)
    data_loader_registry: DataLoaderRegistry = Field(default_factory=DataLoaderRegistry)
    validate_query: bool = Field(default=True)

    @staticmethod
    def new_execution_input(query: Optional[str] = None) -> "ExecutionInputBuilder":
        """Return a new builder, optionally staged with ``query``."""
        builder = ExecutionInputBuilder()
        if query is not None:
            builder.query(query)
        return builder

    @classmethod
    def of(
        cls,
        query: Optional[str],
        operation_name: Optional[str] = None,
        context: Any = None,
        root: Any = None,
        variables: Optional[Mapping[str, Any]] = None,
        validate: bool = True,
    ) -> "ExecutionInput":
        """Create an input directly from its values with a new data loader registry."""
        return (
            cls.new_execution_input()
            .query(query)
            .operation_name(operation_name)
            .context(context)
            .root(root)
            .variables(variables)
            .validate(validate)
            .build()
        )

    def transform(self, builder_consumer: Callable[["ExecutionInputBuilder"], Any]) -> "ExecutionInput":
        """Derive a new input from this one.

        A builder is seeded with all current values and handed to
        ``builder_consumer``, which may change any of them. The builder is
        then built. This input is left untouched, and values the consumer
        does not override are shared with the new input, not copied.

        Args:
            builder_consumer: Called once with the seeded builder. Its return
                value is ignored and anything it raises propagates unchanged.

        Returns:
            A new ExecutionInput built from the transformed builder

        Example:
            >>> with_new_id = execution_input.transform(lambda b: b.variables({"id": 43}))
        """
        builder = (
            ExecutionInputBuilder()
            .query(self.query)
            .operation_name(self.operation_name)
            .context(self.context)
            .root(self.root)
            .validate(self.validate_query)
            .data_loader_registry(self.data_loader_registry)
            .variables(self.variables)
        )

        builder_consumer(builder)

        return builder.build()

    def to_log_dict(self) -> Dict[str, Any]:
        """Return a flat summary suitable for structured log records.

        Variable values are never included, only their names. The query
        text is truncated to the ``log_query_max_length`` setting.
        """
        max_length = get_settings().execution.log_query_max_length
        query = self.query
        if query is not None and len(query) > max_length:
            query = query[:max_length] + "..."

        return {
            "query": query,
            "query_length": len(self.query) if self.query is not None else 0,
            "operation_name": self.operation_name,
            "variable_names": sorted(str(name) for name in self.variables),
            "data_loader_keys": self.data_loader_registry.get_keys(),
            "validate_query": self.validate_query,
        }

    def __str__(self) -> str:
        return (
            f"ExecutionInput{{query={self.query!r}, "
            f"operation_name={self.operation_name!r}, "
            f"context={self.context!r}, "
            f"root={self.root!r}, "
            f"variables={dict(self.variables)!r}, "
            f"data_loader_registry={self.data_loader_registry!r}, "
            f"validate_query={self.validate_query}}}"
        )

    # Collaborators compare by identity: two inputs are equal only when they
    # share the same context, root, variables and registry objects.
    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ExecutionInput):
            return NotImplemented
        return (
            self.query == other.query
            and self.operation_name == other.operation_name
            and self.validate_query == other.validate_query
            and self.context is other.context
            and self.root is other.root
            and self.variables is other.variables
            and self.data_loader_registry is other.data_loader_registry
        )

    def __hash__(self) -> int:
        return hash((
            self.query,
            self.operation_name,
            self.validate_query,
            id(self.context),
            id(self.root),
            id(self.variables),
            id(self.data_loader_registry),
        ))


class ExecutionInputBuilder:
    """Mutable staging area for ExecutionInput values.

    Every setter returns the builder itself so calls can be chained.
    ``build()`` does not consume the builder: calling it again returns
    another input with the same staged values and references.

    Defaults:
        - query, operation_name, context and root are None
        - variables is an empty, read-only mapping
        - data_loader_registry is a new DataLoaderRegistry
        - validate follows the ``default_validate`` setting (True unless configured)

    Not safe for concurrent use from several threads.
    """

    def __init__(self) -> None:
        self._query: Optional[str] = None
        self._operation_name: Optional[str] = None
        self._context: Any = None
        self._root: Any = None
        self._variables: Mapping[str, Any] = _EMPTY_VARIABLES
        self._data_loader_registry: DataLoaderRegistry = DataLoaderRegistry()
        self._validate: bool = get_settings().execution.default_validate

    def query(self, query: Optional[str]) -> "ExecutionInputBuilder":
        self._query = query
        return self

    def operation_name(self, operation_name: Optional[str]) -> "ExecutionInputBuilder":
        self._operation_name = operation_name
        return self

    def context(self, context: Any) -> "ExecutionInputBuilder":
        self._context = context
        return self

    def root(self, root: Any) -> "ExecutionInputBuilder":
        self._root = root
        return self

    def variables(self, variables: Optional[Mapping[str, Any]]) -> "ExecutionInputBuilder":
        """Replace the staged variables. ``None`` stages the empty mapping."""
        self._variables = _EMPTY_VARIABLES if variables is None else variables
        return self

    def validate(self, validate: bool) -> "ExecutionInputBuilder":
        self._validate = validate
        return self

    def data_loader_registry(self, data_loader_registry: DataLoaderRegistry) -> "ExecutionInputBuilder":
        """Stage the data loader registry for the execution.

        Create new registries and new data loaders for each execution. Do not
        re-use instances, as batched loads from different executions would
        be mixed.

        Args:
            data_loader_registry: A registry of data loaders

        Returns:
            This builder

        Raises:
            QueryFlowError: With ``ErrorCode.INVALID_ARGUMENT`` if the
                registry is None. The previously staged registry is kept.
        """
        if data_loader_registry is None:
            raise invalid_argument_error(
                "data_loader_registry must not be None",
                argument="data_loader_registry",
            )
        self._data_loader_registry = data_loader_registry
        return self

    def build(self) -> ExecutionInput:
        execution_input = ExecutionInput(
            query=self._query,
            operation_name=self._operation_name,
            context=self._context,
            root=self._root,
            variables=self._variables,
            data_loader_registry=self._data_loader_registry,
            validate_query=self._validate,
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Built execution input", extra=execution_input.to_log_dict())
        return execution_input
