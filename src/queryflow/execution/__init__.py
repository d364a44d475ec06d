"""Execution input for the query execution engine.

The engine is handed an immutable ``ExecutionInput`` describing the query
text, operation name, context and root objects, variables, the data loader
registry for the execution and whether the query should be validated.
"""

from queryflow.execution.input import ExecutionInput, ExecutionInputBuilder

__all__ = [
    "ExecutionInput",
    "ExecutionInputBuilder",
]
