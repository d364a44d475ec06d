from queryflow.__version__ import __version__

from queryflow.execution import ExecutionInput, ExecutionInputBuilder
from queryflow.dataloader import DataLoaderRegistry

from queryflow.common.exceptions import InvalidArgumentError, QueryFlowError, ErrorCode

from queryflow.logging import get_logger, setup_logging
from queryflow.settings import get_settings


__all__ = [
    "__version__",

    "ExecutionInput",
    "ExecutionInputBuilder",
    "DataLoaderRegistry",

    # Exceptions (public API)
    "QueryFlowError",
    "InvalidArgumentError",
    "ErrorCode",

    # Logging and configuration
    "get_logger",
    "setup_logging",
    "get_settings",
]
