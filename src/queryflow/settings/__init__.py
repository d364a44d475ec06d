"""Settings for queryflow built on Pydantic Settings.

Configuration Sources (precedence order):
    1. Environment variables prefixed with ``QUERYFLOW_`` (highest priority)
    2. A ``.env`` file in the working directory
    3. Field defaults

Example:
    ```python
    from queryflow.settings import get_settings

    settings = get_settings()
    settings.execution.default_validate   # QUERYFLOW_DEFAULT_VALIDATE
    settings.log_level                    # QUERYFLOW_LOG_LEVEL
    ```
"""

from .base import QueryFlowBaseSettings
from .execution import ExecutionSettings
from .main import _reload_settings, get_settings

__all__ = [
    "QueryFlowBaseSettings",
    "ExecutionSettings",
    "get_settings",
    "_reload_settings",
]
