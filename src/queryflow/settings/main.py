from typing import Optional

from pydantic import Field, field_validator

from .base import QueryFlowBaseSettings
from .execution import ExecutionSettings


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class _Settings(QueryFlowBaseSettings):

    log_level: str = Field(
        default="INFO",
        description="Base log level used by setup_logging (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    execution: ExecutionSettings = Field(
        default_factory=ExecutionSettings,
        description="Execution input defaults"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize the log level and reject unknown names.

        Args:
            v: The configured log level

        Returns:
            Upper-cased level name
        """
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(
                f"Invalid log level '{v}'. Expected one of: {', '.join(_LOG_LEVELS)}"
            )
        return level


# Singleton instance
_settings: Optional[_Settings] = None


def get_settings(force_reload: bool = False) -> _Settings:
    """Get the singleton settings instance for the application.

    Settings are loaded from ``QUERYFLOW_*`` environment variables (and an
    optional ``.env`` file) on first access.

    Args:
        force_reload: If True, creates a new Settings instance even if
                     one already exists. Useful for testing or when
                     environment variables have changed.

    Returns:
        Settings: The singleton Settings instance

    Example:
        ```python
        settings = get_settings()
        assert settings is get_settings()

        new_settings = get_settings(force_reload=True)
        assert new_settings is not settings
        ```
    """
    global _settings

    if _settings is None or force_reload:
        _settings = _Settings()

    return _settings


def _reload_settings() -> _Settings:
    """Force reload of settings.

    This is primarily for testing purposes where you need to reset
    the singleton instance.

    Returns:
        A fresh _Settings instance
    """
    global _settings
    _settings = None
    return get_settings(force_reload=True)
