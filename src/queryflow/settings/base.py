from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class QueryFlowBaseSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="QUERYFLOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__"
    )

    app_env: str = Field(
        default="dev",
        description="Application deployment environment (e.g., dev, qa, prod). Stamped on log records."
    )
