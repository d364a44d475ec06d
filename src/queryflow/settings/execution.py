from pydantic import Field

from .base import QueryFlowBaseSettings


class ExecutionSettings(QueryFlowBaseSettings):

    default_validate: bool = Field(
        default=True,
        description="Whether execution inputs request query validation unless the caller "
                    "says otherwise. Disable only for trusted, pre-validated documents."
    )

    log_query_max_length: int = Field(
        default=500,
        ge=0,
        description="Maximum number of query characters included in log records. "
                    "Longer documents are truncated with a trailing '...'."
    )
