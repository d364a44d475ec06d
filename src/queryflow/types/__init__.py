from queryflow.types.base import QueryFlowBaseModel

__all__ = ["QueryFlowBaseModel"]
