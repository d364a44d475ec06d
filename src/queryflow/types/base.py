"""Base model class for queryflow value objects."""

from pydantic import BaseModel, ConfigDict


class QueryFlowBaseModel(BaseModel):
    """Base model for all queryflow models.

    Field values carried by queryflow models are frequently caller-owned
    objects (context, root, loader registries), so arbitrary types are
    allowed and enums are kept as members rather than raw values.
    """
    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        use_enum_values=False,
        validate_assignment=True
    )
