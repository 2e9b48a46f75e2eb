"""Shared schema base for camelCase JSON bodies."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Serialize fields as camelCase (e.g. cover_image -> coverImage).

    Input accepts either the camelCase alias or the snake_case field name, and
    ORM objects can be validated directly.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
