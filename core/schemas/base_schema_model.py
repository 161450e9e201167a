"""Shared pydantic configuration for request, response and settings schemas."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchemaModel(BaseModel):
    """Base for every schema exchanged with the workforce application.

    The application speaks camelCase JSON (``submissionId``, ``notifyPrefs``,
    ``fromEmail``) while the service uses snake_case attributes, so fields are
    aliased to camelCase and accept either spelling on input. Enum fields hold
    their plain string values, which is what the database columns store.
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        extra="ignore",
        str_strip_whitespace=True,
    )
