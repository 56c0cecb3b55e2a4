"""
Base Pydantic schemas and common schema utilities.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(from_attributes=True)


def is_admin_field(default=False):
    """
    Field for the admin flag: accepted as ``isAdmin`` or ``is_admin`` and
    always serialized as ``isAdmin``.
    """
    return Field(
        default,
        validation_alias=AliasChoices("isAdmin", "is_admin"),
        serialization_alias="isAdmin",
    )
