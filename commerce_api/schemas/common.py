"""Shared schema building blocks."""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class RequestModel(BaseModel):
    """Base for request bodies and query strings: unknown properties are rejected."""
    model_config = ConfigDict(extra="forbid")


class ResponseModel(BaseModel):
    """Base for entity representations built from ORM objects."""
    model_config = ConfigDict(from_attributes=True)


def metadata_field():
    """`metadata` reads the ORM's metadata_ attribute."""
    return Field(None, validation_alias=AliasChoices("metadata_", "metadata"))
