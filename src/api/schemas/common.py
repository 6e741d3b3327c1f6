"""Common Pydantic schemas shared across the API."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel

# Secrets are stored exactly as typed
UnstrippedStr = Annotated[str, StringConstraints(strip_whitespace=False)]


class CamelModel(BaseModel):
    """Base schema speaking camelCase on the wire.

    snake_case field names are accepted on input as well. Surrounding
    whitespace is stripped before length checks, so a blank name fails
    ``min_length``.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


class MessageResponse(BaseModel):
    """Simple message response."""

    message: str
