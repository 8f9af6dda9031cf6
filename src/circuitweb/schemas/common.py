"""Shared schema building blocks."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RequestModel(BaseModel):
    """Request body accepting camelCase keys (projectId) as well as snake_case.

    Fields are optional at the schema level; routers check required values
    themselves so a missing field is reported as a 400 with a readable message.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Envelope(BaseModel):
    """Successful response wrapper: {success, message, ...payload}."""

    success: bool = True
    message: str | None = None
