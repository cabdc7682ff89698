"""Shared pydantic base for payloads exchanged with the REST backend."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Backend JSON is camelCase; Python code uses snake_case attribute names.

    ``populate_by_name`` lets factories and tests build instances with the
    Python names, and ``by_alias`` dumps produce the wire format again.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )
