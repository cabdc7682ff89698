"""Error envelope returned by the REST backend.

Failed responses carry ``{"error": {"code": "...", "message": "..."}}``.
Older endpoints answer ``{"error": "text"}``; ``error_message`` accepts both.
"""

from typing import Any

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError


class ErrorDetail(BaseModel):
    """Inner error object with a machine-readable code and human-readable message."""

    code: str
    message: str


class ErrorResponse(BaseModel):
    """Top-level error envelope."""

    error: ErrorDetail


def error_message(body: Any) -> str | None:
    """Extract the human-readable message from a decoded error body, if any."""
    if not isinstance(body, dict):
        return None
    try:
        return ErrorResponse.model_validate(body).error.message
    except PydanticValidationError:
        pass
    for key in ("error", "message", "detail"):
        value = body.get(key)
        if isinstance(value, str) and value:
            return value
    return None
