"""Shared pydantic configuration and error payloads."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model exposing snake_case attributes as camelCase JSON keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorDetail(BaseModel):
    """One failed validation rule."""

    path: list[str]
    message: str


class ErrorResponse(BaseModel):
    """Structured failure body returned by every error response."""

    message: str
    errors: list[ErrorDetail] | None = None
