"""
Response envelope shared by every endpoint.
"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for wire schemas: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Envelope(BaseModel, Generic[T]):
    """Success envelope: ``{"status": "success", "data": ..., "message": ...}``."""

    status: str = "success"
    data: Optional[T] = None
    message: Optional[str] = None


class MessageEnvelope(BaseModel):
    status: str = "success"
    message: str


class ErrorEnvelope(BaseModel):
    """Error envelope rendered by the exception handlers."""

    status: str = "error"
    message: str
    code: Optional[str] = None
    details: Optional[object] = None


class DeletedResponse(BaseModel):
    id: str


def success(data=None, message: Optional[str] = None) -> dict:
    return {"status": "success", "data": data, "message": message}
