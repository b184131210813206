"""
Taskie Backend - Shared Response Envelopes
============================================

What:  Base model and the envelopes every endpoint answers with.
How:   Field names are snake_case in Python and camelCase on the wire
       (alias generator); FastAPI serializes response models by alias.

Envelope shapes:
    {"success": true, "message": "..."}
    {"success": true, "data": {...}}
    {"success": true, "message": "...", "data": {...}}
    {"success": true, "count": 3, "data": [...]}
    {"success": false, "error": "not_found", "message": "...", "requestId": "..."}
"""

from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageEnvelope(CamelModel):
    success: bool = True
    message: str


class DataEnvelope(CamelModel, Generic[T]):
    success: bool = True
    data: T


class MessageDataEnvelope(CamelModel, Generic[T]):
    success: bool = True
    message: str
    data: T


class ListEnvelope(CamelModel, Generic[T]):
    success: bool = True
    count: int
    data: T


class ErrorResponse(CamelModel):
    """
    Error envelope written by the global exception handlers.

    Example:
        {
            "success": false,
            "error": "validation_error",
            "message": "Passwords do not match",
            "details": {"field": "confirmPassword"},
            "requestId": "a1b2c3d4"
        }
    """
    success: bool = False
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(CamelModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float
