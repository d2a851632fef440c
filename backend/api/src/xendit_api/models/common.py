"""Shared API response models.

Provider models (PaymentChannelInfo, ErrorResponse, etc.) live in
xendit_medusa.models and are re-exported here where routes need them.
"""

from pydantic import BaseModel, ConfigDict, Field

from xendit_medusa.models.errors import ErrorCode, ErrorResponse

__all__ = [
    "ErrorCode",
    "ErrorResponse",
    "HealthResponse",
    "MethodNotAllowedResponse",
    "PingResponse",
]


class HealthResponse(BaseModel):
    """Response for GET /health."""

    status: str = Field(default="healthy", examples=["healthy"])
    version: str = Field(..., examples=["0.1.0"])
    provider: str = Field(default="xendit")


class PingResponse(BaseModel):
    """Response for GET /ping."""

    status: str = "ok"
    timestamp: str
    service: str = "xendit-medusa-api"


class MethodNotAllowedResponse(BaseModel):
    """Body returned when a POST-only endpoint receives a GET."""

    model_config = ConfigDict(strict=True)

    error: str = "Method not allowed"
    message: str
