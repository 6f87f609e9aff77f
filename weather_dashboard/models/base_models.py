"""Pydantic models for request/response validation."""

from typing import Any

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Basic health check response."""

    status: str
    version: str


class ErrorDetail(BaseModel):
    """Body of a structured error response."""

    code: str = Field(..., description="Error code from ErrorCode")
    message: str = Field(..., description="User-presentable message")
    details: dict[str, Any] = Field(default_factory=dict, description="Additional error context")


class ErrorResponse(BaseModel):
    """Error response."""

    error: ErrorDetail
