"""
API response models for FastAPI endpoints.
"""

from typing import Optional
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error body returned when a payload cannot be formatted."""

    success: bool = Field(False, description="Always false for errors")
    error: str = Field(description="Error message")
    error_type: Optional[str] = Field(None, description="Formatter error class")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service status", examples=["healthy"])
    version: str = Field(description="API version", examples=["1.0.0"])
    uptime_seconds: float = Field(description="Service uptime")


class VersionResponse(BaseModel):
    """Version information response."""

    api_version: str = Field(description="API version")
    formatter_version: str = Field(description="Formatter rules version")
    parser_version: str = Field(description="XML loader version")
