"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import Any, Optional
from datetime import datetime


class ShortenRequest(BaseModel):
    """Request to shorten a URL.

    ``url`` is left untyped so that a wrong type reaches the service and is
    reported as invalid input rather than a schema error.
    """

    url: Any = Field(None, description="The URL to shorten")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"url": "https://example.com/very/long/path/to/resource"},
                {"url": "www.example.com"},
            ]
        }
    }


class ShortenResponse(BaseModel):
    """Response after shortening a URL."""

    short_url: str = Field(..., alias="shortUrl", description="The complete short URL")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {"shortUrl": "https://short.ly/s/aB3xK9p"}
            ]
        },
    }


class SlugStatusResponse(BaseModel):
    """Whether a slug is taken."""

    slug: str
    exists: bool


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    storage: str = Field(..., description="Storage status")
    backend: str = Field(..., description="Storage backend in use")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Detailed error information")
