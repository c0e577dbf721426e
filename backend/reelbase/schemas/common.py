"""
Reelbase Backend — Shared Response Schemas
============================================

What:  Error and health payloads used across route modules.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    What:  Error body returned by the global exception handlers.

    Example:
        {
            "message": "Error inserting movie data",
            "error": "E11000 duplicate key error collection: reelbase.movies ..."
        }
    """
    message: str = Field(description="What the server was doing when it failed")
    error: Optional[str] = Field(default=None, description="Underlying error text")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and store status.
    Who:   Returned by GET /health for Docker and load balancer probes.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Store connectivity: connected, disconnected")
    store_backend: str = Field(description="Configured store implementation")
    uptime_seconds: float = Field(description="Seconds since service started")


class MessageResponse(BaseModel):
    """Plain acknowledgement, e.g. after a delete."""
    message: str
