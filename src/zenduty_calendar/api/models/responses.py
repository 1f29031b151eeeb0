"""Pydantic response models for API endpoints."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response."""

    status: str  # "healthy" or "unhealthy"
    version: str
    credentials_configured: bool
    session_active: bool
    timestamp: str  # ISO 8601 UTC
    error: str | None = None
