"""API Pydantic models."""

from .responses import HealthResponse

__all__ = ["HealthResponse"]
