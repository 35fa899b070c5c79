"""
Health Check Schemas
"""

from pydantic import BaseModel, Field


class ServiceHealth(BaseModel):
    """Reachability of one upstream dependency."""

    healthy: bool
    message: str = Field(..., description="Human readable status, e.g. the failure reason")


class HealthCheckResponse(BaseModel):
    service: str = Field(..., description="Name of this service")
    version: str
    timestamp: str = Field(..., description="ISO 8601 time of the check in UTC")
    healthy: bool = Field(..., description="True when every dependency is healthy")
    routing_service: ServiceHealth
