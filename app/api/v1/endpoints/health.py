from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, status

from app.core.config import settings
from app.schemas.health import HealthCheckResponse
from app.services.routing_service import routing_service

router = APIRouter()


@router.get("/health")
async def health_check() -> HealthCheckResponse:
    """
    Health check endpoint that verifies the routing backend is reachable.

    Returns 200 if the backend is healthy, 503 otherwise.
    """
    routing_service_health = await routing_service.health_check()

    response = HealthCheckResponse(
        service="farewise-backend",
        version=settings.VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
        healthy=routing_service_health.healthy,
        routing_service=routing_service_health,
    )

    if response.healthy:
        return response
    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=response.model_dump()
    )
