from fastapi import APIRouter

from app.api.v1.endpoints import health, locations, routes, trip_plans

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(routes.router, prefix="/routes", tags=["routes"])
api_router.include_router(locations.router, prefix="/locations", tags=["locations"])
api_router.include_router(trip_plans.router, prefix="/trip-plans", tags=["trip-plans"])
