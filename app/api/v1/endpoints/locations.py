"""
Locations API Endpoint

Transit stop search, place search and reverse geocoding for picking origins
and destinations.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from app.api.v1.endpoints.routes import routing_http_error
from app.schemas.geo import Coordinates
from app.schemas.location import Location
from app.services.geocoding_service import (
    GeocodingAPIError,
    GeocodingNetworkError,
    GeocodingServiceError,
    geocoding_service,
)
from app.services.routing_service import RoutingServiceError, routing_service

logger = logging.getLogger(__name__)

router = APIRouter()


def _geocoding_http_error(e: GeocodingServiceError) -> HTTPException:
    if isinstance(e, GeocodingNetworkError):
        logger.error("Network error: %s", str(e))
        return HTTPException(
            status_code=503, detail=f"Network error connecting to geocoding service: {str(e)}"
        )
    if isinstance(e, GeocodingAPIError):
        logger.error("Geocoding API error: %s", str(e))
        return HTTPException(status_code=502, detail=f"Geocoding service error: {str(e)}")
    logger.error("Geocoding data error: %s", str(e))
    return HTTPException(
        status_code=502, detail=f"Failed to parse geocoding response: {str(e)}"
    )


@router.get("/search", response_model=List[Location])
async def search_locations(q: str = Query(..., min_length=1, description="Place or address")):
    """
    Search for locations matching a free-text query.
    """
    try:
        return await geocoding_service.search_locations(q)
    except GeocodingServiceError as e:
        raise _geocoding_http_error(e) from e


@router.get("/stops", response_model=List[Location])
async def search_stops(q: str = Query(..., min_length=1, description="Stop name")):
    """
    Search transit stops known to the routing backend.

    This is the default destination search; /search covers arbitrary places.
    """
    logger.info("Stop search request: q=%s", q)
    try:
        return await routing_service.search_stops(q)
    except RoutingServiceError as e:
        raise routing_http_error(e) from e


@router.get("/reverse", response_model=Optional[Location])
async def reverse_geocode(
    latitude: float = Query(..., ge=-90.0, le=90.0),
    longitude: float = Query(..., ge=-180.0, le=180.0),
):
    """
    Resolve coordinates to a named location, or null when nothing is known there.
    """
    try:
        return await geocoding_service.reverse_geocode(
            Coordinates(latitude=latitude, longitude=longitude)
        )
    except GeocodingServiceError as e:
        raise _geocoding_http_error(e) from e
