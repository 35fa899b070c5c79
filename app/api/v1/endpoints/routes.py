"""
Routes API Endpoint

Provides REST API for searching, scoring, filtering and selecting public
transport routes.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException

from app.core.config import settings
from app.schemas.constraints import GreedyConstraints
from app.schemas.route import Route
from app.schemas.routes import (
    NO_FEASIBLE_ROUTE_MESSAGE,
    RouteFilterRequest,
    RouteGeometryRequest,
    RouteListResponse,
    RouteRankRequest,
    RouteScoreRequest,
    RouteScoreResponse,
    RouteSearchRequest,
    RouteSearchResponse,
    RouteSelectRequest,
    RouteSelectResponse,
    SequentialSelectRequest,
    SequentialSelectResponse,
)
from app.services.fuzzy_logic import calculate_fuzzy_score, rank_routes
from app.services.greedy_filter import (
    apply_greedy_filter,
    find_optimal_multi_destination_route,
    select_greedy_route,
)
from app.services.routing_service import (
    RoutingAPIError,
    RoutingDataError,
    RoutingNetworkError,
    RoutingServiceError,
    routing_service,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def routing_http_error(e: Exception) -> HTTPException:
    """Translate a routing service error into an HTTP error."""
    if isinstance(e, RoutingAPIError):
        logger.error("Routing backend error: %s", str(e))
        return HTTPException(status_code=502, detail=f"Routing backend error: {str(e)}")
    if isinstance(e, RoutingNetworkError):
        logger.error("Network error: %s", str(e))
        return HTTPException(
            status_code=503, detail=f"Network error connecting to routing backend: {str(e)}"
        )
    if isinstance(e, RoutingDataError):
        logger.error("Data parsing error: %s", str(e))
        return HTTPException(
            status_code=502, detail=f"Failed to parse routing backend response: {str(e)}"
        )
    logger.error("Routing service error: %s", str(e))
    return HTTPException(status_code=500, detail=f"Routing service error: {str(e)}")


def _default_constraints() -> GreedyConstraints:
    return GreedyConstraints(
        max_budget=settings.DEFAULT_MAX_BUDGET,
        max_time=settings.DEFAULT_MAX_TIME,
        max_transfers=settings.DEFAULT_MAX_TRANSFERS,
    )


@router.post("/search", response_model=RouteSearchResponse)
async def search_routes(request: RouteSearchRequest):
    """
    Search for public transport routes between two locations.

    Candidates from the routing backend are pruned with the greedy filter
    and then ranked with fuzzy scoring. An empty result is reported as
    ``feasible: false`` with guidance rather than as an error.

    Raises:
        HTTPException: If the routing backend fails or returns invalid data
    """
    constraints = request.constraints or _default_constraints()

    logger.info(
        "Route search request: origin=%s, destination=%s, preference=%s",
        request.origin.name,
        request.destination.name,
        request.preference.value,
    )

    try:
        candidates = await routing_service.fetch_routes(
            origin=request.origin,
            destination=request.destination,
            preference=request.preference,
            budget=constraints.max_budget,
            max_transfers=constraints.max_transfers,
            preferred_modes=request.preferred_modes,
        )
    except RoutingServiceError as e:
        raise routing_http_error(e) from e

    feasible = apply_greedy_filter(candidates, constraints)
    ranked = rank_routes(feasible, request.preference)

    logger.info(
        "Route search successful: %d candidates, %d feasible", len(candidates), len(ranked)
    )

    return RouteSearchResponse(
        origin=request.origin,
        destination=request.destination,
        routes=ranked,
        feasible=bool(ranked),
        message=None if ranked else NO_FEASIBLE_ROUTE_MESSAGE,
        search_time=datetime.now(timezone.utc),
    )


@router.post("/score", response_model=RouteScoreResponse)
async def score_route(request: RouteScoreRequest):
    """
    Calculate the fuzzy score of one route against explicit maxima.
    """
    score = calculate_fuzzy_score(
        request.route,
        request.max_fare,
        request.max_time,
        request.max_transfers,
        request.preference,
    )
    return RouteScoreResponse(route_id=request.route.id, score=score)


@router.post("/rank", response_model=RouteListResponse)
async def rank(request: RouteRankRequest):
    """
    Rank routes by fuzzy score, best first.
    """
    return RouteListResponse(routes=rank_routes(request.routes, request.preference))


@router.post("/filter", response_model=RouteListResponse)
async def filter_routes(request: RouteFilterRequest):
    """
    Keep only the routes that satisfy every given ceiling.
    """
    return RouteListResponse(routes=apply_greedy_filter(request.routes, request.constraints))


@router.post("/select", response_model=RouteSelectResponse)
async def select_route(request: RouteSelectRequest):
    """
    Select the feasible route with the lowest value of the priority metric.
    """
    route = select_greedy_route(request.routes, request.constraints, request.priority_metric)
    if route is None:
        return RouteSelectResponse(feasible=False, message=NO_FEASIBLE_ROUTE_MESSAGE)
    return RouteSelectResponse(route=route, feasible=True)


@router.post("/select-sequential", response_model=SequentialSelectResponse)
async def select_sequential(request: SequentialSelectRequest):
    """
    Select one route per leg so that the whole trip stays within the ceilings.
    """
    if not request.route_segments:
        return SequentialSelectResponse(feasible=False, message="No legs were requested.")

    routes = find_optimal_multi_destination_route(request.route_segments, request.constraints)
    if routes is None:
        return SequentialSelectResponse(feasible=False, message=NO_FEASIBLE_ROUTE_MESSAGE)
    return SequentialSelectResponse(routes=routes, feasible=True)


@router.post("/geometry", response_model=Route)
async def route_geometry(request: RouteGeometryRequest):
    """
    Fetch path geometry for every segment of a route.

    Returns a new route; the request's route is not cached here.
    """
    try:
        return await routing_service.fetch_route_geometry(request.route)
    except RoutingServiceError as e:
        raise routing_http_error(e) from e
