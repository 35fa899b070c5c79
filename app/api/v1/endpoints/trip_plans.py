"""
Trip Plans API Endpoint

Stateless trip plan operations. The caller owns the plan: each request
carries the current plan and the response carries the next one.
"""

import logging

from fastapi import APIRouter

from app.schemas.trip_plan import (
    TripPlan,
    TripPlanAddRouteRequest,
    TripPlanCreateRequest,
    TripPlanDestinationsRequest,
    TripPlanRemoveRouteRequest,
    TripPlanResponse,
    TripSummary,
)
from app.services.trip_planner import (
    add_route,
    create_trip_plan,
    remove_route,
    update_destinations,
)
from app.utils.formatting import (
    format_currency,
    format_distance,
    format_time,
    format_time_range,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _respond(trip_plan: TripPlan) -> TripPlanResponse:
    summary = TripSummary(
        fare=format_currency(trip_plan.total_fare),
        time=format_time(trip_plan.total_time),
        time_range=format_time_range(trip_plan.total_time),
        distance=format_distance(trip_plan.total_distance),
        stops=max(len(trip_plan.destinations) - 1, 0),
    )
    return TripPlanResponse(trip_plan=trip_plan, summary=summary)


@router.post("", response_model=TripPlanResponse, status_code=201)
async def create(request: TripPlanCreateRequest):
    """
    Start a trip plan from its first confirmed route.
    """
    trip_plan = create_trip_plan(request.route)
    logger.info("Trip plan created: id=%s, route=%s", trip_plan.id, request.route.id)
    return _respond(trip_plan)


@router.post("/routes", response_model=TripPlanResponse)
async def append_route(request: TripPlanAddRouteRequest):
    """
    Append a confirmed route as the next leg.
    """
    logger.info(
        "Add route request: trip_plan=%s, route=%s", request.trip_plan.id, request.route.id
    )
    return _respond(add_route(request.trip_plan, request.route))


@router.post("/routes/remove", response_model=TripPlanResponse)
async def delete_route(request: TripPlanRemoveRouteRequest):
    """
    Remove a leg by route id. Unknown ids return the plan unchanged.
    """
    logger.info(
        "Remove route request: trip_plan=%s, route=%s", request.trip_plan.id, request.route_id
    )
    return _respond(remove_route(request.trip_plan, request.route_id))


@router.put("/destinations", response_model=TripPlanResponse)
async def replace_destinations(request: TripPlanDestinationsRequest):
    """
    Replace destinations without touching routes or totals.
    """
    logger.info(
        "Update destinations request: trip_plan=%s, destinations=%d",
        request.trip_plan.id,
        len(request.destinations),
    )
    return _respond(update_destinations(request.trip_plan, request.destinations))
