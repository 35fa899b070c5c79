"""
Trip Planner Service

Builds a multi-destination trip plan out of confirmed routes.

The plan is a value owned by the caller. Every function here takes the
current plan (None meaning "no plan yet") and returns the next one without
modifying its input. ``TripPlanner`` wraps the same functions for callers
that prefer to keep the plan in one place.
"""

import logging
import uuid
from typing import List, Optional

from app.schemas.location import Location
from app.schemas.route import Route
from app.schemas.trip_plan import TripPlan

logger = logging.getLogger(__name__)


def generate_trip_plan_id() -> str:
    return uuid.uuid4().hex


def create_trip_plan(initial_route: Route, plan_id: Optional[str] = None) -> TripPlan:
    """
    Start a trip plan from its first confirmed route.

    Args:
        initial_route: First leg of the trip
        plan_id: Optional identifier; a random one is generated otherwise

    Returns:
        TripPlan whose destinations are the route's origin and destination
    """
    return TripPlan(
        id=plan_id or generate_trip_plan_id(),
        routes=[initial_route],
        total_fare=initial_route.total_fare,
        total_time=initial_route.total_time,
        total_distance=initial_route.total_distance,
        destinations=[initial_route.origin, initial_route.destination],
    )


def add_route(trip_plan: Optional[TripPlan], route: Route) -> Optional[TripPlan]:
    """
    Append a route as the next leg.

    Does nothing without an existing plan; plans are only started by
    ``create_trip_plan``.
    """
    if trip_plan is None:
        return None

    return trip_plan.model_copy(
        update={
            "routes": [*trip_plan.routes, route],
            "total_fare": trip_plan.total_fare + route.total_fare,
            "total_time": trip_plan.total_time + route.total_time,
            "total_distance": trip_plan.total_distance + route.total_distance,
            "destinations": [*trip_plan.destinations, route.destination],
        }
    )


def remove_route(trip_plan: Optional[TripPlan], route_id: str) -> Optional[TripPlan]:
    """
    Remove a leg by route id.

    Removing leg ``k`` also removes destination ``k + 1``, the arrival point
    that leg introduced, so the origin and every earlier leg stay in place.
    Unknown ids leave the plan unchanged. Removing the last leg leaves a plan
    with no routes and only the origin as destination.
    """
    if trip_plan is None:
        return None

    index = next(
        (i for i, route in enumerate(trip_plan.routes) if route.id == route_id),
        None,
    )
    if index is None:
        logger.debug("Route %s not found in trip plan %s", route_id, trip_plan.id)
        return trip_plan

    removed = trip_plan.routes[index]
    routes = [*trip_plan.routes[:index], *trip_plan.routes[index + 1 :]]
    destinations = [*trip_plan.destinations[: index + 1], *trip_plan.destinations[index + 2 :]]

    return trip_plan.model_copy(
        update={
            "routes": routes,
            "total_fare": trip_plan.total_fare - removed.total_fare,
            "total_time": trip_plan.total_time - removed.total_time,
            "total_distance": trip_plan.total_distance - removed.total_distance,
            "destinations": destinations,
        }
    )


def update_destinations(
    trip_plan: Optional[TripPlan], destinations: List[Location]
) -> Optional[TripPlan]:
    """
    Replace the destinations without touching routes or totals.

    Manual override; keeping destinations consistent with routes is up to
    the caller.
    """
    if trip_plan is None:
        return None
    return trip_plan.model_copy(update={"destinations": list(destinations)})


def clear_trip_plan(trip_plan: Optional[TripPlan]) -> None:  # pylint: disable=unused-argument
    """Abandon the journey."""
    return None


class TripPlanner:
    """
    Holds one trip plan for a single writer.

    Not thread safe; callers serialize add/remove calls.
    """

    def __init__(self, initial_route: Optional[Route] = None):
        self.trip_plan: Optional[TripPlan] = (
            create_trip_plan(initial_route) if initial_route is not None else None
        )

    @property
    def is_active(self) -> bool:
        return self.trip_plan is not None

    def add_route(self, route: Route) -> None:
        self.trip_plan = add_route(self.trip_plan, route)

    def remove_route(self, route_id: str) -> None:
        self.trip_plan = remove_route(self.trip_plan, route_id)

    def update_destinations(self, destinations: List[Location]) -> None:
        self.trip_plan = update_destinations(self.trip_plan, destinations)

    def clear(self) -> None:
        self.trip_plan = clear_trip_plan(self.trip_plan)
