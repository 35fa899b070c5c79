"""
Trip Plan Schemas

A trip plan chains confirmed routes across several sequential destinations.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.location import Location
from app.schemas.route import Route


class TripPlan(BaseModel):
    """
    A multi-destination journey.

    ``destinations`` holds the overall origin followed by one arrival point
    per route, so it is always one longer than ``routes`` while the plan is
    built through the trip planner service.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    routes: List[Route]
    total_fare: float
    total_time: float = Field(..., description="Total time in minutes")
    total_distance: float = Field(..., description="Total distance in kilometers")
    destinations: List[Location]


class TripSummary(BaseModel):
    """Human readable totals for a trip plan."""

    fare: str
    time: str
    time_range: str
    distance: str
    stops: int = Field(..., description="Number of destinations after the origin")


class TripPlanResponse(BaseModel):
    """A trip plan together with its formatted summary."""

    trip_plan: TripPlan
    summary: TripSummary


class TripPlanCreateRequest(BaseModel):
    """Seed a new trip plan from the first confirmed route."""

    route: Route


class TripPlanAddRouteRequest(BaseModel):
    """Append a route to the caller's current trip plan."""

    trip_plan: TripPlan
    route: Route


class TripPlanRemoveRouteRequest(BaseModel):
    """Remove a route, by id, from the caller's current trip plan."""

    trip_plan: TripPlan
    route_id: str


class TripPlanDestinationsRequest(BaseModel):
    """Replace the destinations of the caller's current trip plan."""

    trip_plan: TripPlan
    destinations: List[Location]
