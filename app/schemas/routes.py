"""
Route Search Request/Response Schemas

Pydantic models for the route search, scoring and selection endpoints.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from app.schemas.constraints import GreedyConstraints, Preference, PriorityMetric
from app.schemas.location import Location
from app.schemas.route import FuzzyScore, Route

NO_FEASIBLE_ROUTE_MESSAGE = (
    "No route satisfies your limits. "
    "Try relaxing your budget, time, distance or transfer limits."
)


class RouteSearchRequest(BaseModel):
    """Request schema for route search endpoint."""

    origin: Location = Field(..., description="Starting location")
    destination: Location = Field(..., description="Destination location")
    preference: Preference = Field(
        default=Preference.BALANCED, description="How candidate routes should be ranked"
    )
    constraints: Optional[GreedyConstraints] = Field(
        None,
        description=(
            "Hard ceilings applied before ranking. "
            "Defaults to the configured budget, time and transfer limits if not provided."
        ),
    )
    preferred_modes: Optional[List[str]] = Field(
        None, description="Backend transport modes to consider, e.g. 'jeepney', 'lrt'"
    )


class RouteSearchResponse(BaseModel):
    """Response schema for route search endpoint."""

    origin: Location
    destination: Location
    routes: List[Route] = Field(..., description="Feasible routes, best first")
    feasible: bool = Field(..., description="False when no candidate met the constraints")
    message: Optional[str] = Field(None, description="Guidance when nothing is feasible")
    search_time: datetime = Field(..., description="Time when the search was performed")


class RouteScoreRequest(BaseModel):
    """Score one route against explicit maxima."""

    route: Route
    max_fare: float = Field(..., ge=0)
    max_time: float = Field(..., ge=0)
    max_transfers: float = Field(..., ge=0)
    preference: Optional[Preference] = None


class RouteScoreResponse(BaseModel):
    route_id: str
    score: FuzzyScore


class RouteRankRequest(BaseModel):
    routes: List[Route]
    preference: Optional[Preference] = None


class RouteFilterRequest(BaseModel):
    routes: List[Route]
    constraints: GreedyConstraints = Field(default_factory=GreedyConstraints)


class RouteListResponse(BaseModel):
    routes: List[Route]


class RouteSelectRequest(BaseModel):
    routes: List[Route]
    constraints: GreedyConstraints = Field(default_factory=GreedyConstraints)
    priority_metric: PriorityMetric = PriorityMetric.FARE


class RouteSelectResponse(BaseModel):
    route: Optional[Route] = None
    feasible: bool
    message: Optional[str] = None


class SequentialSelectRequest(BaseModel):
    route_segments: List[List[Route]] = Field(
        ..., description="Candidate routes for each leg, in travel order"
    )
    constraints: GreedyConstraints = Field(default_factory=GreedyConstraints)


class SequentialSelectResponse(BaseModel):
    routes: Optional[List[Route]] = None
    feasible: bool
    message: Optional[str] = None


class RouteGeometryRequest(BaseModel):
    route: Route
