"""
Route Schema

Pydantic models for representing candidate public transport routes and
their fuzzy scores.

Routes are frozen: stamping a score or attaching geometry produces a new
value via ``model_copy`` and never changes the original.
"""

from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.geo import Coordinates
from app.schemas.location import Location


class TransportType(str, Enum):
    """Transport types for public transport segments."""

    JEEPNEY = "jeepney"
    BUS = "bus"
    UV_EXPRESS = "uv_express"
    TRAIN = "train"
    WALK = "walk"


class RouteSegment(BaseModel):
    """One ride on a single transport type."""

    model_config = ConfigDict(frozen=True)

    id: str
    transport_type: TransportType
    route_name: str = Field(..., description="Route or line name, e.g. jeepney route code")
    origin: Location
    destination: Location
    fare: float = Field(..., description="Fare in currency units")
    estimated_time: float = Field(..., description="Estimated travel time in minutes")
    distance: float = Field(..., description="Distance in kilometers")
    geometry: Optional[List[Coordinates]] = Field(
        None, description="Path coordinates, filled in by a separate geometry fetch"
    )
    origin_node: Optional[str] = Field(None, description="Backend graph node of the origin")
    destination_node: Optional[str] = Field(
        None, description="Backend graph node of the destination"
    )
    mode: Optional[str] = Field(None, description="Raw backend mode, e.g. lrt or mrt")
    path_nodes: Optional[List[Union[str, int]]] = Field(
        None, description="Planned node sequence for this segment"
    )


class Route(BaseModel):
    """
    A complete origin to destination itinerary.

    The totals are supplied by the routing backend and are treated as
    authoritative. They are intentionally not range-checked.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    segments: List[RouteSegment] = Field(..., min_length=1)
    total_fare: float
    total_time: float = Field(..., description="Total time in minutes")
    total_distance: float = Field(..., description="Total distance in kilometers")
    total_transfers: int
    fuzzy_score: Optional[float] = None

    @property
    def origin(self) -> Location:
        return self.segments[0].origin

    @property
    def destination(self) -> Location:
        return self.segments[-1].destination

    def with_fuzzy_score(self, score: float) -> "Route":
        """Return a copy of this route carrying the given score."""
        return self.model_copy(update={"fuzzy_score": score})


class FuzzyScore(BaseModel):
    """Per-criterion fuzzy scores and their weighted combination."""

    fare_score: float
    time_score: float
    transfer_score: float
    total_score: float
