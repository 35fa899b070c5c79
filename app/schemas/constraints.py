"""
Constraint and Preference Schemas

Hard ceilings for the greedy filter and the closed sets of preferences and
priority metrics accepted by the scoring and selection services.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Preference(str, Enum):
    """Traveler preference for ranking public transport routes."""

    BALANCED = "balanced"
    LOWEST_FARE = "lowest_fare"
    SHORTEST_TIME = "shortest_time"
    FEWEST_TRANSFERS = "fewest_transfers"


class PriorityMetric(str, Enum):
    """Metric minimized when picking a single best route."""

    FARE = "fare"
    TIME = "time"
    DISTANCE = "distance"
    TRANSFERS = "transfers"


class GreedyConstraints(BaseModel):
    """Optional ceilings. A missing field leaves that dimension unconstrained."""

    model_config = ConfigDict(frozen=True)

    max_budget: Optional[float] = Field(None, description="Maximum total fare")
    max_distance: Optional[float] = Field(None, description="Maximum distance in kilometers")
    max_time: Optional[float] = Field(None, description="Maximum time in minutes")
    max_transfers: Optional[int] = Field(None, description="Maximum number of transfers")
