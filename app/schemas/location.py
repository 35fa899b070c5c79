"""
Location Schema

Pydantic models for representing named places.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from app.schemas.geo import Coordinates


class Location(BaseModel):
    """A named place. Two locations are equal when all their fields are equal."""

    model_config = ConfigDict(frozen=True)

    name: str
    coordinates: Coordinates
    address: Optional[str] = None
