"""Great-circle distance helpers."""

import math

from app.schemas.geo import Coordinates

EARTH_RADIUS_KM = 6371.0


def haversine_km(origin: Coordinates, destination: Coordinates) -> float:
    """Compute distance in kilometers between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(origin.latitude), math.radians(destination.latitude)
    d_phi = math.radians(destination.latitude - origin.latitude)
    d_lambda = math.radians(destination.longitude - origin.longitude)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c
