import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.main import app  # noqa: E402
from app.schemas.geo import Coordinates  # noqa: E402
from app.schemas.location import Location  # noqa: E402
from app.schemas.route import Route, RouteSegment, TransportType  # noqa: E402

PLACES = {
    "A": Location(name="Cubao", coordinates=Coordinates(latitude=14.6195, longitude=121.0537)),
    "B": Location(name="Quiapo", coordinates=Coordinates(latitude=14.5990, longitude=120.9842)),
    "C": Location(name="Makati", coordinates=Coordinates(latitude=14.5547, longitude=121.0244)),
    "D": Location(name="Pasay", coordinates=Coordinates(latitude=14.5378, longitude=121.0014)),
}


def location(key: str) -> Location:
    return PLACES.get(key) or Location(
        name=key, coordinates=Coordinates(latitude=14.6, longitude=121.0)
    )


@pytest.fixture
def make_route():
    """Factory for single-segment routes with explicit totals."""

    def _make_route(
        route_id: str = "r1",
        fare: float = 0.0,
        time: float = 0.0,
        distance: float = 0.0,
        transfers: int = 0,
        origin: str = "A",
        destination: str = "B",
    ) -> Route:
        segment = RouteSegment(
            id="s1",
            transport_type=TransportType.JEEPNEY,
            route_name="Cubao - Quiapo",
            origin=location(origin),
            destination=location(destination),
            fare=fare,
            estimated_time=time,
            distance=distance,
        )
        return Route(
            id=route_id,
            segments=[segment],
            total_fare=fare,
            total_time=time,
            total_distance=distance,
            total_transfers=transfers,
        )

    return _make_route


@pytest.fixture
def places():
    return PLACES


@pytest.fixture(scope="function")
def client():
    """Provides a FastAPI test client."""
    with TestClient(app) as c:
        yield c
