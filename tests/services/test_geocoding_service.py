"""
Unit tests for geocoding service.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from app.core.config import settings
from app.schemas.geo import Coordinates
from app.services.geocoding_service import (
    GeocodingAPIError,
    GeocodingDataError,
    GeocodingNetworkError,
    GeocodingService,
)

NOMINATIM = "https://nominatim.openstreetmap.org"


@pytest.fixture
def geocoding_service():
    return GeocodingService()


def response(status_code: int, path: str, **kwargs) -> httpx.Response:
    return httpx.Response(status_code, request=httpx.Request("GET", NOMINATIM + path), **kwargs)


def mock_client(result=None, side_effect=None) -> MagicMock:
    client = MagicMock()
    client.get = AsyncMock(return_value=result, side_effect=side_effect)
    return client


@pytest.mark.asyncio
async def test_search_locations(geocoding_service):
    results = [
        {"display_name": "SM Megamall, Mandaluyong", "lat": "14.5849", "lon": "121.0566"},
        {"display_name": "SM North EDSA, Quezon City", "lat": "14.6565", "lon": "121.0296"},
    ]
    client = mock_client(response(200, "/search", json=results))
    with patch.object(geocoding_service, "_get_client", return_value=client):
        locations = await geocoding_service.search_locations("SM")

    assert len(locations) == 2
    assert locations[0].name == "SM Megamall, Mandaluyong"
    assert locations[0].address == "SM Megamall, Mandaluyong"
    assert locations[0].coordinates == Coordinates(latitude=14.5849, longitude=121.0566)

    params = client.get.call_args[1]["params"]
    assert params["q"] == "SM"
    assert params["countrycodes"] == "ph"
    assert params["limit"] == 5


@pytest.mark.asyncio
async def test_search_blank_query_skips_request(geocoding_service):
    client = mock_client()
    with patch.object(geocoding_service, "_get_client", return_value=client):
        assert await geocoding_service.search_locations("   ") == []

    client.get.assert_not_called()


@pytest.mark.asyncio
async def test_search_invalid_data(geocoding_service):
    client = mock_client(response(200, "/search", json=[{"display_name": "Nowhere"}]))
    with patch.object(geocoding_service, "_get_client", return_value=client):
        with pytest.raises(GeocodingDataError):
            await geocoding_service.search_locations("Nowhere")


@pytest.mark.asyncio
async def test_search_error_status(geocoding_service):
    client = mock_client(response(429, "/search", text="slow down"))
    with patch.object(geocoding_service, "_get_client", return_value=client):
        with pytest.raises(GeocodingAPIError):
            await geocoding_service.search_locations("Quiapo")


@pytest.mark.asyncio
async def test_search_timeout(geocoding_service):
    client = mock_client(side_effect=httpx.ReadTimeout("timed out"))
    with patch.object(geocoding_service, "_get_client", return_value=client):
        with pytest.raises(GeocodingNetworkError):
            await geocoding_service.search_locations("Quiapo")


@pytest.mark.asyncio
async def test_reverse_geocode(geocoding_service):
    coordinates = Coordinates(latitude=14.5990, longitude=120.9842)
    client = mock_client(response(200, "/reverse", json={"display_name": "Quiapo Church"}))
    with patch.object(geocoding_service, "_get_client", return_value=client):
        location = await geocoding_service.reverse_geocode(coordinates)

    assert location.name == "Quiapo Church"
    assert location.coordinates == coordinates


@pytest.mark.asyncio
async def test_reverse_geocode_unknown_place(geocoding_service):
    client = mock_client(response(200, "/reverse", json={"error": "Unable to geocode"}))
    with patch.object(geocoding_service, "_get_client", return_value=client):
        location = await geocoding_service.reverse_geocode(
            Coordinates(latitude=0.0, longitude=0.0)
        )

    assert location is None


@pytest.mark.asyncio
async def test_client_uses_configured_timeout(geocoding_service):
    with patch.object(settings, "GEOCODING_TIMEOUT_SECONDS", 4.5):
        client = geocoding_service._get_client()

    assert client.timeout.read == 4.5
    assert client.timeout.connect == 4.5
    assert client.headers["User-Agent"] == settings.GEOCODING_USER_AGENT
    await geocoding_service.close()
