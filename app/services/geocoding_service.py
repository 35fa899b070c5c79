"""
Geocoding Service

Free-text location search and reverse geocoding backed by OpenStreetMap
Nominatim.

Documentation: https://nominatim.org/release-docs/latest/api/Overview/
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from app.core.config import settings
from app.schemas.geo import Coordinates
from app.schemas.location import Location

logger = logging.getLogger(__name__)


class GeocodingServiceError(Exception):
    """Base exception for geocoding service errors."""


class GeocodingAPIError(GeocodingServiceError):
    """Raised when Nominatim returns an error status."""


class GeocodingNetworkError(GeocodingServiceError):
    """Raised when network communication fails."""


class GeocodingDataError(GeocodingServiceError):
    """Raised when response data cannot be parsed."""


class GeocodingService:
    """
    Service for looking up locations through Nominatim.
    """

    def __init__(self):
        self._api_url = settings.GEOCODING_API_URL
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """
        Get or create the HTTP client for Nominatim.

        Nominatim's usage policy requires an identifying User-Agent.
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._api_url,
                timeout=settings.GEOCODING_TIMEOUT_SECONDS,
                headers={"User-Agent": settings.GEOCODING_USER_AGENT},
            )
        return self._client

    async def search_locations(self, query: str) -> List[Location]:
        """
        Search for locations matching a free-text query.

        Args:
            query: Place name or address

        Returns:
            Matching locations, best match first (empty for a blank query)

        Raises:
            GeocodingNetworkError: If the request fails or times out
            GeocodingDataError: If the response cannot be parsed
        """
        if not query.strip():
            return []

        params = {
            "q": query,
            "format": "json",
            "limit": settings.GEOCODING_RESULT_LIMIT,
            "countrycodes": settings.GEOCODING_COUNTRY_CODES,
        }
        data = await self._get("/search", params)

        try:
            return [self._parse_location(item) for item in data]
        except (KeyError, ValueError, TypeError) as e:
            logger.error("Failed to parse geocoding search response: %s", str(e))
            raise GeocodingDataError(f"Invalid response data: {str(e)}") from e

    async def reverse_geocode(self, coordinates: Coordinates) -> Optional[Location]:
        """
        Resolve coordinates to a named location.

        Returns:
            The location, or None when Nominatim knows no place there
        """
        params = {
            "lat": coordinates.latitude,
            "lon": coordinates.longitude,
            "format": "json",
        }
        data = await self._get("/reverse", params)

        if not data or "error" in data or "display_name" not in data:
            return None

        return Location(
            name=data["display_name"],
            coordinates=coordinates,
            address=data["display_name"],
        )

    async def _get(self, path: str, params: Dict[str, Any]) -> Any:
        try:
            client = self._get_client()
            response = await client.get(path, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as e:
            logger.error("Request to geocoding service timed out: %s", path)
            raise GeocodingNetworkError("Request timed out") from e
        except httpx.HTTPStatusError as e:
            logger.error("Geocoding service returned status %s", e.response.status_code)
            raise GeocodingAPIError(f"Geocoding service error: {str(e)}") from e
        except httpx.HTTPError as e:
            logger.error("Network error while contacting geocoding service: %s", str(e))
            raise GeocodingNetworkError(f"Network error: {str(e)}") from e
        except ValueError as e:
            logger.error("Geocoding service returned invalid JSON for %s", path)
            raise GeocodingDataError(f"Invalid JSON response: {str(e)}") from e

    @staticmethod
    def _parse_location(item: Dict) -> Location:
        return Location(
            name=item["display_name"],
            coordinates=Coordinates(latitude=float(item["lat"]), longitude=float(item["lon"])),
            address=item["display_name"],
        )

    async def close(self):
        if self._client is not None:
            await self._client.aclose()
            self._client = None


# Singleton instance for dependency injection
geocoding_service = GeocodingService()
