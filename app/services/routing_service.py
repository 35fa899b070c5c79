"""
Routing Service

This service interfaces with the public transport routing backend to fetch
candidate routes between two locations and, on demand, the path geometry of
a chosen route.

Endpoints:
    POST /public-transport/plan      candidate routes for an origin/destination
    POST /public-transport/geometry  per-segment polylines for a route
    GET  /stops/search               transit stops matching a name
    GET  /health                     liveness probe
"""

import logging
import time
from typing import Any, Dict, List, Optional

import httpx

from app.core.config import settings
from app.schemas.constraints import Preference
from app.schemas.geo import Coordinates
from app.schemas.health import ServiceHealth
from app.schemas.location import Location
from app.schemas.route import Route, RouteSegment, TransportType
from app.utils.geo import haversine_km

logger = logging.getLogger(__name__)

TRAIN_MODES = {"lrt", "mrt", "pnr", "train"}


class RoutingServiceError(Exception):
    """Base exception for routing service errors."""


class RoutingAPIError(RoutingServiceError):
    """Raised when the routing backend returns an error."""


class RoutingNetworkError(RoutingServiceError):
    """Raised when network communication fails."""


class RoutingDataError(RoutingServiceError):
    """Raised when response data cannot be parsed."""


def transport_type_for_mode(mode: Optional[str]) -> TransportType:
    """Map a backend mode onto a transport type."""
    mode = (mode or "").lower()
    if mode == "walk":
        return TransportType.WALK
    if mode in TRAIN_MODES:
        return TransportType.TRAIN
    if mode == "jeepney":
        return TransportType.JEEPNEY
    if mode == "bus":
        return TransportType.BUS
    return TransportType.UV_EXPRESS


class RoutingService:
    """
    Service for interacting with the routing backend.
    """

    def __init__(self):
        """
        Initialize the routing service with configuration.
        """
        self._api_url = settings.ROUTING_API_URL
        self._api_key = settings.ROUTING_API_KEY
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """
        Get or create the HTTP client for the routing backend.
        """
        if self._client is None:
            headers = {"Content-Type": "application/json"}
            if self._api_key:
                headers["X-API-Key"] = self._api_key
            self._client = httpx.AsyncClient(
                base_url=self._api_url,
                timeout=settings.ROUTING_TIMEOUT_SECONDS,
                headers=headers,
            )
        return self._client

    async def health_check(self) -> ServiceHealth:
        """
        Perform a health check of the routing backend.
        """
        try:
            client = self._get_client()
            response = await client.get("/health")

            if response.status_code == 200:
                return ServiceHealth(healthy=True, message="Routing backend is responding")
            return ServiceHealth(
                healthy=False,
                message=f"Routing backend returned status code: {response.status_code}",
            )

        except httpx.TimeoutException:
            return ServiceHealth(healthy=False, message="Routing backend request timed out")
        except Exception as e:  # pylint: disable=broad-except
            return ServiceHealth(healthy=False, message=f"Routing backend check failed: {str(e)}")

    async def fetch_routes(
        self,
        origin: Location,
        destination: Location,
        preference: Preference = Preference.BALANCED,
        budget: Optional[float] = None,
        max_transfers: Optional[int] = None,
        preferred_modes: Optional[List[str]] = None,
    ) -> List[Route]:
        """
        Fetch candidate routes between two locations.

        Args:
            origin: Starting location
            destination: Destination location
            preference: Preference forwarded to the backend planner
            budget: Estimated budget (defaults to the configured estimate)
            max_transfers: Optional transfer limit forwarded to the backend
            preferred_modes: Backend modes to consider (defaults to all configured modes)

        Returns:
            List of candidate routes as returned by the backend

        Raises:
            RoutingAPIError: If the backend answers with an error status
            RoutingNetworkError: If the request fails or times out
            RoutingDataError: If the response cannot be parsed
        """
        preferences: Dict[str, Any] = {
            "preference_type": preference.value,
            "estimated_budget": (
                budget if budget is not None else settings.DEFAULT_ESTIMATED_BUDGET
            ),
            "preferred_modes": preferred_modes or settings.DEFAULT_PREFERRED_MODES,
        }
        if max_transfers is not None:
            preferences["max_transfers"] = max_transfers

        payload = {
            "origin": self._location_payload(origin),
            "destination": self._location_payload(destination),
            "preferences": preferences,
        }

        data = await self._post("/public-transport/plan", payload)
        try:
            return self._parse_routes(data, origin, destination)
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            logger.error("Failed to parse routing backend response: %s", str(e))
            raise RoutingDataError(f"Invalid response data: {str(e)}") from e

    async def fetch_route_geometry(self, route: Route) -> Route:
        """
        Fetch path geometry for every segment of a route.

        The input route is left untouched; a new route with populated segment
        geometries is returned. Segments for which the backend returns no
        coordinates keep their current geometry.

        Raises:
            RoutingAPIError, RoutingNetworkError, RoutingDataError
        """
        payload = {
            "legs": [
                {
                    "origin_node": segment.origin_node,
                    "destination_node": segment.destination_node,
                    "mode": segment.mode or segment.transport_type.value,
                    "path_nodes": segment.path_nodes,
                }
                for segment in route.segments
            ]
        }

        data = await self._post("/public-transport/geometry", payload)
        try:
            legs = data.get("legs", [])
            segments: List[RouteSegment] = []
            for idx, segment in enumerate(route.segments):
                coords = legs[idx].get("geometry_coords") if idx < len(legs) else None
                geometry = self._parse_geometry(coords)
                segments.append(
                    segment.model_copy(update={"geometry": geometry}) if geometry else segment
                )
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            logger.error("Failed to parse route geometry response: %s", str(e))
            raise RoutingDataError(f"Invalid geometry data: {str(e)}") from e

        return route.model_copy(update={"segments": segments})

    async def search_stops(self, query: str, limit: Optional[int] = None) -> List[Location]:
        """
        Search the backend's transit stops by name.

        Args:
            query: Free-text stop name
            limit: Maximum number of stops (defaults to the configured limit)

        Returns:
            Matching stops as locations; empty for a blank query

        Raises:
            RoutingAPIError, RoutingNetworkError, RoutingDataError
        """
        query = query.strip()
        if not query:
            return []

        params = {"q": query, "limit": limit or settings.STOP_SEARCH_LIMIT}
        data = await self._get("/stops/search", params)
        try:
            return [
                Location(
                    name=stop["stop_name"],
                    coordinates=Coordinates(
                        latitude=stop["stop_lat"], longitude=stop["stop_lon"]
                    ),
                    address=stop["stop_name"],
                )
                for stop in data or []
            ]
        except (KeyError, ValueError, TypeError) as e:
            logger.error("Failed to parse stop search response: %s", str(e))
            raise RoutingDataError(f"Invalid stop data: {str(e)}") from e

    async def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST a JSON payload to the backend and return the decoded body.
        """
        try:
            client = self._get_client()
            response = await client.post(path, json=payload)
        except httpx.TimeoutException as e:
            logger.error("Request to routing backend timed out: %s", path)
            raise RoutingNetworkError("Request timed out") from e
        except httpx.HTTPError as e:
            logger.error("Network error while contacting routing backend: %s", str(e))
            raise RoutingNetworkError(f"Network error: {str(e)}") from e

        return self._decode(response, path)

    async def _get(self, path: str, params: Dict[str, Any]) -> Any:
        """
        GET a backend resource and return the decoded body.
        """
        try:
            client = self._get_client()
            response = await client.get(path, params=params)
        except httpx.TimeoutException as e:
            logger.error("Request to routing backend timed out: %s", path)
            raise RoutingNetworkError("Request timed out") from e
        except httpx.HTTPError as e:
            logger.error("Network error while contacting routing backend: %s", str(e))
            raise RoutingNetworkError(f"Network error: {str(e)}") from e

        return self._decode(response, path)

    @staticmethod
    def _decode(response: httpx.Response, path: str) -> Any:
        if response.status_code != 200:
            logger.error(
                "Routing backend returned status %s for %s", response.status_code, path
            )
            raise RoutingAPIError(
                f"Routing backend returned status {response.status_code}: {response.text}"
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error("Routing backend returned invalid JSON for %s", path)
            raise RoutingDataError(f"Invalid JSON response: {str(e)}") from e

    @staticmethod
    def _location_payload(location: Location) -> Dict[str, Any]:
        return {
            "lat": location.coordinates.latitude,
            "lon": location.coordinates.longitude,
            "name": location.name,
        }

    def _parse_routes(self, data: Dict, origin: Location, destination: Location) -> List[Route]:
        """
        Parse a plan response into routes.

        The backend answers either with a single route object or with
        ``{"routes": [...]}`` holding several alternatives.
        """
        if "routes" in data:
            return [
                self._parse_route(item, origin, destination, index)
                for index, item in enumerate(data["routes"])
            ]
        if data.get("route"):
            return [self._parse_route(data, origin, destination, 0)]
        return []

    def _parse_route(
        self, data: Dict, origin: Location, destination: Location, index: int
    ) -> Route:
        """
        Parse a single route from backend response data.
        """
        legs = data.get("route") or []
        segments = [self._parse_segment(leg, idx) for idx, leg in enumerate(legs)]

        # Route endpoints without coordinates are the requested locations
        if segments and not legs[0].get("origin_coords"):
            segments[0] = segments[0].model_copy(update={"origin": origin})
        if segments and not legs[-1].get("destination_coords"):
            segments[-1] = segments[-1].model_copy(update={"destination": destination})

        return Route(
            id=str(data.get("id") or f"{int(time.time() * 1000)}_{index}"),
            segments=segments,
            total_fare=data.get("total_fare") or 0,
            total_time=data.get("total_travel_time") or 0,
            total_distance=sum(segment.distance for segment in segments),
            total_transfers=data.get("total_transfers") or 0,
            fuzzy_score=data.get("fuzzy_score"),
        )

    def _parse_segment(self, data: Dict, index: int) -> RouteSegment:
        """
        Parse a single route leg from backend response data.
        """
        origin = self._parse_place(data.get("origin"), data.get("origin_coords"))
        destination = self._parse_place(data.get("destination"), data.get("destination_coords"))
        distance = data.get("distance_km")
        if distance is None and data.get("origin_coords") and data.get("destination_coords"):
            # Straight-line estimate, shorter than the real path
            distance = haversine_km(origin.coordinates, destination.coordinates)

        return RouteSegment(
            id=f"s{index + 1}",
            transport_type=transport_type_for_mode(data.get("mode")),
            route_name=data.get("route_id") or data.get("mode") or "Transit",
            origin=origin,
            destination=destination,
            fare=data.get("fare") or 0,
            estimated_time=data.get("travel_time") or 0,
            distance=distance or 0,
            geometry=self._parse_geometry(data.get("geometry_coords")),
            origin_node=self._optional_str(data.get("origin_node")),
            destination_node=self._optional_str(data.get("destination_node")),
            mode=data.get("mode"),
            path_nodes=data.get("path_nodes"),
        )

    @staticmethod
    def _parse_place(name: Optional[str], coords: Optional[Dict]) -> Location:
        # The backend only names intermediate stops; coordinates are optional
        coordinates = (
            Coordinates(latitude=coords["lat"], longitude=coords["lon"])
            if coords
            else Coordinates(latitude=0.0, longitude=0.0)
        )
        return Location(name=name or "", coordinates=coordinates)

    @staticmethod
    def _parse_geometry(coords: Optional[List]) -> Optional[List[Coordinates]]:
        if not coords:
            return None
        return [Coordinates(latitude=lat, longitude=lon) for lat, lon in coords]

    @staticmethod
    def _optional_str(value: Any) -> Optional[str]:
        return None if value is None else str(value)

    async def close(self):
        """
        Close the HTTP client and cleanup resources.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None


# Singleton instance for dependency injection
routing_service = RoutingService()
