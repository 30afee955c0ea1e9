"""
Externa providers: Google Routes (directions) och Google Elevation
"""

import logging
import requests
from typing import Any, Dict, List, Optional, Sequence

from config import (
    ROUTES_API_URL,
    ELEVATION_API_URL,
    REQUEST_TIMEOUT,
    TRAVEL_MODE
)
from errors import ElevationUnavailable, NetworkError, RouteApiError
from models import Coordinate, DirectionsRoute, RouteLeg

logger = logging.getLogger(__name__)

LocationDescriptor = Dict[str, Any]


class RoutingProvider:
    """Basklass för directions-providers"""

    def compute_routes(
        self,
        origin: LocationDescriptor,
        destination: LocationDescriptor,
        intermediates: Sequence[LocationDescriptor] = ()
    ) -> List[DirectionsRoute]:
        raise NotImplementedError


class ElevationProvider:
    """Basklass för höjddata-providers"""

    def get_elevations(self, points: Sequence[Coordinate]) -> List[float]:
        raise NotImplementedError


class GoogleRoutesProvider(RoutingProvider):
    """Google Routes API, gångläge"""

    def __init__(self, api_key: str, timeout: float = REQUEST_TIMEOUT):
        self.name = "Google Routes"
        self.api_key = api_key
        self.timeout = timeout

    def compute_routes(
        self,
        origin: LocationDescriptor,
        destination: LocationDescriptor,
        intermediates: Sequence[LocationDescriptor] = ()
    ) -> List[DirectionsRoute]:
        """
        Hämta kandidatrutter

        Args:
            origin: Startpunkt som placeId- eller latLng-deskriptor
            destination: Slutpunkt
            intermediates: Via-punkter i ordning

        Returns:
            Lista med DirectionsRoute, tom om ingen rutt hittades

        Raises:
            RouteApiError: Om API:t svarar med ett fel
            NetworkError: Vid transportfel eller oläsbart svar
        """
        body = {
            "origin": origin,
            "destination": destination,
            "travelMode": TRAVEL_MODE,
        }
        if intermediates:
            body["intermediates"] = list(intermediates)

        headers = {
            "Content-Type": "application/json",
            "X-Goog-Api-Key": self.api_key,
            "X-Goog-FieldMask": "*",
        }

        logger.debug("Directions request: %s", body)
        try:
            response = requests.post(ROUTES_API_URL, json=body, headers=headers, timeout=self.timeout)
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error("Directions request failed: %s", e)
            raise NetworkError() from e

        if data.get("error"):
            message = data["error"].get("message") or RouteApiError.default_message
            logger.error("Directions API error: %s", data["error"])
            raise RouteApiError(message)

        return self._parse_routes_response(data)

    def _parse_routes_response(self, data: dict) -> List[DirectionsRoute]:
        """Parsa Routes-svar till DirectionsRoute"""
        routes = []
        for route in data.get("routes") or []:
            polyline = route.get("polyline", {}).get("encodedPolyline", "")
            legs = [
                RouteLeg(distance_meters=leg.get("distanceMeters") or 0)
                for leg in route.get("legs") or []
            ]
            routes.append(DirectionsRoute(encoded_polyline=polyline, legs=legs))
        return routes


class GoogleElevationProvider(ElevationProvider):
    """Google Elevation API, en batchad förfrågan per rutt"""

    def __init__(self, api_key: str, timeout: float = REQUEST_TIMEOUT):
        self.name = "Google Elevation"
        self.api_key = api_key
        self.timeout = timeout

    def get_elevations(self, points: Sequence[Coordinate]) -> List[float]:
        """
        Hämta höjd för varje punkt

        Args:
            points: Koordinater, högst ett hundratal per anrop

        Returns:
            Höjder i meter i samma ordning som points

        Raises:
            ElevationUnavailable: Vid transportfel, status skild från OK eller tomt svar
        """
        locations = "|".join(f"{p.latitude},{p.longitude}" for p in points)
        params = {"locations": locations, "key": self.api_key}

        try:
            response = requests.get(ELEVATION_API_URL, params=params, timeout=self.timeout)
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            raise ElevationUnavailable(str(e)) from e

        status: Optional[str] = data.get("status")
        results = data.get("results") or []
        if status != "OK" or not results:
            raise ElevationUnavailable(f"Elevation API status {status}")

        return [float(result["elevation"]) for result in results]
