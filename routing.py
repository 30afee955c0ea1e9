"""
Ruttsession som koordinerar directions-provider, avkodning och statistik
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from config import DEFAULT_PACE
from errors import MissingLocations, RouteNotFound, RoutePlannerError
from models import Coordinate, CoordinateRef, Location, PlaceRef, RouteStats, SavedRoute
from polyline_codec import decode_polyline
from routing_providers import RoutingProvider
from stats import RouteStatsCalculator
from utils import parse_distance_label

logger = logging.getLogger(__name__)


@dataclass
class RouteResult:
    """Resultat av en lyckad ruttförfrågan"""
    path: List[Coordinate]
    polyline: str
    stats: Optional[RouteStats]


def build_location_descriptor(location: Location) -> Dict[str, Any]:
    """
    Bygg platsobjekt för directions-förfrågan

    Kartval skickas som råa koordinater, sökval som placeId.
    """
    if isinstance(location.ref, CoordinateRef):
        return {
            "location": {
                "latLng": {
                    "latitude": location.ref.latitude,
                    "longitude": location.ref.longitude,
                }
            }
        }
    return {"placeId": location.ref.place_id}


def is_routable(location: Optional[Location]) -> bool:
    """Platsen finns och har koordinater eller ett icke-tomt place-id"""
    if location is None:
        return False
    if isinstance(location.ref, PlaceRef):
        return bool(location.ref.place_id)
    return True


class RouteSession:
    """
    Håller aktuell start, mål, via-punkter och tempo samt senaste rutt

    Sessionen triggar aldrig omberäkning själv; anroparen avgör när
    request_route ska köras efter en ändring.
    """

    def __init__(
        self,
        directions: RoutingProvider,
        stats_calculator: RouteStatsCalculator,
        pace: float = DEFAULT_PACE
    ):
        self.directions = directions
        self.stats_calculator = stats_calculator
        self.pace = pace
        self.origin: Optional[Location] = None
        self.destination: Optional[Location] = None
        self.waypoints: List[Location] = []
        self.path: List[Coordinate] = []
        self.encoded_polyline = ""
        self.stats: Optional[RouteStats] = None
        self.loading = False
        self.last_error: Optional[RoutePlannerError] = None
        self._latest_token = 0

    @property
    def distance_label(self) -> str:
        return self.stats.distance_label if self.stats else ""

    def set_pace(self, pace: float):
        if pace <= 0:
            raise ValueError(f"Pace must be positive, got {pace}")
        self.pace = pace

    def add_waypoint(self, waypoint: Location):
        self.waypoints.append(waypoint)

    def remove_waypoint(self, index: int):
        """Ta bort via-punkt på index, IndexError om den inte finns"""
        del self.waypoints[index]

    def begin_request(self) -> int:
        """Skapa en ny förfrågningstoken; äldre tokens blir inaktuella"""
        self._latest_token += 1
        return self._latest_token

    def is_current(self, token: int) -> bool:
        return token == self._latest_token

    def request_route(self, token: Optional[int] = None) -> Optional[RouteResult]:
        """
        Hämta gångrutt för aktuell start, mål och via-punkter

        Args:
            token: Token från begin_request. Utelämnas den skapas en ny.

        Returns:
            RouteResult, eller None om en nyare förfrågan har startats
            innan svaret kom

        Raises:
            MissingLocations: Om start eller mål saknas (inget nätverksanrop görs)
            RouteApiError: Om directions-API:t svarar med ett fel
            RouteNotFound: Om inga rutter hittades
            NetworkError: Vid transportfel
        """
        if not is_routable(self.origin) or not is_routable(self.destination):
            self.last_error = MissingLocations()
            raise self.last_error

        if token is None:
            token = self.begin_request()

        self.loading = True
        try:
            routes = self.directions.compute_routes(
                build_location_descriptor(self.origin),
                build_location_descriptor(self.destination),
                [build_location_descriptor(wp) for wp in self.waypoints],
            )
            if not routes:
                raise RouteNotFound()

            route = routes[0]
            path = decode_polyline(route.encoded_polyline)
            # Utan delsträckor finns ingen distans att räkna statistik på
            stats = None
            if route.legs:
                stats = self.stats_calculator.compute_stats(route.legs, path, self.pace)
        except RoutePlannerError as e:
            if not self.is_current(token):
                logger.info("Discarding stale route error for request %d: %s", token, e)
                return None
            logger.error("Route request failed: %s", e)
            self.last_error = e
            raise
        finally:
            if self.is_current(token):
                self.loading = False

        if not self.is_current(token):
            logger.info("Discarding stale route result for request %d", token)
            return None

        self.path = path
        self.encoded_polyline = route.encoded_polyline
        self.stats = stats
        self.last_error = None
        return RouteResult(path=path, polyline=route.encoded_polyline, stats=stats)

    def reset(self):
        """Rensa start, mål, via-punkter och rutt"""
        self._latest_token += 1
        self.origin = None
        self.destination = None
        self.waypoints = []
        self.path = []
        self.encoded_polyline = ""
        self.stats = None
        self.loading = False
        self.last_error = None

    def load_saved_route(self, saved: SavedRoute):
        """
        Återställ en sparad rutt utan nätverksanrop

        Höjdprofilen sparas inte, så den är tom tills rutten hämtas på nytt.
        """
        # Avkoda först så att en trasig polyline inte lämnar sessionen halvt uppdaterad
        path = decode_polyline(saved.polyline) if saved.polyline else []
        pace = saved.pace or self.pace

        self._latest_token += 1
        self.origin = saved.origin
        self.destination = saved.destination
        self.waypoints = list(saved.waypoints)
        self.pace = pace
        self.encoded_polyline = saved.polyline
        self.path = path
        self.stats = RouteStats(
            distance_label=saved.distance_label,
            total_distance_meters=parse_distance_label(saved.distance_label),
            pace=pace,
            estimated_time=saved.estimated_time,
            elevation_gain_label=saved.elevation_gain_label,
        )
        self.loading = False
        self.last_error = None

    def to_saved_route_data(self, name: str) -> Dict[str, Any]:
        """
        Bygg data för att spara aktuell rutt

        Returns:
            SavedRoute-fält utan id och created_at

        Raises:
            MissingLocations: Om ingen rutt är beräknad
        """
        if self.origin is None or self.destination is None or not self.encoded_polyline:
            raise MissingLocations("Calculate a route before saving it.")

        stats = self.stats
        return {
            "name": name,
            "origin": self.origin,
            "destination": self.destination,
            "waypoints": list(self.waypoints),
            "polyline": self.encoded_polyline,
            "distance_label": stats.distance_label if stats else "",
            "elevation_gain_label": stats.elevation_gain_label if stats else None,
            "estimated_time": stats.estimated_time if stats else None,
            "pace": self.pace,
        }
