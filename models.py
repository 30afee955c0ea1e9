"""
Datamodeller för gångruttplaneraren
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass(frozen=True)
class Coordinate:
    """En punkt i WGS84, grader"""
    latitude: float
    longitude: float


@dataclass(frozen=True)
class PlaceRef:
    """Plats vald via sökning, skickas som place-id till directions-API:t"""
    place_id: str


@dataclass(frozen=True)
class CoordinateRef:
    """Plats vald genom tryck på kartan, skickas som råa koordinater"""
    latitude: float
    longitude: float


LocationRef = Union[PlaceRef, CoordinateRef]


def location_ref_from_place_id(place_id: str, latitude: float, longitude: float) -> LocationRef:
    """
    Tolka ett sparat placeId

    Äldre sparade rutter lagrar kartval som "lat,lng" i placeId-fältet.

    Args:
        place_id: Sparat placeId
        latitude: Platsens latitud
        longitude: Platsens longitud

    Returns:
        CoordinateRef om place_id innehåller ett kommatecken, annars PlaceRef
    """
    if "," in place_id:
        return CoordinateRef(latitude, longitude)
    return PlaceRef(place_id)


@dataclass
class Location:
    """En plats i rutten: koordinat, visningsnamn och referens"""
    latitude: float
    longitude: float
    ref: LocationRef
    name: Optional[str] = None

    @classmethod
    def from_tap(cls, latitude: float, longitude: float, name: Optional[str] = None) -> "Location":
        return cls(latitude, longitude, CoordinateRef(latitude, longitude), name)

    @classmethod
    def from_place(
        cls,
        place_id: str,
        latitude: float,
        longitude: float,
        name: Optional[str] = None
    ) -> "Location":
        return cls(latitude, longitude, PlaceRef(place_id), name)

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)

    @property
    def place_id(self) -> str:
        """placeId i det lagrade formatet"""
        if isinstance(self.ref, PlaceRef):
            return self.ref.place_id
        return f"{self.ref.latitude},{self.ref.longitude}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name or "",
            "placeId": self.place_id,
            "latitude": self.latitude,
            "longitude": self.longitude,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Location":
        lat = float(data["latitude"])
        lon = float(data["longitude"])
        return cls(
            latitude=lat,
            longitude=lon,
            ref=location_ref_from_place_id(data.get("placeId", ""), lat, lon),
            name=data.get("name") or None,
        )


@dataclass
class ElevationPoint:
    """Höjd vid en kumulativ distans från start"""
    elevation: float  # meter
    distance: float  # meter från start


@dataclass
class RouteStats:
    """Statistik för en beräknad rutt"""
    distance_label: str
    total_distance_meters: float
    pace: float  # min/km
    estimated_time: Optional[str] = None
    elevation_gain_label: Optional[str] = None
    elevation_profile: List[ElevationPoint] = field(default_factory=list)


@dataclass
class RouteLeg:
    """En delsträcka mellan två punkter i rutten"""
    distance_meters: float = 0


@dataclass
class DirectionsRoute:
    """En kandidatrutt från directions-API:t"""
    encoded_polyline: str
    legs: List[RouteLeg] = field(default_factory=list)


@dataclass
class SavedRoute:
    """En namngiven rutt sparad lokalt"""
    id: str
    name: str
    origin: Location
    destination: Location
    polyline: str
    created_at: int  # epoch ms
    distance_label: str
    waypoints: List[Location] = field(default_factory=list)
    elevation_gain_label: Optional[str] = None
    estimated_time: Optional[str] = None
    pace: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        """Platt lagringsformat, höjdprofilen sparas aldrig"""
        data = {
            "id": self.id,
            "name": self.name,
            "originName": self.origin.name or "",
            "destinationName": self.destination.name or "",
            "originPlaceId": self.origin.place_id,
            "destinationPlaceId": self.destination.place_id,
            "originLocation": {
                "latitude": self.origin.latitude,
                "longitude": self.origin.longitude,
            },
            "destinationLocation": {
                "latitude": self.destination.latitude,
                "longitude": self.destination.longitude,
            },
            "waypoints": [wp.to_dict() for wp in self.waypoints],
            "polyline": self.polyline,
            "createdAt": self.created_at,
            "distance": self.distance_label,
        }
        if self.elevation_gain_label is not None:
            data["elevation"] = self.elevation_gain_label
        if self.estimated_time is not None:
            data["estimatedTime"] = self.estimated_time
        if self.pace is not None:
            data["pace"] = self.pace
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SavedRoute":
        origin = Location.from_dict({
            "name": data.get("originName"),
            "placeId": data.get("originPlaceId", ""),
            **data["originLocation"],
        })
        destination = Location.from_dict({
            "name": data.get("destinationName"),
            "placeId": data.get("destinationPlaceId", ""),
            **data["destinationLocation"],
        })
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            origin=origin,
            destination=destination,
            polyline=data.get("polyline", ""),
            created_at=int(data.get("createdAt", 0)),
            distance_label=data.get("distance", ""),
            waypoints=[Location.from_dict(wp) for wp in data.get("waypoints") or []],
            elevation_gain_label=data.get("elevation"),
            estimated_time=data.get("estimatedTime"),
            pace=data.get("pace"),
        )
