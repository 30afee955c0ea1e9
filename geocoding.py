"""
Geokodningsfunktioner: omvänd geokodning med begränsad cache samt adressökning
"""

import logging
import requests
from collections import OrderedDict
from typing import Callable, Dict, Optional

from config import (
    NOMINATIM_BASE_URL,
    USER_AGENT,
    GEOCODE_CACHE_SIZE,
    GEOCODE_TIMEOUT,
    REQUEST_TIMEOUT
)
from errors import GeocodeUnavailable
from models import Location

logger = logging.getLogger(__name__)

# (lat, lon, timeout) -> adressfält
ReverseLookup = Callable[[float, float, float], Dict[str, str]]

LOCALITY_FIELDS = ("neighbourhood", "suburb", "village", "town", "city")


def coordinate_label(lat: float, lon: float) -> str:
    """Reservetikett "53.4567, -2.3456" """
    return f"{lat:.4f}, {lon:.4f}"


def cache_key(lat: float, lon: float) -> str:
    """Cache-nyckel avrundad till fyra decimaler (~11 m)"""
    return f"{lat:.4f},{lon:.4f}"


def build_place_label(address: Dict[str, str]) -> Optional[str]:
    """
    Bygg en kort etikett av adressfält

    Args:
        address: Adressfält från Nominatim

    Returns:
        "väg, område" med högst två delar, eller None om inga fält finns
    """
    parts = []
    if address.get("road"):
        parts.append(address["road"])
    for key in LOCALITY_FIELDS:
        if address.get(key):
            parts.append(address[key])
            break
    return ", ".join(parts[:2]) if parts else None


def nominatim_reverse_lookup(lat: float, lon: float, timeout: float = GEOCODE_TIMEOUT) -> Dict[str, str]:
    """
    Omvänd geokodning via Nominatim

    Args:
        lat: Latitud
        lon: Longitud
        timeout: Maximal väntetid i sekunder

    Returns:
        Adressfält (kan vara tomt)

    Raises:
        GeocodeUnavailable: Vid nätverksfel, timeout, felstatus eller felsvar utan adress
    """
    url = f"{NOMINATIM_BASE_URL}/reverse"
    params = {
        "lat": lat,
        "lon": lon,
        "format": "json",
        "zoom": 16,
        "addressdetails": 1
    }
    headers = {"User-Agent": USER_AGENT}
    try:
        response = requests.get(url, params=params, headers=headers, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as e:
        raise GeocodeUnavailable(str(e)) from e

    # Nominatim svarar 200 med {"error": ...} när platsen inte kan geokodas
    if not isinstance(data, dict) or "error" in data or "address" not in data:
        raise GeocodeUnavailable(str(data.get("error") if isinstance(data, dict) else data))

    return data["address"] or {}


class GeocodeCache:
    """
    Begränsad cache för omvänd geokodning

    Nycklar är koordinater avrundade till fyra decimaler. När cachen
    överskrider max_size tas den äldst insatta posten bort. Endast lyckade
    uppslag cachas, så misslyckade försöks igen vid nästa anrop.
    """

    def __init__(
        self,
        lookup: ReverseLookup = nominatim_reverse_lookup,
        max_size: int = GEOCODE_CACHE_SIZE,
        timeout: float = GEOCODE_TIMEOUT
    ):
        self._lookup = lookup
        self.max_size = max_size
        self.timeout = timeout
        self._entries: "OrderedDict[str, str]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def clear(self):
        self._entries.clear()

    def reverse_geocode(self, lat: float, lon: float) -> str:
        """
        Omvänd geokodning med cache, kastar aldrig fel

        Args:
            lat: Latitud
            lon: Longitud

        Returns:
            Platsetikett, eller koordinatetikett om uppslaget misslyckas
        """
        key = cache_key(lat, lon)
        if key in self._entries:
            logger.debug("Geocode cache hit for %s", key)
            return self._entries[key]

        try:
            address = self._lookup(lat, lon, self.timeout)
        except Exception as e:  # GeocodeUnavailable, timeout eller fel i injicerad lookup
            logger.warning("Geocoding failed for %s: %s", key, e)
            return coordinate_label(lat, lon)

        label = build_place_label(address) or coordinate_label(lat, lon)
        self._store(key, label)
        return label

    def _store(self, key: str, label: str):
        self._entries[key] = label
        if len(self._entries) > self.max_size:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Geocode cache evicted %s", evicted)


def geocode_address(address: str) -> Optional[Location]:
    """
    Geokoda en adress till en plats

    Args:
        address: Fritext att söka på

    Returns:
        Location med koordinatreferens, eller None vid fel
    """
    url = f"{NOMINATIM_BASE_URL}/search"
    params = {
        "q": address,
        "format": "json",
        "limit": 1
    }
    headers = {"User-Agent": USER_AGENT}
    try:
        response = requests.get(url, params=params, headers=headers, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as e:
        logger.warning("Address search failed for %r: %s", address, e)
        return None

    if not data:
        return None
    hit = data[0]
    return Location.from_tap(
        float(hit["lat"]),
        float(hit["lon"]),
        name=hit.get("display_name", address)
    )
