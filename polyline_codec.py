"""
Avkodning och kodning av Googles polyline-format
"""

import math
from typing import Iterable, List, Tuple

from config import POLYLINE_PRECISION
from errors import PolylineDecodeError
from models import Coordinate


def _decode_value(encoded: str, index: int) -> Tuple[int, int]:
    """Läs ett zig-zag-kodat varint-värde från index, returnera (värde, nytt index)"""
    result = 0
    shift = 0
    while True:
        if index >= len(encoded):
            raise PolylineDecodeError(f"Truncated polyline at position {index}")
        byte = ord(encoded[index]) - 63
        if byte < 0:
            raise PolylineDecodeError(f"Invalid character {encoded[index]!r} at position {index}")
        index += 1
        result |= (byte & 0x1f) << shift
        shift += 5
        if byte < 0x20:
            break

    value = ~(result >> 1) if result & 1 else result >> 1
    return value, index


def decode_polyline(encoded: str) -> List[Coordinate]:
    """
    Avkoda en polyline-sträng till koordinater

    Args:
        encoded: Polyline-sträng från directions-API:t

    Returns:
        Lista med Coordinate i ordning

    Raises:
        PolylineDecodeError: Om strängen är trunkerad eller innehåller ogiltiga tecken
    """
    coordinates = []
    index = 0
    lat = 0
    lng = 0

    while index < len(encoded):
        dlat, index = _decode_value(encoded, index)
        dlng, index = _decode_value(encoded, index)
        lat += dlat
        lng += dlng
        coordinates.append(Coordinate(lat / POLYLINE_PRECISION, lng / POLYLINE_PRECISION))

    return coordinates


def _encode_value(value: int) -> str:
    value = ~(value << 1) if value < 0 else value << 1
    chunks = []
    while value >= 0x20:
        chunks.append(chr((0x20 | (value & 0x1f)) + 63))
        value >>= 5
    chunks.append(chr(value + 63))
    return "".join(chunks)


def _scale(value: float) -> int:
    # Avrunda halva uppåt oberoende av tecken, som referensimplementationen
    scaled = value * POLYLINE_PRECISION
    return int(math.copysign(math.floor(abs(scaled) + 0.5), scaled))


def encode_polyline(coordinates: Iterable[Coordinate]) -> str:
    """
    Koda koordinater till en polyline-sträng

    Args:
        coordinates: Koordinater i ordning

    Returns:
        Polyline-sträng med fem decimalers precision
    """
    encoded = []
    prev_lat = 0
    prev_lng = 0

    for point in coordinates:
        lat = _scale(point.latitude)
        lng = _scale(point.longitude)
        encoded.append(_encode_value(lat - prev_lat))
        encoded.append(_encode_value(lng - prev_lng))
        prev_lat, prev_lng = lat, lng

    return "".join(encoded)
