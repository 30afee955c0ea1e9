"""
Hjälpfunktioner för gångruttplaneraren
"""

import math
import gpxpy
import gpxpy.gpx
from typing import List, Optional, Sequence, TypeVar
from datetime import datetime

from config import DEFAULT_PACE
from models import Coordinate, ElevationPoint, RouteStats

T = TypeVar("T")


def round_half_up(value: float) -> int:
    """Avrunda som Math.round: .5 avrundas alltid uppåt"""
    return int(math.floor(value + 0.5))


def format_distance(total_meters: float) -> str:
    """
    Formatera distans för visning

    Args:
        total_meters: Total distans i meter

    Returns:
        "999 m" under 1000 meter, annars "1.00 km"
    """
    if total_meters < 1000:
        if float(total_meters).is_integer():
            return f"{int(total_meters)} m"
        return f"{total_meters} m"
    return f"{total_meters / 1000:.2f} km"


def parse_distance_label(label: str) -> float:
    """Tolka "999 m" eller "5.00 km" tillbaka till meter, 0 om det inte går"""
    try:
        value, unit = label.split()
        meters = float(value) * 1000 if unit == "km" else float(value)
    except ValueError:
        return 0.0
    return meters


def format_estimated_time(total_meters: float, pace: float) -> str:
    """
    Beräkna och formatera uppskattad tid

    Args:
        total_meters: Distans i meter
        pace: Tempo i minuter per km

    Returns:
        "30m" eller "1h 0m"
    """
    minutes = round_half_up((total_meters / 1000) * pace)
    if minutes < 60:
        return f"{minutes}m"
    return f"{minutes // 60}h {minutes % 60}m"


def sample_path(path: Sequence[T], max_samples: int) -> List[T]:
    """
    Plocka ut jämnt fördelade punkter ur en rutt

    Med steg max(1, len // max_samples) kan resultatet bli något fler än
    max_samples när längden inte är jämnt delbar.
    """
    step = max(1, len(path) // max_samples)
    return [point for index, point in enumerate(path) if index % step == 0]


def calculate_elevation_gain(elevations: Sequence[float]) -> float:
    """
    Beräkna total höjdökning

    Args:
        elevations: Höjdvärden i ruttordning

    Returns:
        Summan av alla positiva höjdskillnader i meter
    """
    total_gain = 0.0
    for prev, current in zip(elevations, elevations[1:]):
        if current > prev:
            total_gain += current - prev
    return total_gain


def build_elevation_profile(elevations: Sequence[float], total_meters: float) -> List[ElevationPoint]:
    """Fördela höjdvärden linjärt efter index över hela distansen"""
    denominator = max(len(elevations) - 1, 1)
    return [
        ElevationPoint(elevation=elevation, distance=(i / denominator) * total_meters)
        for i, elevation in enumerate(elevations)
    ]


def format_elevation_gain(gain: float) -> str:
    return f"+{round_half_up(gain)}m"


def parse_pace(pace_str: str) -> float:
    """
    Konvertera tempo-sträng till minuter per km

    Args:
        pace_str: Tempo som "6:00" eller "6.5"

    Returns:
        Minuter per km, DEFAULT_PACE om strängen inte går att tolka
    """
    try:
        if ":" in pace_str:
            minutes, seconds = pace_str.split(":")
            pace = int(minutes) + int(seconds) / 60
        else:
            pace = float(pace_str)
    except (ValueError, AttributeError):
        return DEFAULT_PACE
    return pace if pace > 0 else DEFAULT_PACE


def format_pace(pace: float) -> str:
    """Formatera tempo som "m:ss" """
    total_seconds = round_half_up(pace * 60)
    return f"{total_seconds // 60}:{total_seconds % 60:02d}"


def create_gpx(path: Sequence[Coordinate], name: str = "Gångrutt", stats: Optional[RouteStats] = None) -> str:
    """
    Skapa GPX-fil från en avkodad rutt

    Args:
        path: Avkodade koordinater
        name: Namn på rutten
        stats: Ruttstatistik att lägga i beskrivningen

    Returns:
        GPX som sträng
    """
    gpx = gpxpy.gpx.GPX()
    gpx.creator = "Gångruttplanerare"

    gpx_track = gpxpy.gpx.GPXTrack()
    gpx_track.name = name
    gpx_track.type = "walking"
    gpx.tracks.append(gpx_track)

    gpx_segment = gpxpy.gpx.GPXTrackSegment()
    gpx_track.segments.append(gpx_segment)

    now = datetime.now()
    for point in path:
        gpx_segment.points.append(
            gpxpy.gpx.GPXTrackPoint(point.latitude, point.longitude, time=now)
        )

    if stats:
        gpx.description = f"Genererad rutt på {stats.distance_label}"
        details = [stats.distance_label]
        if stats.elevation_gain_label:
            details.append(f"Höjdökning: {stats.elevation_gain_label}")
        if stats.estimated_time:
            details.append(f"Uppskattad tid: {stats.estimated_time}")
        gpx_track.description = ", ".join(details)

    return gpx.to_xml()
