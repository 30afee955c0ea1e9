"""
Beräkning av ruttstatistik: distans, uppskattad tid och höjdökning
"""

import logging
from typing import List, Sequence, Tuple

from config import ELEVATION_MAX_SAMPLES, ELEVATION_UNKNOWN
from errors import ElevationUnavailable
from models import Coordinate, ElevationPoint, RouteLeg, RouteStats
from routing_providers import ElevationProvider
from utils import (
    build_elevation_profile,
    calculate_elevation_gain,
    format_distance,
    format_elevation_gain,
    format_estimated_time,
    sample_path
)

logger = logging.getLogger(__name__)


def total_distance(legs: Sequence[RouteLeg]) -> float:
    """Summera distansen över alla delsträckor"""
    return sum(leg.distance_meters or 0 for leg in legs)


class RouteStatsCalculator:
    """Beräknar RouteStats för en avkodad rutt"""

    def __init__(self, elevation: ElevationProvider, max_samples: int = ELEVATION_MAX_SAMPLES):
        self.elevation = elevation
        self.max_samples = max_samples

    def compute_stats(
        self,
        legs: Sequence[RouteLeg],
        decoded_path: Sequence[Coordinate],
        pace: float
    ) -> RouteStats:
        """
        Beräkna statistik för en rutt

        Args:
            legs: Delsträckor från directions-API:t
            decoded_path: Avkodad ruttgeometri
            pace: Tempo i minuter per km

        Returns:
            RouteStats. Om höjddata saknas blir etiketten "Elevation Unknown"
            och profilen tom, resten av statistiken påverkas inte.
        """
        total = total_distance(legs)
        gain_label, profile = self.elevation_gain(decoded_path, total)

        return RouteStats(
            distance_label=format_distance(total),
            total_distance_meters=total,
            pace=pace,
            estimated_time=format_estimated_time(total, pace),
            elevation_gain_label=gain_label,
            elevation_profile=profile,
        )

    def elevation_gain(
        self,
        decoded_path: Sequence[Coordinate],
        total_meters: float
    ) -> Tuple[str, List[ElevationPoint]]:
        """
        Hämta höjd för samplade punkter och beräkna höjdökning

        Returns:
            (etikett, profil)
        """
        sampled = sample_path(decoded_path, self.max_samples)
        try:
            if not sampled:
                raise ElevationUnavailable("Empty route path")
            elevations = self.elevation.get_elevations(sampled)
            if not elevations:
                raise ElevationUnavailable("No elevation results")
        except Exception as e:  # ElevationUnavailable eller fel i provider
            logger.warning("Elevation lookup failed: %s", e)
            return ELEVATION_UNKNOWN, []

        gain = calculate_elevation_gain(elevations)
        return format_elevation_gain(gain), build_elevation_profile(elevations, total_meters)
