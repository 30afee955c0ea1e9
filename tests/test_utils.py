"""
Tests for formatting and helper functions.
"""

import gpxpy
import pytest

from config import DEFAULT_PACE
from models import Coordinate, RouteStats
from utils import (
    build_elevation_profile,
    calculate_elevation_gain,
    create_gpx,
    format_distance,
    format_elevation_gain,
    format_estimated_time,
    format_pace,
    parse_distance_label,
    parse_pace,
    round_half_up,
    sample_path,
)


# =============================================================================
# Distance and time formatting
# =============================================================================

class TestFormatDistance:
    """Tests for format_distance."""

    def test_below_one_km(self):
        assert format_distance(999) == "999 m"

    def test_exactly_one_km(self):
        assert format_distance(1000) == "1.00 km"

    def test_five_km(self):
        assert format_distance(5000) == "5.00 km"

    def test_float_meters_without_fraction(self):
        assert format_distance(850.0) == "850 m"

    def test_zero(self):
        assert format_distance(0) == "0 m"

    def test_two_decimals(self):
        assert format_distance(12500) == "12.50 km"


class TestFormatEstimatedTime:
    """Tests for format_estimated_time."""

    def test_exactly_one_hour(self):
        """10 km at 6 min/km is 60 minutes."""
        assert format_estimated_time(10000, 6) == "1h 0m"

    def test_under_one_hour(self):
        """5 km at 6 min/km is 30 minutes."""
        assert format_estimated_time(5000, 6) == "30m"

    def test_hours_and_minutes(self):
        assert format_estimated_time(21100, 6) == "2h 7m"

    def test_rounds_half_up(self):
        assert format_estimated_time(2500, 1) == "3m"


class TestParseDistanceLabel:

    def test_meters(self):
        assert parse_distance_label("999 m") == 999

    def test_kilometers(self):
        assert parse_distance_label("5.00 km") == pytest.approx(5000)

    def test_invalid(self):
        assert parse_distance_label("") == 0.0
        assert parse_distance_label("far away") == 0.0


# =============================================================================
# Elevation helpers
# =============================================================================

class TestElevation:
    """Tests for gain and profile helpers."""

    def test_gain_ignores_descents(self):
        assert calculate_elevation_gain([10, 50, 30]) == 40

    def test_gain_empty(self):
        assert calculate_elevation_gain([]) == 0.0

    def test_gain_label(self):
        assert format_elevation_gain(40.4) == "+40m"
        assert format_elevation_gain(40.5) == "+41m"

    def test_profile_linear_by_index(self):
        profile = build_elevation_profile([10, 50, 30], 5200)
        assert [p.distance for p in profile] == [0, 2600, 5200]
        assert [p.elevation for p in profile] == [10, 50, 30]

    def test_profile_single_point(self):
        profile = build_elevation_profile([42], 1000)
        assert len(profile) == 1
        assert profile[0].distance == 0


class TestSamplePath:
    """Tests for sample_path."""

    def test_short_path_kept(self):
        path = list(range(50))
        assert sample_path(path, 100) == path

    def test_stride(self):
        path = list(range(250))
        sampled = sample_path(path, 100)
        assert sampled[0] == 0
        assert sampled[1] == 2
        assert len(sampled) == 125

    def test_empty(self):
        assert sample_path([], 100) == []


# =============================================================================
# Pace
# =============================================================================

class TestPace:

    def test_parse_minutes_seconds(self):
        assert parse_pace("6:30") == pytest.approx(6.5)

    def test_parse_decimal(self):
        assert parse_pace("5.5") == pytest.approx(5.5)

    def test_parse_invalid_falls_back(self):
        assert parse_pace("fast") == DEFAULT_PACE
        assert parse_pace("0") == DEFAULT_PACE

    def test_format(self):
        assert format_pace(6.5) == "6:30"
        assert format_pace(6.0) == "6:00"

    def test_round_half_up(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(2.4) == 2


# =============================================================================
# GPX export
# =============================================================================

class TestCreateGpx:

    def test_contains_track_points(self):
        path = [Coordinate(53.48, -2.24), Coordinate(53.49, -2.25)]
        xml = create_gpx(path, "Evening walk")
        gpx = gpxpy.parse(xml)
        assert gpx.tracks[0].name == "Evening walk"
        points = gpx.tracks[0].segments[0].points
        assert [(p.latitude, p.longitude) for p in points] == [(53.48, -2.24), (53.49, -2.25)]

    def test_stats_in_description(self):
        stats = RouteStats(
            distance_label="5.00 km",
            total_distance_meters=5000,
            pace=6.0,
            estimated_time="30m",
            elevation_gain_label="+40m",
        )
        gpx = gpxpy.parse(create_gpx([Coordinate(53.48, -2.24)], "Walk", stats))
        assert "+40m" in gpx.tracks[0].description
        assert "30m" in gpx.tracks[0].description
