"""
Shared fixtures for route planner tests.
"""

from unittest.mock import MagicMock

import pytest

from models import DirectionsRoute, Location, RouteLeg
from routing import RouteSession
from stats import RouteStatsCalculator

REFERENCE_POLYLINE = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"


@pytest.fixture
def elevation():
    provider = MagicMock()
    provider.get_elevations.return_value = [10.0, 50.0, 30.0]
    return provider


@pytest.fixture
def directions():
    provider = MagicMock()
    provider.compute_routes.return_value = [
        DirectionsRoute(
            encoded_polyline=REFERENCE_POLYLINE,
            legs=[RouteLeg(2000), RouteLeg(3000)],
        )
    ]
    return provider


@pytest.fixture
def session(directions, elevation):
    return RouteSession(directions, RouteStatsCalculator(elevation), pace=6.0)


@pytest.fixture
def origin():
    return Location.from_place("ChIJdd4hrwug2EcRmSrV3Vo6llI", 53.4808, -2.2426, "Manchester")


@pytest.fixture
def destination():
    return Location.from_tap(53.4567, -2.3456, "Salford Quays")
