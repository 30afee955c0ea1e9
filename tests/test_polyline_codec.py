"""
Tests for the polyline codec.
"""

import pytest

from errors import PolylineDecodeError
from models import Coordinate
from polyline_codec import decode_polyline, encode_polyline

REFERENCE = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"
REFERENCE_POINTS = [
    (38.5, -120.2),
    (40.7, -120.95),
    (43.252, -126.453),
]


def as_tuples(coordinates):
    return [(c.latitude, c.longitude) for c in coordinates]


# =============================================================================
# Decode
# =============================================================================

class TestDecode:
    """Tests for decode_polyline."""

    def test_reference_vector(self):
        """The documented example decodes to the documented points."""
        decoded = decode_polyline(REFERENCE)
        assert len(decoded) == 3
        for (lat, lng), point in zip(REFERENCE_POINTS, decoded):
            assert point.latitude == pytest.approx(lat, abs=1e-9)
            assert point.longitude == pytest.approx(lng, abs=1e-9)

    def test_empty_string(self):
        assert decode_polyline("") == []

    def test_returns_coordinates(self):
        decoded = decode_polyline(REFERENCE)
        assert all(isinstance(p, Coordinate) for p in decoded)

    def test_truncated_longitude_raises(self):
        """A latitude without its longitude is malformed."""
        with pytest.raises(PolylineDecodeError):
            decode_polyline("_p~iF")

    def test_unterminated_chunk_raises(self):
        """A continuation byte at the end of input is malformed."""
        with pytest.raises(PolylineDecodeError):
            decode_polyline("_p~iF~ps|U_")

    def test_invalid_character_raises(self):
        with pytest.raises(PolylineDecodeError):
            decode_polyline("_p~iF ps|U")

    def test_decode_is_deterministic(self):
        assert decode_polyline(REFERENCE) == decode_polyline(REFERENCE)


# =============================================================================
# Encode
# =============================================================================

class TestEncode:
    """Tests for encode_polyline."""

    def test_reference_vector(self):
        points = [Coordinate(lat, lng) for lat, lng in REFERENCE_POINTS]
        assert encode_polyline(points) == REFERENCE

    def test_empty(self):
        assert encode_polyline([]) == ""

    def test_round_trip(self):
        """decode(encode(path)) reproduces the path within 1e-5."""
        path = [
            Coordinate(53.48095, -2.23743),
            Coordinate(53.48101, -2.23801),
            Coordinate(53.47999, -2.24012),
            Coordinate(-33.86882, 151.20929),
            Coordinate(0.0, 0.0),
        ]
        decoded = decode_polyline(encode_polyline(path))
        assert len(decoded) == len(path)
        for original, point in zip(path, decoded):
            assert point.latitude == pytest.approx(original.latitude, abs=1e-5)
            assert point.longitude == pytest.approx(original.longitude, abs=1e-5)

    def test_rounds_to_five_decimals(self):
        decoded = decode_polyline(encode_polyline([Coordinate(38.123456, -120.987654)]))
        assert as_tuples(decoded) == [
            (pytest.approx(38.12346, abs=1e-9), pytest.approx(-120.98765, abs=1e-9))
        ]
