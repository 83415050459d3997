"""Tests for haversine distance."""

from __future__ import annotations

import pytest

from expboard_core.models.search import Coordinates
from expboard_infra.geo.distance import distance_km, is_within_radius

AUSTIN = (30.2672, -97.7431)
DALLAS = (32.7767, -96.797)
AUSTIN_POINT = Coordinates(lat=AUSTIN[0], lng=AUSTIN[1])
DALLAS_POINT = Coordinates(lat=DALLAS[0], lng=DALLAS[1])
SAN_FRANCISCO = (37.7749, -122.4194)
NEW_YORK = (40.7128, -74.006)


@pytest.mark.unit
class TestDistance:
    """Test great-circle distance."""

    def test_zero_to_self(self) -> None:
        """A point is zero km from itself."""
        assert distance_km(*AUSTIN, *AUSTIN) == pytest.approx(0.0, abs=1e-9)

    @pytest.mark.parametrize(
        ("a", "b"),
        [
            (AUSTIN, NEW_YORK),
            (SAN_FRANCISCO, DALLAS),
            ((0.0, 0.0), (0.0, 90.0)),
            ((90.0, 0.0), (-90.0, 0.0)),
            ((89.9, 45.0), (-12.5, -170.0)),
            ((10.0, 179.9), (-10.0, -179.9)),
            ((-33.8688, 151.2093), (51.5074, -0.1278)),
        ],
        ids=[
            "austin-ny",
            "sf-dallas",
            "equator",
            "pole-to-pole",
            "near-pole",
            "antimeridian",
            "sydney-london",
        ],
    )
    def test_symmetric(self, a: tuple[float, float], b: tuple[float, float]) -> None:
        """Distance does not depend on argument order."""
        assert distance_km(*a, *b) == pytest.approx(distance_km(*b, *a), abs=1e-9)

    def test_known_distance(self) -> None:
        """San Francisco to New York is about 4130 km."""
        assert distance_km(*SAN_FRANCISCO, *NEW_YORK) == pytest.approx(4130, rel=0.01)

    def test_antipodal_points(self) -> None:
        """Antipodes are half the circumference apart."""
        assert distance_km(0.0, 0.0, 0.0, 180.0) == pytest.approx(20015.1, rel=0.001)


@pytest.mark.unit
class TestIsWithinRadius:
    """Test radius checks."""

    def test_inside(self) -> None:
        """Dallas is within 500 km of Austin."""
        assert is_within_radius(AUSTIN_POINT, DALLAS_POINT, 500)

    def test_outside(self) -> None:
        """Dallas is not within 100 km of Austin."""
        assert not is_within_radius(AUSTIN_POINT, DALLAS_POINT, 100)

    def test_zero_radius_same_point(self) -> None:
        """A zero radius still includes the origin itself."""
        assert is_within_radius(AUSTIN_POINT, AUSTIN_POINT, 0)
