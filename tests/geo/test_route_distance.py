"""Tests for Haversine route distance."""

import pytest

from loadboard_app.geo.lookup import KNOWN_LOCATIONS, Coordinate
from loadboard_app.geo.route import RouteDistance, haversine_miles


class TestHaversine:
    """Test haversine_miles."""

    def test_same_point_is_zero(self):
        point = KNOWN_LOCATIONS["chicago, il"]
        assert haversine_miles(point, point) == 0.0

    def test_new_york_to_los_angeles(self):
        distance = haversine_miles(KNOWN_LOCATIONS["new york, ny"], KNOWN_LOCATIONS["los angeles, ca"])
        assert distance == pytest.approx(2451, abs=10)

    def test_symmetric(self):
        a = KNOWN_LOCATIONS["boston, ma"]
        b = KNOWN_LOCATIONS["miami, fl"]
        assert haversine_miles(a, b) == pytest.approx(haversine_miles(b, a))

    def test_radius_scales_distance(self):
        a = Coordinate(0.0, 0.0)
        b = Coordinate(0.0, 90.0)
        assert haversine_miles(a, b, radius=1.0) == pytest.approx(1.5707963, rel=1e-6)


class TestRouteDistance:
    """Test RouteDistance."""

    def setup_method(self):
        self.route = RouteDistance()

    def test_single_leg(self):
        assert self.route.total_distance("New York, NY", ["Los Angeles, CA"]) == pytest.approx(2451, abs=10)

    def test_multi_stop_sums_legs(self):
        legs = self.route.legs("Chicago, IL", ["Dallas, TX", "Denver, CO"])
        total = self.route.total_distance("Chicago, IL", ["Dallas, TX", "Denver, CO"])

        assert len(legs) == 2
        assert total == pytest.approx(sum(legs))
        assert total > haversine_miles(KNOWN_LOCATIONS["chicago, il"], KNOWN_LOCATIONS["denver, co"])

    def test_unknown_waypoint_fails_whole_route(self):
        assert self.route.total_distance("New York, NY", ["Atlantis, XX", "Miami, FL"]) is None
        assert self.route.legs("Nowhere", ["Miami, FL"]) is None

    def test_no_stops_is_zero(self):
        assert self.route.total_distance("Boston, MA", []) == 0

    def test_street_addresses_resolve(self):
        distance = self.route.total_distance(
            "3487 South Preston Highway, Lebanon Junction, KY 40150",
            ["1000 Clematis St, West Palm Beach, FL 33401"],
        )
        assert distance is not None
        assert distance > 700
