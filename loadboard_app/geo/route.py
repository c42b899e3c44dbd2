"""Multi-stop route distance using the Haversine great-circle formula."""

import math
from typing import Optional, Sequence

import structlog

from .lookup import Coordinate, GeoLookup

logger = structlog.get_logger(__name__)

EARTH_RADIUS_MILES = 3959.0


def haversine_miles(a: Coordinate, b: Coordinate, radius: float = EARTH_RADIUS_MILES) -> float:
    """Great-circle distance between two points in statute miles."""
    lat1 = math.radians(a.lat)
    lat2 = math.radians(b.lat)
    dlat = math.radians(b.lat - a.lat)
    dlon = math.radians(b.lon - a.lon)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return 2 * radius * math.atan2(math.sqrt(h), math.sqrt(1 - h))


class RouteDistance:
    """Sums great-circle legs over an origin and its ordered stops."""

    def __init__(self, lookup: Optional[GeoLookup] = None,
                 earth_radius_miles: float = EARTH_RADIUS_MILES):
        self.lookup = lookup or GeoLookup()
        self.earth_radius_miles = earth_radius_miles

    def resolve_waypoints(self, origin: str, stops: Sequence[str]) -> Optional[list[Coordinate]]:
        """Resolve every waypoint; None if any of them is unknown."""
        waypoints = [origin, *stops]
        coordinates = []
        for place in waypoints:
            coordinate = self.lookup.resolve(place)
            if coordinate is None:
                logger.info(
                    "Route unresolvable",
                    unresolved=place,
                    waypoint_count=len(waypoints)
                )
                return None
            coordinates.append(coordinate)
        return coordinates

    def legs(self, origin: str, stops: Sequence[str]) -> Optional[list[float]]:
        """Distance of each consecutive leg in miles, or None if unresolvable."""
        coordinates = self.resolve_waypoints(origin, stops)
        if coordinates is None:
            return None
        return [
            haversine_miles(start, end, self.earth_radius_miles)
            for start, end in zip(coordinates, coordinates[1:])
        ]

    def total_distance(self, origin: str, stops: Sequence[str]) -> Optional[float]:
        """
        Total route distance in statute miles.

        Args:
            origin: Pickup location
            stops: Ordered destinations

        Returns:
            Sum of leg distances, or None when any waypoint cannot be resolved
        """
        leg_distances = self.legs(origin, stops)
        if leg_distances is None:
            return None
        return sum(leg_distances)
