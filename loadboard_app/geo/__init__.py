"""
Geographic helpers for route distance estimation.

Place names resolve through a small static table of known cities; route
distance is the sum of great-circle legs between resolved waypoints.
"""
from .lookup import Coordinate, GeoLookup, KNOWN_LOCATIONS
from .route import RouteDistance, haversine_miles

__all__ = ["Coordinate", "GeoLookup", "KNOWN_LOCATIONS", "RouteDistance", "haversine_miles"]
