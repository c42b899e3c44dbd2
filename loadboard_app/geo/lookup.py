"""Static geocode table lookup."""

from dataclasses import dataclass
from typing import Mapping, Optional

import structlog

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Coordinate:
    """A latitude/longitude pair in decimal degrees."""
    lat: float
    lon: float


# Declaration order is part of the lookup contract: the first key contained
# in the input wins.
KNOWN_LOCATIONS: Mapping[str, Coordinate] = {
    "new york, ny": Coordinate(40.7128, -74.0060),
    "los angeles, ca": Coordinate(34.0522, -118.2437),
    "chicago, il": Coordinate(41.8781, -87.6298),
    "dallas, tx": Coordinate(32.7767, -96.7970),
    "atlanta, ga": Coordinate(33.7490, -84.3880),
    "miami, fl": Coordinate(25.7617, -80.1918),
    "denver, co": Coordinate(39.7392, -104.9903),
    "seattle, wa": Coordinate(47.6062, -122.3321),
    "boston, ma": Coordinate(42.3601, -71.0589),
    "philadelphia, pa": Coordinate(39.9526, -75.1652),
    "richmond, va": Coordinate(37.5407, -77.4360),
    "lebanon junction, ky": Coordinate(37.8362, -85.7225),
    "west palm beach, fl": Coordinate(26.7153, -80.0534),
}


class GeoLookup:
    """Resolves free-text place names against a table of known "city, st" keys."""

    def __init__(self, table: Optional[Mapping[str, Coordinate]] = None):
        source = KNOWN_LOCATIONS if table is None else table
        # Keys are matched lowercase; copy preserves declaration order
        self._table = tuple((key.lower(), coord) for key, coord in source.items())

    def resolve(self, place_name: str) -> Optional[Coordinate]:
        """
        Resolve a place name or full street address to a coordinate.

        Args:
            place_name: e.g. "Dallas, TX" or "3487 South Preston Highway,
                Lebanon Junction, KY 40150"

        Returns:
            Coordinate of the first table key contained in the input, or None
        """
        if not place_name:
            return None

        normalized = place_name.lower()
        for key, coordinate in self._table:
            if key in normalized:
                return coordinate

        logger.debug("Place not found in geocode table", place=place_name)
        return None
