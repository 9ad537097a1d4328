#!/usr/bin/env python3
"""
Route data model for waypoint analysis.
"""

from typing import Iterator, List, Sequence, Tuple
import logging
from math import cos, radians

from .geometry import Waypoint
from .waypoints import read_waypoints

logger = logging.getLogger(__name__)

# 1 degree of latitude is roughly 111 km
KM_PER_DEGREE = 111.0


class Route:
    """An ordered, read-only sequence of waypoints loaded for one run."""

    def __init__(self, waypoints: Sequence[Waypoint]):
        """Initializes a Route object.

        Args:
            waypoints: Waypoints in file order.
        """
        self.waypoints: Tuple[Waypoint, ...] = tuple(waypoints)

    @classmethod
    def from_file(cls, filename: str) -> "Route":
        """
        Load and parse a CSV waypoint file into a route.

        Args:
            filename: Path to the CSV file

        Returns:
            Route object representing the route

        Raises:
            WaypointLoadError: If the file is missing, empty, not a CSV or
                holds no valid waypoints
        """
        return cls(read_waypoints(filename))

    def get_bbox(self, buffer: float = 0.0) -> Tuple[float, float, float, float]:
        """
        Get bounding box for this route, optionally with a buffer.

        Args:
            buffer: Buffer distance in kilometers (default: 0.0)

        Returns:
            Tuple of (south, west, north, east) in decimal degrees

        Raises:
            ValueError: If the route has no waypoints
        """
        if not self.waypoints:
            raise ValueError("Cannot compute bounding box of an empty route")

        latitudes = [waypoint.latitude for waypoint in self.waypoints]
        longitudes = [waypoint.longitude for waypoint in self.waypoints]
        min_lat, max_lat = min(latitudes), max(latitudes)
        min_lon, max_lon = min(longitudes), max(longitudes)

        # Longitude degrees shrink with latitude, use the bbox average
        avg_lat = (min_lat + max_lat) / 2
        lat_buffer = buffer / KM_PER_DEGREE
        lon_buffer = buffer / (KM_PER_DEGREE * max(abs(cos(radians(avg_lat))), 1e-6))

        south = max(-90.0, min_lat - lat_buffer)
        north = min(90.0, max_lat + lat_buffer)
        west = max(-180.0, min_lon - lon_buffer)
        east = min(180.0, max_lon + lon_buffer)

        logger.debug(
            f"Route bounding box: ({south:.4f}, {west:.4f}, {north:.4f}, {east:.4f}) with {buffer}km buffer"
        )
        return (south, west, north, east)

    def coordinate_list(self) -> List[List[float]]:
        """Return [latitude, longitude] pairs in route order."""
        return [[waypoint.latitude, waypoint.longitude] for waypoint in self.waypoints]

    def __len__(self) -> int:
        return len(self.waypoints)

    def __getitem__(self, index):
        return self.waypoints[index]

    def __iter__(self) -> Iterator[Waypoint]:
        return iter(self.waypoints)
