#!/usr/bin/env python3
"""
Waypoint type and great-circle distance utilities for route analysis.
"""

from typing import NamedTuple
import math

# Frequented-area radius heuristic used when no radius is configured
DEFAULT_RADIUS_FRACTION = 0.1
MIN_DEFAULT_RADIUS_KM = 0.1


class Waypoint(NamedTuple):
    """A timestamped geographic sample point."""

    timestamp: int
    latitude: float
    longitude: float


def haversine(
    lat1: float, lon1: float, lat2: float, lon2: float, earth_radius_km: float
) -> float:
    """
    Calculate the great-circle distance between two points on a sphere.

    Args:
        lat1: Latitude of the first point in decimal degrees
        lon1: Longitude of the first point in decimal degrees
        lat2: Latitude of the second point in decimal degrees
        lon2: Longitude of the second point in decimal degrees
        earth_radius_km: Sphere radius; the result is expressed in the same unit

    Returns:
        Distance along the sphere surface, in the unit of earth_radius_km
    """
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lon / 2) ** 2
    )
    # Rounding can push a slightly past 1 for antipodal points
    a = min(a, 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return earth_radius_km * c


def waypoint_distance(first: Waypoint, second: Waypoint, earth_radius_km: float) -> float:
    """Haversine distance between two waypoints."""
    return haversine(
        first.latitude,
        first.longitude,
        second.latitude,
        second.longitude,
        earth_radius_km,
    )


def default_frequented_area_radius(max_distance_km: float) -> float:
    """
    Derive a frequented-area radius from the largest pairwise route distance.

    The radius is a tenth of the maximum distance. Products below 1 are
    floored at 0.1 so that tiny or single-point routes still get a usable
    neighbourhood.

    Args:
        max_distance_km: Largest distance between any two waypoints

    Returns:
        Radius to use for frequented-area detection
    """
    radius = max_distance_km * DEFAULT_RADIUS_FRACTION
    if radius < 1:
        return max(radius, MIN_DEFAULT_RADIUS_KM)
    return radius
