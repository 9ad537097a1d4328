#!/usr/bin/env python3
"""
Geometric analyses over an in-memory waypoint sequence.

Every function here is pure: it reads the waypoint sequence and returns a
fresh immutable result. Selections (farthest point, farthest pair, densest
neighbourhood) keep the first candidate reaching the maximum, so results are
deterministic for a given input order.
"""

from typing import List, NamedTuple, Sequence, Set, Tuple
import logging

from .config import AnalysisConfig
from .errors import EmptyInputError
from .geometry import Waypoint, default_frequented_area_radius, haversine, waypoint_distance

logger = logging.getLogger(__name__)


class MaxDistanceResult(NamedTuple):
    """The waypoint farthest from the start of the route."""

    waypoint: Waypoint
    distance_km: float


class MaxDistanceBetweenPoints(NamedTuple):
    """The pair of waypoints that are farthest apart."""

    km: float
    waypoint1: Waypoint
    waypoint2: Waypoint


class MostFrequentedAreaResult(NamedTuple):
    """The waypoint whose neighbourhood holds the most waypoints."""

    central_waypoint: Waypoint
    area_radius_km: float
    entries_count: int


class WaypointsOutsideGeofence(NamedTuple):
    """Waypoints lying outside a circular geofence, in route order."""

    central_waypoint: Waypoint
    area_radius_km: float
    count: int
    waypoints: List[Waypoint]


class PathLength(NamedTuple):
    """Cumulative length of the route's consecutive segments."""

    km: float


class Intersections(NamedTuple):
    """Waypoints revisiting a previously seen coordinate pair."""

    waypoints: List[Waypoint]


class AnalysisResult(NamedTuple):
    """Contents of the primary analysis report."""

    max_distance_from_start: MaxDistanceResult
    most_frequented_area: MostFrequentedAreaResult
    waypoints_outside_geofence: WaypointsOutsideGeofence


class AdvancedAnalysisResult(NamedTuple):
    """Contents of the advanced analysis report."""

    total_path_length: PathLength
    intersections: Intersections
    max_distance_between_points: MaxDistanceBetweenPoints


def max_distance_from_start(
    waypoints: Sequence[Waypoint], earth_radius_km: float
) -> MaxDistanceResult:
    """
    Find the waypoint farthest from the first waypoint.

    Args:
        waypoints: Route waypoints in file order
        earth_radius_km: Sphere radius used for distances

    Returns:
        MaxDistanceResult with the first waypoint reaching the maximum distance

    Raises:
        EmptyInputError: If waypoints is empty
    """
    if not waypoints:
        raise EmptyInputError("Cannot find the farthest point of an empty route")

    start = waypoints[0]
    best = MaxDistanceResult(waypoint=start, distance_km=0.0)
    for waypoint in waypoints[1:]:
        distance = waypoint_distance(start, waypoint, earth_radius_km)
        if distance > best.distance_km:
            best = MaxDistanceResult(waypoint=waypoint, distance_km=distance)

    logger.debug(
        f"Farthest waypoint from start: {best.waypoint} at {best.distance_km:.3f} km"
    )
    return best


def max_distance_between_points(
    waypoints: Sequence[Waypoint], earth_radius_km: float
) -> MaxDistanceBetweenPoints:
    """
    Find the two waypoints with the largest distance between them.

    Every unordered pair (i, j) with i < j is examined. A later pair only
    replaces the current best when strictly farther.

    Args:
        waypoints: Route waypoints
        earth_radius_km: Sphere radius used for distances

    Returns:
        MaxDistanceBetweenPoints for the farthest pair. A single waypoint yields
        a zero distance with that waypoint in both slots.

    Raises:
        EmptyInputError: If waypoints is empty
    """
    if not waypoints:
        raise EmptyInputError("Cannot find the farthest pair of an empty route")

    best = MaxDistanceBetweenPoints(km=0.0, waypoint1=waypoints[0], waypoint2=waypoints[0])
    count = len(waypoints)
    for i in range(count - 1):
        first = waypoints[i]
        for j in range(i + 1, count):
            second = waypoints[j]
            distance = waypoint_distance(first, second, earth_radius_km)
            if distance > best.km:
                best = MaxDistanceBetweenPoints(
                    km=distance, waypoint1=first, waypoint2=second
                )

    logger.debug(f"Farthest pair is {best.km:.3f} km apart")
    return best


def most_frequented_area(
    waypoints: Sequence[Waypoint], radius_km: float, earth_radius_km: float
) -> MostFrequentedAreaResult:
    """
    Find the waypoint whose neighbourhood contains the most waypoints.

    A waypoint counts as a neighbour when its distance from the candidate
    centre is at most radius_km; the centre counts itself.

    Args:
        waypoints: Route waypoints
        radius_km: Neighbourhood radius
        earth_radius_km: Sphere radius used for distances

    Returns:
        MostFrequentedAreaResult for the first waypoint with the highest count

    Raises:
        EmptyInputError: If waypoints is empty
    """
    if not waypoints:
        raise EmptyInputError("Cannot find the most frequented area of an empty route")

    best = MostFrequentedAreaResult(
        central_waypoint=waypoints[0], area_radius_km=radius_km, entries_count=0
    )
    for center in waypoints:
        entries = sum(
            1
            for waypoint in waypoints
            if waypoint_distance(center, waypoint, earth_radius_km) <= radius_km
        )
        if entries > best.entries_count:
            best = MostFrequentedAreaResult(
                central_waypoint=center,
                area_radius_km=radius_km,
                entries_count=entries,
            )

    logger.debug(
        f"Most frequented area: {best.entries_count} waypoints within "
        f"{radius_km:.3f} km of {best.central_waypoint}"
    )
    return best


def waypoints_outside_geofence(
    waypoints: Sequence[Waypoint],
    center_latitude: float,
    center_longitude: float,
    radius_km: float,
    earth_radius_km: float,
) -> WaypointsOutsideGeofence:
    """
    Collect the waypoints lying strictly outside a circular geofence.

    Args:
        waypoints: Route waypoints in file order
        center_latitude: Geofence centre latitude in decimal degrees
        center_longitude: Geofence centre longitude in decimal degrees
        radius_km: Geofence radius
        earth_radius_km: Sphere radius used for distances

    Returns:
        WaypointsOutsideGeofence preserving route order. The central waypoint
        carries the geofence centre with a timestamp of 0.
    """
    outside = [
        waypoint
        for waypoint in waypoints
        if haversine(
            center_latitude,
            center_longitude,
            waypoint.latitude,
            waypoint.longitude,
            earth_radius_km,
        )
        > radius_km
    ]

    logger.debug(f"{len(outside)}/{len(waypoints)} waypoints outside geofence")
    return WaypointsOutsideGeofence(
        central_waypoint=Waypoint(0, center_latitude, center_longitude),
        area_radius_km=radius_km,
        count=len(outside),
        waypoints=outside,
    )


def calculate_path_length(
    waypoints: Sequence[Waypoint], earth_radius_km: float
) -> PathLength:
    """Sum the distances between consecutive waypoints."""
    total = 0.0
    for i in range(len(waypoints) - 1):
        total += waypoint_distance(waypoints[i], waypoints[i + 1], earth_radius_km)
    return PathLength(km=total)


def find_intersections(waypoints: Sequence[Waypoint]) -> Intersections:
    """
    Find waypoints that revisit an earlier coordinate pair.

    Coordinates are compared for exact equality, so GPS noise such as
    45.00001 vs 45.0 is not treated as a revisit. The first occurrence of a
    coordinate pair is never reported; every later occurrence is.

    Args:
        waypoints: Route waypoints in file order

    Returns:
        Intersections listing the repeated waypoints in encounter order
    """
    seen: Set[Tuple[float, float]] = set()
    repeated = []
    for waypoint in waypoints:
        key = (waypoint.latitude, waypoint.longitude)
        if key in seen:
            repeated.append(waypoint)
        seen.add(key)

    logger.debug(f"Found {len(repeated)} revisited coordinates")
    return Intersections(waypoints=repeated)


def resolve_frequented_area_radius(
    waypoints: Sequence[Waypoint], config: AnalysisConfig
) -> float:
    """
    Return the configured frequented-area radius, or derive it from the route.

    Args:
        waypoints: Route waypoints
        config: Analysis configuration

    Returns:
        Radius for frequented-area detection
    """
    if config.most_frequented_area_radius_km is not None:
        return config.most_frequented_area_radius_km

    farthest = max_distance_between_points(waypoints, config.earth_radius_km)
    radius = default_frequented_area_radius(farthest.km)
    logger.info(
        f"No frequented-area radius configured, derived {radius:.3f} km "
        f"from maximum distance {farthest.km:.3f} km"
    )
    return radius


def analyze(waypoints: Sequence[Waypoint], config: AnalysisConfig) -> AnalysisResult:
    """
    Compute the primary analysis report.

    Args:
        waypoints: Route waypoints in file order
        config: Analysis configuration

    Returns:
        AnalysisResult with farthest point, frequented area and geofence results

    Raises:
        EmptyInputError: If waypoints is empty
    """
    radius_km = resolve_frequented_area_radius(waypoints, config)
    return AnalysisResult(
        max_distance_from_start=max_distance_from_start(
            waypoints, config.earth_radius_km
        ),
        most_frequented_area=most_frequented_area(
            waypoints, radius_km, config.earth_radius_km
        ),
        waypoints_outside_geofence=waypoints_outside_geofence(
            waypoints,
            config.geofence_center_latitude,
            config.geofence_center_longitude,
            config.geofence_radius_km,
            config.earth_radius_km,
        ),
    )


def analyze_advanced(
    waypoints: Sequence[Waypoint], config: AnalysisConfig
) -> AdvancedAnalysisResult:
    """
    Compute the advanced analysis report.

    Args:
        waypoints: Route waypoints in file order
        config: Analysis configuration

    Returns:
        AdvancedAnalysisResult with path length, revisits and farthest pair

    Raises:
        EmptyInputError: If waypoints is empty
    """
    return AdvancedAnalysisResult(
        total_path_length=calculate_path_length(waypoints, config.earth_radius_km),
        intersections=find_intersections(waypoints),
        max_distance_between_points=max_distance_between_points(
            waypoints, config.earth_radius_km
        ),
    )
