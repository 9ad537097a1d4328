#!/usr/bin/env python3
"""
JSON serialization of analysis results.
"""

from typing import Any, Dict, List, Sequence
import json
import logging
import os

from .analysis import AdvancedAnalysisResult, AnalysisResult
from .geometry import Waypoint

logger = logging.getLogger(__name__)


def waypoint_to_dict(waypoint: Waypoint) -> Dict[str, Any]:
    """Convert a waypoint to its JSON object form."""
    return dict(waypoint._asdict())


def waypoints_to_list(waypoints: Sequence[Waypoint]) -> List[Dict[str, Any]]:
    return [waypoint_to_dict(waypoint) for waypoint in waypoints]


def analysis_to_dict(result: AnalysisResult) -> Dict[str, Any]:
    """
    Build the primary report document.

    Args:
        result: Primary analysis result

    Returns:
        Dictionary with maxDistanceFromStart, mostFrequentedArea and
        waypointsOutsideGeofence entries
    """
    farthest = result.max_distance_from_start
    area = result.most_frequented_area
    outside = result.waypoints_outside_geofence
    return {
        "maxDistanceFromStart": {
            "waypoint": waypoint_to_dict(farthest.waypoint),
            "distanceKm": farthest.distance_km,
        },
        "mostFrequentedArea": {
            "centralWaypoint": waypoint_to_dict(area.central_waypoint),
            "areaRadiusKm": area.area_radius_km,
            "entriesCount": area.entries_count,
        },
        "waypointsOutsideGeofence": {
            "centralWaypoint": waypoint_to_dict(outside.central_waypoint),
            "areaRadiusKm": outside.area_radius_km,
            "count": outside.count,
            "waypoints": waypoints_to_list(outside.waypoints),
        },
    }


def advanced_analysis_to_dict(result: AdvancedAnalysisResult) -> Dict[str, Any]:
    """
    Build the advanced report document.

    Args:
        result: Advanced analysis result

    Returns:
        Dictionary with totalPathLength, intersections and
        maxDistanceBetweenPoints entries
    """
    pair = result.max_distance_between_points
    return {
        "totalPathLength": {"km": result.total_path_length.km},
        "intersections": {
            "waypoints": waypoints_to_list(result.intersections.waypoints)
        },
        "maxDistanceBetweenPoints": {
            "km": pair.km,
            "waypoint1": waypoint_to_dict(pair.waypoint1),
            "waypoint2": waypoint_to_dict(pair.waypoint2),
        },
    }


def write_json(document: Dict[str, Any], filename: str) -> None:
    """
    Write a report document as indented UTF-8 JSON.

    Args:
        document: JSON-serializable report
        filename: Destination path; missing parent directories are created

    Raises:
        OSError: If the file cannot be written
    """
    directory = os.path.dirname(filename)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(filename, "w", encoding="utf-8") as f:
        json.dump(document, f, indent=2, ensure_ascii=False)
        f.write("\n")

    logger.info(f"Wrote report to {filename}")
