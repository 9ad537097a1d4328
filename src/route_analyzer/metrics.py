#!/usr/bin/env python3
"""
Module for collecting and logging metrics of an analysis run.
"""

import logging
from typing import NamedTuple

from .analysis import AdvancedAnalysisResult, AnalysisResult

logger = logging.getLogger(__name__)


class AnalysisMetrics(NamedTuple):
    """Container for run metrics data."""

    waypoint_count: int
    outside_geofence_count: int
    intersection_count: int
    frequented_area_entries: int
    frequented_area_radius_km: float
    max_distance_from_start_km: float
    max_distance_between_points_km: float
    total_path_length_km: float


def collect_metrics(
    analysis: AnalysisResult, advanced: AdvancedAnalysisResult, waypoint_count: int
) -> AnalysisMetrics:
    """
    Collect metrics from both analysis results.

    Args:
        analysis: Primary analysis result
        advanced: Advanced analysis result
        waypoint_count: Number of waypoints analysed

    Returns:
        AnalysisMetrics containing all collected metrics
    """
    return AnalysisMetrics(
        waypoint_count=waypoint_count,
        outside_geofence_count=analysis.waypoints_outside_geofence.count,
        intersection_count=len(advanced.intersections.waypoints),
        frequented_area_entries=analysis.most_frequented_area.entries_count,
        frequented_area_radius_km=analysis.most_frequented_area.area_radius_km,
        max_distance_from_start_km=analysis.max_distance_from_start.distance_km,
        max_distance_between_points_km=advanced.max_distance_between_points.km,
        total_path_length_km=advanced.total_path_length.km,
    )


def log_metrics(metrics: AnalysisMetrics, enabled: bool) -> None:
    """
    Log metrics as structured key=value lines.

    Args:
        metrics: AnalysisMetrics to log
        enabled: Whether metrics output was requested
    """
    if not enabled:
        return

    logger.info("=== ROUTE_ANALYZER_METRICS ===")
    for key, value in metrics._asdict().items():
        if isinstance(value, float):
            logger.info(f"{key}={value:.6f}")
        else:
            logger.info(f"{key}={value}")
    logger.info("=== END_ROUTE_ANALYZER_METRICS ===")
