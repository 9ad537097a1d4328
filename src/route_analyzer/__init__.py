#!/usr/bin/env python3
"""
Route Analyzer - A batch analysis tool for GPS waypoint routes.

This package loads a sequence of timestamped waypoints from a CSV file,
computes distance, density and geofence metrics over them, and writes the
results as JSON reports.
"""
import importlib.metadata

try:
    __version__ = importlib.metadata.version("route-analyzer")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.0.0"

# Import main classes for public API
from .geometry import Waypoint, haversine
from .config import AnalysisConfig
from .route import Route
from .analysis import AnalysisResult, AdvancedAnalysisResult, analyze, analyze_advanced

__all__ = [
    "Waypoint",
    "haversine",
    "AnalysisConfig",
    "Route",
    "AnalysisResult",
    "AdvancedAnalysisResult",
    "analyze",
    "analyze_advanced",
]
