#!/usr/bin/env python3
"""Error types raised while loading inputs and running the analyses."""


class RouteAnalyzerError(RuntimeError):
    """Base error for failures that abort a run."""


class ConfigLoadError(RouteAnalyzerError):
    """Raised when the configuration document is missing, unreadable or incomplete."""


class WaypointLoadError(RouteAnalyzerError):
    """Raised when the waypoint file is missing, empty, unreadable or not a CSV."""


class EmptyInputError(RouteAnalyzerError):
    """Raised when an analysis that needs at least one waypoint gets none."""


__all__ = [
    "RouteAnalyzerError",
    "ConfigLoadError",
    "WaypointLoadError",
    "EmptyInputError",
]
