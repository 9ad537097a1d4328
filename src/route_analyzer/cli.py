#!/usr/bin/env python3
"""
Route Analyzer command-line tool.

This script loads a CSV file of GPS waypoints and a YAML parameters file,
computes distance, density and geofence analyses over the route, and writes
the results as two JSON reports. An interactive HTML map can optionally be
generated as well.
"""

from typing import List, Optional
import argparse
import logging
import os
import sys

from . import __version__
from . import visualization
from .analysis import AdvancedAnalysisResult, AnalysisResult, analyze, analyze_advanced
from .config import RouteAnalyzerConfig, load_config
from .errors import RouteAnalyzerError
from .file_utils import (
    ADVANCED_OUTPUT_FILENAME,
    CONFIG_FILENAME,
    OUTPUT_FILENAME,
    WAYPOINTS_FILENAME,
    generate_output_filename,
    resolve_input_file,
)
from .metrics import collect_metrics, log_metrics
from .report import advanced_analysis_to_dict, analysis_to_dict, write_json
from .route import Route

# Configure logging
logger = logging.getLogger("route_analyzer")


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the command-line argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="route-analyzer",
        description="GPS waypoint route analysis tool",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--input-dir",
        type=str,
        default="evaluation",
        help=f"Directory holding {WAYPOINTS_FILENAME} and {CONFIG_FILENAME} (default: evaluation)",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Directory for the JSON reports (default: the input directory)",
    )
    parser.add_argument(
        "--waypoints",
        type=str,
        default=None,
        help="Waypoint CSV file; disables the fallback to bundled defaults",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML parameters file; disables the fallback to bundled defaults",
    )
    parser.add_argument(
        "--map",
        dest="map_output",
        type=str,
        nargs="?",
        const="",
        default=None,
        help="Also write an interactive HTML map (default name: 'route map.html' in the output directory)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set logging level (default: INFO)",
    )
    parser.add_argument(
        "--metrics",
        action="store_true",
        help="Output structured metrics after processing",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"route-analyzer {__version__}",
    )
    return parser


def setup_logging(log_level: str) -> None:
    """Setup logging configuration."""
    level = getattr(logging, log_level)

    # Create formatter
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
    )

    # Create console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    # Configure the root logger so all modules inherit the configuration
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)


def print_summary(analysis: AnalysisResult, advanced: AdvancedAnalysisResult) -> None:
    """
    Print a short human-readable summary of both reports.

    Args:
        analysis: Primary analysis result
        advanced: Advanced analysis result
    """
    farthest = analysis.max_distance_from_start
    area = analysis.most_frequented_area
    outside = analysis.waypoints_outside_geofence
    pair = advanced.max_distance_between_points

    print(
        f"Farthest from start:     {farthest.distance_km:.3f} km "
        f"(timestamp {farthest.waypoint.timestamp})"
    )
    print(
        f"Most frequented area:    {area.entries_count} waypoints within "
        f"{area.area_radius_km:.3f} km of ({area.central_waypoint.latitude}, "
        f"{area.central_waypoint.longitude})"
    )
    print(
        f"Outside geofence:        {outside.count} waypoints beyond "
        f"{outside.area_radius_km:.3f} km"
    )
    print(f"Total path length:       {advanced.total_path_length.km:.3f} km")
    print(f"Revisited coordinates:   {len(advanced.intersections.waypoints)}")
    print(f"Max distance in route:   {pair.km:.3f} km")


def run(settings: RouteAnalyzerConfig) -> None:
    """
    Run a full analysis: resolve inputs, analyse, write reports.

    Both reports are computed, and the optional map saved, before any
    report is written, so a failure leaves no report behind.

    Args:
        settings: Settings of this run

    Raises:
        RouteAnalyzerError: If the configuration or waypoints cannot be loaded
        OSError: If a report cannot be written
    """
    config_path = resolve_input_file(settings.config, settings.input_dir, CONFIG_FILENAME)
    waypoints_path = resolve_input_file(
        settings.waypoints, settings.input_dir, WAYPOINTS_FILENAME
    )

    config = load_config(config_path)
    route = Route.from_file(waypoints_path)
    logger.info(f"Loaded route with {len(route)} waypoints")

    analysis = analyze(route.waypoints, config)
    advanced = analyze_advanced(route.waypoints, config)

    output_dir = settings.output_dir or settings.input_dir
    output_document = analysis_to_dict(analysis)
    advanced_document = advanced_analysis_to_dict(advanced)

    # The map goes first so a map failure leaves no report behind
    if settings.map_output is not None:
        if settings.map_output:
            map_filename = settings.map_output
        else:
            os.makedirs(output_dir, exist_ok=True)
            map_filename = generate_output_filename(output_dir)
        visualization.create_route_map(route, analysis, advanced, map_filename)

    write_json(output_document, os.path.join(output_dir, OUTPUT_FILENAME))
    write_json(advanced_document, os.path.join(output_dir, ADVANCED_OUTPUT_FILENAME))

    print_summary(analysis, advanced)
    log_metrics(collect_metrics(analysis, advanced, len(route)), settings.metrics)


def main(argv: Optional[List[str]] = None) -> None:
    """
    Parses command-line arguments, runs the analysis and exits with
    status 1 on any fatal error.
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    settings = RouteAnalyzerConfig(
        input_dir=args.input_dir,
        output_dir=args.output_dir,
        waypoints=args.waypoints,
        config=args.config,
        map_output=args.map_output,
        log_level=args.log_level,
        metrics=args.metrics,
    )

    setup_logging(settings.log_level)

    try:
        run(settings)
    except RouteAnalyzerError as e:
        logger.error(str(e))
        sys.exit(1)
    except (RuntimeError, ValueError, OSError) as e:
        logger.error(f"Route analysis failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
