#!/usr/bin/env python3
"""
Configuration for route analysis runs.

AnalysisConfig holds the numeric parameters read from the YAML parameters
document; RouteAnalyzerConfig holds the command-line settings of a run.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional
import logging

import yaml

from .errors import ConfigLoadError

logger = logging.getLogger(__name__)

REQUIRED_KEYS = {
    "earthRadiusKm": "earth_radius_km",
    "geofenceCenterLatitude": "geofence_center_latitude",
    "geofenceCenterLongitude": "geofence_center_longitude",
    "geofenceRadiusKm": "geofence_radius_km",
}
OPTIONAL_KEYS = {
    "mostFrequentedAreaRadiusKm": "most_frequented_area_radius_km",
}


@dataclass(frozen=True)
class AnalysisConfig:
    """Parameters of the geometric analyses."""

    earth_radius_km: float
    geofence_center_latitude: float
    geofence_center_longitude: float
    geofence_radius_km: float
    # None means the radius is derived from the route's maximum pairwise distance
    most_frequented_area_radius_km: Optional[float] = None

    @classmethod
    def from_mapping(cls, document: Mapping[str, Any]) -> "AnalysisConfig":
        """
        Build a configuration from a parsed parameters document.

        Args:
            document: Mapping with camelCase keys as found in the YAML file

        Returns:
            AnalysisConfig instance

        Raises:
            ConfigLoadError: If a required key is missing, a value is not a
                number, or earthRadiusKm is not positive
        """
        missing = [key for key in REQUIRED_KEYS if document.get(key) is None]
        if missing:
            raise ConfigLoadError(
                f"Missing required configuration keys: {', '.join(missing)}"
            )

        unknown = set(document) - set(REQUIRED_KEYS) - set(OPTIONAL_KEYS)
        if unknown:
            logger.debug(f"Ignoring unknown configuration keys: {sorted(unknown)}")

        values: Dict[str, Optional[float]] = {}
        for key, field_name in {**REQUIRED_KEYS, **OPTIONAL_KEYS}.items():
            raw = document.get(key)
            if raw is None:
                values[field_name] = None
                continue
            values[field_name] = _to_float(key, raw)

        if values["earth_radius_km"] <= 0:  # type: ignore[operator]
            raise ConfigLoadError(
                f"earthRadiusKm must be positive, got {values['earth_radius_km']}"
            )

        return cls(**values)  # type: ignore[arg-type]


def _to_float(key: str, raw: Any) -> float:
    # bool is an int subclass, but "true" is never a meaningful distance
    if isinstance(raw, bool):
        raise ConfigLoadError(f"Configuration key {key} must be a number, got {raw!r}")
    try:
        return float(raw)
    except (TypeError, ValueError) as e:
        raise ConfigLoadError(
            f"Configuration key {key} must be a number, got {raw!r}"
        ) from e


def load_config(filename: str) -> AnalysisConfig:
    """
    Load and validate a YAML parameters document.

    Args:
        filename: Path to the YAML file

    Returns:
        AnalysisConfig parsed from the file

    Raises:
        ConfigLoadError: If the file is missing, unreadable, not valid YAML,
            not a mapping, or lacks required keys
    """
    logger.debug(f"Reading configuration file: {filename}")
    try:
        with open(filename, "r", encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigLoadError(f"Configuration file not found: {filename}") from e
    except PermissionError as e:
        raise ConfigLoadError(
            f"Cannot read configuration file (permission denied): {filename}"
        ) from e
    except OSError as e:
        raise ConfigLoadError(f"Cannot read configuration file {filename}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigLoadError(f"Invalid YAML in {filename}: {e}") from e

    if document is None:
        raise ConfigLoadError(f"Configuration file is empty: {filename}")
    if not isinstance(document, Mapping):
        raise ConfigLoadError(
            f"Configuration file {filename} must contain a mapping of keys to values"
        )

    config = AnalysisConfig.from_mapping(document)
    logger.info(
        f"Loaded configuration: earth radius {config.earth_radius_km} km, "
        f"geofence {config.geofence_radius_km} km around "
        f"({config.geofence_center_latitude}, {config.geofence_center_longitude})"
    )
    return config


@dataclass
class RouteAnalyzerConfig:
    """Settings for a route-analyzer CLI run."""

    input_dir: str = "evaluation"
    output_dir: Optional[str] = None
    waypoints: Optional[str] = None
    config: Optional[str] = None
    map_output: Optional[str] = None
    log_level: str = "INFO"
    metrics: bool = False
