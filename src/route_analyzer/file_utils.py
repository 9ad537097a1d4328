#!/usr/bin/env python3
"""
File utilities for locating input files and generating output filenames.

Inputs are resolved through an ordered list of candidates. An explicitly
requested path is used as-is; otherwise the input directory is tried first
and the defaults bundled with the package are the last resort.
"""

from typing import Callable, List, Optional
import os
import logging

logger = logging.getLogger(__name__)

WAYPOINTS_FILENAME = "waypoints.csv"
CONFIG_FILENAME = "custom-parameters.yml"
OUTPUT_FILENAME = "output.json"
ADVANCED_OUTPUT_FILENAME = "output_advanced.json"

BUNDLED_RESOURCES_DIR = os.path.join(os.path.dirname(__file__), "resources")

# A resolver yields a usable path or None to advance to the next candidate
Resolver = Callable[[], Optional[str]]


def is_usable_file(path: str) -> bool:
    """Check that path is an existing, non-empty regular file."""
    return os.path.isfile(path) and os.path.getsize(path) > 0


def candidate_file(path: str, description: str) -> Resolver:
    """
    Create a resolver that accepts path when it is an existing, non-empty file.

    Args:
        path: Candidate file path
        description: Human-readable name of the candidate for log messages

    Returns:
        Resolver returning path, or None after logging why it was skipped
    """

    def resolve() -> Optional[str]:
        if not os.path.exists(path):
            logger.warning(f"{description} not found: {path}")
            return None
        if not is_usable_file(path):
            logger.warning(f"{description} is empty or not a file: {path}")
            return None
        return path

    return resolve


def resolve_first(resolvers: List[Resolver]) -> Optional[str]:
    """Return the first path produced by resolvers, trying them in order."""
    for index, resolver in enumerate(resolvers):
        path = resolver()
        if path is not None:
            if index > 0:
                logger.warning(f"Using fallback file: {path}")
            return path
    return None


def resolve_input_file(
    explicit_path: Optional[str], input_dir: str, filename: str
) -> str:
    """
    Resolve one input file through the fallback chain.

    Args:
        explicit_path: Path given on the command line; never replaced by a fallback
        input_dir: Directory searched for filename
        filename: Default file name in input_dir and in the bundled resources

    Returns:
        Path to use. If every candidate is unusable the bundled default path
        is returned and the loader reports the failure.
    """
    if explicit_path is not None:
        return explicit_path

    if not os.path.isdir(input_dir):
        logger.warning(f"Input directory not found: {input_dir}")

    bundled = os.path.join(BUNDLED_RESOURCES_DIR, filename)
    resolvers: List[Resolver] = [
        candidate_file(os.path.join(input_dir, filename), f"Input file {filename}"),
        candidate_file(bundled, f"Bundled default {filename}"),
    ]

    resolved = resolve_first(resolvers)
    if resolved is None:
        return bundled
    logger.debug(f"Resolved {filename} to {resolved}")
    return resolved


def generate_output_filename(output_dir: str, base_name: str = "route map") -> str:
    """
    Generates an output HTML filename and reserves it by creating an empty file.

    Strategy:
    1. Try "<base_name>.html" in output_dir
    2. If file exists, try " (1).html", " (2).html", etc. (by attempting to create exclusively)
    3. Stop at 180 attempts
    4. Use exclusive open (`open(path, 'x')`) to avoid race conditions and reserve the name.

    Args:
        output_dir: Directory for the output file
        base_name: File name without extension

    Returns:
        Safe output filename that has been created as an empty file to reserve its name

    Raises:
        RuntimeError: If no available filename found after 180 attempts
        ValueError: If a filename cannot be created (e.g., due to permissions)
    """
    candidates = [os.path.join(output_dir, base_name + ".html")]
    candidates.extend(
        os.path.join(output_dir, f"{base_name} ({i}).html") for i in range(1, 180)
    )

    for candidate in candidates:
        try:
            with open(candidate, "x"):
                pass
            return candidate
        except FileExistsError:
            continue
        except OSError as e:
            logger.error(f"Cannot create file {candidate}: {e}")
            raise ValueError(f"Cannot create file: {e}")

    logger.error(
        f"Could not find an available filename after 180 attempts. "
        f"Please clean up {output_dir} or pass an explicit --map path."
    )
    raise RuntimeError("No available filename found after 180 attempts")
