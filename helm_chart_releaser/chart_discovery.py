"""
Chart Discovery Module

Locates the charts root of the repository and maps a git diff to the chart
directories it touches.
"""

import logging
from pathlib import Path
from typing import Iterable, List

from .config import CHART_FILE, DEFAULT_CHARTS_DIR, SINGLE_CHART_DIRS
from .exceptions import ConfigurationError
from .io_layer import IOLayer

logger = logging.getLogger(__name__)


def find_charts_dir(charts_dir: str, root: str = ".") -> str:
    """Determine the directory that holds chart directories.

    An explicitly configured directory is returned unchanged. Otherwise a
    single chart under helm/ or chart/ means the repository root is the
    charts root, and charts/ is used when neither exists.

    Args:
        charts_dir: Configured charts directory, may be empty
        root: Repository root

    Returns:
        Charts root, relative to the repository root

    Raises:
        ConfigurationError: If both helm/ and chart/ contain a chart
    """
    if charts_dir:
        logger.debug(f"Using existing charts_dir={charts_dir}")
        return charts_dir

    found = [name for name in SINGLE_CHART_DIRS if (Path(root) / name / CHART_FILE).is_file()]
    logger.debug(f"Single chart directories found: {found}")
    if len(found) > 1:
        raise ConfigurationError("Can't use both helm and chart directory.")

    charts_dir = "." if found else DEFAULT_CHARTS_DIR
    logger.debug(f"Set charts_dir={charts_dir}")
    return charts_dir


def chart_depth(charts_dir: str) -> int:
    """Number of path segments of a chart directory below the charts root.

    Segments that are empty or made only of dots ("", ".", "..") are not
    counted, so "charts/", "./charts" and "charts" all give 2, and "." gives 1.
    """
    segments = [s for s in charts_dir.split("/") if s.strip(".")]
    return len(segments) + 1


def candidate_chart_dirs(files: Iterable[str], depth: int) -> List[str]:
    """Truncate changed file paths to chart directory candidates.

    Only adjacent duplicates are collapsed: a chart whose files are
    interleaved with another chart's files in the diff shows up again.
    """
    candidates: List[str] = []
    for path in files:
        candidate = "/".join(path.split("/")[:depth])
        if not candidates or candidates[-1] != candidate:
            candidates.append(candidate)
    return candidates


def filter_charts(io_layer: IOLayer, paths: Iterable[str], root: str = ".") -> List[str]:
    """Keep only paths that contain a chart descriptor."""
    charts = [p for p in paths if p and io_layer.file_exists(str(Path(root) / p / CHART_FILE))]
    logger.debug(f"Filtered charts: {charts}")
    return charts


def lookup_changed_charts(io_layer: IOLayer, commit: str, charts_dir: str, root: str = ".") -> List[str]:
    """List the chart directories changed since a commit.

    Args:
        io_layer: I/O layer used for git and file system access
        commit: Reference commit or tag
        charts_dir: Charts root, relative to the repository root
        root: Repository root

    Returns:
        Chart directories in diff order; charts that no longer have a
        descriptor (e.g. deleted ones) are left out
    """
    files = io_layer.changed_files(commit, charts_dir)
    depth = chart_depth(charts_dir)
    logger.debug(f"Depth={depth}, fields=1-{depth}")

    candidates = candidate_chart_dirs(files, depth)
    logger.debug(f"Changed directories: {candidates}")

    return filter_charts(io_layer, candidates, root)
