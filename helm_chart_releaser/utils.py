"""
Utility Functions Module for Helm Chart Releaser

This module provides helpers used throughout the application.

Functions:
    setup_logging: Configures application logging
    write_output_record: Writes a key=value record for later workflow steps
"""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

logger = logging.getLogger(__name__)


def setup_logging(level: int = logging.INFO) -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def write_output_record(
    path: str, key: str, value: str, env: Optional[Mapping[str, str]] = None
) -> None:
    """Write a single key=value record to a file.

    The record is also appended to $GITHUB_OUTPUT when it is set, so that
    subsequent workflow steps can read it as a step output.

    Args:
        path: File to (over)write
        key: Record key
        value: Record value
        env: Environment variables (defaults to os.environ)
    """
    if env is None:
        env = os.environ
    line = f"{key}={value}\n"
    Path(path).write_text(line, encoding="utf-8")
    logger.debug(f"Wrote {line.strip()} to {path}")

    github_output = env.get("GITHUB_OUTPUT")
    if github_output:
        with open(github_output, "a", encoding="utf-8") as f:
            f.write(line)
