"""
I/O Layer for Helm Chart Releaser

This module contains all I/O operations (git, helm, GitHub) separated from
the release decisions. Every mutating operation passes through this layer,
which honours dry-run mode by printing what would happen instead of doing it.
Read-only operations always run, so a dry run sees the real repository state.
"""

import logging
import shlex
import subprocess
import sys
from pathlib import Path
from typing import Any, List, Optional, Sequence

from git import Repo

from . import git_operations, github_releases
from .exceptions import ToolError

logger = logging.getLogger(__name__)


class IOLayer:
    """Handles all I/O operations for the application."""

    def __init__(self, repo: Repo, github_repo: Any, dry_run: bool = False):
        """Initialize the I/O layer.

        Args:
            repo: Git repository object
            github_repo: GitHub repository object
            dry_run: If True, don't perform mutating operations
        """
        self.repo = repo
        self.github_repo = github_repo
        self.dry_run = dry_run

    # -----------------------------------------------------------------------------
    # File System Operations
    # -----------------------------------------------------------------------------

    def file_exists(self, path: str) -> bool:
        """Check whether a regular file exists."""
        return Path(path).is_file()

    # -----------------------------------------------------------------------------
    # Command Execution
    # -----------------------------------------------------------------------------

    def _gate(self, cmd: Sequence[str]) -> bool:
        """Decide whether a mutating operation may run.

        In dry-run mode prints the equivalent command line instead.

        Returns:
            True if the operation should run, False if dry run
        """
        if self.dry_run:
            print(f"[DRY RUN] Would run: {shlex.join(cmd)}", file=sys.stderr)
            return False

        logger.debug(f"Executing: {shlex.join(cmd)}")
        return True

    def run(self, cmd: Sequence[str], input: Optional[str] = None) -> bool:
        """Run a mutating command, or print it in dry-run mode.

        Output is not captured, it streams directly to the terminal.

        Args:
            cmd: Command and arguments
            input: Text passed to the command's stdin (e.g. a password)

        Returns:
            True if executed, False if dry run

        Raises:
            ToolError: If the command exits with a non-zero status
        """
        if not self._gate(cmd):
            return False

        result = subprocess.run(list(cmd), input=input, text=True, check=False)
        if result.returncode != 0:
            raise ToolError(
                f"Command failed with exit code {result.returncode}: {shlex.join(cmd)}",
                command=list(cmd),
                returncode=result.returncode,
            )
        return True

    def read_command(self, cmd: Sequence[str]) -> str:
        """Run a read-only command and return its stdout.

        Runs in dry-run mode too.

        Raises:
            ToolError: If the command exits with a non-zero status
        """
        logger.debug(f"Reading: {shlex.join(cmd)}")
        result = subprocess.run(list(cmd), capture_output=True, text=True, check=False)
        if result.returncode != 0:
            raise ToolError(
                f"Command failed with exit code {result.returncode}: {shlex.join(cmd)}\n{result.stderr.strip()}",
                command=list(cmd),
                returncode=result.returncode,
            )
        return result.stdout

    # -----------------------------------------------------------------------------
    # Git Operations
    # -----------------------------------------------------------------------------

    def lookup_latest_tag(self) -> str:
        """Find the reference commit for change detection."""
        return git_operations.lookup_latest_tag(self.repo)

    def changed_files(self, commit: str, path: str) -> List[str]:
        """List files changed since the commit under the path."""
        return git_operations.changed_files(self.repo, commit, path)

    # -----------------------------------------------------------------------------
    # GitHub Operations
    # -----------------------------------------------------------------------------

    def release_exists(self, tag: str) -> bool:
        """Check whether a GitHub release exists for the tag."""
        return github_releases.release_exists(self.github_repo, tag)

    def create_release(self, tag: str, title: str, notes: str, mark_as_latest: bool = True) -> bool:
        """Create a GitHub release.

        Returns:
            True if created, False if dry run
        """
        latest = "--latest" if mark_as_latest else "--latest=false"
        if not self._gate(["gh", "release", "create", tag, "--title", title, "--notes", notes, latest]):
            return False

        github_releases.create_release(self.github_repo, tag, title, notes, mark_as_latest)
        return True

    def upload_release_asset(self, tag: str, path: str) -> bool:
        """Upload a file to a GitHub release, replacing a same-named asset.

        Returns:
            True if uploaded, False if dry run
        """
        if not self._gate(["gh", "release", "upload", tag, path, "--clobber"]):
            return False

        github_releases.upload_asset(self.github_repo, tag, path)
        return True
