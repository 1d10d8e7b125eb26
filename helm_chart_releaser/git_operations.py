"""
Git Operations Module for Helm Chart Releaser

This module handles Git-related operations such as repository and client
setup, reference commit lookup and listing changed files.

Functions:
    setup_git_client: Sets up Git and GitHub clients with proper authentication
    lookup_latest_tag: Finds the commit to diff against
    changed_files: Lists files changed since a commit under a path

Raises:
    GitOperationError: When Git or GitHub client setup fails
"""

import logging
from typing import List, Optional

from git import Repo
from git.exc import GitCommandError
from github import Auth, Github
from github.Repository import Repository

from .exceptions import GitOperationError

logger = logging.getLogger(__name__)


def setup_git_client(token: str, repository: str, path: str = ".") -> tuple[Repo, Optional[Repository]]:
    """Set up Git and GitHub clients.

    Args:
        token: GitHub token
        repository: "owner/name" of the GitHub repository; when empty it is
            derived from the origin remote
        path: Any path inside the working tree

    Returns:
        Tuple of (local repository, GitHub repository)
    """
    try:
        repo = Repo(path, search_parent_directories=True)
        repository = repository or _repository_from_remote(repo)
        github_client = Github(auth=Auth.Token(token))
        github_repo = github_client.get_repo(repository)
        return repo, github_repo
    except Exception as e:
        raise GitOperationError(f"Failed to setup git clients: {e}") from e


def _repository_from_remote(repo: Repo) -> str:
    """Derive "owner/name" from the origin remote URL."""
    url = repo.remotes.origin.url
    path = url.split(":", 1)[-1] if url.startswith("git@") else url.split("://", 1)[-1].split("/", 1)[-1]
    if path.endswith(".git"):
        path = path[: -len(".git")]
    return path


def lookup_latest_tag(repo: Repo) -> str:
    """Find the reference commit for change detection.

    Uses the most recent tag reachable from the parent of HEAD. When the
    repository has no tags, falls back to the root commit.

    Args:
        repo: Git repository object

    Returns:
        Tag name or commit SHA
    """
    try:
        repo.git.fetch("--tags")
    except GitCommandError as e:
        logger.warning(f"Failed to fetch tags: {e.stderr.strip() if e.stderr else e}")

    try:
        tag = repo.git.describe("--tags", "--abbrev=0", "HEAD~")
    except GitCommandError:
        logger.debug("No tag found, falling back to the root commit")
        roots = repo.git.rev_list("--max-parents=0", "--first-parent", "HEAD")
        tag = roots.splitlines()[0]

    logger.debug(f"Found latest tag: {tag}")
    return tag


def changed_files(repo: Repo, commit: str, path: str) -> List[str]:
    """List files changed between a commit and the working tree.

    Renames are detected, so a moved file is reported under its new path.

    Args:
        repo: Git repository object
        commit: Reference commit or tag
        path: Restrict the diff to this path

    Returns:
        Changed file paths relative to the repository root, in git order
    """
    output = repo.git.diff("--find-renames", "--name-only", commit, "--", path)
    files = output.splitlines()
    logger.debug(f"Changed files: {files}")
    return files
