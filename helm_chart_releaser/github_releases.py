"""
GitHub Releases Module for Helm Chart Releaser

This module wraps the PyGithub calls used to look up, create and update
releases. Callers only deal with tag names and file paths, so changes in
the GitHub API surface stay contained here.

Functions:
    release_exists: Checks whether a release exists for a tag
    create_release: Creates a release for a tag
    upload_asset: Uploads a file to a release, replacing a same-named asset

Dependencies:
    github.Repository
    github.GitRelease
"""

import logging
import os
from typing import Any

from github.GithubException import UnknownObjectException

logger = logging.getLogger(__name__)

TGZ_CONTENT_TYPE = "application/gzip"


def release_exists(github_repo: Any, tag: str) -> bool:
    """Check whether a release is already published for the tag.

    Looks the release up by tag, one request per call. Draft releases
    have no tag yet and are not found.

    Args:
        github_repo: GitHub repository object
        tag: Release tag name

    Returns:
        True if a release with exactly this tag exists
    """
    try:
        github_repo.get_release(tag)
        exists = True
    except UnknownObjectException:
        exists = False
    logger.debug(f"Release exists: {exists} (tag={tag})")
    return exists


def create_release(github_repo: Any, tag: str, title: str, notes: str, mark_as_latest: bool = True):
    """Create a release for the tag.

    The tag is created on the default branch if it does not exist yet.

    Args:
        github_repo: GitHub repository object
        tag: Release tag name
        title: Release title
        notes: Release notes (the chart description)
        mark_as_latest: Mark the release as the repository's latest release

    Returns:
        The created GitRelease
    """
    release = github_repo.create_git_release(
        tag=tag,
        name=title,
        message=notes,
        make_latest="true" if mark_as_latest else "false",
    )
    print(f"Release created: {release.html_url}")
    return release


def upload_asset(github_repo: Any, tag: str, path: str):
    """Upload a file to the release for the tag.

    An existing asset with the same file name is deleted first, so
    re-releasing a version refreshes the attached package.

    Args:
        github_repo: GitHub repository object
        tag: Release tag name
        path: Path of the file to upload

    Returns:
        The uploaded GitReleaseAsset

    Raises:
        UnknownObjectException: If no release exists for the tag
    """
    release = github_repo.get_release(tag)
    name = os.path.basename(path)

    for asset in release.get_assets():
        if asset.name == name:
            logger.debug(f"Deleting existing asset {name} from release {tag}")
            asset.delete_asset()

    asset = release.upload_asset(path, name=name, content_type=TGZ_CONTENT_TYPE)
    logger.debug(f"Uploaded {name} to release {tag}")
    return asset
