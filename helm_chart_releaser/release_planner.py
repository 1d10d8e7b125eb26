"""Release planner - decides what to do with each changed chart.

Pure functions only; existence of the release is looked up by the caller.
"""

import logging
from typing import Optional

from .config import CHART_NAME_PLACEHOLDER
from .environment import ReleaserConfig
from .helm import package_path, push_ref
from .models import ChartMetadata, ChartReleasePlan

logger = logging.getLogger(__name__)


def release_tag(pattern: Optional[str], name: str, version: str) -> str:
    """Compute the GitHub release tag of a chart version.

    Args:
        pattern: Tag name pattern containing {chartName}, or empty
        name: Chart name
        version: Chart version

    Returns:
        "<pattern with name substituted>-<version>", or "<name>-<version>"
        when no pattern is set
    """
    prefix = pattern.replace(CHART_NAME_PLACEHOLDER, name) if pattern else name
    return f"{prefix}-{version}"


def plan_chart_release(
    chart: str,
    info: ChartMetadata,
    release_exists: bool,
    config: ReleaserConfig,
) -> ChartReleasePlan:
    """
    Decide which release steps run for a chart.

    - skip_existing and the release exists: nothing runs for this chart.
    - otherwise the package is always pushed; registry pushes overwrite.
    - the release is created only if it does not exist yet.
    - the package is (re-)uploaded to the release unless GitHub releases
      are skipped, replacing an asset of the same name.
    """
    tag = release_tag(config.tag_name_pattern, info.name, info.version)
    skip = config.skip_existing and release_exists

    if skip:
        logger.debug(f"Release {tag} exists and skip_existing is set, skipping {chart}")
    else:
        logger.debug(f"Planning release of {chart}: tag={tag}, release_exists={release_exists}")

    return ChartReleasePlan(
        chart=chart,
        tag=tag,
        package_path=package_path(config, chart, info),
        push_ref=push_ref(config, info.name),
        notes=info.description,
        release_exists=release_exists,
        skip=skip,
        push=not skip,
        create_release=not skip and not release_exists and not config.skip_gh_release,
        upload_asset=not skip and not config.skip_gh_release,
        mark_as_latest=config.mark_as_latest,
    )
