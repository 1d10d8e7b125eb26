"""Release executor - runs the release pipeline for changed charts."""

import logging
import os
from typing import Mapping, MutableMapping, Optional

from . import helm
from .chart_discovery import find_charts_dir, lookup_changed_charts
from .config import CHART_VERSION_FILE, RELEASED_CHARTS_FILE
from .environment import ReleaserConfig
from .io_layer import IOLayer
from .models import ChartReleasePlan, RunResult
from .release_planner import plan_chart_release, release_tag
from .utils import write_output_record

logger = logging.getLogger(__name__)


def plan_chart(io_layer: IOLayer, config: ReleaserConfig, chart: str) -> ChartReleasePlan:
    """Read a chart's metadata and decide how to release it."""
    info = helm.chart_info(io_layer, chart)
    logger.debug(f"Processing chart: {chart} (name: {info.name}, version: {info.version})")

    tag = release_tag(config.tag_name_pattern, info.name, info.version)
    exists = io_layer.release_exists(tag)
    return plan_chart_release(chart, info, exists, config)


def execute_chart_plan(plan: ChartReleasePlan, io_layer: IOLayer, config: ReleaserConfig) -> bool:
    """
    Execute the release steps of one chart.

    Returns:
        True if the package was uploaded to the release, i.e. the chart
        counts as released in this run
    """
    if plan.skip:
        print(f"Release tag '{plan.tag}' is present. Skip chart push (skip_existing=true)...")
        return False

    helm.package_chart(io_layer, config, plan.chart)

    if plan.push:
        helm.push_chart(io_layer, plan.package_path, plan.push_ref)

    if plan.create_release:
        logger.debug(f"Creating GitHub release {plan.tag}")
        io_layer.create_release(plan.tag, plan.tag, plan.notes, plan.mark_as_latest)

    if plan.upload_asset:
        logger.debug(f"Uploading chart package to GitHub release {plan.tag}")
        io_layer.upload_release_asset(plan.tag, plan.package_path)
        return True

    return False


def release_charts(
    config: ReleaserConfig,
    io_layer: IOLayer,
    env: Optional[MutableMapping[str, str]] = None,
) -> RunResult:
    """
    Find changed charts and release them one after another.

    Must be called with the repository root as working directory. The
    first failing command aborts the run; charts released before it stay
    released.
    """
    if env is None:
        env = os.environ

    charts_dir = find_charts_dir(config.charts_dir)
    config = config.with_charts_dir(charts_dir)

    print("Looking up latest tag...")
    reference = io_layer.lookup_latest_tag()
    result = RunResult(reference=reference)

    print(f"Discovering changed charts since '{reference}'...")
    result.changed_charts = lookup_changed_charts(io_layer, reference, charts_dir)
    logger.debug(f"Changed charts: {result.changed_charts}")

    if not result.has_changes():
        print("Nothing to do. No chart changes detected.")
        return result

    helm.install_helm(config, env)
    helm.registry_login(io_layer, config)

    for chart in result.changed_charts:
        plan = plan_chart(io_layer, config, chart)
        result.plans.append(plan)
        if execute_chart_plan(plan, io_layer, config):
            result.released_charts.append(chart)
            logger.debug(f"Added {chart} to released_charts: {result.released_charts}")

    return result


def write_run_outputs(result: RunResult, env: Optional[Mapping[str, str]] = None) -> None:
    """Write the released chart list and the reference version records."""
    write_output_record(RELEASED_CHARTS_FILE, "released_charts", ",".join(result.released_charts), env)
    write_output_record(CHART_VERSION_FILE, "chart_version", result.reference, env)
