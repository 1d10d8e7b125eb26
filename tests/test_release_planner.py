"""Tests for release tag computation and release decisions."""

from dataclasses import replace

import pytest

from helm_chart_releaser.models import ChartMetadata
from helm_chart_releaser.release_planner import plan_chart_release, release_tag


class TestReleaseTag:
    def test_without_pattern(self):
        assert release_tag("", "app", "1.2.3") == "app-1.2.3"
        assert release_tag(None, "app", "1.2.3") == "app-1.2.3"

    def test_with_pattern(self):
        assert release_tag("{chartName}-chart", "app", "1.2.3") == "app-chart-1.2.3"

    def test_every_placeholder_is_replaced(self):
        assert release_tag("{chartName}/{chartName}", "app", "0.1.0") == "app/app-0.1.0"

    def test_deterministic(self):
        tags = {release_tag("helm-{chartName}", "app", "1.0.0") for _ in range(3)}

        assert tags == {"helm-app-1.0.0"}


class TestPlanChartRelease:
    """Tests for plan_chart_release()."""

    @pytest.fixture
    def info(self):
        return ChartMetadata(description="My app", name="app", version="1.0.0")

    def test_new_release(self, info, base_config):
        plan = plan_chart_release("charts/app", info, False, base_config)

        assert plan.tag == "app-1.0.0"
        assert plan.skip is False
        assert plan.push is True
        assert plan.create_release is True
        assert plan.upload_asset is True
        assert plan.mark_as_latest is True
        assert plan.notes == "My app"
        assert plan.package_path == "/tmp/cra/linux-amd64/package/charts/app/app-1.0.0.tgz"
        assert plan.push_ref == "oci://ghcr.io/acme/app"

    def test_existing_release_skipped_by_default(self, info, base_config):
        plan = plan_chart_release("charts/app", info, True, base_config)

        assert plan.skip is True
        assert plan.push is False
        assert plan.create_release is False
        assert plan.upload_asset is False

    def test_existing_release_without_skip_existing(self, info, base_config):
        config = replace(base_config, skip_existing=False)

        plan = plan_chart_release("charts/app", info, True, config)

        assert plan.skip is False
        assert plan.push is True
        assert plan.create_release is False
        assert plan.upload_asset is True

    def test_skip_gh_release_only_pushes(self, info, base_config):
        config = replace(base_config, skip_gh_release=True)

        plan = plan_chart_release("charts/app", info, False, config)

        assert plan.push is True
        assert plan.create_release is False
        assert plan.upload_asset is False

    def test_mark_as_latest_false(self, info, base_config):
        config = replace(base_config, mark_as_latest=False)

        assert plan_chart_release("charts/app", info, False, config).mark_as_latest is False

    def test_tag_pattern_and_oci_path(self, info, base_config):
        config = replace(base_config, tag_name_pattern="{chartName}-chart", oci_path="helm")

        plan = plan_chart_release("charts/app", info, False, config)

        assert plan.tag == "app-chart-1.0.0"
        assert plan.push_ref == "oci://ghcr.io/acme/helm/app"

    def test_missing_metadata_does_not_fail(self, base_config):
        plan = plan_chart_release("charts/app", ChartMetadata(), False, base_config)

        assert plan.tag == "-"
        assert plan.notes == ""
