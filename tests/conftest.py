"""Test fixtures for Helm Chart Releaser.

This module provides shared fixtures used across multiple test modules.
It sets up chart repository layouts on disk and mock I/O objects that
simulate git, helm and GitHub.

Fixtures:
    chart_repo: Creates a temporary repository with charts under charts/
    base_config: A valid configuration with a derived install directory
    mock_io: A Mock standing in for IOLayer
"""

from unittest.mock import Mock

import pytest
import yaml

from helm_chart_releaser.environment import ReleaserConfig
from helm_chart_releaser.io_layer import IOLayer


def create_chart(chart_dir, name, version="1.0.0", description="A Helm chart"):
    """Helper to create a chart directory with a Chart.yaml file."""
    chart_dir.mkdir(parents=True, exist_ok=True)
    chart = {
        "apiVersion": "v2",
        "name": name,
        "version": version,
        "description": description,
    }
    with open(chart_dir / "Chart.yaml", "w", encoding="utf-8") as f:
        yaml.dump(chart, f)
    (chart_dir / "values.yaml").write_text("replicaCount: 1\n")
    return chart_dir


@pytest.fixture
def chart_repo(tmp_path, monkeypatch):
    """Creates a temporary repository layout and makes it the working directory.

    tmp_path/
    └── charts/
        ├── foo/Chart.yaml
        ├── bar/Chart.yaml
        └── docs/README.md   (not a chart)
    """
    create_chart(tmp_path / "charts" / "foo", "foo")
    create_chart(tmp_path / "charts" / "bar", "bar", version="2.1.0")
    (tmp_path / "charts" / "docs").mkdir()
    (tmp_path / "charts" / "docs" / "README.md").write_text("# docs\n")
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def base_config():
    """A valid configuration as produced from CLI flags and environment."""
    return ReleaserConfig(
        oci_registry="oci://ghcr.io/acme",
        oci_username="bot",
        charts_dir="charts/",
        install_dir="/tmp/cra/linux-amd64",
        install_dir_derived=True,
        github_repository="acme/charts",
        github_token="gh-token",
        oci_password="oci-password",
    )


@pytest.fixture
def mock_io():
    """A Mock with the IOLayer interface; files are checked on the real disk."""
    io_layer = Mock(spec=IOLayer)
    io_layer.dry_run = False
    io_layer.file_exists.side_effect = lambda path: IOLayer.file_exists(io_layer, path)
    io_layer.release_exists.return_value = False
    io_layer.lookup_latest_tag.return_value = "v1.0.0"
    io_layer.changed_files.return_value = []
    return io_layer
