"""
Configuration Module for Helm Chart Releaser

This module contains constants shared across the application: defaults for
the helm download, conventional chart directory names and the names of the
output records consumed by later workflow steps.

Constants:
    DEFAULT_HELM_VERSION: Helm release installed when no version is given
    HELM_ARCH: Platform suffix of the official helm release archives
    HELM_DOWNLOAD_URL: Base URL of the official helm release archives
    CHART_FILE: Name of the chart descriptor file
    CHART_NAME_PLACEHOLDER: Token substituted with the chart name in tag patterns
    SINGLE_CHART_DIRS: Directory names probed for a single-chart repository
    DEFAULT_CHARTS_DIR: Charts root used when no single-chart directory exists
    RELEASED_CHARTS_FILE: Output record listing released chart paths
    CHART_VERSION_FILE: Output record holding the reference version
"""

import platform

DEFAULT_HELM_VERSION = "v3.13.2"
# Official helm is available only for x86_64
HELM_ARCH = f"{platform.system().lower()}-amd64"
HELM_DOWNLOAD_URL = "https://get.helm.sh"

CHART_FILE = "Chart.yaml"
CHART_NAME_PLACEHOLDER = "{chartName}"
SINGLE_CHART_DIRS = ("helm", "chart")
DEFAULT_CHARTS_DIR = "charts/"

RELEASED_CHARTS_FILE = "released_charts.txt"
CHART_VERSION_FILE = "chart_version.txt"
