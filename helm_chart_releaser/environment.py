"""
Environment Configuration Module

Builds the run configuration from command line parameters and environment
variables, and validates it. Apart from exporting the helm home variables
in export_helm_env(), this module has no side effects.
"""

import logging
import os
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, MutableMapping

from .config import CHART_NAME_PLACEHOLDER, DEFAULT_HELM_VERSION, HELM_ARCH

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReleaserConfig:
    """Configuration parsed from CLI flags and environment variables."""

    oci_registry: str
    helm_version: str = DEFAULT_HELM_VERSION
    charts_dir: str = ""
    oci_username: str = ""
    oci_path: str = ""
    tag_name_pattern: str = ""
    install_dir: str = ""
    install_dir_derived: bool = False
    skip_helm_install: bool = False
    skip_dependencies: bool = False
    skip_existing: bool = True
    skip_oci_login: bool = False
    mark_as_latest: bool = True
    skip_gh_release: bool = False
    dry_run: bool = False
    debug: bool = False
    github_repository: str = ""
    github_token: str = field(default="", repr=False)
    oci_password: str = field(default="", repr=False)

    @classmethod
    def from_args(cls, params: Mapping[str, Any], env: Mapping[str, str]) -> "ReleaserConfig":
        """Create configuration from parsed CLI parameters and environment variables.

        Args:
            params: Parsed command line parameters (already converted to
                their Python types by the CLI layer)
            env: Dictionary of environment variables (typically os.environ)

        Returns:
            ReleaserConfig instance
        """
        install_dir = params.get("install_dir") or ""
        install_dir_derived = not install_dir
        if install_dir_derived:
            # use /tmp or RUNNER_TOOL_CACHE in GitHub Actions
            install_dir = f"{env.get('RUNNER_TOOL_CACHE') or '/tmp'}/cra/{HELM_ARCH}"
            logger.debug(f"Setting default install_dir={install_dir}")

        return cls(
            oci_registry=params.get("oci_registry") or "",
            helm_version=params.get("helm_version") or DEFAULT_HELM_VERSION,
            charts_dir=params.get("charts_dir") or "",
            oci_username=params.get("oci_username") or "",
            oci_path=params.get("oci_path") or "",
            tag_name_pattern=params.get("tag_name_pattern") or "",
            install_dir=install_dir,
            install_dir_derived=install_dir_derived,
            skip_helm_install=_flag(params, "skip_helm_install", False),
            skip_dependencies=_flag(params, "skip_dependencies", False),
            skip_existing=_flag(params, "skip_existing", True),
            skip_oci_login=_flag(params, "skip_oci_login", False),
            mark_as_latest=_flag(params, "mark_as_latest", True),
            skip_gh_release=_flag(params, "skip_gh_release", False),
            dry_run=env.get("DRY_RUN", "false").lower() == "true",
            debug=_flag(params, "debug", False) or env.get("DEBUG", "false").lower() == "true",
            github_repository=env.get("GITHUB_REPOSITORY", ""),
            github_token=env.get("GITHUB_TOKEN", ""),
            oci_password=env.get("OCI_PASSWORD", ""),
        )

    def validate(self) -> List[str]:
        """Validate the configuration.

        Checks run in priority order, so the first entry is the one to
        report when failing fast.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []

        if not self.oci_registry:
            errors.append("'-r|--oci-registry' is required.")

        if not self.skip_oci_login and not self.oci_username:
            errors.append("'-u|--oci-username' is required unless you skip oci login.")

        if self.tag_name_pattern and CHART_NAME_PLACEHOLDER not in self.tag_name_pattern:
            errors.append(f"Name pattern must contain '{CHART_NAME_PLACEHOLDER}' field.")

        if not self.github_token:
            errors.append("Environment variable GITHUB_TOKEN must be set")

        if not self.skip_oci_login and not self.oci_password:
            errors.append("Environment variable OCI_PASSWORD must be set unless you skip oci login.")

        return errors

    def helm_env(self) -> Dict[str, str]:
        """Helm home directories under the derived install directory."""
        if not self.install_dir_derived:
            return {}
        return {
            "HELM_CACHE_HOME": f"{self.install_dir}/.cache",
            "HELM_CONFIG_HOME": f"{self.install_dir}/.config",
            "HELM_DATA_HOME": f"{self.install_dir}/.share",
        }

    def export_helm_env(self, env: MutableMapping[str, str] = None) -> None:
        """Export the HELM_* variables when the install directory was derived."""
        if env is None:
            env = os.environ
        for key, value in self.helm_env().items():
            env[key] = value
        if self.install_dir_derived:
            logger.debug("Set HELM_* environment variables")

    def with_charts_dir(self, charts_dir: str) -> "ReleaserConfig":
        """Return a copy with the located charts directory."""
        return replace(self, charts_dir=charts_dir)


def _flag(params: Mapping[str, Any], name: str, default: bool) -> bool:
    value = params.get(name)
    return default if value is None else bool(value)
