"""
Helm Operations Module for Helm Chart Releaser

This module builds and runs the helm commands needed for a release and
installs the helm binary when it is not provided by the environment.

Functions:
    install_helm: Makes a verified helm binary available on PATH
    registry_login: Logs helm into the OCI registry
    chart_info: Reads description, name and version of a chart
    package_chart: Packages a chart into its per-chart package directory
    push_chart: Pushes a packaged chart to the OCI registry
"""

import hashlib
import logging
import os
import shutil
import tarfile
import tempfile
from pathlib import Path
from typing import MutableMapping

import httpx
import yaml

from .config import HELM_ARCH, HELM_DOWNLOAD_URL
from .environment import ReleaserConfig
from .exceptions import PreconditionError
from .io_layer import IOLayer
from .models import ChartMetadata

logger = logging.getLogger(__name__)

OCI_SCHEME = "oci://"


# -----------------------------------------------------------------------------
# Installation
# -----------------------------------------------------------------------------

def install_helm(config: ReleaserConfig, env: MutableMapping[str, str] = None) -> None:
    """Make helm available, downloading and verifying it if needed.

    Args:
        config: Run configuration (helm version, install directory, skip flag)
        env: Environment whose PATH is updated (defaults to os.environ)

    Raises:
        PreconditionError: If helm install is skipped but helm is missing,
            or if the download fails or its checksum does not match
    """
    if env is None:
        env = os.environ

    if config.skip_helm_install:
        existing = shutil.which("helm", path=env.get("PATH"))
        if existing:
            print("Skipping helm install. Using existing helm...")
            logger.debug(f"Found existing helm at {existing}")
            return
        raise PreconditionError("Remove --skip-helm-install or preinstall!")

    install_dir = Path(config.install_dir)
    helm_bin = install_dir / "helm"
    if helm_bin.is_file() and os.access(helm_bin, os.X_OK):
        print("Helm is found in the install directory")
    else:
        install_dir.mkdir(parents=True, exist_ok=True)
        print(f"Installing Helm ({config.helm_version}) to {install_dir}...")
        _download_helm(config.helm_version, helm_bin)

    print("Setting PATH to use helm from the install directory...")
    env["PATH"] = f"{install_dir}{os.pathsep}{env.get('PATH', '')}"
    logger.debug(f"Updated PATH={env['PATH']}")


def _download_helm(version: str, helm_bin: Path) -> None:
    archive_name = f"helm-{version}-{HELM_ARCH}.tar.gz"
    url = f"{HELM_DOWNLOAD_URL}/{archive_name}"

    with tempfile.TemporaryDirectory() as tmp:
        archive = Path(tmp) / "helm.tar.gz"
        try:
            _download(url, archive)
            expected = httpx.get(f"{url}.sha256sum", follow_redirects=True)
            expected.raise_for_status()
        except httpx.HTTPError as e:
            raise PreconditionError(f"Failed to download helm {version}: {e}") from e

        expected_sha = expected.text.split()[0].lower() if expected.text.strip() else ""
        actual_sha = sha256_file(archive)
        logger.debug(f"Helm checksum expected={expected_sha} actual={actual_sha}")
        if actual_sha != expected_sha:
            raise PreconditionError("Aborting helm checksum is invalid")

        with tarfile.open(archive, "r:gz") as tar:
            member = tar.extractfile(f"{HELM_ARCH}/helm")
            if member is None:
                raise PreconditionError(f"{HELM_ARCH}/helm not found in {archive_name}")
            with member, open(helm_bin, "wb") as f:
                shutil.copyfileobj(member, f)
    helm_bin.chmod(0o755)


def _download(url: str, dest: Path) -> None:
    with httpx.stream("GET", url, follow_redirects=True) as response:
        response.raise_for_status()
        with open(dest, "wb") as f:
            for chunk in response.iter_bytes():
                f.write(chunk)


def sha256_file(path: Path) -> str:
    """Compute the hex SHA-256 digest of a file."""
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()


# -----------------------------------------------------------------------------
# Registry
# -----------------------------------------------------------------------------

def strip_oci_scheme(registry: str) -> str:
    """Drop a leading oci:// from a registry reference."""
    return registry[len(OCI_SCHEME):] if registry.startswith(OCI_SCHEME) else registry


def oci_host(registry: str) -> str:
    """Host part of a registry reference, e.g. ghcr.io for oci://ghcr.io/org."""
    return strip_oci_scheme(registry).split("/", 1)[0]


def registry_login(io_layer: IOLayer, config: ReleaserConfig) -> None:
    """Log helm into the OCI registry, password passed on stdin."""
    if config.skip_oci_login:
        print("Skipping helm login. Using existing credentials...")
        return

    host = oci_host(config.oci_registry)
    logger.debug(f"Executing helm login to {host} with username: {config.oci_username}")
    io_layer.run(
        ["helm", "registry", "login", "-u", config.oci_username, "--password-stdin", host],
        input=config.oci_password,
    )


def push_ref(config: ReleaserConfig, name: str) -> str:
    """Full OCI reference a chart is pushed to."""
    parts = [strip_oci_scheme(config.oci_registry)]
    if config.oci_path:
        parts.append(config.oci_path)
    parts.append(name)
    return OCI_SCHEME + "/".join(parts)


# -----------------------------------------------------------------------------
# Charts
# -----------------------------------------------------------------------------

def parse_chart_info(output: str) -> ChartMetadata:
    """Extract description, name and version from `helm show chart` output.

    Missing fields become empty strings.
    """
    try:
        data = yaml.safe_load(output)
    except yaml.YAMLError as e:
        logger.warning(f"Could not parse chart metadata: {e}")
        data = None
    if not isinstance(data, dict):
        data = {}

    def field(key: str) -> str:
        value = data.get(key)
        return "" if value is None else str(value)

    return ChartMetadata(description=field("description"), name=field("name"), version=field("version"))


def chart_info(io_layer: IOLayer, chart_dir: str) -> ChartMetadata:
    """Read a chart's metadata with `helm show chart`."""
    info = parse_chart_info(io_layer.read_command(["helm", "show", "chart", chart_dir]))
    logger.debug(f"Chart info: {info}")
    return info


def package_dir(config: ReleaserConfig, chart: str) -> str:
    """Directory a chart is packaged into."""
    return f"{config.install_dir}/package/{chart}"


def package_path(config: ReleaserConfig, chart: str, info: ChartMetadata) -> str:
    """Path of the packaged chart archive."""
    return f"{package_dir(config, chart)}/{info.name}-{info.version}.tgz"


def package_chart(io_layer: IOLayer, config: ReleaserConfig, chart: str) -> None:
    """Package a chart, updating its dependencies unless skipped."""
    cmd = ["helm", "package", chart]
    if not config.skip_dependencies:
        cmd.append("-u")
    cmd.extend(["-d", package_dir(config, chart)])

    print(f"Packaging chart '{chart}'...")
    io_layer.run(cmd)


def push_chart(io_layer: IOLayer, package: str, ref: str) -> None:
    """Push a packaged chart to the OCI registry."""
    logger.debug(f"Pushing chart to OCI registry: {ref}")
    io_layer.run(["helm", "push", package, ref])
