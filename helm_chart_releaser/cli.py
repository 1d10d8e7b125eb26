#!/usr/bin/env python3

"""
Helm Chart Release Script

Packages every chart changed since the last release, pushes it to an OCI
registry and publishes it as a GitHub release. The decisions live in
release_planner, all I/O goes through the I/O layer.
"""

import logging
import os
import sys

import click
from git.exc import GitCommandError
from github.GithubException import GithubException

from .config import DEFAULT_HELM_VERSION
from .environment import ReleaserConfig
from .exceptions import ReleaserError
from .git_operations import setup_git_client
from .io_layer import IOLayer
from .release_executor import release_charts, write_run_outputs
from .utils import setup_logging

logger = logging.getLogger(__name__)


class TrueFalse(click.ParamType):
    """A flag value that must be literally "true" or "false"."""

    name = "true|false"

    def convert(self, value, param, ctx):
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in ("true", "false"):
            return text == "true"
        self.fail(f"{value!r} is not one of 'true', 'false'.", param, ctx)


TRUE_FALSE = TrueFalse()


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-v", "--version", "helm_version", default=DEFAULT_HELM_VERSION, show_default=True,
              help="The helm version to use.")
@click.option("-d", "--charts-dir", help="The charts directory (default either: helm, chart or charts).")
@click.option("-u", "--oci-username", help="The username used to login to the OCI registry.")
@click.option("-r", "--oci-registry", help="The OCI registry.")
@click.option("-p", "--oci-path", help="The OCI path to construct full path as {oci-registry}/{oci-path}.")
@click.option("-t", "--tag-name-pattern",
              help="GitHub release naming pattern, must contain '{chartName}' (ex. '{chartName}-chart').")
@click.option("--install-dir", help="Custom helm install dir.")
@click.option("--skip-helm-install", type=TRUE_FALSE, default="false", show_default=True,
              help="Skip helm installation.")
@click.option("--skip-dependencies", type=TRUE_FALSE, default="false", show_default=True,
              help="Skip dependencies update from Chart.yaml to dir charts/ before packaging.")
@click.option("--skip-existing", type=TRUE_FALSE, default="true", show_default=True,
              help="Skip the chart push if the GitHub release exists.")
@click.option("--skip-oci-login", is_flag=True, help="Skip the OCI registry login.")
@click.option("-l", "--mark-as-latest", type=TRUE_FALSE, default="true", show_default=True,
              help="Mark the created GitHub release as 'latest'.")
@click.option("--skip-gh-release", type=TRUE_FALSE, default="false", show_default=True,
              help="Skip the GitHub release creation.")
@click.option("--debug", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, **params) -> None:
    """Release changed Helm charts to an OCI registry and GitHub releases.

    Requires GITHUB_TOKEN, and OCI_PASSWORD unless --skip-oci-login is set.
    Set DRY_RUN=true to print mutating commands instead of running them.
    """
    config = ReleaserConfig.from_args(params, os.environ)
    setup_logging(logging.DEBUG if config.debug else logging.INFO)
    logger.debug(f"Parsed configuration: {config}")

    errors = config.validate()
    if errors:
        click.echo(f"ERROR: {errors[0]}", err=True)
        click.echo(ctx.get_help(), err=True)
        sys.exit(1)

    config.export_helm_env()
    if config.dry_run:
        print("===> DRY-RUN: TRUE")

    try:
        repo, github_repo = setup_git_client(config.github_token, config.github_repository)
        original_dir = os.getcwd()
        os.chdir(repo.working_tree_dir)
        try:
            io_layer = IOLayer(repo, github_repo, config.dry_run)
            result = release_charts(config, io_layer)
            write_run_outputs(result)
        finally:
            os.chdir(original_dir)
    except (ReleaserError, GitCommandError, GithubException) as e:
        click.echo(f"ERROR: {e}", err=True)
        sys.exit(1)

    if result.released_charts:
        print(f"Released {len(result.released_charts)} chart(s): {', '.join(result.released_charts)}")
    print("Chart release process completed")


def main(argv=None):
    """Main entry point; usage errors exit with status 1."""
    try:
        exit_code = cli.main(args=argv, prog_name="helm-chart-releaser", standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(1)
    sys.exit(exit_code or 0)


if __name__ == "__main__":
    main()
