"""CLI entry point: nuget-inspector.

Subcommands:
    nuget-inspector inspect App.sln                       # inspect a solution
    nuget-inspector inspect src/App/App.csproj -o out     # inspect one project
    nuget-inspector inspect App.sln --excluded-modules ".*Tests$" --ignore-failure
"""

from __future__ import annotations

import sys

import click
import structlog

from nuget_inspector.core.logging import setup_logging
from nuget_inspector.inspectors import inspect as run_inspection
from nuget_inspector.models import ResultStatus
from nuget_inspector.nuget.search import DEFAULT_PACKAGES_REPO_URL, NugetSearchService
from nuget_inspector.options import InspectionOptions
from nuget_inspector.writer import write_result

log = structlog.get_logger("nuget_inspector.cli")


@click.group()
def main() -> None:
    """nuget-inspector: NuGet dependency graphs for .NET solutions and projects."""


@main.command("inspect")
@click.argument("target", type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option(
    "-o",
    "--output-directory",
    envvar="NUGET_INSPECTOR_OUTPUT_DIRECTORY",
    default=None,
    help="Directory the inspection JSON is written to",
)
@click.option(
    "--included-modules",
    envvar="NUGET_INSPECTOR_INCLUDED_MODULES",
    default=None,
    help="Comma-separated project names or regexes to inspect (overrides excludes)",
)
@click.option(
    "--excluded-modules",
    envvar="NUGET_INSPECTOR_EXCLUDED_MODULES",
    default=None,
    help="Comma-separated project names or regexes to skip",
)
@click.option(
    "--ignore-failure",
    envvar="NUGET_INSPECTOR_IGNORE_FAILURE",
    is_flag=True,
    help="Record failing projects as empty instead of aborting",
)
@click.option(
    "--packages-repo-url",
    envvar="NUGET_INSPECTOR_PACKAGES_REPO_URL",
    default=DEFAULT_PACKAGES_REPO_URL,
    show_default=True,
    help="NuGet v3 service index used to look up package dependencies",
)
@click.option("--offline", is_flag=True, help="Do not query the package registry")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def inspect_command(
    target: str,
    output_directory: str | None,
    included_modules: str | None,
    excluded_modules: str | None,
    ignore_failure: bool,
    packages_repo_url: str,
    offline: bool,
    verbose: bool,
) -> None:
    """Inspect a solution or project file and write its dependency graph."""
    setup_logging(verbose=verbose)

    options = InspectionOptions(
        target_path=target,
        output_directory=output_directory,
        included_modules=included_modules,
        excluded_modules=excluded_modules,
        ignore_failure=ignore_failure,
        verbose=verbose,
        packages_repo_url=packages_repo_url,
    )

    if offline:
        result = run_inspection(options)
    else:
        with NugetSearchService(packages_repo_url) as nuget_service:
            result = run_inspection(options, nuget_service=nuget_service)

    if result.status is ResultStatus.ERROR:
        click.echo(f"Inspection failed: {result.error}", err=True)
        sys.exit(1)

    path = write_result(result)
    click.echo(str(path))


if __name__ == "__main__":
    main()
