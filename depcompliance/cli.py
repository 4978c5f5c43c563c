"""CLI entry point: depcompliance.

Subcommands:
    depcompliance list model.json -o report.json   # Write the compliance report
    depcompliance check model.json -r report.json  # Fail on anything not in the report
    depcompliance ignored model.json               # Show the ignored dependencies
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any, NoReturn

import click
import structlog

from depcompliance.check import check_compliance
from depcompliance.codec import read_report, write_report
from depcompliance.config import ComplianceSettings, load_settings
from depcompliance.core.logging import setup_logging
from depcompliance.exceptions import ComplianceError
from depcompliance.loader import load_project_model
from depcompliance.models.coordinates import ModuleCoordinate, sort_coordinates
from depcompliance.report import build_snapshot
from depcompliance.walker import GraphWalker

log = structlog.get_logger("depcompliance.cli")


def _settings_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by every command that reads the compliance settings."""
    func = click.option(
        "--ignore-maven-local/--no-ignore-maven-local",
        default=None,
        help="Drop the local Maven cache repository from the report",
    )(func)
    func = click.option(
        "--ignore",
        "ignore",
        multiple=True,
        metavar="GROUP:NAME:VERSION",
        help="Dependency to leave out of the report (repeatable)",
    )(func)
    func = click.option(
        "--config",
        "config_file",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="TOML file with a [tool.dependency-compliance] table",
    )(func)
    return func


def _fail(error: ComplianceError) -> NoReturn:
    click.echo(str(error), err=True)
    sys.exit(1)


def _load(
    model: Path,
    config_file: Path | None,
    ignore: tuple[str, ...],
    ignore_maven_local: bool | None,
    output_file: Path | None = None,
) -> tuple[ComplianceSettings, GraphWalker]:
    settings = load_settings(
        config_file=config_file,
        ignore=list(ignore),
        ignore_maven_local=ignore_maven_local,
        output_file=output_file,
    )
    project = load_project_model(model)
    return settings, GraphWalker(project, settings.ignore, settings.ignore_maven_local)


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(verbose: bool) -> None:
    """Dependency compliance: list and check the external dependencies of a build."""
    setup_logging(verbose=verbose)


@main.command("list")
@click.argument("model", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-o",
    "--output",
    "output_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Report file (default: dependency-compliance-report.json)",
)
@_settings_options
def list_dependencies(
    model: Path,
    output_file: Path | None,
    config_file: Path | None,
    ignore: tuple[str, ...],
    ignore_maven_local: bool | None,
) -> None:
    """Write the compliance report; fail if any dependency is unresolved."""
    try:
        settings, walker = _load(model, config_file, ignore, ignore_maven_local, output_file)
        snapshot = build_snapshot(walker)
        write_report(snapshot, settings.output_file)
    except ComplianceError as e:
        _fail(e)

    click.echo(f"Compliance report written to {settings.output_file}")
    click.echo(f"  Dependencies: {len(snapshot.dependencies)}")
    click.echo(f"  Build dependencies: {len(snapshot.build_dependencies)}")
    click.echo(f"  Repositories: {len(snapshot.repositories)}")
    click.echo(f"  Build repositories: {len(snapshot.build_repositories)}")


@main.command("check")
@click.argument("model", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-r",
    "--report",
    "report_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Approved report (default: the configured output file)",
)
@_settings_options
def check(
    model: Path,
    report_file: Path | None,
    config_file: Path | None,
    ignore: tuple[str, ...],
    ignore_maven_local: bool | None,
) -> None:
    """Fail if the build uses anything the approved report does not list."""
    try:
        settings, walker = _load(model, config_file, ignore, ignore_maven_local, report_file)
        current = build_snapshot(walker)
        approved = read_report(settings.output_file)
    except ComplianceError as e:
        _fail(e)

    result = check_compliance(current, approved)
    for coordinate in result.unused_dependencies + result.unused_build_dependencies:
        click.echo(f"Listed but no longer used: {coordinate}")
    if not result.ok:
        for message in result.failure_messages():
            click.echo(message, err=True)
        sys.exit(1)
    click.echo(f"All dependencies are listed in {settings.output_file}")


@main.command("ignored")
@click.argument("model", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--no-resolve",
    is_flag=True,
    help="Only print the ignore-policy; do not walk the dependency graph",
)
@_settings_options
def ignored(
    model: Path,
    no_resolve: bool,
    config_file: Path | None,
    ignore: tuple[str, ...],
    ignore_maven_local: bool | None,
) -> None:
    """Show the dependencies the ignore-policy leaves out of the report."""
    in_use: set[ModuleCoordinate] | None = None
    try:
        settings = load_settings(
            config_file=config_file, ignore=list(ignore), ignore_maven_local=ignore_maven_local
        )
        if not no_resolve:
            unfiltered = GraphWalker(load_project_model(model))
            in_use = set(unfiltered.resolve_dependencies()) | set(
                unfiltered.resolve_build_dependencies()
            )
    except ComplianceError as e:
        _fail(e)

    click.echo("(DependencyCompliance) Ignoring these dependencies:")
    for coordinate in sort_coordinates(settings.ignore):
        click.echo(str(coordinate))

    if in_use is None:
        return
    stale = sort_coordinates(settings.ignore - in_use)
    if stale:
        log.warning("ignore.unused_entries", entries=[str(c) for c in stale])


if __name__ == "__main__":
    main()
