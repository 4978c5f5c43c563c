"""Report assembly — walker results into a :class:`ComplianceSnapshot`.

Usage:
    walker = GraphWalker(project, settings.ignore, settings.ignore_maven_local)
    snapshot = build_snapshot(walker)
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from depcompliance.models.coordinates import (
    ModuleCoordinate,
    RepositoryCoordinate,
    sort_repositories,
)
from depcompliance.models.snapshot import ComplianceSnapshot
from depcompliance.walker import GraphWalker

log = structlog.get_logger("depcompliance.report")


def assemble_snapshot(
    dependencies: Iterable[ModuleCoordinate],
    build_dependencies: Iterable[ModuleCoordinate],
    repositories: Iterable[RepositoryCoordinate],
    build_repositories: Iterable[RepositoryCoordinate],
) -> ComplianceSnapshot:
    """Combine already filtered and ordered results into one snapshot."""
    return ComplianceSnapshot(
        dependencies=tuple(dependencies),
        build_dependencies=tuple(build_dependencies),
        repositories=tuple(sort_repositories(repositories)),
        build_repositories=tuple(sort_repositories(build_repositories)),
    )


def build_snapshot(walker: GraphWalker) -> ComplianceSnapshot:
    """Walk both axes of the project and assemble the snapshot.

    Any :class:`ResolutionError` from the walker propagates untouched.
    """
    snapshot = assemble_snapshot(
        walker.resolve_dependencies(),
        walker.resolve_build_dependencies(),
        walker.resolve_repositories(),
        walker.resolve_build_repositories(),
    )
    log.info(
        "report.assembled",
        dependencies=len(snapshot.dependencies),
        build_dependencies=len(snapshot.build_dependencies),
        repositories=len(snapshot.repositories),
        build_repositories=len(snapshot.build_repositories),
    )
    return snapshot
