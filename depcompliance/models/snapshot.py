"""The assembled, exportable result of one invocation."""

from __future__ import annotations

from dataclasses import dataclass

from depcompliance.models.coordinates import ModuleCoordinate, RepositoryCoordinate


@dataclass(frozen=True)
class ComplianceSnapshot:
    """Filtered and ordered dependencies and repositories, runtime and build-time.

    Dependency tuples are in report order. Repository tuples are ordered by
    name but compare as collections only by content and position.
    """

    dependencies: tuple[ModuleCoordinate, ...] = ()
    build_dependencies: tuple[ModuleCoordinate, ...] = ()
    repositories: tuple[RepositoryCoordinate, ...] = ()
    build_repositories: tuple[RepositoryCoordinate, ...] = ()
