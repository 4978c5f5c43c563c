"""GraphWalker — collect external dependencies and repositories across a module tree.

For each resolvable dependency set the walker either gets a clean set of
module coordinates or raises :class:`ResolutionError` naming every
unresolved attempt. Results of all sets are unioned, sorted, and only then
run through the ignore-policy.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from depcompliance.exceptions import ResolutionError
from depcompliance.ignore_policy import filter_ignored
from depcompliance.models.coordinates import (
    MAVEN_LOCAL,
    ModuleCoordinate,
    RepositoryCoordinate,
    sort_coordinates,
)
from depcompliance.models.project import (
    ComponentId,
    DeclaredRepository,
    DependencySet,
    ModuleComponentId,
    ProjectComponentId,
    ProjectModel,
    ResolvedDependency,
    UnresolvedDependency,
)

log = structlog.get_logger("depcompliance.walker")


def resolve_dependency_set(dependency_set: DependencySet) -> set[ModuleCoordinate]:
    """Map one resolved dependency set to its external module coordinates.

    Ignored coordinates are *not* removed here; filtering happens once, after
    all sets have been merged.

    Raises:
        ResolutionError: if any outcome of the set is unresolved.
    """
    unresolved: list[str] = []
    resolved: list[ResolvedDependency] = []
    for outcome in dependency_set.outcomes:
        if isinstance(outcome, UnresolvedDependency):
            unresolved.append(outcome.attempted)
        elif isinstance(outcome, ResolvedDependency):
            resolved.append(outcome)
        else:
            raise TypeError(f"Unknown dependency outcome: {outcome!r}")

    if unresolved:
        attempted = list(dict.fromkeys(unresolved))
        log.error(
            "walker.unresolved_dependencies",
            dependency_set=dependency_set.name,
            unresolved=attempted,
        )
        raise ResolutionError(attempted)

    coordinates: set[ModuleCoordinate] = set()
    for outcome in resolved:
        coordinate = _to_coordinate(outcome.selected)
        if coordinate is not None:
            coordinates.add(coordinate)

    log.debug(
        "walker.dependency_set_resolved",
        dependency_set=dependency_set.name,
        outcomes=len(dependency_set.outcomes),
        modules=len(coordinates),
    )
    return coordinates


def _to_coordinate(selected: ComponentId) -> ModuleCoordinate | None:
    """External modules become coordinates; project-internal components are dropped."""
    if isinstance(selected, ModuleComponentId):
        return ModuleCoordinate(group=selected.group, name=selected.module, version=selected.version)
    if isinstance(selected, ProjectComponentId):
        return None
    raise TypeError(f"Unknown component identity: {selected!r}")


class GraphWalker:
    """Walk a :class:`ProjectModel` with a fixed ignore-policy.

    Parameters
    ----------
    project:
        The module tree to walk.
    ignored:
        Coordinates to drop from the dependency results.
    ignore_maven_local:
        If ``True``, the local Maven cache repository is dropped from the
        repository results.
    """

    def __init__(
        self,
        project: ProjectModel,
        ignored: frozenset[ModuleCoordinate] = frozenset(),
        ignore_maven_local: bool = False,
    ) -> None:
        self._project = project
        self._ignored = ignored
        self._ignore_maven_local = ignore_maven_local

    # ── dependencies ─────────────────────────────────────────────────────

    def resolve_dependencies(self) -> list[ModuleCoordinate]:
        """All external dependencies of every resolvable set of every module."""
        dependency_sets = [
            dependency_set
            for module in self._project.all_modules()
            for dependency_set in module.dependency_sets
            if dependency_set.can_be_resolved
        ]
        return self._collect(dependency_sets)

    def resolve_build_dependencies(self) -> list[ModuleCoordinate]:
        """All external dependencies of every module's build script classpath."""
        dependency_sets = [module.buildscript.classpath for module in self._project.all_modules()]
        return self._collect(dependency_sets)

    def _collect(self, dependency_sets: Iterable[DependencySet]) -> list[ModuleCoordinate]:
        merged: set[ModuleCoordinate] = set()
        for dependency_set in dependency_sets:
            merged |= resolve_dependency_set(dependency_set)
        ordered = sort_coordinates(merged)
        kept = filter_ignored(ordered, self._ignored)
        if len(kept) != len(ordered):
            log.info("walker.dependencies_ignored", ignored=len(ordered) - len(kept))
        return kept

    # ── repositories ─────────────────────────────────────────────────────

    def resolve_repositories(self) -> set[RepositoryCoordinate]:
        """Every repository declared by any module."""
        return self._collect_repositories(
            repo for module in self._project.all_modules() for repo in module.repositories
        )

    def resolve_build_repositories(self) -> set[RepositoryCoordinate]:
        """Every repository declared by any module's build script."""
        return self._collect_repositories(
            repo
            for module in self._project.all_modules()
            for repo in module.buildscript.repositories
        )

    def _collect_repositories(
        self, declared: Iterable[DeclaredRepository]
    ) -> set[RepositoryCoordinate]:
        repositories = {RepositoryCoordinate(name=r.name, url=r.url) for r in declared}
        if self._ignore_maven_local:
            repositories = {r for r in repositories if r.name != MAVEN_LOCAL}
        return repositories
