"""Builders for synthetic project models — use in unit and CLI tests.

Usage::

    from depcompliance.testing import module, resolved, unresolved

    project = ProjectModel(root=module(
        ":",
        dependencies=[resolved("a:a:1.0"), unresolved("b:b:2.0")],
        repositories=["MavenRepo"],
    ))
"""

from __future__ import annotations

from typing import Any

from depcompliance.models.project import (
    BuildModule,
    BuildScript,
    DeclaredRepository,
    DependencyOutcome,
    DependencySet,
    ModuleComponentId,
    ProjectComponentId,
    ResolvedDependency,
    UnresolvedDependency,
)


def resolved(notation: str) -> ResolvedDependency:
    """``"g:n:v"`` resolves to an external module, ``":path"`` to a sub-project."""
    if notation.startswith(":"):
        return ResolvedDependency(selected=ProjectComponentId(project_path=notation))
    group, name, version = notation.split(":")
    return ResolvedDependency(selected=ModuleComponentId(group=group, module=name, version=version))


def unresolved(notation: str) -> UnresolvedDependency:
    return UnresolvedDependency(attempted=notation)


def dependency_set(
    outcomes: list[DependencyOutcome], name: str = "runtimeClasspath", resolvable: bool = True
) -> DependencySet:
    return DependencySet(name=name, outcomes=list(outcomes), can_be_resolved=resolvable)


def module(
    path: str = ":",
    dependencies: list[DependencyOutcome] | None = None,
    repositories: list[str] | None = None,
    classpath: list[DependencyOutcome] | None = None,
    build_repositories: list[str] | None = None,
    children: list[BuildModule] | None = None,
    extra_sets: list[DependencySet] | None = None,
) -> BuildModule:
    """Build a module with one runtime dependency set and a build script."""
    sets = [dependency_set(dependencies)] if dependencies is not None else []
    sets.extend(extra_sets or [])
    return BuildModule(
        path=path,
        dependency_sets=sets,
        repositories=[DeclaredRepository(name=r) for r in repositories or []],
        buildscript=BuildScript(
            classpath=dependency_set(classpath or [], name="classpath"),
            repositories=[DeclaredRepository(name=r) for r in build_repositories or []],
        ),
        children=list(children or []),
    )


def export_document(
    dependencies: list[dict[str, Any]] | None = None,
    repositories: list[dict[str, Any]] | None = None,
    classpath: list[dict[str, Any]] | None = None,
    build_repositories: list[dict[str, Any]] | None = None,
    subprojects: list[dict[str, Any]] | None = None,
    path: str = ":",
) -> dict[str, Any]:
    """A project-model export document (the JSON shape the loader reads)."""
    return {
        "path": path,
        "configurations": [
            {"name": "runtimeClasspath", "canBeResolved": True, "dependencies": dependencies or []}
        ],
        "repositories": repositories or [],
        "buildscript": {
            "classpath": classpath or [],
            "repositories": build_repositories or [],
        },
        "subprojects": subprojects or [],
    }


def selected(notation: str) -> dict[str, Any]:
    """Export entry for a resolved dependency, same notation as :func:`resolved`."""
    if notation.startswith(":"):
        return {"selected": {"project": notation}}
    group, name, version = notation.split(":")
    return {"selected": {"group": group, "module": name, "version": version}}


def attempted(notation: str) -> dict[str, Any]:
    return {"attempted": notation}
