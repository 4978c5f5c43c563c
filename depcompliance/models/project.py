"""Project model — the already-resolved dependency graph handed over by the build tool.

These types describe the host tool's side of the boundary. The walker only
reads them; nothing in here resolves anything.

Outcome kinds form closed unions:

    ComponentId        = ModuleComponentId | ProjectComponentId
    DependencyOutcome  = ResolvedDependency | UnresolvedDependency
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Union


# ── Component identities ──────────────────────────────────────────────────


@dataclass(frozen=True)
class ModuleComponentId:
    """A component fetched from an external repository."""

    group: str
    module: str
    version: str


@dataclass(frozen=True)
class ProjectComponentId:
    """A component built by the project itself (e.g. a sibling sub-project)."""

    project_path: str


ComponentId = Union[ModuleComponentId, ProjectComponentId]


# ── Resolution outcomes ───────────────────────────────────────────────────


@dataclass(frozen=True)
class ResolvedDependency:
    """An edge of the graph that resolved to a selected component."""

    selected: ComponentId


@dataclass(frozen=True)
class UnresolvedDependency:
    """An edge of the graph the build tool could not resolve."""

    attempted: str  # display name, e.g. "commons-io:commons-io:2.11.0"


DependencyOutcome = Union[ResolvedDependency, UnresolvedDependency]


# ── Declarations ──────────────────────────────────────────────────────────


@dataclass
class DependencySet:
    """One resolvable unit of dependency declarations (a configuration)."""

    name: str
    outcomes: list[DependencyOutcome] = field(default_factory=list)
    can_be_resolved: bool = True


@dataclass
class DeclaredRepository:
    name: str
    url: str | None = None


@dataclass
class BuildScript:
    """The build-tooling axis of a module: its classpath and repositories."""

    classpath: DependencySet = field(default_factory=lambda: DependencySet(name="classpath"))
    repositories: list[DeclaredRepository] = field(default_factory=list)


@dataclass
class BuildModule:
    """A node of the module tree (the root project or a sub-project)."""

    path: str
    dependency_sets: list[DependencySet] = field(default_factory=list)
    repositories: list[DeclaredRepository] = field(default_factory=list)
    buildscript: BuildScript = field(default_factory=BuildScript)
    children: list[BuildModule] = field(default_factory=list)


@dataclass
class ProjectModel:
    """The whole module tree, rooted at ``root``."""

    root: BuildModule

    def all_modules(self) -> Iterator[BuildModule]:
        """Yield the root and every sub-project, depth first, parents before children."""
        stack = [self.root]
        while stack:
            module = stack.pop()
            yield module
            stack.extend(reversed(module.children))
