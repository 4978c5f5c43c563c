"""Coordinate value types that a compliance report is made of."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

# Name the build tool gives to the local Maven cache repository.
MAVEN_LOCAL = "MavenLocal"


@dataclass(frozen=True, order=True)
class ModuleCoordinate:
    """One external dependency, identified by group, name and version.

    Equality and ordering are structural: group first, then name, then
    version, each compared as plain text. ``1.10`` sorts before ``1.9``.
    """

    group: str
    name: str
    version: str

    def __str__(self) -> str:
        return f"{self.group}:{self.name}:{self.version}"


@dataclass(frozen=True)
class RepositoryCoordinate:
    """An artifact source declared by a build module.

    Identity is the declared name; the URL is carried along for the report
    but does not take part in equality.
    """

    name: str
    url: str | None = field(default=None, compare=False)

    def __str__(self) -> str:
        return self.name


def sort_coordinates(coordinates: Iterable[ModuleCoordinate]) -> list[ModuleCoordinate]:
    """Return *coordinates* in report order (group, name, version)."""
    return sorted(coordinates)


def sort_repositories(repositories: Iterable[RepositoryCoordinate]) -> list[RepositoryCoordinate]:
    """Return *repositories* ordered by name, for stable report output."""
    return sorted(repositories, key=lambda r: r.name)
