"""Ignore-policy — parse ``group:name:version`` patterns and filter by them.

Matching is exact structural equality. There is no glob or prefix support.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from depcompliance.exceptions import ConfigurationError
from depcompliance.models.coordinates import ModuleCoordinate

log = structlog.get_logger("depcompliance.ignore")


def parse_ignore_pattern(pattern: str) -> ModuleCoordinate:
    """Parse one ``group:name:version`` pattern.

    Raises :class:`ConfigurationError` unless the pattern splits into exactly
    three non-empty parts.
    """
    parts = pattern.strip().split(":")
    if len(parts) != 3 or not all(parts):
        raise ConfigurationError(
            f"Invalid ignore pattern '{pattern}': expected 'group:name:version'",
            pattern=pattern,
        )
    group, name, version = parts
    return ModuleCoordinate(group=group, name=name, version=version)


def parse_ignore_patterns(patterns: Iterable[str]) -> frozenset[ModuleCoordinate]:
    """Parse every non-blank pattern into the set of coordinates to suppress."""
    ignored = frozenset(parse_ignore_pattern(p) for p in patterns if p.strip())
    log.debug("ignore.loaded", count=len(ignored))
    return ignored


def is_ignored(coordinate: ModuleCoordinate, ignored: frozenset[ModuleCoordinate]) -> bool:
    return coordinate in ignored


def filter_ignored(
    coordinates: Iterable[ModuleCoordinate],
    ignored: frozenset[ModuleCoordinate],
) -> list[ModuleCoordinate]:
    """Drop ignored coordinates, keeping the order of the rest."""
    return [c for c in coordinates if not is_ignored(c, ignored)]
