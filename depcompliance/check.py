"""Compliance check — compare the current build against an approved report.

The approved report is a previously written snapshot. Anything the build
uses now that the report does not list is a violation. Anything the report
lists that the build no longer uses is reported as unused, never as a
failure.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from depcompliance.models.coordinates import (
    ModuleCoordinate,
    RepositoryCoordinate,
    sort_coordinates,
    sort_repositories,
)
from depcompliance.models.snapshot import ComplianceSnapshot

log = structlog.get_logger("depcompliance.check")

_CATEGORY_LABELS = {
    "dependencies": "dependencies",
    "build_dependencies": "build dependencies",
    "repositories": "repositories",
    "build_repositories": "build repositories",
}


@dataclass
class ComplianceCheckResult:
    """Entries missing from (and unused in) the approved report, per category."""

    missing_dependencies: list[ModuleCoordinate] = field(default_factory=list)
    missing_build_dependencies: list[ModuleCoordinate] = field(default_factory=list)
    missing_repositories: list[RepositoryCoordinate] = field(default_factory=list)
    missing_build_repositories: list[RepositoryCoordinate] = field(default_factory=list)
    unused_dependencies: list[ModuleCoordinate] = field(default_factory=list)
    unused_build_dependencies: list[ModuleCoordinate] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not (
            self.missing_dependencies
            or self.missing_build_dependencies
            or self.missing_repositories
            or self.missing_build_repositories
        )

    def failure_messages(self) -> list[str]:
        """One line per category with violations, in a fixed category order."""
        messages = []
        for category, label in _CATEGORY_LABELS.items():
            missing = getattr(self, f"missing_{category}")
            if missing:
                names = ", ".join(str(entry) for entry in missing)
                messages.append(
                    f"The following {label} are not listed in the compliance report: [{names}]"
                )
        return messages


def _missing_coordinates(
    current: tuple[ModuleCoordinate, ...], approved: tuple[ModuleCoordinate, ...]
) -> list[ModuleCoordinate]:
    return sort_coordinates(set(current) - set(approved))


def _missing_repositories(
    current: tuple[RepositoryCoordinate, ...], approved: tuple[RepositoryCoordinate, ...]
) -> list[RepositoryCoordinate]:
    approved_names = {r.name for r in approved}
    return sort_repositories(r for r in set(current) if r.name not in approved_names)


def check_compliance(
    current: ComplianceSnapshot, approved: ComplianceSnapshot
) -> ComplianceCheckResult:
    """Compare *current* against *approved* and collect the differences."""
    result = ComplianceCheckResult(
        missing_dependencies=_missing_coordinates(current.dependencies, approved.dependencies),
        missing_build_dependencies=_missing_coordinates(
            current.build_dependencies, approved.build_dependencies
        ),
        missing_repositories=_missing_repositories(current.repositories, approved.repositories),
        missing_build_repositories=_missing_repositories(
            current.build_repositories, approved.build_repositories
        ),
        unused_dependencies=_missing_coordinates(approved.dependencies, current.dependencies),
        unused_build_dependencies=_missing_coordinates(
            approved.build_dependencies, current.build_dependencies
        ),
    )
    if not result.ok:
        log.warning(
            "check.violations",
            dependencies=len(result.missing_dependencies),
            build_dependencies=len(result.missing_build_dependencies),
            repositories=len(result.missing_repositories),
            build_repositories=len(result.missing_build_repositories),
        )
    return result
