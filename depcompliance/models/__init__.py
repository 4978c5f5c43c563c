"""Value types shared by the walker, the report assembler and the codec."""

from depcompliance.models.coordinates import (
    MAVEN_LOCAL,
    ModuleCoordinate,
    RepositoryCoordinate,
    sort_coordinates,
    sort_repositories,
)
from depcompliance.models.snapshot import ComplianceSnapshot

__all__ = [
    "MAVEN_LOCAL",
    "ComplianceSnapshot",
    "ModuleCoordinate",
    "RepositoryCoordinate",
    "sort_coordinates",
    "sort_repositories",
]
