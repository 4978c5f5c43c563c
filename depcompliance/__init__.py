"""Dependency compliance: audit the external dependencies of a multi-module build."""

__version__ = "0.1.0"

from depcompliance.check import ComplianceCheckResult, check_compliance
from depcompliance.codec import decode_snapshot, encode_snapshot, read_report, write_report
from depcompliance.config import ComplianceSettings, load_settings
from depcompliance.exceptions import (
    ComplianceError,
    ConfigurationError,
    DecodeError,
    ProjectModelError,
    ReportIOError,
    ResolutionError,
)
from depcompliance.ignore_policy import filter_ignored, parse_ignore_patterns
from depcompliance.models import ComplianceSnapshot, ModuleCoordinate, RepositoryCoordinate
from depcompliance.report import assemble_snapshot, build_snapshot
from depcompliance.walker import GraphWalker

__all__ = [
    "ComplianceCheckResult",
    "ComplianceError",
    "ComplianceSettings",
    "ComplianceSnapshot",
    "ConfigurationError",
    "DecodeError",
    "GraphWalker",
    "ModuleCoordinate",
    "ProjectModelError",
    "RepositoryCoordinate",
    "ReportIOError",
    "ResolutionError",
    "assemble_snapshot",
    "build_snapshot",
    "check_compliance",
    "decode_snapshot",
    "encode_snapshot",
    "filter_ignored",
    "load_settings",
    "parse_ignore_patterns",
    "read_report",
    "write_report",
]
