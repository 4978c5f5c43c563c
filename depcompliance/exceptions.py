"""Custom exceptions for dependency-compliance."""

from __future__ import annotations


class ComplianceError(Exception):
    """Base exception for all dependency-compliance errors."""


class ResolutionError(ComplianceError):
    """Raised when one or more dependencies of a dependency set cannot be resolved."""

    def __init__(self, unresolved: list[str]):
        self.unresolved = unresolved
        super().__init__(
            f"The following dependencies cannot be resolved: [{', '.join(unresolved)}]"
        )


class ConfigurationError(ComplianceError):
    """Raised when the ignore-policy or a config source is malformed."""

    def __init__(self, message: str, pattern: str | None = None):
        self.pattern = pattern
        super().__init__(message)


class DecodeError(ComplianceError):
    """Raised when a compliance report document is structurally invalid."""


class ProjectModelError(ComplianceError):
    """Raised when the exported project model cannot be loaded."""


class ReportIOError(ComplianceError):
    """Raised when reading or writing the report file fails."""
