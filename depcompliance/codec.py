"""Report codec — ComplianceSnapshot <-> JSON document.

Document shape::

    {
      "dependencies":       [{"group": ..., "name": ..., "version": ...}, ...],
      "buildDependencies":  [{"group": ..., "name": ..., "version": ...}, ...],
      "repositories":       [{"name": ..., "url": ...}, ...],
      "buildRepositories":  [{"name": ..., "url": ...}, ...]
    }

``url`` is optional. Unknown keys are ignored on read; missing keys fail.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from depcompliance.exceptions import DecodeError, ReportIOError
from depcompliance.models.coordinates import ModuleCoordinate, RepositoryCoordinate
from depcompliance.models.snapshot import ComplianceSnapshot

log = structlog.get_logger("depcompliance.codec")

CHARSET = "utf-8"


# ── Document schemas ──────────────────────────────────────────────────────


class DependencyEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    group: str
    name: str
    version: str


class RepositoryEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    url: str | None = None


class ComplianceReport(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    dependencies: list[DependencyEntry]
    build_dependencies: list[DependencyEntry] = Field(alias="buildDependencies")
    repositories: list[RepositoryEntry]
    build_repositories: list[RepositoryEntry] = Field(alias="buildRepositories")


# ── Conversion ────────────────────────────────────────────────────────────


def _dependency_entries(coordinates: tuple[ModuleCoordinate, ...]) -> list[DependencyEntry]:
    return [DependencyEntry(group=c.group, name=c.name, version=c.version) for c in coordinates]


def _repository_entries(repositories: tuple[RepositoryCoordinate, ...]) -> list[RepositoryEntry]:
    return [RepositoryEntry(name=r.name, url=r.url) for r in repositories]


def encode_snapshot(snapshot: ComplianceSnapshot) -> str:
    """Serialize *snapshot* to its canonical JSON text."""
    report = ComplianceReport(
        dependencies=_dependency_entries(snapshot.dependencies),
        build_dependencies=_dependency_entries(snapshot.build_dependencies),
        repositories=_repository_entries(snapshot.repositories),
        build_repositories=_repository_entries(snapshot.build_repositories),
    )
    return report.model_dump_json(by_alias=True, exclude_none=True, indent=2) + "\n"


def decode_snapshot(text: str | bytes) -> ComplianceSnapshot:
    """Parse a JSON report back into a :class:`ComplianceSnapshot`.

    Raises:
        DecodeError: if the text is not JSON or a required field is missing
            or has the wrong type.
    """
    try:
        report = ComplianceReport.model_validate_json(text)
    except ValidationError as e:
        raise DecodeError(f"Invalid compliance report: {e}") from e

    return ComplianceSnapshot(
        dependencies=tuple(
            ModuleCoordinate(group=d.group, name=d.name, version=d.version)
            for d in report.dependencies
        ),
        build_dependencies=tuple(
            ModuleCoordinate(group=d.group, name=d.name, version=d.version)
            for d in report.build_dependencies
        ),
        repositories=tuple(RepositoryCoordinate(name=r.name, url=r.url) for r in report.repositories),
        build_repositories=tuple(
            RepositoryCoordinate(name=r.name, url=r.url) for r in report.build_repositories
        ),
    )


# ── Files ─────────────────────────────────────────────────────────────────


def write_report(snapshot: ComplianceSnapshot, path: Path) -> None:
    """Write the encoded snapshot to *path* atomically.

    The document is written to a temp file next to *path* and renamed over
    it, so readers never see a half-written report.
    """
    content = encode_snapshot(snapshot)
    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
        with os.fdopen(fd, "w", encoding=CHARSET) as fh:
            fh.write(content)
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise ReportIOError(f"Cannot write compliance report '{path}': {e}") from e
    log.info("report.written", path=str(path), bytes=len(content.encode(CHARSET)))


def read_report(path: Path) -> ComplianceSnapshot:
    """Read and decode the report at *path*."""
    try:
        text = path.read_text(encoding=CHARSET)
    except OSError as e:
        raise ReportIOError(f"Cannot read compliance report '{path}': {e}") from e
    except UnicodeDecodeError as e:
        raise DecodeError(f"Compliance report '{path}' is not valid UTF-8: {e}") from e
    return decode_snapshot(text)
