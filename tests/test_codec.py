"""Tests for the report codec and report files."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from depcompliance.codec import decode_snapshot, encode_snapshot, read_report, write_report
from depcompliance.exceptions import DecodeError, ReportIOError
from depcompliance.models.coordinates import ModuleCoordinate, RepositoryCoordinate
from depcompliance.models.snapshot import ComplianceSnapshot


def _snapshot() -> ComplianceSnapshot:
    return ComplianceSnapshot(
        dependencies=(ModuleCoordinate("a", "a", "1.0"), ModuleCoordinate("b", "b", "2.0")),
        build_dependencies=(ModuleCoordinate("org.gradle", "plugin", "0.9"),),
        repositories=(
            RepositoryCoordinate("MavenRepo", "https://repo.maven.apache.org/maven2/"),
            RepositoryCoordinate("internal"),
        ),
        build_repositories=(),
    )


class TestEncode:
    def test_document_shape(self):
        doc = json.loads(encode_snapshot(_snapshot()))
        assert set(doc) == {"dependencies", "buildDependencies", "repositories", "buildRepositories"}
        assert doc["dependencies"][0] == {"group": "a", "name": "a", "version": "1.0"}
        assert doc["buildDependencies"] == [{"group": "org.gradle", "name": "plugin", "version": "0.9"}]
        assert doc["repositories"] == [
            {"name": "MavenRepo", "url": "https://repo.maven.apache.org/maven2/"},
            {"name": "internal"},
        ]
        assert doc["buildRepositories"] == []

    def test_byte_identical(self):
        assert encode_snapshot(_snapshot()) == encode_snapshot(_snapshot())

    def test_ends_with_newline(self):
        assert encode_snapshot(ComplianceSnapshot()).endswith("}\n")


class TestDecode:
    def test_round_trip(self):
        snapshot = _snapshot()
        decoded = decode_snapshot(encode_snapshot(snapshot))
        assert decoded == snapshot
        assert decoded.repositories[0].url == "https://repo.maven.apache.org/maven2/"

    def test_unknown_fields_ignored(self):
        doc = {
            "dependencies": [{"group": "a", "name": "a", "version": "1.0", "license": "MIT"}],
            "buildDependencies": [],
            "repositories": [],
            "buildRepositories": [],
            "generatedBy": "future-version",
        }
        assert decode_snapshot(json.dumps(doc)).dependencies == (ModuleCoordinate("a", "a", "1.0"),)

    def test_missing_top_level_field(self):
        doc = {"dependencies": [], "repositories": [], "buildRepositories": []}
        with pytest.raises(DecodeError, match="buildDependencies"):
            decode_snapshot(json.dumps(doc))

    def test_missing_dependency_field(self):
        doc = {
            "dependencies": [{"group": "a", "name": "a"}],
            "buildDependencies": [],
            "repositories": [],
            "buildRepositories": [],
        }
        with pytest.raises(DecodeError):
            decode_snapshot(json.dumps(doc))

    def test_not_json(self):
        with pytest.raises(DecodeError):
            decode_snapshot("not json{{{")


class TestReportFiles:
    def test_write_then_read(self, tmp_path: Path):
        path = tmp_path / "reports" / "dependency-compliance-report.json"
        write_report(_snapshot(), path)
        assert read_report(path) == _snapshot()
        assert [p.name for p in path.parent.iterdir()] == [path.name]

    def test_read_invalid_utf8(self, tmp_path: Path):
        path = tmp_path / "report.json"
        path.write_bytes(b'{"dependencies": ["\xff"]}')
        with pytest.raises(DecodeError, match="not valid UTF-8"):
            read_report(path)

    def test_read_missing_file(self, tmp_path: Path):
        with pytest.raises(ReportIOError, match="Cannot read"):
            read_report(tmp_path / "missing.json")

    def test_failed_write_leaves_previous_report(self, tmp_path: Path):
        path = tmp_path / "report.json"
        path.write_text("previous")
        with patch("depcompliance.codec.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(ReportIOError, match="disk full"):
                write_report(_snapshot(), path)
        assert path.read_text() == "previous"
        assert [p.name for p in tmp_path.iterdir()] == ["report.json"]
