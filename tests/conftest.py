"""Shared pytest fixtures for dependency-compliance tests."""

import json
import logging

import pytest
import structlog

from depcompliance.testing import attempted, export_document, selected


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "DEPCOMPLIANCE_IGNORE",
        "DEPCOMPLIANCE_IGNORE_MAVEN_LOCAL",
        "DEPCOMPLIANCE_OUTPUT_FILE",
        "DEPCOMPLIANCE_LOG_LEVEL",
        "DEPCOMPLIANCE_LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers installed by setup_logging; CliRunner closes their streams."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            root.removeHandler(handler)


@pytest.fixture
def model_file(tmp_path):
    """A two-module export: root uses a:a and b:b, sub-project :lib uses c:c."""
    doc = export_document(
        dependencies=[selected("a:a:1.0"), selected("b:b:2.0"), selected(":lib")],
        repositories=[
            {"name": "MavenRepo", "url": "https://repo.maven.apache.org/maven2/"},
            {"name": "MavenLocal"},
        ],
        classpath=[selected("org.gradle:plugin:0.9")],
        build_repositories=[{"name": "Gradle Central Plugin Repository"}],
        subprojects=[
            export_document(path=":lib", dependencies=[selected("c:c:3.0")]),
        ],
    )
    path = tmp_path / "model.json"
    path.write_text(json.dumps(doc))
    return path


@pytest.fixture
def unresolvable_model_file(tmp_path):
    doc = export_document(
        dependencies=[selected("a:a:1.0"), attempted("commons-io:commons-io:2.11.0")],
    )
    path = tmp_path / "unresolvable.json"
    path.write_text(json.dumps(doc))
    return path
