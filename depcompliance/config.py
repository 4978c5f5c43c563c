"""Settings for the ignore-policy, the local-cache flag and the report path.

Values are layered, lowest precedence first:

    1. ``[tool.dependency-compliance]`` in an optional TOML config file
       (a relative ``output-file`` is taken relative to that file)
    2. environment variables (DEPCOMPLIANCE_IGNORE, DEPCOMPLIANCE_IGNORE_MAVEN_LOCAL,
       DEPCOMPLIANCE_OUTPUT_FILE)
    3. explicit CLI options

Ignore patterns are parsed here, so a malformed pattern fails before any
graph is walked.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from depcompliance.exceptions import ConfigurationError
from depcompliance.ignore_policy import parse_ignore_patterns
from depcompliance.models.coordinates import ModuleCoordinate

DEFAULT_OUTPUT_FILE = Path("dependency-compliance-report.json")
CONFIG_TABLE = "dependency-compliance"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class ComplianceSettings:
    ignore: frozenset[ModuleCoordinate] = frozenset()
    ignore_maven_local: bool = False
    output_file: Path = DEFAULT_OUTPUT_FILE


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got '{value}'")


def load_config_file(path: Path) -> dict[str, Any]:
    """Read the ``[tool.dependency-compliance]`` table of a TOML file.

    A file without the table yields an empty dict.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file '{path}': {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigurationError(f"Config file '{path}' is not valid UTF-8: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in config file '{path}': {e}") from e

    table = data.get("tool", {}).get(CONFIG_TABLE, {})
    if not isinstance(table, dict):
        raise ConfigurationError(f"[tool.{CONFIG_TABLE}] in '{path}' must be a table")

    values: dict[str, Any] = {}
    if "ignore" in table:
        ignore = table["ignore"]
        if not isinstance(ignore, list) or not all(isinstance(p, str) for p in ignore):
            raise ConfigurationError(f"'ignore' in '{path}' must be a list of strings")
        values["ignore"] = ignore
    if "ignore-maven-local" in table:
        if not isinstance(table["ignore-maven-local"], bool):
            raise ConfigurationError(f"'ignore-maven-local' in '{path}' must be a boolean")
        values["ignore_maven_local"] = table["ignore-maven-local"]
    if "output-file" in table:
        if not isinstance(table["output-file"], str):
            raise ConfigurationError(f"'output-file' in '{path}' must be a string")
        values["output_file"] = path.parent / table["output-file"]
    return values


def _env_values() -> dict[str, Any]:
    values: dict[str, Any] = {}
    ignore = os.environ.get("DEPCOMPLIANCE_IGNORE")
    if ignore is not None:
        values["ignore"] = ignore.split(",")
    ignore_maven_local = os.environ.get("DEPCOMPLIANCE_IGNORE_MAVEN_LOCAL")
    if ignore_maven_local is not None:
        values["ignore_maven_local"] = _parse_bool(
            "DEPCOMPLIANCE_IGNORE_MAVEN_LOCAL", ignore_maven_local
        )
    output_file = os.environ.get("DEPCOMPLIANCE_OUTPUT_FILE")
    if output_file:
        values["output_file"] = output_file
    return values


def load_settings(
    config_file: Path | None = None,
    ignore: list[str] | None = None,
    ignore_maven_local: bool | None = None,
    output_file: Path | None = None,
) -> ComplianceSettings:
    """Build settings from config file, environment and explicit overrides.

    ``None`` for an override means "not given". A non-empty ``ignore`` list
    replaces the ignore list of lower layers rather than extending it.
    """
    values: dict[str, Any] = {}
    if config_file is not None:
        values.update(load_config_file(config_file))
    values.update(_env_values())
    if ignore:
        values["ignore"] = ignore
    if ignore_maven_local is not None:
        values["ignore_maven_local"] = ignore_maven_local
    if output_file is not None:
        values["output_file"] = output_file

    return ComplianceSettings(
        ignore=parse_ignore_patterns(values.get("ignore", [])),
        ignore_maven_local=values.get("ignore_maven_local", False),
        output_file=Path(values.get("output_file", DEFAULT_OUTPUT_FILE)),
    )
