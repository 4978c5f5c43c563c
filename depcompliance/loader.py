"""Project-model loader — read the build tool's resolved-graph export.

The export is one JSON object per module, nested through ``subprojects``.
See :class:`ModuleSchema` for the shape. Unknown keys are ignored so newer
exporters stay readable.
"""

from __future__ import annotations

from pathlib import Path

import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from depcompliance.exceptions import ProjectModelError
from depcompliance.models.project import (
    BuildModule,
    BuildScript,
    ComponentId,
    DeclaredRepository,
    DependencyOutcome,
    DependencySet,
    ModuleComponentId,
    ProjectComponentId,
    ProjectModel,
    ResolvedDependency,
    UnresolvedDependency,
)

log = structlog.get_logger("depcompliance.loader")


# ── Export schemas ────────────────────────────────────────────────────────


class SelectedSchema(BaseModel):
    """Either ``{group, module, version}`` or ``{project}``."""

    model_config = ConfigDict(extra="ignore")

    group: str | None = None
    module: str | None = None
    version: str | None = None
    project: str | None = None

    @model_validator(mode="after")
    def _exactly_one_kind(self) -> SelectedSchema:
        module_fields = (self.group, self.module, self.version)
        is_module = all(f is not None for f in module_fields)
        if is_module == (self.project is not None):
            raise ValueError("selected must have either group/module/version or project")
        if not is_module and any(f is not None for f in module_fields):
            raise ValueError("selected project component must not carry module fields")
        return self


class OutcomeSchema(BaseModel):
    """Either ``{selected: ...}`` or ``{attempted: "..."}``."""

    model_config = ConfigDict(extra="ignore")

    selected: SelectedSchema | None = None
    attempted: str | None = None

    @model_validator(mode="after")
    def _exactly_one_kind(self) -> OutcomeSchema:
        if (self.selected is None) == (self.attempted is None):
            raise ValueError("dependency must have exactly one of 'selected' or 'attempted'")
        return self


class ConfigurationSchema(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str
    can_be_resolved: bool = Field(default=True, alias="canBeResolved")
    dependencies: list[OutcomeSchema] = Field(default_factory=list)


class RepositorySchema(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    url: str | None = None


class BuildScriptSchema(BaseModel):
    model_config = ConfigDict(extra="ignore")

    classpath: list[OutcomeSchema] = Field(default_factory=list)
    repositories: list[RepositorySchema] = Field(default_factory=list)


class ModuleSchema(BaseModel):
    model_config = ConfigDict(extra="ignore")

    path: str = ":"
    configurations: list[ConfigurationSchema] = Field(default_factory=list)
    repositories: list[RepositorySchema] = Field(default_factory=list)
    buildscript: BuildScriptSchema = Field(default_factory=BuildScriptSchema)
    subprojects: list[ModuleSchema] = Field(default_factory=list)


# ── Conversion ────────────────────────────────────────────────────────────


def _component(selected: SelectedSchema) -> ComponentId:
    if selected.project is not None:
        return ProjectComponentId(project_path=selected.project)
    return ModuleComponentId(
        group=selected.group,  # type: ignore[arg-type]
        module=selected.module,  # type: ignore[arg-type]
        version=selected.version,  # type: ignore[arg-type]
    )


def _outcome(schema: OutcomeSchema) -> DependencyOutcome:
    if schema.attempted is not None:
        return UnresolvedDependency(attempted=schema.attempted)
    return ResolvedDependency(selected=_component(schema.selected))  # type: ignore[arg-type]


def _repositories(schemas: list[RepositorySchema]) -> list[DeclaredRepository]:
    return [DeclaredRepository(name=r.name, url=r.url) for r in schemas]


def _module(schema: ModuleSchema) -> BuildModule:
    return BuildModule(
        path=schema.path,
        dependency_sets=[
            DependencySet(
                name=c.name,
                outcomes=[_outcome(d) for d in c.dependencies],
                can_be_resolved=c.can_be_resolved,
            )
            for c in schema.configurations
        ],
        repositories=_repositories(schema.repositories),
        buildscript=BuildScript(
            classpath=DependencySet(
                name="classpath",
                outcomes=[_outcome(d) for d in schema.buildscript.classpath],
            ),
            repositories=_repositories(schema.buildscript.repositories),
        ),
        children=[_module(child) for child in schema.subprojects],
    )


def parse_project_model(text: str | bytes) -> ProjectModel:
    """Parse an exported project model document."""
    try:
        root = ModuleSchema.model_validate_json(text)
    except ValidationError as e:
        raise ProjectModelError(f"Invalid project model: {e}") from e
    return ProjectModel(root=_module(root))


def load_project_model(path: Path) -> ProjectModel:
    """Read and parse the project model exported to *path*."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ProjectModelError(f"Cannot read project model '{path}': {e}") from e
    except UnicodeDecodeError as e:
        raise ProjectModelError(f"Project model '{path}' is not valid UTF-8: {e}") from e
    model = parse_project_model(text)
    log.debug(
        "loader.project_model_loaded",
        path=str(path),
        modules=sum(1 for _ in model.all_modules()),
    )
    return model
