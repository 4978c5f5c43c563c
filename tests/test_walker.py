"""Tests for GraphWalker against synthetic project models."""

from __future__ import annotations

import pytest

from depcompliance.exceptions import ResolutionError
from depcompliance.models.coordinates import ModuleCoordinate, RepositoryCoordinate
from depcompliance.models.project import ProjectModel
from depcompliance.testing import dependency_set, module, resolved, unresolved
from depcompliance.walker import GraphWalker, resolve_dependency_set


def _c(notation: str) -> ModuleCoordinate:
    group, name, version = notation.split(":")
    return ModuleCoordinate(group, name, version)


# ── resolve_dependency_set ───────────────────────────────────────────────


class TestResolveDependencySet:
    def test_maps_external_modules(self):
        ds = dependency_set([resolved("a:a:1.0"), resolved("b:b:2.0")])
        assert resolve_dependency_set(ds) == {_c("a:a:1.0"), _c("b:b:2.0")}

    def test_project_components_dropped(self):
        ds = dependency_set([resolved("a:a:1.0"), resolved(":core"), resolved(":lib")])
        assert resolve_dependency_set(ds) == {_c("a:a:1.0")}

    def test_duplicate_edges_collapse(self):
        ds = dependency_set([resolved("a:a:1.0"), resolved("a:a:1.0")])
        assert resolve_dependency_set(ds) == {_c("a:a:1.0")}

    def test_empty_set(self):
        assert resolve_dependency_set(dependency_set([])) == set()

    def test_single_unresolved(self):
        ds = dependency_set([resolved("a:a:1.0"), unresolved("commons-io:commons-io:2.11.0")])
        with pytest.raises(ResolutionError) as exc_info:
            resolve_dependency_set(ds)
        assert str(exc_info.value) == (
            "The following dependencies cannot be resolved: [commons-io:commons-io:2.11.0]"
        )

    def test_all_unresolved_listed_in_encounter_order(self):
        ds = dependency_set(
            [unresolved("a:b:1.0"), resolved("x:x:1"), unresolved("c:d:2.0"), unresolved("a:b:1.0")]
        )
        with pytest.raises(ResolutionError) as exc_info:
            resolve_dependency_set(ds)
        assert exc_info.value.unresolved == ["a:b:1.0", "c:d:2.0"]
        assert str(exc_info.value) == (
            "The following dependencies cannot be resolved: [a:b:1.0, c:d:2.0]"
        )

    def test_unknown_outcome_rejected(self):
        ds = dependency_set([object()])  # type: ignore[list-item]
        with pytest.raises(TypeError):
            resolve_dependency_set(ds)


# ── GraphWalker ──────────────────────────────────────────────────────────


def _tree() -> ProjectModel:
    return ProjectModel(
        root=module(
            ":",
            dependencies=[resolved("b:b:2.0"), resolved("a:a:1.0"), resolved(":lib")],
            repositories=["MavenRepo", "MavenLocal"],
            classpath=[resolved("org.gradle:plugin:0.9")],
            build_repositories=["Gradle Central Plugin Repository"],
            children=[
                module(
                    ":lib",
                    dependencies=[resolved("a:a:1.0"), resolved("c:c:3.0")],
                    repositories=["MavenRepo", "internal"],
                    classpath=[resolved("org.gradle:plugin:0.9"), resolved("x:tool:1")],
                    build_repositories=["MavenLocal"],
                ),
            ],
        )
    )


class TestGraphWalkerDependencies:
    def test_union_across_modules_sorted(self):
        walker = GraphWalker(_tree())
        assert walker.resolve_dependencies() == [_c("a:a:1.0"), _c("b:b:2.0"), _c("c:c:3.0")]

    def test_build_dependencies(self):
        walker = GraphWalker(_tree())
        assert walker.resolve_build_dependencies() == [_c("org.gradle:plugin:0.9"), _c("x:tool:1")]

    def test_ignore_policy_applied(self):
        walker = GraphWalker(_tree(), ignored=frozenset({_c("a:a:1.0"), _c("x:tool:1")}))
        assert walker.resolve_dependencies() == [_c("b:b:2.0"), _c("c:c:3.0")]
        assert walker.resolve_build_dependencies() == [_c("org.gradle:plugin:0.9")]

    def test_ignore_entry_not_in_graph_has_no_effect(self):
        walker = GraphWalker(_tree(), ignored=frozenset({_c("zzz:zzz:9")}))
        assert walker.resolve_dependencies() == GraphWalker(_tree()).resolve_dependencies()

    def test_non_resolvable_sets_skipped(self):
        root = module(
            ":",
            dependencies=[resolved("a:a:1.0")],
            extra_sets=[
                dependency_set([unresolved("never:resolved:1")], name="api", resolvable=False)
            ],
        )
        assert GraphWalker(ProjectModel(root=root)).resolve_dependencies() == [_c("a:a:1.0")]

    def test_unresolved_in_sub_project_fails_everything(self):
        root = module(
            ":",
            dependencies=[resolved("a:a:1.0")],
            children=[module(":lib", dependencies=[unresolved("commons-io:commons-io:2.11.0")])],
        )
        with pytest.raises(ResolutionError, match=r"\[commons-io:commons-io:2.11.0\]"):
            GraphWalker(ProjectModel(root=root)).resolve_dependencies()

    def test_unresolved_build_dependency_does_not_affect_runtime_axis(self):
        root = module(":", dependencies=[resolved("a:a:1.0")], classpath=[unresolved("p:p:1")])
        walker = GraphWalker(ProjectModel(root=root))
        assert walker.resolve_dependencies() == [_c("a:a:1.0")]
        with pytest.raises(ResolutionError):
            walker.resolve_build_dependencies()

    def test_deterministic(self):
        first = GraphWalker(_tree()).resolve_dependencies()
        for _ in range(5):
            assert GraphWalker(_tree()).resolve_dependencies() == first


class TestGraphWalkerRepositories:
    def test_flattened_and_deduplicated(self):
        names = {r.name for r in GraphWalker(_tree()).resolve_repositories()}
        assert names == {"MavenRepo", "MavenLocal", "internal"}

    def test_maven_local_kept_by_default(self):
        assert RepositoryCoordinate("MavenLocal") in GraphWalker(_tree()).resolve_build_repositories()

    def test_maven_local_suppressed(self):
        walker = GraphWalker(_tree(), ignore_maven_local=True)
        assert {r.name for r in walker.resolve_repositories()} == {"MavenRepo", "internal"}
        assert {r.name for r in walker.resolve_build_repositories()} == {
            "Gradle Central Plugin Repository"
        }

    def test_only_exact_name_suppressed(self):
        root = module(":", repositories=["mavenLocal", "MavenLocal2", "MavenLocal"])
        walker = GraphWalker(ProjectModel(root=root), ignore_maven_local=True)
        assert {r.name for r in walker.resolve_repositories()} == {"mavenLocal", "MavenLocal2"}


class TestAllModules:
    def test_parents_before_children(self):
        root = module(":", children=[module(":a", children=[module(":a:x")]), module(":b")])
        paths = [m.path for m in ProjectModel(root=root).all_modules()]
        assert paths == [":", ":a", ":a:x", ":b"]
