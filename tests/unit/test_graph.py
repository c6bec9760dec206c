"""
Unit tests: project graph
"""

import pytest

from buildorch.core.errors import ConfigurationError, UnknownProjectError
from buildorch.core.graph import ProjectGraph


class TestProjectGraph:
    """Construction and lookups"""

    def test_subprojects_keep_declaration_order(self, tmp_path):
        """Subprojects keep declaration order"""
        graph = ProjectGraph.create("android", tmp_path)
        for name in ["lib2", "app", "lib1"]:
            graph.add_project(name)

        assert [p.name for p in graph.subprojects] == ["lib2", "app", "lib1"]
        assert [p.path for p in graph.all_projects] == [":", ":lib2", ":app", ":lib1"]
        assert len(graph) == 4

    def test_unknown_project(self, tmp_path):
        """Unknown project"""
        graph = ProjectGraph.create("android", tmp_path)
        with pytest.raises(UnknownProjectError):
            graph.project(":missing")
        assert graph.find_project("missing") is None

    def test_duplicate_project_rejected(self, tmp_path):
        """Duplicate project rejected"""
        graph = ProjectGraph.create("android", tmp_path)
        graph.add_project("app")
        with pytest.raises(ConfigurationError):
            graph.add_project("app")

    @pytest.mark.parametrize("name", ["", "a:b"])
    def test_invalid_project_name(self, tmp_path, name):
        """Invalid project name"""
        graph = ProjectGraph.create("android", tmp_path)
        with pytest.raises(ConfigurationError):
            graph.add_project(name)

    def test_allprojects_and_each_subproject(self, tmp_path):
        """Allprojects and each subproject"""
        graph = ProjectGraph.create("android", tmp_path)
        graph.add_project("app")
        seen_all, seen_sub = [], []

        graph.allprojects(lambda p: seen_all.append(p.path))
        graph.each_subproject(lambda p: seen_sub.append(p.path))

        assert seen_all == [":", ":app"]
        assert seen_sub == [":app"]

    def test_projects_evaluated_listeners_fire_once(self, tmp_path):
        """Projects evaluated listeners fire once"""
        graph = ProjectGraph.create("android", tmp_path)
        calls = []
        graph.projects_evaluated(lambda g: calls.append("a"))
        graph.projects_evaluated(lambda g: calls.append("b"))

        graph.fire_projects_evaluated()
        graph.fire_projects_evaluated()

        assert calls == ["a", "b"]
