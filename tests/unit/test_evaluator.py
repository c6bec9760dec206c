"""
Unit tests: graph evaluator

Deterministic order, dependency checks and lifecycle hooks
"""

import pytest

from buildorch.core.errors import EvaluationError, EvaluationOrderError
from buildorch.core.graph import ProjectGraph
from buildorch.executor.evaluator import (
    GraphEvaluator,
    check_dependencies,
    evaluate_graph,
    select_next_project,
)


def create_graph(tmp_path, names):
    graph = ProjectGraph.create("android", tmp_path)
    for name in names:
        graph.add_project(name)
    return graph


class TestSelectNextProject:
    """Tie breaking among ready projects"""

    def test_empty(self):
        """Empty"""
        assert select_next_project([], {}) is None

    def test_declaration_order_wins(self, tmp_path):
        """Declaration order wins"""
        graph = create_graph(tmp_path, ["b", "a"])
        order = {p.path: i for i, p in enumerate(graph.all_projects)}
        selected = select_next_project(graph.subprojects, order)
        assert selected.name == "b"

    def test_path_breaks_remaining_ties(self, tmp_path):
        """Path breaks remaining ties"""
        graph = create_graph(tmp_path, ["b", "a"])
        selected = select_next_project(graph.subprojects, {})
        assert selected.name == "a"


class TestCheckDependencies:
    """Static validation of ordering edges"""

    def test_unknown_target(self, tmp_path):
        """Unknown target"""
        graph = create_graph(tmp_path, ["lib1"])
        graph.project(":lib1").evaluation_depends_on(":app")
        with pytest.raises(EvaluationOrderError):
            check_dependencies(graph)

    def test_cycle(self, tmp_path):
        """Cycle"""
        graph = create_graph(tmp_path, ["a", "b", "c"])
        graph.project(":a").evaluation_depends_on(":b")
        graph.project(":b").evaluation_depends_on(":c")
        graph.project(":c").evaluation_depends_on(":a")

        with pytest.raises(EvaluationOrderError) as exc_info:
            check_dependencies(graph)
        assert exc_info.value.details["cycle"][0] == exc_info.value.details["cycle"][-1]

    def test_acyclic(self, tmp_path):
        """Acyclic"""
        graph = create_graph(tmp_path, ["app", "lib1", "lib2"])
        graph.project(":lib1").evaluation_depends_on(":app")
        graph.project(":lib2").evaluation_depends_on(":app")
        check_dependencies(graph)


class TestGraphEvaluator:
    """Configuration phase"""

    def test_root_first_then_declaration_order(self, tmp_path):
        """Root first then declaration order"""
        graph = create_graph(tmp_path, ["lib2", "lib1"])
        result = evaluate_graph(graph)

        assert result.order == [":", ":lib2", ":lib1"]
        assert all(p.evaluated for p in graph)
        assert graph.evaluated

    def test_dependencies_honoured(self, tmp_path):
        """Dependencies honoured"""
        graph = create_graph(tmp_path, ["lib1", "app", "lib2"])

        def root_script(project):
            graph.project(":lib1").evaluation_depends_on(":app")
            graph.project(":lib2").evaluation_depends_on(":app")

        graph.root.build_script = root_script
        result = evaluate_graph(graph)

        assert result.order == [":", ":app", ":lib1", ":lib2"]

    def test_dependency_declared_by_own_script_evaluated_on_the_spot(self, tmp_path):
        """Dependency declared by own script evaluated on the spot"""
        graph = create_graph(tmp_path, ["lib1", "app"])
        graph.project(":lib1").build_script = lambda p: p.evaluation_depends_on(":app")

        result = evaluate_graph(graph)

        assert result.order == [":", ":app", ":lib1"]

    def test_cycle_through_build_scripts(self, tmp_path):
        """Cycle through build scripts"""
        graph = create_graph(tmp_path, ["a", "b"])
        graph.project(":a").build_script = lambda p: p.evaluation_depends_on(":b")
        graph.project(":b").build_script = lambda p: p.evaluation_depends_on(":a")

        with pytest.raises(EvaluationOrderError):
            evaluate_graph(graph)

    def test_build_script_runs_before_after_evaluate(self, tmp_path):
        """Build script runs before after evaluate"""
        graph = create_graph(tmp_path, ["app"])
        app = graph.project(":app")
        calls = []

        def script(project):
            calls.append("script")
            project.apply_plugin("java")

        app.build_script = script
        app.after_evaluate(lambda p: calls.append(("after", p.plugins.ids())))

        result = evaluate_graph(graph)

        assert calls == ["script", ("after", ["java"])]
        assert result.deferred_actions[":app"] == 1

    def test_projects_evaluated_after_everything(self, tmp_path):
        """Projects evaluated after everything"""
        graph = create_graph(tmp_path, ["app", "lib1"])
        seen = []
        graph.projects_evaluated(lambda g: seen.append([p.evaluated for p in g]))

        evaluate_graph(graph)

        assert seen == [[True, True, True]]

    def test_build_script_errors_propagate(self, tmp_path):
        """Build script errors propagate"""
        graph = create_graph(tmp_path, ["app"])

        def failing(project):
            raise RuntimeError("broken build script")

        graph.project(":app").build_script = failing
        with pytest.raises(RuntimeError, match="broken build script"):
            evaluate_graph(graph)
        assert not graph.evaluated

    def test_evaluate_twice_rejected(self, tmp_path):
        """Evaluate twice rejected"""
        graph = create_graph(tmp_path, ["app"])
        evaluator = GraphEvaluator(graph)
        evaluator.evaluate()
        with pytest.raises(EvaluationError):
            evaluator.evaluate()

    def test_summary(self, tmp_path):
        """Summary"""
        graph = create_graph(tmp_path, ["app"])
        graph.project(":app").build_script = lambda p: p.apply_plugin("java")

        summary = evaluate_graph(graph).summary(graph)

        assert summary["evaluation_order"] == [":", ":app"]
        assert summary["projects"][":app"]["plugins"] == ["java"]
        assert summary["projects"][":app"]["toolchain"] is None
        assert summary["projects"][":"]["extensions"] == []


class TestEvaluatorErrorPaths:
    """Failed runs and late dependency declarations"""

    def test_reevaluate_after_failure_rejected(self, tmp_path):
        """A graph whose first run failed cannot be evaluated again"""
        graph = create_graph(tmp_path, ["app", "lib1"])
        root_runs = []
        graph.root.build_script = lambda p: root_runs.append(p.path)

        def failing(project):
            raise RuntimeError("broken build script")

        graph.project(":lib1").build_script = failing
        evaluator = GraphEvaluator(graph)
        with pytest.raises(RuntimeError):
            evaluator.evaluate()

        with pytest.raises(EvaluationError):
            evaluator.evaluate()
        with pytest.raises(EvaluationError):
            GraphEvaluator(graph).evaluate()
        assert root_runs == [":"]

    def test_unknown_dependency_from_own_script(self, tmp_path):
        """A build script depending on a missing project is an ordering error"""
        graph = create_graph(tmp_path, ["lib1"])
        graph.project(":lib1").build_script = lambda p: p.evaluation_depends_on(":nope")

        with pytest.raises(EvaluationOrderError) as exc_info:
            evaluate_graph(graph)
        assert exc_info.value.details == {"project": ":lib1", "depends_on": ":nope"}

    def test_dependency_from_after_evaluate_enforced(self, tmp_path):
        """Dependencies declared by deferred actions are evaluated before completion"""
        graph = create_graph(tmp_path, ["lib1", "app"])
        graph.project(":lib1").after_evaluate(lambda p: p.evaluation_depends_on(":app"))

        result = evaluate_graph(graph)

        assert result.order == [":", ":app", ":lib1"]

    def test_unknown_dependency_from_after_evaluate(self, tmp_path):
        """Deferred actions cannot depend on a missing project"""
        graph = create_graph(tmp_path, ["lib1"])
        graph.project(":lib1").after_evaluate(lambda p: p.evaluation_depends_on(":nope"))

        with pytest.raises(EvaluationOrderError):
            evaluate_graph(graph)

    def test_cycle_from_after_evaluate(self, tmp_path):
        """A deferred dependency back onto an evaluating project is a cycle"""
        graph = create_graph(tmp_path, ["a", "b"])
        graph.project(":a").after_evaluate(lambda p: p.evaluation_depends_on(":b"))
        graph.project(":b").build_script = lambda p: p.evaluation_depends_on(":a")

        with pytest.raises(EvaluationOrderError):
            evaluate_graph(graph)
