"""
Graph evaluator

Runs the configuration phase of a project graph: the root first, then the
remaining projects in a deterministic order that honours their evaluation
dependencies, then the graph-wide ``projects_evaluated`` listeners.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple

from ..core.errors import EvaluationError, EvaluationOrderError
from ..core.extensions import JavaPluginExtension
from ..core.graph import ProjectGraph
from ..core.project import EvaluationState, Project

logger = logging.getLogger(__name__)


def select_next_project(
    ready: List[Project], project_order: Dict[str, int]
) -> Optional[Project]:
    """
    Pick the next project to evaluate

    Priority:
    1. earlier declaration in the graph
    2. project path in lexicographic order
    """
    if not ready:
        return None

    def sort_key(project: Project) -> Tuple[float, str]:
        return (project_order.get(project.path, float("inf")), project.path)

    return sorted(ready, key=sort_key)[0]


def check_dependencies(graph: ProjectGraph) -> None:
    """
    Verify every evaluation dependency targets a known project and that the
    dependencies are acyclic

    Raises:
        EvaluationOrderError: unknown target or cycle
    """
    projects = {p.path: p for p in graph.all_projects}
    for project in projects.values():
        for target in project.evaluation_dependencies:
            if target not in projects:
                raise EvaluationOrderError(
                    f"Project {project.path} depends on unknown project {target}",
                    {"project": project.path, "depends_on": target},
                )

    visiting: Set[str] = set()
    done: Set[str] = set()

    def visit(path: str, trail: List[str]) -> None:
        if path in done:
            return
        if path in visiting:
            cycle = trail[trail.index(path):] + [path]
            raise EvaluationOrderError(
                f"Evaluation dependency cycle: {' -> '.join(cycle)}",
                {"cycle": cycle},
            )
        visiting.add(path)
        for target in projects[path].evaluation_dependencies:
            visit(target, trail + [path])
        visiting.discard(path)
        done.add(path)

    for path in projects:
        visit(path, [])


@dataclass
class EvaluationResult:
    """Outcome of a configuration phase"""

    order: List[str] = field(default_factory=list)
    deferred_actions: Dict[str, int] = field(default_factory=dict)

    def summary(self, graph: ProjectGraph) -> Dict[str, Any]:
        projects = {}
        for project in graph.all_projects:
            java = project.extensions.find_by_type(JavaPluginExtension)
            projects[project.path] = {
                "name": project.name,
                "build_dir": str(project.build_dir),
                "plugins": project.plugins.ids(),
                "extensions": project.extensions.names(),
                "toolchain": java.toolchain.language_version if java else None,
                "evaluation_depends_on": list(project.evaluation_dependencies),
                "repositories": list(project.repositories),
                "tasks": project.tasks.names(),
            }
        return {"evaluation_order": list(self.order), "projects": projects}


class GraphEvaluator:
    """
    Configuration phase driver

    Single threaded. Errors raised by build scripts or deferred actions
    propagate unchanged and leave the graph partially evaluated.
    """

    def __init__(self, graph: ProjectGraph):
        self.graph = graph
        self.project_order = {p.path: i for i, p in enumerate(graph.all_projects)}

    def evaluate(self) -> EvaluationResult:
        # a failed run leaves the root evaluated or evaluating, never unevaluated
        if self.graph.evaluated or self.graph.root.state != EvaluationState.UNEVALUATED:
            raise EvaluationError("Project graph has already been evaluated")

        result = EvaluationResult()

        # root script declares the ordering of everything else
        self._evaluate_project(self.graph.root, result)
        check_dependencies(self.graph)

        while True:
            pending = [p for p in self.graph.subprojects if not p.evaluated]
            if not pending:
                break
            ready = [p for p in pending if self._is_ready(p)]
            project = select_next_project(ready, self.project_order)
            if project is None:
                raise EvaluationOrderError(
                    "No project is ready for evaluation",
                    {"pending": [p.path for p in pending]},
                )
            self._evaluate_project(project, result)

        self.graph.evaluated = True
        self.graph.fire_projects_evaluated()

        logger.info(
            "Project graph evaluated",
            extra={"order": result.order},
        )
        return result

    def _is_ready(self, project: Project) -> bool:
        for path in project.evaluation_dependencies:
            target = self.graph.find_project(path)
            if target is None:
                raise EvaluationOrderError(
                    f"Project {project.path} depends on unknown project {path}",
                    {"project": project.path, "depends_on": path},
                )
            if not target.evaluated:
                return False
        return True

    def _evaluate_project(self, project: Project, result: EvaluationResult) -> None:
        logger.debug("Evaluating project", extra={"project": project.path})
        project.state = EvaluationState.EVALUATING

        if project.build_script is not None:
            project.build_script(project)

        self._evaluate_dependencies(project, result)
        result.deferred_actions[project.path] = project.fire_after_evaluate()
        # deferred actions may declare dependencies too
        self._evaluate_dependencies(project, result)
        project.state = EvaluationState.EVALUATED
        result.order.append(project.path)

    def _evaluate_dependencies(self, project: Project, result: EvaluationResult) -> None:
        """Evaluate dependencies declared while the project was being configured"""
        for path in list(project.evaluation_dependencies):
            target = self.graph.find_project(path)
            if target is None:
                raise EvaluationOrderError(
                    f"Project {project.path} depends on unknown project {path}",
                    {"project": project.path, "depends_on": path},
                )
            if target.state == EvaluationState.EVALUATING:
                raise EvaluationOrderError(
                    f"Evaluation dependency cycle between {project.path} and {path}",
                    {"project": project.path, "depends_on": path},
                )
            if target.state == EvaluationState.UNEVALUATED:
                self._evaluate_project(target, result)


def evaluate_graph(graph: ProjectGraph) -> EvaluationResult:
    """Evaluate a graph with the default evaluator"""
    return GraphEvaluator(graph).evaluate()
