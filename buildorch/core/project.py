"""
Project node

A project is one unit of the build graph: it owns an output directory, the
plugins applied to it, the extensions those plugins attached, its tasks and
the ordering dependencies it declares on other projects.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from .errors import ConfigurationError
from .extensions import ExtensionContainer
from .plugins import PluginContainer, PluginDeclaration
from .tasks import TaskContainer

logger = logging.getLogger(__name__)

PATH_SEPARATOR = ":"

ProjectAction = Callable[["Project"], None]


class EvaluationState(str, Enum):
    """Project configuration lifecycle"""

    UNEVALUATED = "unevaluated"
    EVALUATING = "evaluating"
    EVALUATED = "evaluated"


class Project(BaseModel):
    """
    Build graph node

    - name: unique among siblings
    - project_dir: where the project's own sources live
    - build_dir: output location, rewritten by the root build script
    - build_script: the project's own configuration closure
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    name: str
    project_dir: Path
    build_dir: Path
    parent: Optional["Project"] = Field(default=None, repr=False)
    repositories: List[str] = Field(default_factory=list)
    plugin_declarations: Dict[str, PluginDeclaration] = Field(default_factory=dict)
    evaluation_dependencies: List[str] = Field(default_factory=list)
    build_script: Optional[Callable[..., None]] = Field(default=None, repr=False, exclude=True)
    state: EvaluationState = EvaluationState.UNEVALUATED

    _plugins: PluginContainer = PrivateAttr()
    _extensions: ExtensionContainer = PrivateAttr()
    _tasks: TaskContainer = PrivateAttr()
    _after_evaluate: List[ProjectAction] = PrivateAttr(default_factory=list)

    def model_post_init(self, __context: Any) -> None:
        self._plugins = PluginContainer(self)
        self._extensions = ExtensionContainer()
        self._tasks = TaskContainer()

    @property
    def path(self) -> str:
        """Graph path, ":" for the root and ":a:b" below it"""
        if self.parent is None:
            return PATH_SEPARATOR
        parent_path = self.parent.path
        if parent_path == PATH_SEPARATOR:
            return PATH_SEPARATOR + self.name
        return parent_path + PATH_SEPARATOR + self.name

    @property
    def root_project(self) -> "Project":
        project = self
        while project.parent is not None:
            project = project.parent
        return project

    @property
    def plugins(self) -> PluginContainer:
        return self._plugins

    @property
    def extensions(self) -> ExtensionContainer:
        return self._extensions

    @property
    def tasks(self) -> TaskContainer:
        return self._tasks

    @property
    def evaluated(self) -> bool:
        return self.state == EvaluationState.EVALUATED

    def apply_plugin(self, plugin_id: str) -> None:
        self._plugins.apply(plugin_id)

    def after_evaluate(self, action: ProjectAction) -> None:
        """
        Run an action once this project's own configuration has finished

        Actions queue up in registration order. On an already evaluated
        project the action runs immediately.
        """
        if self.evaluated:
            action(self)
            return
        self._after_evaluate.append(action)

    def fire_after_evaluate(self) -> int:
        """Drain the deferred action queue, returns how many actions ran"""
        count = 0
        while self._after_evaluate:
            action = self._after_evaluate.pop(0)
            action(self)
            count += 1
        return count

    def evaluation_depends_on(self, path: str) -> None:
        """Require the project at ``path`` to be evaluated before this one"""
        if not path.startswith(PATH_SEPARATOR):
            path = PATH_SEPARATOR + path
        if path == self.path:
            raise ConfigurationError(
                f"Project {self.path} cannot depend on its own evaluation"
            )
        if path not in self.evaluation_dependencies:
            self.evaluation_dependencies.append(path)
            logger.debug(
                "Evaluation dependency declared",
                extra={"project": self.path, "depends_on": path},
            )
