"""
Project graph

The tree of projects built by the graph loader. Besides lookups it carries
the graph-wide listeners that fire once every project has been evaluated.
"""

import logging
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional

from .errors import ConfigurationError, UnknownProjectError
from .project import PATH_SEPARATOR, Project, ProjectAction

logger = logging.getLogger(__name__)

GraphListener = Callable[["ProjectGraph"], None]

DEFAULT_BUILD_DIR_NAME = "build"


class ProjectGraph:
    """
    Project tree with a single root

    Projects are kept in declaration order, which the evaluator uses to
    break ties between projects that are ready at the same time.
    """

    def __init__(self, root: Project):
        if root.parent is not None:
            raise ConfigurationError(f"Root project {root.name} must not have a parent")
        self.root = root
        self._projects: Dict[str, Project] = {root.path: root}
        self._projects_evaluated: List[GraphListener] = []
        self.evaluated = False

    @classmethod
    def create(
        cls,
        root_name: str,
        root_dir: Path,
        build_dir: Optional[Path] = None,
        build_script: Optional[ProjectAction] = None,
    ) -> "ProjectGraph":
        root_dir = Path(root_dir)
        root = Project(
            name=root_name,
            project_dir=root_dir,
            build_dir=build_dir or root_dir / DEFAULT_BUILD_DIR_NAME,
            build_script=build_script,
        )
        return cls(root)

    def add_project(
        self,
        name: str,
        parent: Optional[Project] = None,
        project_dir: Optional[Path] = None,
        build_script: Optional[ProjectAction] = None,
    ) -> Project:
        """Attach a new project below ``parent`` (the root by default)"""
        parent = parent or self.root
        if PATH_SEPARATOR in name or not name:
            raise ConfigurationError(f"Invalid project name: {name!r}")

        project_dir = Path(project_dir) if project_dir else parent.project_dir / name
        project = Project(
            name=name,
            project_dir=project_dir,
            build_dir=project_dir / DEFAULT_BUILD_DIR_NAME,
            parent=parent,
            build_script=build_script,
        )
        if project.path in self._projects:
            raise ConfigurationError(f"Duplicate project: {project.path}")

        self._projects[project.path] = project
        logger.debug("Project added", extra={"project": project.path})
        return project

    def project(self, path: str) -> Project:
        """Look up a project by path, ``"app"`` is read as ``":app"``"""
        if not path.startswith(PATH_SEPARATOR):
            path = PATH_SEPARATOR + path
        project = self._projects.get(path)
        if project is None:
            raise UnknownProjectError(f"Project not found: {path}")
        return project

    def find_project(self, path: str) -> Optional[Project]:
        try:
            return self.project(path)
        except UnknownProjectError:
            return None

    @property
    def all_projects(self) -> List[Project]:
        return list(self._projects.values())

    @property
    def subprojects(self) -> List[Project]:
        return [p for p in self._projects.values() if p is not self.root]

    def allprojects(self, action: ProjectAction) -> None:
        """Apply an action to the root and every subproject right away"""
        for project in self.all_projects:
            action(project)

    def each_subproject(self, action: ProjectAction) -> None:
        """Apply an action to every subproject right away"""
        for project in self.subprojects:
            action(project)

    def projects_evaluated(self, listener: GraphListener) -> None:
        """Register a listener that fires once after all projects are evaluated"""
        self._projects_evaluated.append(listener)

    def fire_projects_evaluated(self) -> None:
        listeners, self._projects_evaluated = self._projects_evaluated, []
        for listener in listeners:
            listener(self)

    def __iter__(self) -> Iterator[Project]:
        return iter(self.all_projects)

    def __len__(self) -> int:
        return len(self._projects)
