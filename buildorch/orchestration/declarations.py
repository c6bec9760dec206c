"""Plugin declarations and repositories shared by all projects"""

import logging

from ..core.graph import ProjectGraph
from ..core.project import Project
from .settings import BuildSettings

logger = logging.getLogger(__name__)


def declare_plugins(graph: ProjectGraph, settings: BuildSettings) -> None:
    """
    Make plugin versions available to subprojects

    Declarations with ``apply=True`` are also applied to the root project.
    """
    root = graph.root
    root.plugin_declarations = {d.id: d for d in settings.plugin_declarations}
    for declaration in settings.plugin_declarations:
        if declaration.apply:
            root.apply_plugin(declaration.id)


def declare_repositories(graph: ProjectGraph, settings: BuildSettings) -> None:
    repositories = list(settings.repositories)

    def action(project: Project) -> None:
        for repository in repositories:
            if repository not in project.repositories:
                project.repositories.append(repository)

    graph.allprojects(action)
    logger.debug("Repositories declared", extra={"repositories": repositories})
