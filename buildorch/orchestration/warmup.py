"""
Plugin warmup

After the whole graph is evaluated, re-enters the root application project
and initializes the extension of its code-generation plugin so that the
plugin's input descriptor is parsed before anything consumes it.

Best effort: a missing project, a missing extension or a failing
initialization is logged and ignored.
"""

import logging

from ..core.graph import ProjectGraph
from ..core.project import Project
from .settings import BuildSettings

logger = logging.getLogger(__name__)


def warm_up_extension(project: Project, extension_name: str) -> bool:
    """
    Look up and initialize an optional extension

    Returns:
        True if the extension was found and initialized. Never raises.
    """
    try:
        extension = project.extensions.find_by_name(extension_name)
        if extension is None:
            return False

        initialize = getattr(extension, "initialize", None)
        if callable(initialize):
            initialize()

        logger.debug(
            "Extension warmed up",
            extra={"project": project.path, "extension": extension_name},
        )
        return True
    except Exception:
        logger.debug(
            "Extension warmup failed",
            extra={"project": project.path, "extension": extension_name},
            exc_info=True,
        )
        return False


def register_plugin_warmup(graph: ProjectGraph, settings: BuildSettings) -> None:
    """Schedule the warmup to run once all projects are evaluated"""
    name = settings.root_project_name
    extension_name = settings.warmup_extension_name

    def on_projects_evaluated(evaluated: ProjectGraph) -> None:
        try:
            project = evaluated.find_project(name)
            if project is None:
                return
            project.after_evaluate(
                lambda p: warm_up_extension(p, extension_name)
            )
        except Exception:
            logger.debug(
                "Plugin warmup skipped",
                extra={"project": name},
                exc_info=True,
            )

    graph.projects_evaluated(on_projects_evaluated)
