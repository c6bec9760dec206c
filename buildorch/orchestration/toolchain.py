"""
Toolchain enforcement

Pins the JVM language version of every subproject that applied one of the
recognized capabilities. The check runs after the subproject's own build
script, once its plugin set is final.
"""

import logging
from typing import Iterable

from ..core.extensions import JavaPluginExtension
from ..core.graph import ProjectGraph
from ..core.project import Project
from .settings import BuildSettings

logger = logging.getLogger(__name__)


def has_any_plugin(project: Project, plugin_ids: Iterable[str]) -> bool:
    return any(project.plugins.has_plugin(plugin_id) for plugin_id in plugin_ids)


def enforce_toolchain(
    project: Project, capabilities: Iterable[str], language_version: int
) -> bool:
    """
    Set the toolchain language version if the project qualifies

    Returns:
        True when the version was set. Projects without a recognized
        capability, or without a JVM extension, are left untouched.
    """
    if not has_any_plugin(project, capabilities):
        return False

    java = project.extensions.find_by_type(JavaPluginExtension)
    if java is None:
        logger.debug(
            "No JVM extension, toolchain not pinned",
            extra={"project": project.path},
        )
        return False

    java.configure_toolchain(language_version)
    logger.debug(
        "Toolchain pinned",
        extra={"project": project.path, "language_version": language_version},
    )
    return True


def register_toolchain_enforcer(graph: ProjectGraph, settings: BuildSettings) -> None:
    """Defer toolchain enforcement on every subproject until it is evaluated"""
    capabilities = list(settings.toolchain_capabilities)
    version = settings.java_language_version

    def action(project: Project) -> None:
        enforce_toolchain(project, capabilities, version)

    graph.each_subproject(lambda project: project.after_evaluate(action))
