"""
Evaluation ordering

Every subproject other than the root application project waits for that
project to finish configuring. Only the edges are recorded here; the graph
evaluator enforces them.
"""

import logging
from typing import List, Tuple

from ..core.graph import ProjectGraph
from .settings import BuildSettings

logger = logging.getLogger(__name__)


def declare_evaluation_order(
    graph: ProjectGraph, settings: BuildSettings
) -> List[Tuple[str, str]]:
    """
    Declare ``project -> app`` ordering edges

    Raises:
        UnknownProjectError: a subproject needs the root application project
            and the graph has none

    Returns:
        The declared edges as ``(project path, dependency path)`` pairs
    """
    name = settings.root_project_name
    edges: List[Tuple[str, str]] = []

    for project in graph.subprojects:
        if project.name == name:
            continue
        target = graph.project(name)
        project.evaluation_depends_on(target.path)
        edges.append((project.path, target.path))

    logger.info(
        "Evaluation order declared",
        extra={"root_project": name, "edges": len(edges)},
    )
    return edges
