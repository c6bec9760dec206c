"""
Root build script

Wires the orchestration steps together in the order the root project needs
them and installs the result as the root project's build script.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from ..core.graph import ProjectGraph
from ..core.project import Project
from ..core.tasks import DeleteTask
from ..executor.evaluator import EvaluationResult, GraphEvaluator
from .clean import register_clean_task
from .declarations import declare_plugins, declare_repositories
from .layout import remap_build_dirs
from .ordering import declare_evaluation_order
from .settings import BuildSettings
from .toolchain import register_toolchain_enforcer
from .warmup import register_plugin_warmup

logger = logging.getLogger(__name__)


@dataclass
class RootConfiguration:
    """What the root build script set up"""

    build_dir: Path
    ordering_edges: List[Tuple[str, str]] = field(default_factory=list)
    clean_task: Optional[DeleteTask] = None


def configure_root(
    graph: ProjectGraph, settings: Optional[BuildSettings] = None
) -> RootConfiguration:
    """
    Run the root build script against a constructed graph

    Order:
    1. plugin declarations and repositories
    2. build directory remapping
    3. deferred toolchain enforcement on each subproject
    4. evaluation ordering edges
    5. post-evaluation plugin warmup
    6. clean task
    """
    settings = settings or BuildSettings()

    declare_plugins(graph, settings)
    declare_repositories(graph, settings)
    build_dir = remap_build_dirs(graph, settings)
    register_toolchain_enforcer(graph, settings)
    edges = declare_evaluation_order(graph, settings)
    register_plugin_warmup(graph, settings)
    clean_task = register_clean_task(graph, settings)

    return RootConfiguration(build_dir=build_dir, ordering_edges=edges, clean_task=clean_task)


def install_root_script(
    graph: ProjectGraph, settings: Optional[BuildSettings] = None
) -> List[RootConfiguration]:
    """
    Make ``configure_root`` the root project's build script

    A build script already present on the root runs first. The returned
    list receives the RootConfiguration once the root is evaluated.
    """
    configured: List[RootConfiguration] = []
    previous = graph.root.build_script

    def root_script(project: Project) -> None:
        if previous is not None:
            previous(project)
        configured.append(configure_root(graph, settings))

    graph.root.build_script = root_script
    return configured


def orchestrate(
    graph: ProjectGraph, settings: Optional[BuildSettings] = None
) -> Tuple[RootConfiguration, EvaluationResult]:
    """Install the root build script and run the whole configuration phase"""
    configured = install_root_script(graph, settings)
    result = GraphEvaluator(graph).evaluate()
    logger.info(
        "Orchestration finished",
        extra={"build_dir": str(configured[0].build_dir), "order": result.order},
    )
    return configured[0], result
