"""
Build directory remapping

Moves every project's output into one shared tree: the root output
directory is replaced by a fixed relative location resolved against it, and
each subproject writes to a child directory named after itself.
"""

import logging
import os
from pathlib import Path
from typing import Union

from ..core.graph import ProjectGraph
from .settings import BuildSettings

logger = logging.getLogger(__name__)


def resolve_shared_build_dir(
    root_build_dir: Union[str, Path], relative: str = "../../build"
) -> Path:
    """
    Resolve ``relative`` against the root's current output directory

    The result is absolute and normalized; symlinks are left alone.
    """
    return Path(os.path.normpath(os.path.abspath(Path(root_build_dir) / relative)))


def remap_build_dirs(graph: ProjectGraph, settings: BuildSettings) -> Path:
    """
    Point the root and all subprojects at the shared output tree

    Returns:
        The new root output directory
    """
    shared = resolve_shared_build_dir(graph.root.build_dir, settings.build_dir_relative)
    graph.root.build_dir = shared

    for project in graph.subprojects:
        project.build_dir = shared / project.name

    logger.info(
        "Build directories remapped",
        extra={"build_dir": str(shared), "subprojects": len(graph.subprojects)},
    )
    return shared
