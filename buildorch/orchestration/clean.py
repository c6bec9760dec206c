"""Clean task: deletes the shared output tree"""

from ..core.graph import ProjectGraph
from ..core.tasks import DeleteTask
from .settings import BuildSettings


def register_clean_task(graph: ProjectGraph, settings: BuildSettings) -> DeleteTask:
    root = graph.root
    # resolved at execution time, after the build directories were remapped
    task = DeleteTask(
        settings.clean_task_name,
        [lambda: root.build_dir],
        description="Deletes the shared build directory.",
    )
    root.tasks.register(task)
    return task
