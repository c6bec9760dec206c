"""
Tasks

Named operations registered on a project and executed only on request.
"""

import logging
import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from .errors import ConfigurationError, UnknownTaskError

logger = logging.getLogger(__name__)

PathProvider = Union[Path, Callable[[], Path]]


class Task(ABC):
    """Task base class"""

    def __init__(self, name: str, description: Optional[str] = None):
        self.name = name
        self.description = description
        self.executed = False

    @abstractmethod
    def action(self) -> None:
        pass

    def execute(self) -> None:
        logger.info("Executing task", extra={"task": self.name})
        self.action()
        self.executed = True


class DeleteTask(Task):
    """
    Recursively delete files and directories

    Targets may be paths or zero-argument callables returning a path; the
    callables are resolved at execution time. Absent targets are skipped,
    so running the task twice is harmless.
    """

    def __init__(
        self,
        name: str,
        targets: List[PathProvider],
        description: Optional[str] = None,
    ):
        super().__init__(name, description)
        self.targets = list(targets)
        self.deleted: List[Path] = []

    def resolve_targets(self) -> List[Path]:
        return [Path(t() if callable(t) else t) for t in self.targets]

    def action(self) -> None:
        self.deleted = []
        for target in self.resolve_targets():
            if target.is_dir() and not target.is_symlink():
                shutil.rmtree(target)
                self.deleted.append(target)
                logger.info("Deleted directory", extra={"path": str(target)})
            elif target.exists() or target.is_symlink():
                target.unlink()
                self.deleted.append(target)
                logger.info("Deleted file", extra={"path": str(target)})
            else:
                logger.debug("Nothing to delete", extra={"path": str(target)})


class TaskContainer:
    """Named task registry of one project"""

    def __init__(self) -> None:
        self._tasks: Dict[str, Task] = {}

    def register(self, task: Task) -> Task:
        if task.name in self._tasks:
            raise ConfigurationError(f"Task already registered: {task.name}")
        self._tasks[task.name] = task
        return task

    def find_by_name(self, name: str) -> Optional[Task]:
        return self._tasks.get(name)

    def get(self, name: str) -> Task:
        task = self._tasks.get(name)
        if task is None:
            raise UnknownTaskError(f"Task not found: {name}")
        return task

    def names(self) -> List[str]:
        return list(self._tasks)

    def __contains__(self, name: object) -> bool:
        return name in self._tasks
