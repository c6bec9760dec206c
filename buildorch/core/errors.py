"""
buildorch Exception Definitions

Errors raised while loading, orchestrating and evaluating a project graph.
Configuration errors propagate to the caller and abort the build; only the
plugin warmup hook discards its own failures.
"""

from typing import Any, Dict, Optional


class BuildOrchError(Exception):
    """buildorch base exception"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(BuildOrchError):
    """
    Configuration error

    Raised when a project is configured inconsistently, such as a duplicate
    extension or task name, or a project depending on itself.
    """

    pass


class DocumentError(BuildOrchError):
    """
    Graph document error

    Raised when a graph document cannot be read or fails validation.
    """

    pass


class UnknownProjectError(ConfigurationError):
    """No project with the requested path exists in the graph"""

    pass


class UnknownPluginError(ConfigurationError):
    """
    Unknown plugin

    Raised when a plugin id is neither a core plugin nor declared by the
    root project.
    """

    pass


class UnknownExtensionError(ConfigurationError):
    """A mandatory extension lookup found nothing"""

    pass


class UnknownTaskError(ConfigurationError):
    """No task with the requested name is registered"""

    pass


class ExtensionError(BuildOrchError):
    """
    Extension initialization error

    Raised when an extension cannot establish its derived state, such as a
    missing or malformed service descriptor file.
    """

    pass


class EvaluationError(BuildOrchError):
    """
    Evaluation error

    Raised when the graph evaluator is misused, such as evaluating the same
    graph twice.
    """

    pass


class EvaluationOrderError(EvaluationError):
    """
    Evaluation order error

    Raised when ordering dependencies form a cycle or point at a project
    that does not exist.
    """

    pass
