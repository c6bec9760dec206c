"""
buildorch - build configuration orchestration

Remaps output directories into one shared tree, pins the JVM toolchain
across subprojects and makes one application project configure before its
siblings.
"""

__version__ = "0.1.0"

from .core import (
    # Errors
    BuildOrchError,
    ConfigurationError,
    DocumentError,
    UnknownProjectError,
    UnknownPluginError,
    UnknownExtensionError,
    UnknownTaskError,
    ExtensionError,
    EvaluationError,
    EvaluationOrderError,
    # Core classes
    Project,
    ProjectGraph,
    JavaPluginExtension,
    GoogleServicesExtension,
    DeleteTask,
    GraphDocument,
    load_document,
    load_graph,
)
from .executor import GraphEvaluator, EvaluationResult, evaluate_graph
from .orchestration import BuildSettings, configure_root, orchestrate

__all__ = [
    "__version__",
    # Errors
    "BuildOrchError",
    "ConfigurationError",
    "DocumentError",
    "UnknownProjectError",
    "UnknownPluginError",
    "UnknownExtensionError",
    "UnknownTaskError",
    "ExtensionError",
    "EvaluationError",
    "EvaluationOrderError",
    # Core
    "Project",
    "ProjectGraph",
    "JavaPluginExtension",
    "GoogleServicesExtension",
    "DeleteTask",
    "GraphDocument",
    "load_document",
    "load_graph",
    # Executor
    "GraphEvaluator",
    "EvaluationResult",
    "evaluate_graph",
    # Orchestration
    "BuildSettings",
    "configure_root",
    "orchestrate",
]
