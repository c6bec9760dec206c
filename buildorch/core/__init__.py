"""buildorch core data model"""

from .errors import (
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
)
from .extensions import (
    ExtensionContainer,
    JavaPluginExtension,
    ToolchainSpec,
    AndroidExtension,
    KotlinExtension,
    GoogleServicesExtension,
)
from .plugins import (
    PluginContainer,
    PluginDeclaration,
    PluginDefinition,
    PLUGIN_CATALOG,
    get_plugin_definition,
)
from .tasks import Task, DeleteTask, TaskContainer
from .project import Project, EvaluationState
from .graph import ProjectGraph
from .document import (
    GraphDocument,
    ProjectSpec,
    parse_document,
    load_document,
    load_graph,
)

__all__ = [
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
    # Extensions
    "ExtensionContainer",
    "JavaPluginExtension",
    "ToolchainSpec",
    "AndroidExtension",
    "KotlinExtension",
    "GoogleServicesExtension",
    # Plugins
    "PluginContainer",
    "PluginDeclaration",
    "PluginDefinition",
    "PLUGIN_CATALOG",
    "get_plugin_definition",
    # Tasks
    "Task",
    "DeleteTask",
    "TaskContainer",
    # Projects
    "Project",
    "EvaluationState",
    "ProjectGraph",
    # Document
    "GraphDocument",
    "ProjectSpec",
    "parse_document",
    "load_document",
    "load_graph",
]
