"""
Plugins (capabilities)

A plugin is identified by an id. Applying it records the id on the project,
applies the plugins it implies and attaches its extensions. Core plugins can
be applied anywhere; every other plugin must first be declared by the root
project together with its version.
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Tuple

from pydantic import BaseModel

from .errors import UnknownPluginError
from .extensions import (
    AndroidExtension,
    GoogleServicesExtension,
    JavaPluginExtension,
    KotlinExtension,
)

if TYPE_CHECKING:
    from .project import Project

logger = logging.getLogger(__name__)

JAVA = "java"
JAVA_LIBRARY = "java-library"
APPLICATION = "application"
ANDROID_APPLICATION = "com.android.application"
ANDROID_LIBRARY = "com.android.library"
KOTLIN_ANDROID = "org.jetbrains.kotlin.android"
GOOGLE_SERVICES = "com.google.gms.google-services"

GOOGLE_SERVICES_DESCRIPTOR = "google-services.json"


class PluginDeclaration(BaseModel):
    """
    Plugin declared by the root project

    ``apply=False`` makes the version available to subprojects without
    applying the plugin to the root itself.
    """

    id: str
    version: str
    apply: bool = False


@dataclass
class PluginDefinition:
    """Known plugin: implied plugins and extension factories"""

    id: str
    implies: Tuple[str, ...] = ()
    core: bool = False
    extensions: Dict[str, Callable[["Project"], object]] = field(default_factory=dict)


def _java_extension(project: "Project") -> JavaPluginExtension:
    return JavaPluginExtension()


def _android_extension(project: "Project") -> AndroidExtension:
    return AndroidExtension()


def _kotlin_extension(project: "Project") -> KotlinExtension:
    return KotlinExtension()


def _google_services_extension(project: "Project") -> GoogleServicesExtension:
    return GoogleServicesExtension(
        descriptor_file=project.project_dir / GOOGLE_SERVICES_DESCRIPTOR
    )


PLUGIN_CATALOG: Dict[str, PluginDefinition] = {
    JAVA: PluginDefinition(JAVA, core=True, extensions={"java": _java_extension}),
    JAVA_LIBRARY: PluginDefinition(JAVA_LIBRARY, implies=(JAVA,), core=True),
    APPLICATION: PluginDefinition(APPLICATION, implies=(JAVA,), core=True),
    ANDROID_APPLICATION: PluginDefinition(
        ANDROID_APPLICATION, extensions={"android": _android_extension}
    ),
    ANDROID_LIBRARY: PluginDefinition(
        ANDROID_LIBRARY,
        extensions={"android": _android_extension, "java": _java_extension},
    ),
    KOTLIN_ANDROID: PluginDefinition(
        KOTLIN_ANDROID, extensions={"kotlin": _kotlin_extension}
    ),
    GOOGLE_SERVICES: PluginDefinition(
        GOOGLE_SERVICES, extensions={"googleServices": _google_services_extension}
    ),
}


def get_plugin_definition(plugin_id: str) -> PluginDefinition:
    definition = PLUGIN_CATALOG.get(plugin_id)
    if definition is None:
        raise UnknownPluginError(f"Unknown plugin: {plugin_id}")
    return definition


class PluginContainer:
    """
    Plugins applied to one project

    Keeps application order; applying an id twice is a no-op.
    """

    def __init__(self, project: "Project") -> None:
        self._project = project
        self._applied: List[str] = []

    def apply(self, plugin_id: str) -> None:
        if plugin_id in self._applied:
            return

        definition = get_plugin_definition(plugin_id)
        if not definition.core and self.find_declaration(plugin_id) is None:
            raise UnknownPluginError(
                f"Plugin {plugin_id} is not declared by the root project",
                {"project": self._project.path, "plugin": plugin_id},
            )

        self._applied.append(plugin_id)
        for implied in definition.implies:
            self.apply(implied)

        extensions = self._project.extensions
        for name, factory in definition.extensions.items():
            if name not in extensions:
                extensions.create(name, factory(self._project))

        logger.debug(
            "Plugin applied",
            extra={"project": self._project.path, "plugin": plugin_id},
        )

    def has_plugin(self, plugin_id: str) -> bool:
        return plugin_id in self._applied

    def ids(self) -> List[str]:
        return list(self._applied)

    def find_declaration(self, plugin_id: str) -> Optional[PluginDeclaration]:
        return self._project.root_project.plugin_declarations.get(plugin_id)

    def __contains__(self, plugin_id: object) -> bool:
        return plugin_id in self._applied

    def __iter__(self):
        return iter(list(self._applied))
