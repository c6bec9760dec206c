"""
Project extensions

Extensions are optional configuration objects that plugins attach to a
project. They are queried by name or by type; a missing extension is a
normal state, reported as None.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from .errors import ConfigurationError, ExtensionError, UnknownExtensionError

logger = logging.getLogger(__name__)

E = TypeVar("E")


class ToolchainSpec(BaseModel):
    """Language toolchain requirement"""

    model_config = ConfigDict(validate_assignment=True)

    language_version: Optional[int] = None


class JavaPluginExtension(BaseModel):
    """
    JVM language configuration surface

    Attached by the JVM language plugins and by the android library plugin.
    """

    toolchain: ToolchainSpec = Field(default_factory=ToolchainSpec)

    def configure_toolchain(self, language_version: int) -> None:
        self.toolchain.language_version = language_version


class AndroidExtension(BaseModel):
    """Android component configuration"""

    namespace: Optional[str] = None
    compile_sdk: Optional[int] = None


class KotlinExtension(BaseModel):
    """Kotlin compiler configuration"""

    jvm_target: Optional[str] = None


class GoogleServicesExtension(BaseModel):
    """
    Google services descriptor binding

    Reads the project's service descriptor (``google-services.json``) once,
    on the first call to ``initialize()``, and exposes the parsed content.
    Consumers that need the descriptor before they run must make sure
    ``initialize()`` has happened; the warmup hook does this for the root
    application project.
    """

    descriptor_file: Path
    _descriptor: Optional[Dict[str, Any]] = PrivateAttr(default=None)

    @property
    def initialized(self) -> bool:
        return self._descriptor is not None

    def initialize(self) -> Dict[str, Any]:
        """
        Parse the descriptor file

        Returns:
            Parsed descriptor content

        Raises:
            ExtensionError: file missing, unreadable or not a JSON object
        """
        if self._descriptor is not None:
            return self._descriptor

        try:
            with open(self.descriptor_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise ExtensionError(
                f"Service descriptor not found: {self.descriptor_file}",
                {"descriptor_file": str(self.descriptor_file)},
            ) from e
        except (OSError, json.JSONDecodeError) as e:
            raise ExtensionError(
                f"Cannot read service descriptor {self.descriptor_file}: {e}",
                {"descriptor_file": str(self.descriptor_file)},
            ) from e

        if not isinstance(data, dict):
            raise ExtensionError(
                f"Service descriptor must be a JSON object: {self.descriptor_file}"
            )

        self._descriptor = data
        logger.debug(
            "Service descriptor parsed",
            extra={"descriptor_file": str(self.descriptor_file)},
        )
        return data

    @property
    def project_info(self) -> Dict[str, Any]:
        return self.initialize().get("project_info", {})

    @property
    def clients(self) -> List[Dict[str, Any]]:
        return self.initialize().get("client", [])


class ExtensionContainer:
    """
    Named extension registry of one project

    Keeps registration order so listings are deterministic.
    """

    def __init__(self) -> None:
        self._extensions: Dict[str, Any] = {}

    def create(self, name: str, extension: E) -> E:
        """Register an extension under a unique name"""
        if name in self._extensions:
            raise ConfigurationError(f"Extension already exists: {name}")
        self._extensions[name] = extension
        return extension

    def find_by_name(self, name: str) -> Optional[Any]:
        return self._extensions.get(name)

    def find_by_type(self, extension_type: Type[E]) -> Optional[E]:
        """First registered extension that is an instance of the given type"""
        for extension in self._extensions.values():
            if isinstance(extension, extension_type):
                return extension
        return None

    def get_by_name(self, name: str) -> Any:
        extension = self.find_by_name(name)
        if extension is None:
            raise UnknownExtensionError(f"Extension not found: {name}")
        return extension

    def names(self) -> List[str]:
        return list(self._extensions)

    def __contains__(self, name: object) -> bool:
        return name in self._extensions

    def __len__(self) -> int:
        return len(self._extensions)
