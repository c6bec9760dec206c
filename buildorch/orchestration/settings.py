"""
Orchestration settings

Defaults reproduce the root build file of the android workspace; any of
them can be overridden from the ``settings`` section of a graph document or
from a separate YAML/JSON file.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..core.errors import DocumentError
from ..core.plugins import (
    ANDROID_APPLICATION,
    ANDROID_LIBRARY,
    GOOGLE_SERVICES,
    JAVA,
    KOTLIN_ANDROID,
    PluginDeclaration,
)


def _default_plugin_declarations() -> List[PluginDeclaration]:
    return [
        PluginDeclaration(id=ANDROID_APPLICATION, version="8.11.1"),
        PluginDeclaration(id=KOTLIN_ANDROID, version="2.2.20"),
        PluginDeclaration(id=GOOGLE_SERVICES, version="4.4.2"),
        PluginDeclaration(id=ANDROID_LIBRARY, version="8.11.1"),
    ]


class BuildSettings(BaseModel):
    """Root build configuration"""

    # Directory remapping
    build_dir_relative: str = "../../build"

    # Toolchain enforcement
    java_language_version: int = 17
    toolchain_capabilities: List[str] = Field(
        default_factory=lambda: [JAVA, ANDROID_LIBRARY]
    )

    # Evaluation ordering and warmup
    root_project_name: str = "app"
    warmup_extension_name: str = "googleServices"

    # Tasks
    clean_task_name: str = "clean"

    # Declarations shared by all projects
    repositories: List[str] = Field(default_factory=lambda: ["google", "mavenCentral"])
    plugin_declarations: List[PluginDeclaration] = Field(
        default_factory=_default_plugin_declarations
    )

    @field_validator("java_language_version")
    @classmethod
    def validate_java_version(cls, v):
        if v < 1:
            raise ValueError(f"Invalid java language version: {v}")
        return v

    @field_validator("root_project_name")
    @classmethod
    def validate_root_project_name(cls, v):
        if not v or ":" in v:
            raise ValueError(f"Invalid root project name: {v!r}")
        return v


def parse_settings(data: Dict[str, Any]) -> BuildSettings:
    try:
        return BuildSettings(**(data or {}))
    except PydanticValidationError as e:
        raise DocumentError(f"Invalid build settings: {e}") from e


def load_settings(path: Union[str, Path]) -> BuildSettings:
    """Load settings from a YAML or JSON file"""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except OSError as e:
        raise DocumentError(f"Cannot read settings file {path}: {e}") from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise DocumentError(f"Cannot parse settings file {path}: {e}") from e

    if data is not None and not isinstance(data, dict):
        raise DocumentError(f"Settings file must contain a mapping: {path}")
    return parse_settings(data)
