"""
Graph document

Declarative description of a project graph, read from YAML or JSON:

    root: android
    settings:
      root_project_name: app
    projects:
      - name: app
        plugins: [com.android.application, com.google.gms.google-services]
      - name: lib1
        plugins: [application]
        java_version: 11

Each project entry becomes the project's own build script: it applies the
listed plugins and fills in the extension values it names.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import DocumentError
from .extensions import AndroidExtension, JavaPluginExtension, KotlinExtension
from .graph import ProjectGraph
from .project import Project

logger = logging.getLogger(__name__)


class ProjectSpec(BaseModel):
    """One subproject entry"""

    name: str
    project_dir: Optional[str] = None
    plugins: List[str] = Field(default_factory=list)
    java_version: Optional[int] = None
    android_namespace: Optional[str] = None
    compile_sdk: Optional[int] = None
    kotlin_jvm_target: Optional[str] = None
    evaluation_depends_on: List[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v or ":" in v or "/" in v:
            raise ValueError(f"Invalid project name: {v!r}")
        return v

    def configure(self, project: Project) -> None:
        """Build script of this project"""
        for plugin_id in self.plugins:
            project.apply_plugin(plugin_id)

        if self.java_version is not None:
            java = project.extensions.find_by_type(JavaPluginExtension)
            if java is not None:
                java.configure_toolchain(self.java_version)

        android = project.extensions.find_by_type(AndroidExtension)
        if android is not None:
            if self.android_namespace is not None:
                android.namespace = self.android_namespace
            if self.compile_sdk is not None:
                android.compile_sdk = self.compile_sdk

        kotlin = project.extensions.find_by_type(KotlinExtension)
        if kotlin is not None and self.kotlin_jvm_target is not None:
            kotlin.jvm_target = self.kotlin_jvm_target

        for path in self.evaluation_depends_on:
            project.evaluation_depends_on(path)


class GraphDocument(BaseModel):
    """
    Graph document (root of the file)

    - root: name of the root project
    - build_dir: root output directory before remapping
    - settings: orchestration settings, see BuildSettings
    - projects: subprojects in declaration order
    """

    root: str = "root"
    build_dir: Optional[str] = None
    settings: Dict[str, Any] = Field(default_factory=dict)
    projects: List[ProjectSpec] = Field(default_factory=list)

    @field_validator("projects")
    @classmethod
    def validate_unique_names(cls, v):
        seen = set()
        for spec in v:
            if spec.name in seen:
                raise ValueError(f"Duplicate project name: {spec.name}")
            seen.add(spec.name)
        return v

    def build_graph(self, base_dir: Union[str, Path]) -> ProjectGraph:
        """
        Construct the project graph

        Relative directories are resolved against ``base_dir``, usually the
        directory holding the document.
        """
        base_dir = Path(base_dir).resolve()
        build_dir = base_dir / self.build_dir if self.build_dir else None
        graph = ProjectGraph.create(self.root, base_dir, build_dir=build_dir)

        for spec in self.projects:
            project_dir = base_dir / spec.project_dir if spec.project_dir else None
            graph.add_project(
                spec.name, project_dir=project_dir, build_script=spec.configure
            )

        logger.info(
            "Project graph constructed",
            extra={"root": self.root, "projects": len(self.projects)},
        )
        return graph


def parse_document(data: Any) -> GraphDocument:
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise DocumentError("Graph document must be a mapping")
    try:
        return GraphDocument(**data)
    except PydanticValidationError as e:
        raise DocumentError(f"Invalid graph document: {e}") from e


def load_document(path: Union[str, Path]) -> GraphDocument:
    """Load a graph document from a YAML or JSON file"""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except OSError as e:
        raise DocumentError(f"Cannot read graph document {path}: {e}") from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise DocumentError(f"Cannot parse graph document {path}: {e}") from e

    return parse_document(data)


def load_graph(path: Union[str, Path]) -> ProjectGraph:
    """Load a document and build its graph relative to the document's directory"""
    path = Path(path)
    return load_document(path).build_graph(path.parent)
