"""
buildorch CLI

Command line entry point: configure a project graph, clean its shared build
directory, or show the graph as declared.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import click
import yaml

from .core.document import load_document
from .core.errors import BuildOrchError
from .orchestration.script import orchestrate
from .orchestration.settings import load_settings, parse_settings


def _orchestrate_document(document: str, settings_file: Optional[str]):
    doc = load_document(document)
    settings = load_settings(settings_file) if settings_file else parse_settings(doc.settings)
    graph = doc.build_graph(Path(document).parent)
    root_config, result = orchestrate(graph, settings)
    return graph, settings, root_config, result


def _dump(data: Dict[str, Any], fmt: str) -> str:
    if fmt == "json":
        return json.dumps(data, indent=2, ensure_ascii=False)
    return yaml.safe_dump(data, allow_unicode=True, sort_keys=False)


@click.group()
@click.version_option(version="0.1.0")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """buildorch - orchestrate the configuration of a multi-project build"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@cli.command()
@click.argument("document", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--settings", "settings_file",
    type=click.Path(exists=True, dir_okay=False),
    help="Settings file overriding the document's settings section",
)
@click.option(
    "--output", "-o",
    type=click.Path(),
    help="Write the summary to a file",
)
@click.option(
    "--format", "fmt",
    type=click.Choice(["json", "yaml"]),
    default="json",
    help="Summary format",
)
def configure(document, settings_file, output, fmt):
    """Run the configuration phase and print a summary"""
    try:
        graph, _, root_config, result = _orchestrate_document(document, settings_file)
    except BuildOrchError as e:
        click.echo(f"Configuration failed: {e}", err=True)
        sys.exit(1)

    summary = result.summary(graph)
    summary["build_dir"] = str(root_config.build_dir)
    summary["ordering_edges"] = [list(edge) for edge in root_config.ordering_edges]
    output_str = _dump(summary, fmt)

    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(output_str)
        click.echo(f"Summary written to: {output}")
    else:
        click.echo(output_str)


@cli.command()
@click.argument("document", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--settings", "settings_file",
    type=click.Path(exists=True, dir_okay=False),
    help="Settings file overriding the document's settings section",
)
def clean(document, settings_file):
    """Delete the shared build directory"""
    try:
        graph, settings, root_config, _ = _orchestrate_document(document, settings_file)
        task = graph.root.tasks.get(settings.clean_task_name)
        task.execute()
    except BuildOrchError as e:
        click.echo(f"Clean failed: {e}", err=True)
        sys.exit(1)

    if getattr(task, "deleted", None):
        click.echo(f"Deleted: {root_config.build_dir}")
    else:
        click.echo(f"Nothing to delete: {root_config.build_dir}")


@cli.command()
@click.argument("document", type=click.Path(exists=True, dir_okay=False))
def show(document):
    """Show the project graph as declared"""
    try:
        doc = load_document(document)
    except BuildOrchError as e:
        click.echo(f"Cannot load document: {e}", err=True)
        sys.exit(1)

    click.echo(f"Document: {document}")
    click.echo(f"Root: {doc.root}")
    click.echo()

    click.echo("Projects:")
    for spec in doc.projects:
        click.echo(f"  - :{spec.name}")
        if spec.plugins:
            click.echo(f"      plugins: {', '.join(spec.plugins)}")


def main():
    """CLI entry point"""
    cli()


if __name__ == "__main__":
    main()
