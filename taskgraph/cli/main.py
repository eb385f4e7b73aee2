#!/usr/bin/env python3
"""
Command line interface for Task Graph

Usage: task-graph <taskfile> --output <file.dot> [--config <file>]
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import click

from .. import __version__, setup_logging
from ..config import Config
from ..dot import renderer
from ..errors import TaskGraphError
from ..graph import TaskGraphBuilder
from ..graphviz import save_to
from ..taskfile import load
from .config import export_config, load_config

logger = logging.getLogger(__name__)


def apply_overrides(config: Config, group_by_namespace: bool = False,
                    highlight: Sequence[str] = ()) -> Config:
    """Apply command line overrides on top of the loaded configuration."""
    if group_by_namespace:
        config.group_by_namespace = True

    for pattern in highlight:
        config.add_highlight(pattern)
        logger.debug(f"Highlighting tasks matching {pattern}")

    return config


def image_path(output: str, file_type: str) -> str:
    """Image file next to the DOT file: the output path with its extension replaced by file_type."""
    return str(Path(output).with_suffix("." + file_type))


def describe_error(error: BaseException) -> str:
    """Message for error followed by the messages of the errors that caused it."""
    messages = []
    current: Optional[BaseException] = error
    while current is not None:
        messages.append(str(current) or type(current).__name__)
        current = current.__cause__

    return ": ".join(messages)


@click.command()
@click.argument('taskfile', type=click.Path())
@click.option('--output', '-o', required=True, type=click.Path(dir_okay=False),
              help='Path to the output DOT file')
@click.option('--config', '-c', 'config_path', type=click.Path(dir_okay=False),
              help='Path to a config file (YAML or JSON)')
@click.option('--group-by-namespace', is_flag=True,
              help='Group tasks in the same namespace together in the output')
@click.option('--highlight', multiple=True, metavar='PATTERN',
              help='Highlight tasks matching a glob pattern (repeatable)')
@click.option('--render-image', metavar='TYPE',
              help='Render the graph with Graphviz dot as an image of this type (e.g. png, svg)')
@click.option('--export-config', 'export_path', type=click.Path(dir_okay=False),
              help='Export the effective configuration (YAML, or JSON for .json files)')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.version_option(version=__version__, prog_name='task-graph')
def cli(taskfile, output, config_path, group_by_namespace, highlight, render_image,
        export_path, verbose):
    """
    Draw the tasks of a Taskfile as a Graphviz graph.

    TASKFILE: Taskfile to read, or a directory containing one
    """
    setup_logging("DEBUG" if verbose else "INFO")

    try:
        config = load_config(config_path)
        apply_overrides(config, group_by_namespace, highlight)

        if export_path:
            export_config(config, export_path)
            click.echo(f"📝 Exported configuration to {export_path}")

        taskfile_data = load(taskfile)
        graph = TaskGraphBuilder(taskfile_data).build()

        save_to(output, graph, config)
        logger.info(f"Saved graph to {output}")
        click.echo(f"✅ Saved graph to {output}")

        if render_image:
            image_file = image_path(output, render_image)
            dot_executable = renderer.find_executable(config.dot_path)
            renderer.render_image(dot_executable, output, image_file, render_image)
            logger.info(f"Rendered image {image_file}")
            click.echo(f"🖼️  Rendered image to {image_file}")

    except TaskGraphError as e:
        message = describe_error(e)
        logger.error(f"task-graph failed: {message}")
        click.echo(f"❌ {message}")
        sys.exit(1)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
