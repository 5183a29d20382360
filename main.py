"""Command line entry point: trace a project's field lines or open the viewer."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import click
from loguru import logger

from calculator import calculate_fields
from logging_config import setup_logging
from project import ProjectFileError, load_project
from simulation_config import ViewerConfig


def _load(path: Path):
    try:
        return load_project(path)
    except ProjectFileError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging.")
@click.option(
    "--log-file", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Also log to this file."
)
def cli(debug: bool, log_file: Optional[Path]) -> None:
    """Electric field lines of point charges on a 2D canvas."""

    setup_logging(level="DEBUG" if debug else "INFO", log_file=log_file)


@cli.command()
@click.argument("project_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the traced fields here instead of stdout.",
)
def trace(project_file: Path, output: Optional[Path]) -> None:
    """Trace every field of PROJECT_FILE and print the result as JSON."""

    project = _load(project_file)
    fields_in = [model.model_dump(mode="json") for model in project.fields]
    result = calculate_fields(project.width, project.height, fields_in)
    document = json.dumps(result, indent=2)

    if output is None:
        click.echo(document)
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(document, encoding="utf-8")
        logger.info(f"Wrote {len(result)} traced fields to {output}")


@cli.command()
@click.argument("project_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--size", nargs=2, type=int, default=None, help="Window size in pixels.")
def view(project_file: Path, size: Optional[tuple]) -> None:
    """Open PROJECT_FILE in the interactive viewer."""

    import pygame

    from scene2d import FieldScene

    project = _load(project_file)
    config = ViewerConfig()
    if size:
        config.window_size = size

    pygame.init()
    try:
        screen = pygame.display.set_mode(config.window_size)
        pygame.display.set_caption(f"Electrostat • {project.name}")
        FieldScene(screen, config, project, project_path=project_file).run()
    finally:
        pygame.quit()


if __name__ == "__main__":
    cli()
