"""``gladius manifest`` — print the manifest attributes of the primary archive."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from gladius.cli.commands._loading import configure, load_build, project_option

console = Console()
err_console = Console(stderr=True)


def manifest_cmd(
    project_file: Path = project_option,
    title: str = typer.Option(
        None,
        "--title",
        help="Implementation-Title override. Defaults to the project name.",
    ),
) -> None:
    """Print ``Name: value`` manifest attributes, one per line."""
    build = load_build(project_file, err_console)
    context = configure(build, err_console, versioning_only=True)
    for name, value in context.metadata.manifest_attributes(title=title).items():
        console.print(f"{name}: {value}", highlight=False)
