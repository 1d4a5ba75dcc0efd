"""Shared project loading and fatal-error reporting for CLI commands."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from gladius.config import GladiusConfig
from gladius.core.build import Build, BuildContext
from gladius.core.commit_resolver import (
    CommitResolutionError,
    RepositoryNotFoundError,
    UnresolvableHeadError,
)
from gladius.models.project import ProjectConfigError, load_project


def _failed_step(exc: Exception) -> str:
    if isinstance(exc, RepositoryNotFoundError):
        return "repository discovery"
    if isinstance(exc, UnresolvableHeadError):
        return "HEAD resolution"
    if isinstance(exc, CommitResolutionError):
        return "commit resolution"
    return "project configuration"


def load_build(project_file: Path | None, console: Console) -> Build:
    """Load the project declaration, exiting with code 1 if it is unusable."""
    config = GladiusConfig()
    path = project_file or config.project_file
    try:
        project = load_project(path)
    except ProjectConfigError as exc:
        console.print(f"[bold red]Configuration failed ({_failed_step(exc)}):[/bold red] {exc}")
        raise typer.Exit(code=1)
    return Build(project, config)


def configure(build: Build, console: Console, *, versioning_only: bool = False) -> BuildContext:
    """Run the configuration pass, exiting with code 1 on a resolution failure."""
    try:
        if versioning_only:
            return build.configure_versioning()
        return build.configure()
    except CommitResolutionError as exc:
        console.print(f"[bold red]Configuration failed ({_failed_step(exc)}):[/bold red] {exc}")
        raise typer.Exit(code=1)


project_option = typer.Option(
    None,
    "--project",
    "-p",
    help="Project file (gladius.toml or pyproject.toml). Defaults to GLADIUS_PROJECT_FILE.",
)
