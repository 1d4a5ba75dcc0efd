"""Main Typer application — imports and registers all CLI commands.

Entry point: ``gladius`` (configured via pyproject.toml [project.scripts]).
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from gladius.cli.commands.info import info_cmd
from gladius.cli.commands.manifest import manifest_cmd
from gladius.cli.commands.package import package_cmd
from gladius.cli.commands.version_cmd import version_cmd
from gladius.config import GladiusConfig

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

app = typer.Typer(
    name="gladius",
    help="Gladius: deterministic build versioning and artifact assembly.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        None,
        "--log-level",
        help="Logging level. Defaults to GLADIUS_LOG_LEVEL (INFO).",
    ),
) -> None:
    """Configure logging for every command."""
    level = (log_level or GladiusConfig().log_level).upper()
    if level not in _LOG_LEVELS:
        Console(stderr=True).print(
            f"[bold red]Invalid log level:[/bold red] {level} "
            f"(choose from {', '.join(_LOG_LEVELS)})"
        )
        raise typer.Exit(code=1)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


# Register subcommands
app.command(name="version", help="Print the composed version.")(version_cmd)
app.command(name="info", help="Show build metadata and publishable outputs.")(info_cmd)
app.command(name="manifest", help="Print primary archive manifest attributes.")(manifest_cmd)
app.command(name="package", help="Assemble primary and secondary archives.")(package_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
