"""``gladius version`` — print the composed version.

Prints only the version string so scripts can capture it.
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console

from gladius.cli.commands._loading import configure, load_build, project_option

console = Console()
err_console = Console(stderr=True)


def version_cmd(project_file: Path = project_option) -> None:
    """Print the version this build would produce."""
    build = load_build(project_file, err_console)
    context = configure(build, err_console, versioning_only=True)
    console.print(context.metadata.version, highlight=False)
