"""``gladius package`` — run the packaging steps.

Without ``--step`` every declared step runs, ending with ``dist``. With one
or more ``--step`` options only those steps and their dependencies run.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from gladius.cli.commands._loading import configure, load_build, project_option
from gladius.core.step_graph import StepExecutionError, UnknownStepError
from gladius.models.steps import StepState

console = Console()

_STATE_STYLE = {
    StepState.PASSED: "[green]passed[/green]",
    StepState.FAILED: "[red]failed[/red]",
    StepState.BLOCKED: "[yellow]blocked[/yellow]",
    StepState.NOT_STARTED: "[dim]skipped[/dim]",
}


def package_cmd(
    project_file: Path = project_option,
    steps: list[str] = typer.Option(
        None,
        "--step",
        "-s",
        help="Step id to run (e.g. 'jcpi:sourcesJar'). Repeatable.",
    ),
    fail_fast: bool = typer.Option(
        False,
        "--fail-fast",
        help="Stop at the first failing step.",
    ),
) -> None:
    """Assemble the primary, sources, javadoc and tests archives."""
    build = load_build(project_file, console)
    context = configure(build, console)

    console.print(f"[bold cyan]Building {context.project.name} {context.metadata.version}[/bold cyan]")
    try:
        states = context.graph.run(steps or None, fail_fast=fail_fast)
    except UnknownStepError as exc:
        console.print(f"[bold red]Unknown step:[/bold red] {exc}")
        raise typer.Exit(code=1)
    except StepExecutionError as exc:
        console.print(f"[bold red]Build failed:[/bold red] {exc}")
        raise typer.Exit(code=1)

    table = Table(title="Steps")
    table.add_column("Step", style="cyan")
    table.add_column("State", justify="center")
    for step_id in context.graph.order():
        table.add_row(step_id, _STATE_STYLE.get(states[step_id], states[step_id].value))
    console.print(table)

    failed = context.graph.failed_steps()
    if failed:
        for step_id in failed:
            console.print(f"[red]- {step_id}: {context.graph.errors[step_id]}[/red]")
        console.print("[bold red]Build failed.[/bold red]")
        raise typer.Exit(code=1)

    console.print("[bold green]Build complete.[/bold green]")
