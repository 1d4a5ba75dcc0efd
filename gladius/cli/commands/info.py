"""``gladius info`` — show build metadata and the publishable outputs of each module."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from gladius.cli.commands._loading import configure, load_build, project_option

console = Console()


def info_cmd(project_file: Path = project_option) -> None:
    """Show version metadata and declared artifacts."""
    build = load_build(project_file, console)
    context = configure(build, console)
    metadata = context.metadata

    console.print()
    console.print(
        Panel(
            "\n".join([
                f"[bold]Project:[/bold]       {context.project.name}",
                f"[bold]Version:[/bold]       {metadata.version}",
                f"[bold]CI:[/bold]            {'yes' if context.environment.is_ci else 'no'}",
                f"[bold]Build Number:[/bold]  {metadata.build_number or '-'}",
                f"[bold]Commit:[/bold]        {metadata.commit_id}",
                f"[bold]Abbreviated:[/bold]   {metadata.abbreviated_commit_id}",
            ]),
            title="[bold]Gladius[/bold]",
            border_style="cyan",
            padding=(1, 2),
        )
    )

    table = Table(title="Publishable Outputs")
    table.add_column("Module", style="cyan")
    table.add_column("Classifier", style="green")
    table.add_column("Step")
    table.add_column("Archive")
    for module in context.modules.values():
        for output in module.outputs:
            classifier = output.classifier.value if output.classifier else "[dim](primary)[/dim]"
            table.add_row(module.name, classifier, output.step_id, str(output.path))
    console.print(table)
