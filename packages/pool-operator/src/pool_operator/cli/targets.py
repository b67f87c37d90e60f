"""CLI commands for inspecting target sources."""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from pool_operator.cli.batch import EXIT_USAGE, load_settings
from pool_operator.exceptions import EmptySourceError, TargetSourceError
from pool_operator.targets import resolve_targets

targets_app = typer.Typer(help="Inspect target lists")
console = Console()


@targets_app.command("show")
def show_targets(
    targets_file: Path = typer.Option(
        None,
        "--targets-file",
        "-f",
        help="File with one target name per line (env: POOL_OPERATOR_TARGETS_FILE)",
    ),
    target: list[str] = typer.Option(None, "--target", "-t", help="Inline target name"),
) -> None:
    """Show the targets a run would process, in order."""
    settings = load_settings()

    try:
        names = resolve_targets(targets_file or settings.targets_file, target)
    except (EmptySourceError, TargetSourceError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_USAGE)

    table = Table(title=f"Targets ({len(names)})")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Target", style="cyan")

    for index, name in enumerate(names, start=1):
        table.add_row(str(index), Text(name))

    console.print(table)
