"""Batch run CLI command.

Provides the command that applies stop, start or restart to a target list:
- run: Resolve targets, build the controller, run with retries

Exit codes:
    0: every target was actioned
    1: a target exhausted its retry budget
    2: no usable targets or invalid configuration
    130: cancelled by SIGINT/SIGTERM during a wait
"""

import asyncio
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from pool_operator.batch import BatchOperator
from pool_operator.cli.controller_factory import AVAILABLE_CONTROLLERS, create_controller
from pool_operator.config import Settings
from pool_operator.exceptions import (
    EmptySourceError,
    RetryBudgetExhausted,
    RunCancelled,
    TargetSourceError,
)
from pool_operator.observer import ConsoleObserver, LoggingObserver, RunObserver
from pool_operator.retry import RetryPolicy
from pool_operator.targets import resolve_targets
from pool_operator.types import Operation, RunResult

batch_app = typer.Typer(help="Stop, start or restart a list of targets")
console = Console()

EXIT_FAILED = 1
EXIT_USAGE = 2
EXIT_CANCELLED = 130


def load_settings() -> Settings:
    """Load settings from the environment, exiting on invalid values."""
    try:
        return Settings()
    except ValidationError as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_USAGE)


@batch_app.command("run")
def run_batch(
    action: Operation = typer.Option(
        Operation.RESTART, "--action", "-a", help="Operation to apply to every target"
    ),
    targets_file: Path = typer.Option(
        None,
        "--targets-file",
        "-f",
        help="File with one target name per line (env: POOL_OPERATOR_TARGETS_FILE)",
    ),
    target: list[str] = typer.Option(
        None, "--target", "-t", help="Target name; may be repeated, runs after file targets"
    ),
    controller: str = typer.Option(
        None,
        "--controller",
        "-c",
        help=f"Controller back end ({', '.join(AVAILABLE_CONTROLLERS)}; env: POOL_OPERATOR_CONTROLLER)",
    ),
    max_attempts: int = typer.Option(
        None, "--max-attempts", min=1, help="Attempts per target per phase (default 10)"
    ),
    retry_delay: float = typer.Option(
        None, "--retry-delay", min=0, help="Seconds between attempts (default 30)"
    ),
    restart_pause: float = typer.Option(
        None, "--restart-pause", min=0, help="Seconds between stop and start phases (default 120)"
    ),
) -> None:
    """
    Apply an operation to every target, in order, with retries.

    Each target gets a fixed number of attempts with a fixed delay between
    them. The run stops at the first target that cannot be actioned.

    Environment variables:
        POOL_OPERATOR_TARGETS_FILE: Default target file
        POOL_OPERATOR_CONTROLLER: Default controller
        POOL_OPERATOR_MAX_ATTEMPTS, POOL_OPERATOR_RETRY_DELAY_SECONDS,
        POOL_OPERATOR_RESTART_PAUSE_SECONDS: Retry policy defaults
    """
    settings = load_settings()

    try:
        names = resolve_targets(targets_file or settings.targets_file, target)
    except (EmptySourceError, TargetSourceError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_USAGE)

    try:
        policy = RetryPolicy(
            max_attempts=max_attempts if max_attempts is not None else settings.max_attempts,
            delay_seconds=retry_delay if retry_delay is not None else settings.retry_delay_seconds,
            restart_pause_seconds=(
                restart_pause if restart_pause is not None else settings.restart_pause_seconds
            ),
        )
        backend = create_controller(controller or settings.controller, settings)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_USAGE)

    observers: list[RunObserver] = [ConsoleObserver(console)]
    if settings.log_file is not None:
        observers.append(LoggingObserver())

    operator = BatchOperator(backend, policy=policy, observers=observers)

    console.print(
        f"[bold]{action.value.capitalize()}[/bold] {len(names)} target(s) via "
        f"{escape(controller or settings.controller)} "
        f"[dim](max {policy.max_attempts} attempts, {policy.delay_seconds:.0f}s apart)[/dim]"
    )

    async def _run() -> RunResult:
        operator.install_signal_handlers()
        return await operator.run(action, names)

    try:
        result = asyncio.run(_run())
    except RetryBudgetExhausted as e:
        if e.result is not None:
            print_summary(e.result)
        console.print(f"[red]Run aborted:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_FAILED)
    except RunCancelled as e:
        if e.result is not None:
            print_summary(e.result)
        console.print(f"[yellow]{escape(str(e))}[/yellow]")
        raise typer.Exit(EXIT_CANCELLED)

    print_summary(result)
    console.print(f"[green]{action.value.capitalize()} completed for all targets[/green]")


def print_summary(result: RunResult) -> None:
    """Render per-target outcomes as a table."""
    if not result.outcomes:
        return

    table = Table(title=f"{result.operation.value.capitalize()} Summary")
    table.add_column("Target", style="cyan")
    table.add_column("Phase")
    table.add_column("Attempts", justify="right")
    table.add_column("Result")

    for outcome in result.outcomes:
        status = "[green]ok[/green]" if outcome.success else "[red]failed[/red]"
        table.add_row(
            Text(outcome.target),
            outcome.operation.value,
            str(outcome.attempts),
            status,
        )

    console.print(table)
