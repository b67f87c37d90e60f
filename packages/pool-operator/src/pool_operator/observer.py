"""
Run observers for batch operations.

The operator reports every event of a run to its observers:
- phase start (stop or start phase, with the target count)
- each attempt, successful or not
- each retry delay
- each terminal per-target outcome
- the restart pause

RunObserver provides no-op hooks; subclasses override what they need.
LoggingObserver writes to the ``pool_operator`` logger and ConsoleObserver
prints human-readable lines through rich.
"""

import logging

from rich.console import Console
from rich.markup import escape

from pool_operator.exceptions import ActionFailure
from pool_operator.types import Operation, RunResult, TargetOutcome

logger = logging.getLogger(__name__)


class RunObserver:
    """Base observer with no-op hooks."""

    def on_phase(self, operation: Operation, targets: list[str]) -> None:
        pass

    def on_attempt(
        self,
        target: str,
        operation: Operation,
        attempt: int,
        max_attempts: int,
        failure: ActionFailure | None,
    ) -> None:
        """Called after every controller call. ``failure`` is None on success."""

    def on_retry_wait(self, target: str, operation: Operation, delay_seconds: float) -> None:
        pass

    def on_outcome(self, outcome: TargetOutcome) -> None:
        pass

    def on_pause(self, seconds: float) -> None:
        pass

    def on_finish(self, result: RunResult) -> None:
        pass


class LoggingObserver(RunObserver):
    """Observer that writes run events to the standard logging tree."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def on_phase(self, operation: Operation, targets: list[str]) -> None:
        self._log.info("Beginning %s phase for %d target(s)", operation.value, len(targets))

    def on_attempt(self, target, operation, attempt, max_attempts, failure):
        if failure is None:
            self._log.info(
                "%s %s: attempt %d/%d succeeded", operation.value, target, attempt, max_attempts
            )
        else:
            self._log.warning(
                "%s %s: attempt %d/%d failed: %s",
                operation.value,
                target,
                attempt,
                max_attempts,
                failure.detail,
            )

    def on_retry_wait(self, target, operation, delay_seconds):
        self._log.info(
            "Waiting %.0fs before retrying %s %s", delay_seconds, operation.value, target
        )

    def on_outcome(self, outcome: TargetOutcome) -> None:
        if outcome.success:
            self._log.info(
                "%s %s completed after %d attempt(s)",
                outcome.operation.value,
                outcome.target,
                outcome.attempts,
            )
        else:
            self._log.error(
                "Unable to %s %s after %d attempt(s)",
                outcome.operation.value,
                outcome.target,
                outcome.attempts,
            )

    def on_pause(self, seconds: float) -> None:
        self._log.info("Pausing %.0fs between stop and start phases", seconds)

    def on_finish(self, result: RunResult) -> None:
        level = logging.INFO if result.success else logging.ERROR
        self._log.log(
            level,
            "%s run finished: success=%s attempts=%d",
            result.operation.value,
            result.success,
            result.total_attempts,
        )


class ConsoleObserver(RunObserver):
    """Observer that prints progress for an operator watching the terminal.

    Target names and failure text are escaped before they reach rich markup;
    names are opaque and may contain square brackets.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def on_phase(self, operation: Operation, targets: list[str]) -> None:
        verb = "Stopping" if operation is Operation.STOP else "Starting"
        self.console.print(f"[bold]{verb} {len(targets)} target(s)[/bold]")

    def on_attempt(self, target, operation, attempt, max_attempts, failure):
        if failure is None:
            self.console.print(
                f"  [green]{operation.value}[/green] {escape(target)} "
                f"[dim](attempt {attempt}/{max_attempts})[/dim]"
            )
        else:
            self.console.print(
                f"  [yellow]{operation.value} {escape(target)} failed[/yellow] "
                f"[dim](attempt {attempt}/{max_attempts})[/dim]: {escape(failure.detail)}"
            )

    def on_retry_wait(self, target, operation, delay_seconds):
        self.console.print(f"  [dim]retrying in {delay_seconds:.0f}s[/dim]")

    def on_outcome(self, outcome: TargetOutcome) -> None:
        name = escape(outcome.target)
        if outcome.success:
            self.console.print(
                f"[green]{outcome.operation.value} {name} done[/green] "
                f"after {outcome.attempts} attempt(s)"
            )
        else:
            self.console.print(
                f"[red]Unable to {outcome.operation.value} {name} "
                f"after {outcome.attempts} attempts[/red]"
            )

    def on_pause(self, seconds: float) -> None:
        self.console.print(f"[cyan]Waiting {seconds:.0f}s before starting targets[/cyan]")
