"""
Exception classes for batch target operations.

- EmptySourceError: no usable target names were found
- TargetSourceError: the target source could not be read
- ActionFailure: a single stop/start attempt failed (retried locally)
- RetryBudgetExhausted: a target failed on every attempt; aborts the run
- RunCancelled: shutdown was requested while the run was waiting

Each exception stores its context in attributes so the CLI can render
a precise message and choose an exit code.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pool_operator.types import RunResult


class EmptySourceError(Exception):
    """
    Raised when a target source yields zero names after blank lines are dropped.

    Fatal: raised before any controller action is attempted.

    Attributes:
        source: Description of the source that was empty (path or "inline")
    """

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(f"No target names found in {source}")


class TargetSourceError(Exception):
    """
    Raised when a target source file cannot be read.

    Attributes:
        path: The path that was requested
        reason: Underlying error text
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read target source {path}: {reason}")


class ActionFailure(Exception):
    """
    Raised for a single failed stop/start attempt against a target.

    Every cause (raised exception or unsuccessful result) is wrapped the
    same way; the retry loop absorbs these until the budget runs out.

    Attributes:
        target: Target name the action was applied to
        operation: Primitive operation name ("stop" or "start")
        cause: Original exception, or None if the controller reported failure
        detail: Human-readable failure description
    """

    def __init__(
        self,
        target: str,
        operation: str,
        cause: BaseException | None = None,
        detail: str = "",
    ) -> None:
        self.target = target
        self.operation = operation
        self.cause = cause
        self.detail = detail or (str(cause) if cause is not None else "controller reported failure")
        super().__init__(f"{operation} {target} failed: {self.detail}")


class RetryBudgetExhausted(Exception):
    """
    Raised when a target fails on every attempt of its retry budget.

    Terminal: no further targets are attempted after this is raised.

    Attributes:
        target: Target that could not be actioned
        operation: Primitive operation name ("stop" or "start")
        attempts: Number of attempts made (equals the budget)
        last_failure: The final ActionFailure, if any
        result: Partial RunResult up to and including the failed target
    """

    def __init__(
        self,
        target: str,
        operation: str,
        attempts: int,
        last_failure: ActionFailure | None = None,
    ) -> None:
        self.target = target
        self.operation = operation
        self.attempts = attempts
        self.last_failure = last_failure
        self.result: "RunResult | None" = None
        reason = f": {last_failure.detail}" if last_failure is not None else ""
        super().__init__(
            f"Could not {operation} {target} after {attempts} attempts{reason}"
        )


class RunCancelled(Exception):
    """
    Raised when shutdown is requested during a retry delay or restart pause.

    Attributes:
        operation: The operation that was running
        result: Partial RunResult at the time of cancellation
    """

    def __init__(self, operation: str) -> None:
        self.operation = operation
        self.result: "RunResult | None" = None
        super().__init__(f"{operation} run cancelled by shutdown request")
