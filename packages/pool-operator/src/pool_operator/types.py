"""
Core types for batch target operations.

This module defines the data structures shared by the operator, the
observers and the CLI:
- Operation: Enum of requested operations (stop, start, restart)
- TargetOutcome: Terminal result for one target in one phase
- RunResult: Summary of a whole run

Per project patterns:
- Use str enum for CLI and JSON compatibility
- Pydantic BaseModel for result types
- Field() with descriptions for documentation
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, computed_field


class Operation(str, Enum):
    """
    Operations that can be requested for a target list.

    STOP and START are primitive: each is one retried controller call per
    target. RESTART is composed: stop every target, pause once, then start
    every target.
    """

    STOP = "stop"
    """Stop every target in order."""

    START = "start"
    """Start every target in order."""

    RESTART = "restart"
    """Stop all, pause once, start all."""

    @property
    def phases(self) -> tuple["Operation", ...]:
        """Primitive operations this operation runs, in order."""
        if self is Operation.RESTART:
            return (Operation.STOP, Operation.START)
        return (self,)


class TargetOutcome(BaseModel):
    """
    Terminal outcome for one target in one phase.

    Attributes:
        target: Target name as given in the source
        operation: Primitive phase the outcome belongs to (stop or start)
        success: True if an attempt succeeded within the budget
        attempts: Number of controller calls made for this target
        last_error: Failure text from the last failed attempt, if any
        finished_at: When the terminal outcome was reached
    """

    target: str = Field(..., description="Target name")
    operation: Operation = Field(..., description="Primitive phase (stop or start)")
    success: bool = Field(..., description="Whether the target was actioned")
    attempts: int = Field(..., ge=1, description="Controller calls made")
    last_error: str | None = Field(
        default=None, description="Error from the last failed attempt"
    )
    finished_at: datetime = Field(
        default_factory=datetime.now, description="When the outcome was reached"
    )

    @computed_field
    @property
    def retries(self) -> int:
        """Attempts beyond the first."""
        return self.attempts - 1


class RunResult(BaseModel):
    """
    Summary of one batch run.

    Outcomes are kept in processing order. For a restart, the stop-phase
    outcomes precede the start-phase outcomes.
    """

    operation: Operation = Field(..., description="Requested operation")
    targets: list[str] = Field(default_factory=list, description="Targets in input order")
    outcomes: list[TargetOutcome] = Field(default_factory=list)
    pauses: int = Field(default=0, description="Restart pauses taken between phases")
    failed_target: str | None = Field(
        default=None, description="Target that exhausted its retry budget"
    )
    cancelled: bool = Field(default=False, description="Run ended by shutdown request")
    started_at: datetime = Field(default_factory=datetime.now)
    finished_at: datetime | None = Field(default=None)

    @computed_field
    @property
    def success(self) -> bool:
        """True if every target in every phase was actioned."""
        if self.cancelled or self.failed_target is not None:
            return False
        expected = len(self.targets) * len(self.operation.phases)
        return len(self.outcomes) == expected and all(o.success for o in self.outcomes)

    @computed_field
    @property
    def total_attempts(self) -> int:
        """Controller calls made across all targets and phases."""
        return sum(o.attempts for o in self.outcomes)
