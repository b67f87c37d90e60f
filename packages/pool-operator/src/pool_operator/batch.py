"""
BatchOperator for retry-orchestrated stop/start/restart runs.

The operator applies an Operation to an ordered target list through a
TargetController:
- Targets are processed strictly in input order, one at a time
- Each target gets its own retry budget per phase (fixed count, fixed delay)
- A target that exhausts its budget aborts the run; later targets are not tried
- Restart runs the stop phase, pauses exactly once, then runs the start phase

Waits use asyncio.Event with a timeout, so request_shutdown() (wired to
SIGINT/SIGTERM by the CLI) interrupts a retry delay or the restart pause.
"""

import asyncio
import functools
import logging
import signal
from datetime import datetime
from typing import Any, Awaitable, Callable, Iterable

from pool_operator.controller import TargetController
from pool_operator.exceptions import (
    ActionFailure,
    EmptySourceError,
    RetryBudgetExhausted,
    RunCancelled,
)
from pool_operator.observer import RunObserver
from pool_operator.retry import RetryPolicy
from pool_operator.types import Operation, RunResult, TargetOutcome

logger = logging.getLogger(__name__)


class BatchOperator:
    """
    Applies stop/start/restart across an ordered list of targets.

    Example:
        operator = BatchOperator(
            controller=IISAppPoolController(),
            policy=RetryPolicy(max_attempts=10, delay_seconds=30),
            observers=[LoggingObserver()],
        )
        result = await operator.run(Operation.RESTART, ["PoolA", "PoolB"])
    """

    def __init__(
        self,
        controller: TargetController,
        policy: RetryPolicy | None = None,
        observers: Iterable[RunObserver] | None = None,
    ) -> None:
        """
        Initialize the operator.

        Args:
            controller: Back end performing the real stop/start calls
            policy: Retry budget and waits, or None for the defaults
            observers: Sinks receiving attempt/outcome/pause events
        """
        self.controller = controller
        self.policy = policy or RetryPolicy()
        self.observers: list[RunObserver] = list(observers) if observers else []
        self._shutdown = asyncio.Event()

    def request_shutdown(self) -> None:
        """Interrupt the current or next wait; the run ends with RunCancelled."""
        self._shutdown.set()

    def install_signal_handlers(self) -> None:
        """
        Route SIGINT/SIGTERM to request_shutdown on the running loop.

        The Windows event loops do not support add_signal_handler; there the
        default KeyboardInterrupt behavior is left in place.
        """
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, functools.partial(self._handle_signal, sig))
            except NotImplementedError:
                logger.debug("Signal handlers not supported on this event loop")
                return

    def _handle_signal(self, sig: signal.Signals) -> None:
        logger.warning("Received %s, cancelling run at the next wait", sig.name)
        self.request_shutdown()

    async def run(self, operation: Operation, targets: Iterable[str]) -> RunResult:
        """
        Apply an operation to every target in order.

        Args:
            operation: STOP, START or RESTART
            targets: Target names in processing order

        Returns:
            RunResult with one outcome per target per phase

        Raises:
            EmptySourceError: If targets is empty (no controller call is made)
            RetryBudgetExhausted: If a target fails on every attempt; the
                partial result is attached as ``.result``
            RunCancelled: If shutdown is requested during a wait
        """
        targets = list(targets)
        if not targets:
            raise EmptySourceError("target list")

        result = RunResult(operation=operation, targets=targets)
        try:
            for index, phase in enumerate(operation.phases):
                if index > 0:
                    await self._pause(result)
                await self._run_phase(phase, targets, result)
        except RetryBudgetExhausted as e:
            result.failed_target = e.target
            e.result = result
            raise
        except RunCancelled as e:
            result.cancelled = True
            e.result = result
            raise
        finally:
            result.finished_at = datetime.now()
            self._notify("on_finish", result)

        return result

    async def _run_phase(
        self, phase: Operation, targets: list[str], result: RunResult
    ) -> None:
        self._notify("on_phase", phase, targets)
        for target in targets:
            outcome, last_failure = await self._apply(phase, target, result)
            result.outcomes.append(outcome)
            self._notify("on_outcome", outcome)
            if not outcome.success:
                raise RetryBudgetExhausted(
                    target, phase.value, outcome.attempts, last_failure
                )

    async def _apply(
        self, phase: Operation, target: str, result: RunResult
    ) -> tuple[TargetOutcome, ActionFailure | None]:
        """Run one target's action until it succeeds or the budget is spent."""
        action = self._action_for(phase)
        attempts = 0
        last_failure: ActionFailure | None = None

        while True:
            attempts += 1
            failure = await self._attempt(action, target, phase)
            self._notify(
                "on_attempt", target, phase, attempts, self.policy.max_attempts, failure
            )

            if failure is None:
                outcome = TargetOutcome(
                    target=target,
                    operation=phase,
                    success=True,
                    attempts=attempts,
                    last_error=last_failure.detail if last_failure else None,
                )
                return outcome, last_failure

            last_failure = failure
            if not self.policy.should_retry(attempts):
                outcome = TargetOutcome(
                    target=target,
                    operation=phase,
                    success=False,
                    attempts=attempts,
                    last_error=failure.detail,
                )
                return outcome, last_failure

            self._notify("on_retry_wait", target, phase, self.policy.delay_seconds)
            await self._wait(self.policy.delay_seconds, result.operation)

    def _action_for(
        self, phase: Operation
    ) -> Callable[[str], Awaitable[dict[str, Any]]]:
        if phase is Operation.STOP:
            return self.controller.stop
        if phase is Operation.START:
            return self.controller.start
        raise ValueError(f"{phase.value} is not a primitive operation")

    async def _attempt(
        self,
        action: Callable[[str], Awaitable[dict[str, Any]]],
        target: str,
        phase: Operation,
    ) -> ActionFailure | None:
        """Make one controller call; return None on success, else the failure."""
        try:
            outcome = await action(target)
        except Exception as e:
            logger.debug("%s %s raised", phase.value, target, exc_info=True)
            return ActionFailure(target, phase.value, cause=e)

        if not outcome or not outcome.get("success"):
            detail = ""
            if outcome:
                detail = outcome.get("error") or outcome.get("stderr") or ""
            return ActionFailure(target, phase.value, detail=detail)
        return None

    async def _pause(self, result: RunResult) -> None:
        result.pauses += 1
        self._notify("on_pause", self.policy.restart_pause_seconds)
        await self._wait(self.policy.restart_pause_seconds, result.operation)

    async def _wait(self, seconds: float, operation: Operation) -> None:
        """Block for a fixed time unless shutdown is requested."""
        if self._shutdown.is_set():
            raise RunCancelled(operation.value)
        try:
            await asyncio.wait_for(self._shutdown.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            return
        raise RunCancelled(operation.value)

    def _notify(self, hook: str, *args: Any) -> None:
        for observer in self.observers:
            getattr(observer, hook)(*args)
