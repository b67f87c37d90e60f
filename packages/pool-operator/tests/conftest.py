"""Shared fixtures: a scripted controller and a recording observer."""

from typing import Any

import pytest

from pool_operator.observer import RunObserver
from pool_operator.retry import RetryPolicy


class ScriptedController:
    """Controller whose per-target results are scripted in advance.

    ``script`` maps (operation, target) to a list of results consumed one per
    call: True/False for a reported outcome, or an Exception instance to raise.
    Once a list is exhausted (or absent) calls succeed.
    """

    def __init__(self, script: dict[tuple[str, str], list[Any]] | None = None):
        self.script = {key: list(values) for key, values in (script or {}).items()}
        self.calls: list[tuple[str, str]] = []

    async def stop(self, target: str) -> dict[str, Any]:
        return self._next("stop", target)

    async def start(self, target: str) -> dict[str, Any]:
        return self._next("start", target)

    def _next(self, operation: str, target: str) -> dict[str, Any]:
        self.calls.append((operation, target))
        queue = self.script.get((operation, target))
        outcome = queue.pop(0) if queue else True
        if isinstance(outcome, Exception):
            raise outcome
        return {"target": target, "command": operation, "success": outcome}

    def count(self, operation: str, target: str | None = None) -> int:
        return sum(
            1 for op, name in self.calls if op == operation and (target is None or name == target)
        )


class RecordingObserver(RunObserver):
    """Observer that keeps every event in order."""

    def __init__(self):
        self.events: list[tuple] = []

    def on_phase(self, operation, targets):
        self.events.append(("phase", operation.value, list(targets)))

    def on_attempt(self, target, operation, attempt, max_attempts, failure):
        self.events.append(("attempt", operation.value, target, attempt, failure is None))

    def on_retry_wait(self, target, operation, delay_seconds):
        self.events.append(("retry_wait", operation.value, target))

    def on_outcome(self, outcome):
        self.events.append(("outcome", outcome.operation.value, outcome.target, outcome.success))

    def on_pause(self, seconds):
        self.events.append(("pause", seconds))

    def on_finish(self, result):
        self.events.append(("finish", result.success))

    def of(self, kind: str) -> list[tuple]:
        return [e for e in self.events if e[0] == kind]


@pytest.fixture
def fast_policy() -> RetryPolicy:
    """Default budget of 10 attempts with no real waiting."""
    return RetryPolicy(max_attempts=10, delay_seconds=0, restart_pause_seconds=0)


@pytest.fixture
def recorder() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def make_controller():
    """Factory for ScriptedController instances."""
    return ScriptedController
