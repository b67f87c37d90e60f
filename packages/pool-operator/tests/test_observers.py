"""Tests for the logging and console run observers."""

import logging

import pytest
from rich.console import Console

from pool_operator.batch import BatchOperator
from pool_operator.exceptions import RetryBudgetExhausted
from pool_operator.observer import ConsoleObserver, LoggingObserver
from pool_operator.retry import RetryPolicy
from pool_operator.types import Operation


@pytest.mark.asyncio
async def test_logging_observer_records_attempts_and_outcome(make_controller, fast_policy, caplog):
    """Failed attempts log warnings, completion logs info."""
    controller = make_controller({("stop", "PoolA"): [RuntimeError("access denied")]})
    operator = BatchOperator(controller, policy=fast_policy, observers=[LoggingObserver()])

    with caplog.at_level(logging.INFO, logger="pool_operator"):
        await operator.run(Operation.STOP, ["PoolA"])

    messages = [(r.levelno, r.getMessage()) for r in caplog.records if r.name == "pool_operator.observer"]
    assert (logging.WARNING, "stop PoolA: attempt 1/10 failed: access denied") in messages
    assert (logging.INFO, "stop PoolA: attempt 2/10 succeeded") in messages
    assert (logging.INFO, "stop PoolA completed after 2 attempt(s)") in messages


@pytest.mark.asyncio
async def test_logging_observer_reports_permanent_failure(make_controller, caplog):
    controller = make_controller({("start", "PoolA"): [False, False]})
    policy = RetryPolicy(max_attempts=2, delay_seconds=0, restart_pause_seconds=0)
    operator = BatchOperator(controller, policy=policy, observers=[LoggingObserver()])

    with caplog.at_level(logging.INFO, logger="pool_operator"):
        with pytest.raises(RetryBudgetExhausted):
            await operator.run(Operation.START, ["PoolA"])

    errors = [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR]
    assert "Unable to start PoolA after 2 attempt(s)" in errors


@pytest.mark.asyncio
async def test_console_observer_prints_progress(make_controller, fast_policy):
    console = Console(record=True, width=120)
    controller = make_controller({("stop", "PoolA"): [False]})
    operator = BatchOperator(controller, policy=fast_policy, observers=[ConsoleObserver(console)])

    await operator.run(Operation.RESTART, ["PoolA"])

    output = console.export_text()
    assert "Stopping 1 target(s)" in output
    assert "stop PoolA failed" in output
    assert "retrying in 0s" in output
    assert "Waiting 0s before starting targets" in output
    assert "Starting 1 target(s)" in output
    assert "stop PoolA done after 2 attempt(s)" in output
    assert "start PoolA done after 1 attempt(s)" in output


@pytest.mark.asyncio
async def test_console_observer_escapes_target_markup(make_controller, fast_policy):
    console = Console(record=True, width=120)
    controller = make_controller({("stop", "Pool[/x]"): [RuntimeError("[bold]denied")]})
    operator = BatchOperator(controller, policy=fast_policy, observers=[ConsoleObserver(console)])

    await operator.run(Operation.STOP, ["Pool[/x]", "[bold]"])

    output = console.export_text()
    assert "stop Pool[/x] failed" in output
    assert "[bold]denied" in output
    assert "stop Pool[/x] done after 2 attempt(s)" in output
    assert "stop [bold] done after 1 attempt(s)" in output
