"""Tests for RetryPolicy and result types."""

import pytest

from pool_operator.retry import RetryPolicy
from pool_operator.types import Operation, RunResult, TargetOutcome


class TestRetryPolicy:
    """Tests for the fixed-count, fixed-delay policy."""

    def test_defaults(self):
        policy = RetryPolicy()

        assert policy.max_attempts == 10
        assert policy.delay_seconds == 30
        assert policy.restart_pause_seconds == 120

    def test_should_retry_until_budget_spent(self):
        policy = RetryPolicy(max_attempts=3)

        assert policy.should_retry(1) is True
        assert policy.should_retry(2) is True
        assert policy.should_retry(3) is False

    def test_single_attempt_budget_never_retries(self):
        assert RetryPolicy(max_attempts=1).should_retry(1) is False

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_attempts": 0},
            {"delay_seconds": -1},
            {"restart_pause_seconds": -0.5},
        ],
    )
    def test_invalid_values_rejected(self, kwargs):
        with pytest.raises(ValueError):
            RetryPolicy(**kwargs)


class TestOperationPhases:
    """Tests for how operations decompose into primitive phases."""

    def test_restart_is_stop_then_start(self):
        assert Operation.RESTART.phases == (Operation.STOP, Operation.START)

    def test_primitives_are_single_phase(self):
        assert Operation.STOP.phases == (Operation.STOP,)
        assert Operation.START.phases == (Operation.START,)


class TestRunResult:
    """Tests for computed result fields."""

    def test_incomplete_restart_is_not_success(self):
        result = RunResult(
            operation=Operation.RESTART,
            targets=["a"],
            outcomes=[TargetOutcome(target="a", operation=Operation.STOP, success=True, attempts=2)],
        )

        assert result.success is False
        assert result.total_attempts == 2

    def test_serializes_computed_fields(self):
        result = RunResult(
            operation=Operation.STOP,
            targets=["a"],
            outcomes=[TargetOutcome(target="a", operation=Operation.STOP, success=True, attempts=3)],
        )

        data = result.model_dump(mode="json")
        assert data["success"] is True
        assert data["total_attempts"] == 3
        assert data["outcomes"][0]["retries"] == 2
        assert data["operation"] == "stop"
