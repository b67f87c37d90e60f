"""
pool-operator

Retrying stop/start/restart for ordered lists of named targets such as IIS
application pools, systemd units and Docker containers.
This package provides:

- BatchOperator: fixed-count, fixed-delay retry orchestration
- TargetController Protocol: Interface for stop/start back ends
- Target source resolution from files and inline names
- CLI infrastructure: Typer-based command structure
"""

__version__ = "0.1.0"

# Re-export public types for convenient imports
from pool_operator.batch import BatchOperator
from pool_operator.controller import TargetController
from pool_operator.exceptions import (
    ActionFailure,
    EmptySourceError,
    RetryBudgetExhausted,
    RunCancelled,
    TargetSourceError,
)
from pool_operator.observer import ConsoleObserver, LoggingObserver, RunObserver
from pool_operator.retry import RetryPolicy
from pool_operator.targets import load_targets, parse_targets, resolve_targets
from pool_operator.types import Operation, RunResult, TargetOutcome

__all__ = [
    "__version__",
    # Orchestration
    "BatchOperator",
    "RetryPolicy",
    "Operation",
    "RunResult",
    "TargetOutcome",
    # Controller Protocol
    "TargetController",
    # Observers
    "RunObserver",
    "LoggingObserver",
    "ConsoleObserver",
    # Target sources
    "parse_targets",
    "load_targets",
    "resolve_targets",
    # Errors
    "EmptySourceError",
    "TargetSourceError",
    "ActionFailure",
    "RetryBudgetExhausted",
    "RunCancelled",
]
