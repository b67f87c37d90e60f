"""
Retry policy for per-target stop/start attempts.

The policy is fixed-count, fixed-delay: every failed attempt below the
budget waits the same delay before the next attempt. There is no
exponential growth and no jitter.

The restart pause lives here too, since it is the other fixed wait a run
can take.
"""

from dataclasses import dataclass

DEFAULT_MAX_ATTEMPTS = 10
DEFAULT_DELAY_SECONDS = 30.0
DEFAULT_RESTART_PAUSE_SECONDS = 120.0


@dataclass(frozen=True)
class RetryPolicy:
    """
    Configuration for per-target retry behavior.

    Attributes:
        max_attempts: Attempts allowed per target per phase (default 10)
        delay_seconds: Wait between a failed attempt and the next (default 30)
        restart_pause_seconds: Single wait between the stop and start
            phases of a restart (default 120)

    Example:
        policy = RetryPolicy(max_attempts=3, delay_seconds=5)
        policy.should_retry(attempts=2)  # True, one attempt left
        policy.should_retry(attempts=3)  # False, budget spent
    """

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    delay_seconds: float = DEFAULT_DELAY_SECONDS
    restart_pause_seconds: float = DEFAULT_RESTART_PAUSE_SECONDS

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts}")
        if self.delay_seconds < 0:
            raise ValueError(f"delay_seconds must be >= 0, got {self.delay_seconds}")
        if self.restart_pause_seconds < 0:
            raise ValueError(
                f"restart_pause_seconds must be >= 0, got {self.restart_pause_seconds}"
            )

    def should_retry(self, attempts: int) -> bool:
        """
        Check if another attempt should be made.

        Args:
            attempts: Number of attempts made so far for the current target

        Returns:
            True if attempts < max_attempts, False otherwise
        """
        return attempts < self.max_attempts
