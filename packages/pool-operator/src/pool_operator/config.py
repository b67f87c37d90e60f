"""Environment-based configuration for pool-operator."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings

from pool_operator.retry import (
    DEFAULT_DELAY_SECONDS,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_RESTART_PAUSE_SECONDS,
    RetryPolicy,
)


class Settings(BaseSettings):
    """pool-operator configuration.

    All settings can be overridden via environment variables with the
    POOL_OPERATOR_ prefix. For example:
        POOL_OPERATOR_TARGETS_FILE=C:\\ops\\pools.txt
        POOL_OPERATOR_CONTROLLER=systemd
        POOL_OPERATOR_RETRY_DELAY_SECONDS=5
    """

    # Target source
    targets_file: Path | None = None

    # Back end: iis, systemd or docker
    controller: str = "iis"

    # Retry policy
    max_attempts: int = Field(default=DEFAULT_MAX_ATTEMPTS, ge=1)
    retry_delay_seconds: float = Field(default=DEFAULT_DELAY_SECONDS, ge=0)
    restart_pause_seconds: float = Field(default=DEFAULT_RESTART_PAUSE_SECONDS, ge=0)

    # Controller specifics
    appcmd_path: Path | None = None
    docker_stop_timeout: int = 10

    # Logging; run events are written to log_file when one is set
    log_level: str = "WARNING"
    log_file: Path | None = None

    model_config = {"env_prefix": "POOL_OPERATOR_"}

    def retry_policy(self) -> RetryPolicy:
        """Build the RetryPolicy described by these settings."""
        return RetryPolicy(
            max_attempts=self.max_attempts,
            delay_seconds=self.retry_delay_seconds,
            restart_pause_seconds=self.restart_pause_seconds,
        )
