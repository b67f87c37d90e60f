"""
Target controller protocol.

A target controller performs the real stop/start against a named target
(an IIS application pool, a systemd unit, a container). The batch
operator only depends on this protocol, so new back ends can be added
without touching the retry logic.

Example:
    ```python
    class MyController:
        async def stop(self, target: str) -> dict[str, Any]:
            ...
            return {"target": target, "command": "stop", "success": True}

        async def start(self, target: str) -> dict[str, Any]:
            ...
    ```

Results are dicts with at least a ``success`` key. A falsy ``success`` and
a raised exception are both treated as one failed attempt.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class TargetController(Protocol):
    """Interface for stop/start back ends."""

    async def stop(self, target: str) -> dict[str, Any]:
        """Stop the named target and report whether it is now stopped."""
        ...

    async def start(self, target: str) -> dict[str, Any]:
        """Start the named target and report whether it is now running."""
        ...
