"""Systemd unit controller.

Runs ``systemctl stop|start <unit>`` and confirms the outcome with
``systemctl is-active``. Commands go through asyncio.create_subprocess_exec
with array arguments, never a shell.
"""

import asyncio
import logging
from typing import Any

from pool_operator.host.validation import UnitGuard

logger = logging.getLogger(__name__)


class SystemdController:
    """Controller for systemd units.

    A stop succeeds when systemctl exits 0 and the unit is no longer active;
    a start succeeds when systemctl exits 0 and the unit reports 'active'.

    Note:
        Requires systemd. Elsewhere the systemctl binary is missing and each
        call raises FileNotFoundError, which the batch operator counts as a
        failed attempt. Tests mock the subprocess calls.
    """

    def __init__(self, allowed_units: set[str] | None = None):
        """Initialize controller.

        Args:
            allowed_units: Units that may be controlled, or None for any
                unit not on the forbidden list
        """
        self._guard = UnitGuard(allowed_units)

    async def start(self, target: str) -> dict[str, Any]:
        """Start a unit.

        Returns:
            Dict with target, command, returncode, active, success, stdout, stderr

        Raises:
            ValueError: If the unit is forbidden, not allowed, or has an invalid name
        """
        return await self._change_state(target, "start", want_active=True)

    async def stop(self, target: str) -> dict[str, Any]:
        """Stop a unit.

        Returns:
            Dict with target, command, returncode, active, success, stdout, stderr

        Raises:
            ValueError: If the unit is forbidden, not allowed, or has an invalid name
        """
        return await self._change_state(target, "stop", want_active=False)

    async def _change_state(
        self, target: str, command: str, want_active: bool
    ) -> dict[str, Any]:
        self._guard.validate_unit_name(target)
        if not self._guard.is_allowed(target):
            raise ValueError(f"Unit '{target}' is not allowed")

        returncode, stdout, stderr = await self._systemctl(command, target)
        _, state, _ = await self._systemctl("is-active", target)
        active = state == "active"
        logger.debug("systemctl %s %s -> rc=%s state=%s", command, target, returncode, state)

        return {
            "target": target,
            "command": command,
            "returncode": returncode,
            "active": active,
            "success": returncode == 0 and active == want_active,
            "stdout": stdout,
            "stderr": stderr,
        }

    async def _systemctl(self, *args: str) -> tuple[int | None, str, str]:
        proc = await asyncio.create_subprocess_exec(
            "systemctl",
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        stdout, stderr = await proc.communicate()
        return (
            proc.returncode,
            stdout.decode("utf-8", errors="replace").strip(),
            stderr.decode("utf-8", errors="replace").strip(),
        )
