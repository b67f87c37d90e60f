"""IIS application pool controller built on appcmd.exe.

Stops and starts application pools through ``appcmd stop|start apppool``
and confirms the resulting state with ``appcmd list apppool /text:state``.

All commands use asyncio.create_subprocess_exec with array arguments;
nothing is passed through a shell.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import Any

from pool_operator.iis.validation import validate_app_pool_name

logger = logging.getLogger(__name__)


def default_appcmd_path() -> Path:
    """Return the stock appcmd.exe location under %windir%."""
    windir = os.environ.get("WINDIR", r"C:\Windows")
    return Path(windir) / "System32" / "inetsrv" / "appcmd.exe"


class IISAppPoolController:
    """Controller for IIS application pools.

    Success is judged by the pool state after the command, not by appcmd's
    exit code: appcmd exits non-zero when asked to stop a pool that is
    already stopped, which still leaves the pool where the caller wants it.

    Note:
        Requires IIS and an elevated session on Windows. Tests mock the
        subprocess calls.
    """

    def __init__(self, appcmd_path: Path | None = None):
        """Initialize controller.

        Args:
            appcmd_path: Path to appcmd.exe, or None for the default location
        """
        self.appcmd_path = appcmd_path or default_appcmd_path()

    async def stop(self, target: str) -> dict[str, Any]:
        """Stop an application pool.

        Returns:
            Dict with target, command, returncode, state, success, stdout, stderr

        Raises:
            ValueError: If the pool name is invalid
            FileNotFoundError: If appcmd.exe is missing
        """
        return await self._change_state(target, "stop", expected_state="Stopped")

    async def start(self, target: str) -> dict[str, Any]:
        """Start an application pool.

        Returns:
            Dict with target, command, returncode, state, success, stdout, stderr

        Raises:
            ValueError: If the pool name is invalid
            FileNotFoundError: If appcmd.exe is missing
        """
        return await self._change_state(target, "start", expected_state="Started")

    async def get_state(self, target: str) -> str:
        """Return the pool state reported by appcmd (e.g. 'Started', 'Stopped')."""
        validate_app_pool_name(target)
        _, stdout, _ = await self._appcmd("list", "apppool", target, "/text:state")
        return stdout

    async def _change_state(
        self, target: str, command: str, expected_state: str
    ) -> dict[str, Any]:
        validate_app_pool_name(target)

        returncode, stdout, stderr = await self._appcmd(
            command, "apppool", f"/apppool.name:{target}"
        )
        state = await self.get_state(target)
        logger.debug(
            "appcmd %s apppool %s -> rc=%s state=%s", command, target, returncode, state
        )

        return {
            "target": target,
            "command": command,
            "returncode": returncode,
            "state": state,
            "success": state == expected_state,
            "stdout": stdout,
            "stderr": stderr or (stdout if returncode else ""),
        }

    async def _appcmd(self, *args: str) -> tuple[int | None, str, str]:
        proc = await asyncio.create_subprocess_exec(
            str(self.appcmd_path),
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
