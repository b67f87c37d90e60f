"""Docker container controller.

Provides async wrappers around python-on-whales for non-blocking container
stop/start. Blocking docker calls run in the default executor.
"""

import asyncio
from typing import Any

from python_on_whales import docker

# Seconds docker waits for a graceful stop before SIGKILL
DEFAULT_STOP_TIMEOUT = 10


class DockerController:
    """Controller for Docker containers addressed by name or ID.

    Both operations are idempotent: stopping a stopped container or starting
    a running one succeeds without calling docker again.
    """

    def __init__(self, stop_timeout: int = DEFAULT_STOP_TIMEOUT):
        """Initialize controller with the python-on-whales docker client.

        Args:
            stop_timeout: Seconds to wait for graceful shutdown before SIGKILL
        """
        self._docker = docker
        self.stop_timeout = stop_timeout

    async def start(self, target: str) -> dict[str, Any]:
        """Start a container.

        Returns:
            Dict with target, container_id, state, running, success

        Raises:
            NoSuchContainer: If the container doesn't exist
        """
        loop = asyncio.get_running_loop()

        def _blocking_start():
            container = self._docker.container.inspect(target)

            if not container.state.running:
                self._docker.container.start(target)
                container = self._docker.container.inspect(target)

            return {
                "target": target,
                "command": "start",
                "container_id": container.id,
                "state": container.state.status,
                "running": container.state.running,
                "success": bool(container.state.running),
            }

        return await loop.run_in_executor(None, _blocking_start)

    async def stop(self, target: str) -> dict[str, Any]:
        """Stop a container with graceful shutdown.

        Returns:
            Dict with target, container_id, state, exit_code, running, success

        Raises:
            NoSuchContainer: If the container doesn't exist
        """
        loop = asyncio.get_running_loop()

        def _blocking_stop():
            container = self._docker.container.inspect(target)

            if container.state.running:
                self._docker.container.stop(target, time=self.stop_timeout)
                container = self._docker.container.inspect(target)

            return {
                "target": target,
                "command": "stop",
                "container_id": container.id,
                "state": container.state.status,
                "exit_code": container.state.exit_code or 0,
                "running": container.state.running,
                "success": not container.state.running,
            }

        return await loop.run_in_executor(None, _blocking_stop)
