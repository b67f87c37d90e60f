"""Docker container controller backed by python-on-whales."""

from pool_operator.docker.actions import DockerController

__all__ = ["DockerController"]
