"""
Factory for creating target controller instances.

Uses lazy imports so the docker back end is only loaded when selected.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pool_operator.config import Settings
    from pool_operator.controller import TargetController

# Hardcoded list of available controllers
AVAILABLE_CONTROLLERS = ["iis", "systemd", "docker"]


def create_controller(name: str, settings: "Settings") -> "TargetController":
    """
    Create the controller selected by name.

    Args:
        name: Controller identifier ("iis", "systemd" or "docker")
        settings: Settings supplying controller-specific options

    Returns:
        A TargetController implementation

    Raises:
        ValueError: If name is not recognized
    """
    if name == "iis":
        from pool_operator.iis.actions import IISAppPoolController

        return IISAppPoolController(appcmd_path=settings.appcmd_path)
    elif name == "systemd":
        from pool_operator.host.actions import SystemdController

        return SystemdController()
    elif name == "docker":
        # Lazy import to avoid loading python-on-whales unless needed
        from pool_operator.docker.actions import DockerController

        return DockerController(stop_timeout=settings.docker_stop_timeout)
    else:
        raise ValueError(
            f"Unknown controller '{name}'. "
            f"Available controllers: {', '.join(AVAILABLE_CONTROLLERS)}"
        )
