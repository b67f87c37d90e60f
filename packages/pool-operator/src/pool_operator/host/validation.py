"""Validation utilities for systemd unit targets.

Provides a unit guard that blocks operations on units the host needs to
stay reachable, plus an optional allow list.
"""

from typing import Set


class UnitGuard:
    """Authorization check for systemd units.

    Forbidden units (systemd, ssh, dbus, etc.) are blocked even if they
    appear in the allow list. With no allow list, every other unit is allowed.
    """

    # Units that must never be stopped by a batch run
    FORBIDDEN_UNITS: Set[str] = {
        "systemd",
        "dbus",
        "ssh",
        "sshd",
        "networking",
        "network-manager",
        "systemd-resolved",
        "systemd-networkd",
        "init",
    }

    def __init__(self, allowed: Set[str] | None = None):
        """Initialize guard.

        Args:
            allowed: Units that may be controlled, or None to allow any
                non-forbidden unit
        """
        self.allowed = set(allowed) if allowed is not None else None

    def is_allowed(self, unit: str) -> bool:
        """Check if a unit may be controlled.

        Forbidden units take precedence over the allow list. A trailing
        '.service' suffix is ignored for the comparison.
        """
        name = unit.removesuffix(".service")
        if name in self.FORBIDDEN_UNITS:
            return False
        if self.allowed is None:
            return True
        return name in self.allowed or unit in self.allowed

    def validate_unit_name(self, unit: str) -> None:
        """Validate a unit name before it reaches systemctl.

        Raises:
            ValueError: If the name contains path separators, traversal,
                or starts with '-' (would be parsed as an option)
        """
        if "/" in unit:
            raise ValueError("Invalid unit name: contains path separator '/'")
        if ".." in unit:
            raise ValueError("Invalid unit name: contains path traversal '..'")
        if unit.startswith("-"):
            raise ValueError("Invalid unit name: starts with '-'")
