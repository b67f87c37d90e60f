"""Host-level controller for systemd units.

Provides SystemdController for stopping and starting units, with unit name
checks via UnitGuard.
"""

from pool_operator.host.actions import SystemdController
from pool_operator.host.validation import UnitGuard

__all__ = ["SystemdController", "UnitGuard"]
