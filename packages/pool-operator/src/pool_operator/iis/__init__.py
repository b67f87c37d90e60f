"""IIS application pool controller.

Provides IISAppPoolController for stopping and starting application pools
via appcmd.exe, with pool name validation via validate_app_pool_name.
"""

from pool_operator.iis.actions import IISAppPoolController, default_appcmd_path
from pool_operator.iis.validation import validate_app_pool_name

__all__ = ["IISAppPoolController", "default_appcmd_path", "validate_app_pool_name"]
