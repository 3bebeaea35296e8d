"""
Domain models: typed records shared by adapters, services and the CLI.
"""

from vmbootstrap.core.models.action import Action, Receipt
from vmbootstrap.core.models.platform import PackageManager, PlatformInfo
from vmbootstrap.core.models.settings import BootstrapSettings

__all__ = [
    "Action",
    "BootstrapSettings",
    "PackageManager",
    "PlatformInfo",
    "Receipt",
]
