from .step_10_base_install import BaseInstallStep
from .step_20_openvas_setup import SetupStep
from .step_30_feed_sync import FeedSyncStep
from .step_90_reboot import reboot_host

__all__ = [
    "BaseInstallStep",
    "SetupStep",
    "FeedSyncStep",
    "reboot_host",
]
