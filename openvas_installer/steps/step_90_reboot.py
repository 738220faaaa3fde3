from __future__ import annotations

import logging

from ..lib.command import run_cmd

logger = logging.getLogger(__name__)


def reboot_host(*, dry_run: bool = False) -> None:
    """Flush filesystems and reboot. On a real host this does not come back."""

    logger.info("Rebooting host")
    run_cmd(["sync"], check=False, dry_run=dry_run)
    run_cmd(["reboot"], dry_run=dry_run)
