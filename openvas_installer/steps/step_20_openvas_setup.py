from __future__ import annotations

import logging

from ..context import InstallCtx
from ..lib.command import CmdResult
from ..lib.selinux import selinux_mode

logger = logging.getLogger(__name__)


class SetupStep:
    """Runs openvas-setup. The caller interprets the result."""

    def run(self, ctx: InstallCtx, *, description: str = "Run openvas-setup (may be interactive)") -> CmdResult:
        logger.info("SELinux runtime: %s", selinux_mode(dry_run=ctx.dry_run))
        return ctx.executor.run(description, ctx.cfg.setup_command)
