from __future__ import annotations

import logging

from ..context import InstallCtx

logger = logging.getLogger(__name__)


class FeedSyncStep:
    def run(self, ctx: InstallCtx) -> None:
        argv = ctx.cfg.feed_sync_command
        tool = argv[0]

        # Packaging differs between Atomicorp releases; the tool may not exist.
        if not ctx.executor.has_tool(tool):
            logger.info("%s not found (may be normal depending on packaging). Skipping.", tool)
            return

        r = ctx.executor.run(f"Run {' '.join(argv)} (best effort)", argv)
        if not r.ok:
            logger.warning("Feed sync failed (rc=%d); continuing", r.returncode)
