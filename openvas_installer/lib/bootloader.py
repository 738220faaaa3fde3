from __future__ import annotations

import logging
from typing import Sequence

from ..errors import BootloaderUnavailable
from .command import CmdResult, CommandExecutor

logger = logging.getLogger(__name__)

GRUBBY = "grubby"


def add_kernel_args(executor: CommandExecutor, args: Sequence[str]) -> CmdResult:
    """Append kernel arguments to every installed boot entry via grubby."""

    if not executor.has_tool(GRUBBY):
        raise BootloaderUnavailable(f"{GRUBBY} not found; cannot set kernel args {' '.join(args)}")

    joined = " ".join(args)
    result = executor.run(
        f"Add kernel arg {joined} ({GRUBBY} --update-kernel=ALL)",
        [GRUBBY, "--update-kernel=ALL", f"--args={joined}"],
    )
    if result.ok:
        logger.info("Kernel args added to all boot entries: %s", joined)
    return result
