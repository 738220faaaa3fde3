from __future__ import annotations

from dataclasses import dataclass

from .config import InstallerConfig
from .lib.command import CommandExecutor
from .prompt import Confirm


@dataclass(frozen=True)
class InstallCtx:
    cfg: InstallerConfig
    executor: CommandExecutor
    confirm: Confirm

    @property
    def dry_run(self) -> bool:
        return self.executor.dry_run
