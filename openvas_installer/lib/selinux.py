from __future__ import annotations

import logging
import re
import shutil
from pathlib import Path
from typing import List, Protocol

from ..errors import BootloaderUnavailable
from .bootloader import add_kernel_args
from .command import CommandExecutor, run_cmd

logger = logging.getLogger(__name__)

SELINUX_CONFIG = "/etc/selinux/config"
DISABLE_KERNEL_ARG = "selinux=0"

_MODE_LINE = re.compile(r"^SELINUX=.*$", re.MULTILINE)


class Disabler(Protocol):
    def disable_persistently(self) -> List[str]:
        ...


def selinux_mode(*, dry_run: bool = False) -> str:
    """Runtime SELinux mode as reported by getenforce, or 'unknown'."""

    if dry_run or shutil.which("getenforce") is None:
        return "unknown"
    r = run_cmd(["getenforce"], check=False)
    return r.output.strip() or "unknown"


def set_config_mode(config_path: str, mode: str) -> None:
    """Rewrite the SELINUX= line of the policy config (appending it if absent)."""

    p = Path(config_path)
    text = p.read_text(encoding="utf-8")
    line = f"SELINUX={mode}"
    if _MODE_LINE.search(text):
        text = _MODE_LINE.sub(line, text)
    else:
        if text and not text.endswith("\n"):
            text += "\n"
        text += line + "\n"
    p.write_text(text, encoding="utf-8")
    logger.info("Set %s in %s", line, config_path)


class SELinuxDisabler:
    """Disables SELinux for the next boot: config file plus kernel argument.

    The two actions are independent and best-effort; problems come back as
    warnings and the caller decides whether to reboot anyway.
    """

    def __init__(
        self,
        executor: CommandExecutor,
        *,
        config_path: str = SELINUX_CONFIG,
        kernel_arg: str = DISABLE_KERNEL_ARG,
    ) -> None:
        self.executor = executor
        self.config_path = config_path
        self.kernel_arg = kernel_arg

    def disable_persistently(self) -> List[str]:
        warnings: List[str] = []
        logger.info("=== Disabling SELinux persistently (required by Atomicorp openvas-setup) ===")
        logger.info("Current SELinux runtime: %s", selinux_mode(dry_run=self.executor.dry_run))

        if self.executor.dry_run:
            logger.info("Would set SELINUX=disabled in %s", self.config_path)
        else:
            try:
                set_config_mode(self.config_path, "disabled")
            except OSError as e:
                warnings.append(f"Could not update {self.config_path}: {e}")

        try:
            result = add_kernel_args(self.executor, [self.kernel_arg])
            if not result.ok:
                warnings.append(f"grubby failed (rc={result.returncode}); kernel arg {self.kernel_arg} not applied")
        except BootloaderUnavailable:
            warnings.append(
                f"grubby not found; cannot automatically set kernel arg {self.kernel_arg}. "
                f"Install grubby or add {self.kernel_arg} to GRUB_CMDLINE_LINUX manually."
            )

        for w in warnings:
            logger.warning(w)
        logger.info("SELinux disabled settings applied. A reboot is required.")
        return warnings
