from __future__ import annotations

import logging
from typing import Sequence

from .command import CmdResult, CommandExecutor

logger = logging.getLogger(__name__)


def dnf_update(executor: CommandExecutor) -> CmdResult:
    return executor.run("System update", ["dnf", "-y", "update"])


def dnf_install(executor: CommandExecutor, packages: Sequence[str], *, description: str | None = None) -> CmdResult:
    if not packages:
        return CmdResult(argv=[], returncode=0, output="")
    return executor.run(
        description or f"Install {', '.join(packages)}",
        ["dnf", "-y", "install", *packages],
    )


def enable_repo(executor: CommandExecutor, repo: str) -> CmdResult:
    """Enable a repository through dnf config-manager (needs dnf-plugins-core)."""

    return executor.run(f"Enable {repo.upper()}", ["dnf", "config-manager", "--set-enabled", repo])


def refresh_metadata(executor: CommandExecutor) -> CmdResult:
    return executor.run("dnf clean all + makecache", "dnf -y clean all && dnf -y makecache", shell=True)
