from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional

from .classifier import FailureClassifier
from .config import InstallerConfig, load_installer_config
from .context import InstallCtx
from .controller import ControllerResult, PhaseController
from .errors import InstallerError, NotRoot
from .lib.command import CommandExecutor
from .lib.env import PATHS
from .lib.net import ipv4_summary
from .lib.selinux import SELinuxDisabler
from .logging_utils import configure_logging, ensure_log_alias
from .prompt import Confirm, fixed_answer, tty_confirm
from .state_store import FileStateStore
from .steps import reboot_host

logger = logging.getLogger(__name__)


def build_controller(
    cfg: InstallerConfig,
    *,
    state_path: str,
    log_path: str,
    confirm: Confirm,
    dry_run: bool = False,
) -> PhaseController:
    executor = CommandExecutor(log_path, dry_run=dry_run)
    return PhaseController(
        ctx=InstallCtx(cfg=cfg, executor=executor, confirm=confirm),
        store=FileStateStore(state_path, read_only=dry_run),
        classifier=FailureClassifier(cfg.failure_patterns),
        disabler=SELinuxDisabler(executor, config_path=cfg.selinux_config, kernel_arg=cfg.kernel_arg),
        reboot=lambda: reboot_host(dry_run=dry_run),
    )


def _log_summary(result: ControllerResult, *, log_path: str, alias: Optional[str], state_path: str) -> None:
    logger.info("=== Summary ===")
    for line in ipv4_summary():
        logger.info("  %s", line)
    logger.info("Logs: %s%s", log_path, f" (alias {alias})" if alias else "")
    logger.info("State file: %s", state_path)
    logger.info("Phase: %s", result.phase.value)


def run(
    *,
    config_path: Optional[str] = PATHS.config_default,
    state_path: Optional[str] = None,
    log_path: Optional[str] = None,
    confirm: Confirm = tty_confirm,
    dry_run: bool = False,
) -> ControllerResult:
    """Run (or resume) the install, persisting the phase for the next invocation."""

    cfg = load_installer_config(config_path)
    state_path = state_path or cfg.state_path
    actual_log_path = configure_logging(log_path=log_path or cfg.log_path)
    if not dry_run:
        ensure_log_alias(actual_log_path, cfg.log_alias)

    logger.info("Logs: %s", actual_log_path)
    logger.info("State: %s", state_path)

    controller = build_controller(
        cfg,
        state_path=state_path,
        log_path=actual_log_path,
        confirm=confirm,
        dry_run=dry_run,
    )

    try:
        result = controller.run()
    except InstallerError as e:
        logger.error("%s", e)
        raise
    except Exception:
        logger.exception("Installer failed")
        raise

    if not result.rebooting:
        _log_summary(result, log_path=actual_log_path, alias=cfg.log_alias, state_path=state_path)
    return result


def require_root() -> None:
    if os.geteuid() != 0:
        raise NotRoot("Run as root: sudo -i; then openvas-installer")


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(
        prog="openvas-installer",
        description="Install OpenVAS from Atomicorp; resumes after the SELinux reboot.",
    )
    p.add_argument("--config", default=PATHS.config_default, help="YAML config (optional)")
    p.add_argument("--state", default=None, help="Path to phase state (json|yaml|env)")
    p.add_argument("--log", default=None, help="Path to install log")
    p.add_argument("--dry-run", action="store_true", help="Log commands without running them")
    answers = p.add_mutually_exclusive_group()
    answers.add_argument("--yes", action="store_true", help="Answer yes to every prompt")
    answers.add_argument("--no", action="store_true", help="Answer no to every prompt")
    p.add_argument("--show-state", action="store_true", help="Print the persisted phase and exit")

    args = p.parse_args(argv)

    if args.show_state:
        cfg = load_installer_config(args.config)
        print(FileStateStore(args.state or cfg.state_path).load().value)
        return 0

    confirm: Confirm = tty_confirm
    if args.yes:
        confirm = fixed_answer(True)
    elif args.no:
        confirm = fixed_answer(False)

    try:
        if not args.dry_run:
            require_root()
        result = run(
            config_path=args.config,
            state_path=args.state,
            log_path=args.log,
            confirm=confirm,
            dry_run=bool(args.dry_run),
        )
    except InstallerError as e:
        print(str(e), file=sys.stderr)
        return e.exit_code
    return result.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
