from __future__ import annotations

import logging
import shlex

from ..context import InstallCtx
from ..errors import StepFailed
from ..lib.command import CmdResult
from ..lib.pkg import dnf_install, dnf_update, enable_repo, refresh_metadata

logger = logging.getLogger(__name__)

_SERVICES_SCRIPT = (
    "if [[ ! -d /var/lib/pgsql/data/base ]]; then postgresql-setup --initdb || true; fi; "
    "systemctl enable --now postgresql || true; systemctl enable --now redis || true"
)


def _required(result: CmdResult, description: str) -> None:
    if not result.ok:
        raise StepFailed(description, result.returncode)


def _best_effort(result: CmdResult, description: str) -> None:
    if not result.ok:
        logger.warning("%s failed (rc=%d); continuing", description, result.returncode)


class BaseInstallStep:
    """Base packages, the Atomicorp repository and the openvas package."""

    def run(self, ctx: InstallCtx) -> None:
        cfg = ctx.cfg
        ex = ctx.executor

        if ctx.confirm("Run system update (dnf -y update) first?"):
            _best_effort(dnf_update(ex), "System update")
        else:
            logger.info("Skipping system update")

        desc = "Install dnf plugins core (config-manager)"
        _required(dnf_install(ex, ["dnf-plugins-core"], description=desc), desc)

        if ctx.confirm("Enable CRB repo (recommended on Alma/RHEL 9 for dependencies)?"):
            _best_effort(enable_repo(ex, "crb"), "Enable CRB")
        else:
            logger.info("CRB not enabled (user choice)")

        if ctx.confirm("Install EPEL (can help resolve dependencies)?"):
            _best_effort(dnf_install(ex, ["epel-release"], description="Install EPEL"), "Install EPEL")
        else:
            logger.info("EPEL not installed (user choice)")

        desc = "Install base dependencies"
        _required(dnf_install(ex, cfg.base_packages, description=desc), desc)

        desc = "Enable & start PostgreSQL + Redis (best effort)"
        _best_effort(ex.run(desc, _SERVICES_SCRIPT, shell=True), desc)

        installer = shlex.quote(cfg.installer_path)
        desc = f"Download Atomicorp installer to {cfg.installer_path}"
        cmd = f"curl -fsSL {shlex.quote(cfg.installer_url)} -o {installer} && chmod +x {installer}"
        _required(ex.run(desc, cmd, shell=True), desc)

        # Interactive: the Atomicorp installer asks the operator to accept its terms.
        logger.info("If the Atomicorp installer prompts for terms, type: yes")
        desc = "Run Atomicorp installer (interactive)"
        _required(ex.run(desc, ["bash", cfg.installer_path]), desc)

        desc = "dnf clean all + makecache"
        _required(refresh_metadata(ex), desc)

        desc = f"Install {cfg.product_package} via Atomicorp"
        _required(dnf_install(ex, [cfg.product_package], description=desc), desc)
