from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .classifier import FailureClassifier, FailureKind
from .context import InstallCtx
from .errors import RemediationDeclined, SetupFailed
from .lib.command import CmdResult
from .lib.selinux import Disabler
from .phases import Phase, check_transition
from .state_store import StateStore
from .steps import BaseInstallStep, FeedSyncStep, SetupStep

logger = logging.getLogger(__name__)


@dataclass
class ControllerResult:
    phase: Phase
    rebooting: bool = False
    ran_phases: List[Phase] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        return 0


class PhaseController:
    """Resumable install state machine.

    The persisted phase is the only input used to decide where to resume.
    Every transition is saved before the next phase's work starts, and the
    post-reboot phase is saved before the reboot is issued.
    """

    def __init__(
        self,
        *,
        ctx: InstallCtx,
        store: StateStore,
        classifier: FailureClassifier,
        disabler: Disabler,
        reboot: Callable[[], None],
        base_install: Optional[BaseInstallStep] = None,
        setup: Optional[SetupStep] = None,
        feed_sync: Optional[FeedSyncStep] = None,
    ) -> None:
        self.ctx = ctx
        self.store = store
        self.classifier = classifier
        self.disabler = disabler
        self.reboot = reboot
        self.base_install = base_install or BaseInstallStep()
        self.setup = setup or SetupStep()
        self.feed_sync = feed_sync or FeedSyncStep()

    def run(self) -> ControllerResult:
        phase = self.store.load()
        result = ControllerResult(phase=phase)
        logger.info("Starting Atomicorp OpenVAS install (phase: %s)", phase.value)

        if phase is Phase.DONE:
            logger.info("Installation already complete; nothing to do")
            return result

        while phase is not Phase.DONE:
            result.ran_phases.append(phase)

            if phase is Phase.START:
                self.base_install.run(self.ctx)
                phase = self._advance(phase, Phase.SETUP)

            elif phase is Phase.SETUP:
                setup_result = self.setup.run(self.ctx)
                if not setup_result.ok:
                    result.warnings.extend(self._remediate(setup_result))
                    result.phase = Phase.POSTREBOOT_SETUP
                    result.rebooting = True
                    return result
                phase = self._advance(phase, Phase.FEEDS)

            elif phase is Phase.POSTREBOOT_SETUP:
                # No classification here: a second failure is a different fault.
                setup_result = self.setup.run(self.ctx, description="Post-reboot: retry openvas-setup")
                if not setup_result.ok:
                    raise SetupFailed(setup_result.returncode, str(self.ctx.executor.log_path))
                phase = self._advance(phase, Phase.FEEDS)

            elif phase is Phase.FEEDS:
                self.feed_sync.run(self.ctx)
                phase = self._advance(phase, Phase.DONE)

        result.phase = phase
        logger.info("=== Done ===")
        return result

    def _advance(self, current: Phase, nxt: Phase) -> Phase:
        check_transition(current, nxt)
        self.store.save(nxt)
        logger.info("Phase %s -> %s", current.value, nxt.value)
        return nxt

    def _remediate(self, setup_result: CmdResult) -> List[str]:
        """Handle a failed first setup run: disable SELinux and reboot, or fail."""

        kind = self.classifier.classify(self.ctx.executor.read_log())
        if kind is FailureKind.OTHER_FAILURE:
            raise SetupFailed(setup_result.returncode, str(self.ctx.executor.log_path))

        logger.info("Detected Atomicorp requirement: SELinux has to be DISABLED (not Permissive/Enforcing).")
        if not self.ctx.confirm("Apply required SELinux disable + reboot now?"):
            raise RemediationDeclined()

        warnings = self.disabler.disable_persistently()
        self._advance(Phase.SETUP, Phase.POSTREBOOT_SETUP)
        logger.info("Rebooting now. After reboot, re-run: openvas-installer")
        self.reboot()
        return warnings
