from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Iterable, List, Pattern

logger = logging.getLogger(__name__)

# Atomicorp's openvas-setup prints this when SELinux is enforcing or permissive.
DEFAULT_FAILURE_PATTERNS = ("selinux must be disabled",)


class FailureKind(str, Enum):
    SECURITY_MODULE_MUST_BE_DISABLED = "security_module_must_be_disabled"
    OTHER_FAILURE = "other_failure"


class FailureClassifier:
    """Decides whether a failed setup run is the SELinux-must-be-disabled case.

    openvas-setup has no structured error codes, so this is a text match
    over the accumulated install log. Patterns are regular expressions,
    matched case-insensitively, and are taken from configuration.
    """

    def __init__(self, patterns: Iterable[str] = DEFAULT_FAILURE_PATTERNS) -> None:
        self.patterns: List[Pattern[str]] = [re.compile(p, re.IGNORECASE) for p in patterns]
        if not self.patterns:
            raise ValueError("At least one failure pattern is required")

    def classify(self, log_text: str) -> FailureKind:
        for pattern in self.patterns:
            if pattern.search(log_text):
                logger.info("Matched failure pattern %r", pattern.pattern)
                return FailureKind.SECURITY_MODULE_MUST_BE_DISABLED
        return FailureKind.OTHER_FAILURE
