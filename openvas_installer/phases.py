from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet, Optional

from .errors import InvalidTransition


class Phase(str, Enum):
    """Installation phases, persisted across reboots.

    start -> setup -> feeds -> done
               |        ^
               v        |
         postreboot_setup
    """

    START = "start"
    SETUP = "setup"
    POSTREBOOT_SETUP = "postreboot_setup"
    FEEDS = "feeds"
    DONE = "done"

    @classmethod
    def parse(cls, value: object) -> Optional["Phase"]:
        if value is None:
            return None
        text = str(value).strip().strip("'\"").strip().lower()
        for phase in cls:
            if phase.value == text:
                return phase
        return None


TRANSITIONS: Dict[Phase, FrozenSet[Phase]] = {
    Phase.START: frozenset({Phase.SETUP}),
    Phase.SETUP: frozenset({Phase.FEEDS, Phase.POSTREBOOT_SETUP}),
    Phase.POSTREBOOT_SETUP: frozenset({Phase.FEEDS}),
    Phase.FEEDS: frozenset({Phase.DONE}),
    Phase.DONE: frozenset(),
}


def check_transition(current: Phase, nxt: Phase) -> None:
    if nxt not in TRANSITIONS[current]:
        raise InvalidTransition(f"Illegal phase transition: {current.value} -> {nxt.value}")
