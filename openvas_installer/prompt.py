from __future__ import annotations

import logging
from typing import Callable

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]


def tty_confirm(question: str) -> bool:
    """Ask on the terminal; anything but 'y' (including EOF) is no."""

    print()
    try:
        answer = input(f"{question} [y/N]: ")
    except EOFError:
        answer = ""
    yes = answer.strip().lower() == "y"
    logger.info("Prompt %r answered %s", question, "yes" if yes else "no")
    return yes


def fixed_answer(answer: bool) -> Confirm:
    """Non-interactive confirmer for scripted runs."""

    def confirm(question: str) -> bool:
        logger.info("Prompt %r auto-answered %s", question, "yes" if answer else "no")
        return answer

    return confirm
