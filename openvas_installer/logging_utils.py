from __future__ import annotations

import logging
import os
import time
from pathlib import Path
from typing import Optional

from .lib.env import PATHS

DEFAULT_LOG_PATH = PATHS.log_default
DEFAULT_LOG_ALIAS = PATHS.log_alias


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
) -> str:
    """Configure logging.

    All decisions go to the install log, which is also the transcript that
    command output is appended to (and that failure classification reads).

    Notes:
    - If /var/log is not writable we fall back to a file in the working
      directory and return that path instead.

    Returns the actual file path being used.
    """

    logger = logging.getLogger()
    logger.setLevel(level)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_openvas_configured", False):
        return getattr(logger, "_openvas_log_path", log_path)

    handlers: list[logging.Handler] = []

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    try:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        Path(log_path).touch(mode=0o600, exist_ok=True)
        os.chmod(log_path, 0o600)
        file_handler: logging.Handler = logging.FileHandler(log_path, encoding="utf-8")
        chosen_path = log_path
    except OSError:
        # Fall back to a writable location.
        chosen_path = str(Path.cwd() / "openvas-install.log")
        file_handler = logging.FileHandler(chosen_path, encoding="utf-8")
    file_handler.setFormatter(fmt)
    handlers.append(file_handler)

    if also_console:
        console = logging.StreamHandler()
        console.setFormatter(fmt)
        handlers.append(console)

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_openvas_configured", True)
    setattr(logger, "_openvas_log_path", chosen_path)

    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path


def ensure_log_alias(log_path: str, alias_path: Optional[str] = DEFAULT_LOG_ALIAS) -> Optional[str]:
    """Point alias_path at log_path with a symlink.

    A regular file already sitting at the alias is moved aside to
    ``<alias>.<epoch>.bak`` first. Returns the backup path, if one was made.
    """

    log = logging.getLogger(__name__)
    if not alias_path:
        return None

    alias = Path(alias_path)
    target = Path(os.path.abspath(log_path))
    # Already linked, or the alias is the log itself.
    if alias.resolve() == target.resolve():
        return None

    backup: Optional[str] = None
    if alias.exists() and not alias.is_symlink():
        backup = f"{alias_path}.{int(time.time())}.bak"
        os.replace(alias, backup)
        log.info("Moved existing %s to %s", alias_path, backup)

    try:
        alias.parent.mkdir(parents=True, exist_ok=True)
        if alias.is_symlink():
            alias.unlink()
        alias.symlink_to(target)
    except OSError as e:
        log.warning("Could not link %s -> %s: %s", alias_path, log_path, e)
    return backup
