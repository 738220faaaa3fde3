from __future__ import annotations

import json
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

from .phases import Phase

logger = logging.getLogger(__name__)

_ENV_LINE = re.compile(r"^\s*(?:export\s+)?PHASE\s*=\s*(.*?)\s*$")


class StateStore(Protocol):
    """Persists the current installation phase."""

    def load(self) -> Phase:
        ...

    def save(self, phase: Phase) -> None:
        ...


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"json", "yaml", "yml", "env"}:
        return ext
    # Default to JSON for unknown extensions.
    return "json"


def _parse_env(text: str) -> Dict[str, Any]:
    # State files written by the shell installer: PHASE="setup"
    data: Dict[str, Any] = {}
    for line in text.splitlines():
        m = _ENV_LINE.match(line)
        if m:
            data["phase"] = m.group(1)
    return data


def _read_mapping(path: Path) -> Dict[str, Any]:
    fmt = _detect_format(path)
    text = path.read_text(encoding="utf-8")

    if fmt == "env":
        return _parse_env(text)
    if fmt in {"yaml", "yml"}:
        import yaml

        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text)

    if not isinstance(data, dict):
        raise ValueError(f"State file must be an object/dict, got {type(data)}")
    return data


def _render(path: Path, phase: Phase) -> str:
    fmt = _detect_format(path)
    state = {"phase": phase.value}
    if fmt == "env":
        return f'PHASE="{phase.value}"\n'
    if fmt in {"yaml", "yml"}:
        import yaml

        return yaml.safe_dump(state, sort_keys=False)
    return json.dumps(state, indent=2, sort_keys=True) + "\n"


class FileStateStore:
    """Single-record phase store at a fixed path (json|yaml|env by suffix)."""

    def __init__(self, path: str, *, read_only: bool = False) -> None:
        self.path = Path(path)
        self.read_only = read_only

    def load(self) -> Phase:
        """Return the persisted phase, or ``Phase.START`` if there is none."""

        if not self.path.exists():
            return Phase.START

        try:
            data = _read_mapping(self.path)
        except Exception as e:
            logger.warning("Ignoring unreadable state file %s: %s", self.path, e)
            return Phase.START

        phase: Optional[Phase] = Phase.parse(data.get("phase"))
        if phase is None:
            logger.warning("No recognizable phase in %s; starting over", self.path)
            return Phase.START
        return phase

    def save(self, phase: Phase) -> None:
        if self.read_only:
            logger.info("Would save phase %s to %s", phase.value, self.path)
            return

        self.path.parent.mkdir(parents=True, exist_ok=True)
        contents = _render(self.path, phase)

        fd, tmp = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=str(self.path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(contents)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise
        logger.debug("Saved phase %s to %s", phase.value, self.path)
