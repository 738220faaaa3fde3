"""Shared fixtures: in-memory fakes for the store, executor, disabler and reboot."""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

import pytest

from openvas_installer.config import InstallerConfig
from openvas_installer.context import InstallCtx
from openvas_installer.lib.command import CmdResult
from openvas_installer.phases import Phase
from openvas_installer.prompt import fixed_answer


class MemoryStateStore:
    """StateStore fake that records saves into a shared event list."""

    def __init__(self, phase: Phase = Phase.START, events: Optional[list] = None):
        self.phase = phase
        self.saved: List[Phase] = []
        self.events = events if events is not None else []

    def load(self) -> Phase:
        return self.phase

    def save(self, phase: Phase) -> None:
        self.phase = phase
        self.saved.append(phase)
        self.events.append(("save", phase))


class FakeExecutor:
    """CommandExecutor fake.

    ``script`` maps a command's first word to queued (returncode, output)
    pairs; unscripted commands succeed with no output. Output is appended
    to an in-memory log the classifier reads back.
    """

    def __init__(
        self,
        script: Optional[Dict[str, List[Tuple[int, str]]]] = None,
        tools: Sequence[str] = (),
        log_text: str = "",
    ):
        self.script = {k: list(v) for k, v in (script or {}).items()}
        self.tools = set(tools)
        self.log_text = log_text
        self.calls: List[Tuple[str, Union[str, List[str]]]] = []
        self.dry_run = False
        self.log_path = Path("/tmp/fake-openvas-install.log")

    def run(self, description, argv, *, shell=False) -> CmdResult:
        self.calls.append((description, argv))
        key = argv.split()[0] if isinstance(argv, str) else argv[0]
        queued = self.script.get(key) or []
        rc, output = queued.pop(0) if queued else (0, "")
        self.log_text += output
        argv_list = [argv] if isinstance(argv, str) else list(argv)
        return CmdResult(argv=argv_list, returncode=rc, output=output)

    def read_log(self) -> str:
        return self.log_text

    def has_tool(self, name: str) -> bool:
        return name in self.tools

    def commands(self) -> List[str]:
        return [a.split()[0] if isinstance(a, str) else a[0] for _, a in self.calls]


class FakeDisabler:
    def __init__(self, events: list, warnings: Optional[List[str]] = None):
        self.events = events
        self.warnings = warnings or []
        self.calls = 0

    def disable_persistently(self) -> List[str]:
        self.calls += 1
        self.events.append(("disable",))
        return list(self.warnings)


@pytest.fixture
def events():
    return []


@pytest.fixture
def fake_executor():
    return FakeExecutor()


@pytest.fixture
def make_ctx():
    def _make(executor, answer: bool = True, cfg: Optional[InstallerConfig] = None) -> InstallCtx:
        return InstallCtx(cfg=cfg or InstallerConfig(), executor=executor, confirm=fixed_answer(answer))

    return _make


@pytest.fixture(autouse=True)
def no_getenforce(monkeypatch):
    """Keep tests from querying the host's SELinux state."""
    monkeypatch.setattr("openvas_installer.lib.selinux.selinux_mode", lambda **kw: "Enforcing")
    monkeypatch.setattr("openvas_installer.steps.step_20_openvas_setup.selinux_mode", lambda **kw: "Enforcing")


@pytest.fixture
def make_store(events):
    def _make(phase: Phase = Phase.START) -> MemoryStateStore:
        return MemoryStateStore(phase, events)

    return _make


@pytest.fixture
def make_executor():
    return FakeExecutor


@pytest.fixture
def disabler(events):
    return FakeDisabler(events)


@pytest.fixture
def root_logging():
    """Undo configure_logging(): drop its handlers and the configured marker."""

    root = logging.getLogger()
    level = root.level
    before = list(root.handlers)

    def _reset():
        for h in list(root.handlers):
            # pytest's capture handlers are subclasses; leave them alone.
            if h not in before and type(h) in (logging.FileHandler, logging.StreamHandler):
                root.removeHandler(h)
                h.close()
        for attr in ("_openvas_configured", "_openvas_log_path"):
            if hasattr(root, attr):
                delattr(root, attr)
        root.setLevel(level)

    _reset()
    yield root
    _reset()
