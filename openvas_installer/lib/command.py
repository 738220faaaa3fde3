from __future__ import annotations

import codecs
import logging
import os
import shlex
import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Sequence, TextIO

from ..errors import CommandError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    output: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def _fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    env: Mapping[str, str] | None = None,
    dry_run: bool = False,
) -> CmdResult:
    """Run a short, non-interactive command and capture its output.

    Used for short queries (getenforce, ip) whose output is parsed rather than
    shown to the operator.
    """

    argv_list = list(argv)
    logger.debug("CMD %s", _fmt_argv(argv_list))

    if dry_run:
        return CmdResult(argv=argv_list, returncode=0, output="")

    try:
        p = subprocess.run(
            argv_list,
            text=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            env=dict(os.environ, **(env or {})),
        )
    except FileNotFoundError as e:
        if check:
            raise CommandError(argv_list, 127, str(e)) from e
        return CmdResult(argv=argv_list, returncode=127, output=str(e))

    if check and p.returncode != 0:
        raise CommandError(argv_list, p.returncode, p.stdout or "")

    return CmdResult(argv=argv_list, returncode=p.returncode, output=p.stdout or "")


class CommandExecutor:
    """Runs installer commands, teeing combined output into the durable log.

    Every command's output is appended to ``log_path`` so that failures can
    later be classified from the accumulated transcript.
    """

    def __init__(
        self,
        log_path: str,
        *,
        dry_run: bool = False,
        echo: bool = True,
        console: TextIO | None = None,
    ) -> None:
        self.log_path = Path(log_path)
        self.dry_run = dry_run
        self.echo = echo
        self.console = console or sys.stdout

    def run(self, description: str, argv: Sequence[str] | str, *, shell: bool = False) -> CmdResult:
        """Execute a command and return its status; never raises on non-zero exit."""

        if shell:
            argv_list = ["bash", "-lc", argv if isinstance(argv, str) else _fmt_argv(argv)]
        else:
            argv_list = shlex.split(argv) if isinstance(argv, str) else list(argv)

        logger.info("=== %s ===", description)
        logger.info("CMD %s", argv if shell and isinstance(argv, str) else _fmt_argv(argv_list))

        if self.dry_run:
            return CmdResult(argv=argv_list, returncode=0, output="")

        chunks: list[str] = []
        try:
            # stdin stays attached: openvas-setup and the Atomicorp installer prompt.
            proc = subprocess.Popen(argv_list, stdout=subprocess.PIPE, stderr=subprocess.STDOUT)
        except OSError as e:
            msg = f"{argv_list[0]}: {e}\n"
            self._append(msg)
            logger.error("Could not start %s: %s", argv_list[0], e)
            return CmdResult(argv=argv_list, returncode=127, output=msg)

        assert proc.stdout is not None
        # Multi-byte characters may straddle read boundaries.
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        with self.log_path.open("a", encoding="utf-8") as log:
            while True:
                data = proc.stdout.read1(4096)
                text = decoder.decode(data, final=not data)
                if text:
                    chunks.append(text)
                    log.write(text)
                    log.flush()
                    if self.echo:
                        self.console.write(text)
                        self.console.flush()
                if not data:
                    break
        returncode = proc.wait()

        if returncode != 0:
            logger.warning("%s exited with rc=%d", description, returncode)
        return CmdResult(argv=argv_list, returncode=returncode, output="".join(chunks))

    def read_log(self) -> str:
        try:
            return self.log_path.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            return ""

    def has_tool(self, name: str) -> bool:
        return shutil.which(name) is not None

    def _append(self, text: str) -> None:
        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        with self.log_path.open("a", encoding="utf-8") as log:
            log.write(text)
