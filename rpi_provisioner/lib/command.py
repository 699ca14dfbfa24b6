from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from ..console import StatusConsole
from ..errors import ExecutionError

logger = logging.getLogger(__name__)

# Same call shape as subprocess.run; tests substitute a recorder.
Executor = Callable[..., "subprocess.CompletedProcess[str]"]

# ValueError covers NUL bytes in argv and undecodable output.
_SPAWN_ERRORS = (OSError, subprocess.SubprocessError, ValueError)


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def _fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


class CommandRunner:
    """Run external commands with consistent logging and status output.

    - Always logs the command and its captured output.
    - run() reports to the console and raises ExecutionError on failure.
    - query() is silent and returns the result whatever the exit status.
    """

    def __init__(self, console: StatusConsole, executor: Optional[Executor] = None) -> None:
        self.console = console
        self.executor: Executor = executor or subprocess.run

    def _spawn(self, argv_list: list[str], input_text: Optional[str]) -> CmdResult:
        p = self.executor(
            argv_list,
            input=input_text,
            text=True,
            encoding="utf-8",
            errors="replace",
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
        stdout = p.stdout or ""
        stderr = p.stderr or ""
        if stdout:
            logger.debug("STDOUT %s", stdout.strip())
        if stderr:
            logger.debug("STDERR %s", stderr.strip())
        return CmdResult(argv=argv_list, returncode=p.returncode, stdout=stdout, stderr=stderr)

    def run(
        self,
        argv: Sequence[str],
        description: str,
        *,
        input_text: Optional[str] = None,
    ) -> CmdResult:
        argv_list = list(argv)
        self.console.info(f"{description}...")
        logger.info("CMD %s", _fmt_argv(argv_list))

        try:
            r = self._spawn(argv_list, input_text)
        except _SPAWN_ERRORS as e:
            logger.error("ERROR: %s: cannot execute %s (%s)", description, _fmt_argv(argv_list), e)
            self.console.error(f"Failed: {description} ({e})")
            raise ExecutionError(description, argv_list, None, str(e)) from e

        if not r.ok:
            logger.error(
                "ERROR: %s: command failed (%s): %s", description, r.returncode, _fmt_argv(argv_list)
            )
            self.console.error(f"Failed: {description}")
            raise ExecutionError(description, argv_list, r.returncode, r.stderr)

        logger.info("SUCCESS: %s", description)
        self.console.success(f"{description} completed")
        return r

    def query(self, argv: Sequence[str]) -> CmdResult:
        """Run a read-only status command; raises ExecutionError only if it cannot start."""

        argv_list = list(argv)
        logger.debug("QUERY %s", _fmt_argv(argv_list))
        try:
            r = self._spawn(argv_list, None)
        except _SPAWN_ERRORS as e:
            logger.debug("QUERY failed to start %s (%s)", _fmt_argv(argv_list), e)
            raise ExecutionError(_fmt_argv(argv_list), argv_list, None, str(e)) from e
        logger.debug("QUERY exit=%s %s", r.returncode, _fmt_argv(argv_list))
        return r
