from __future__ import annotations

import io
import subprocess
from typing import Callable, List, Optional, Sequence

import pytest
from rich.console import Console

from rpi_provisioner.config import SetupConfig
from rpi_provisioner.console import THEME, StatusConsole
from rpi_provisioner.context import SetupCtx
from rpi_provisioner.lib.command import CommandRunner
from rpi_provisioner.logging_utils import reset_logging


class FakeExecutor:
    """Stands in for subprocess.run and records every argv it is given.

    rule(argv) returns an exit code, or raises to simulate a spawn failure.
    """

    def __init__(self, rule: Optional[Callable[[List[str]], int]] = None, stdout: str = "") -> None:
        self.rule = rule or (lambda argv: 0)
        self.stdout = stdout
        self.calls: List[List[str]] = []
        self.inputs: List[Optional[str]] = []
        self.kwargs: List[dict] = []

    def __call__(self, argv: Sequence[str], **kwargs) -> "subprocess.CompletedProcess[str]":
        argv = list(argv)
        self.calls.append(argv)
        self.inputs.append(kwargs.get("input"))
        self.kwargs.append(kwargs)
        rc = self.rule(argv)
        return subprocess.CompletedProcess(argv, rc, stdout=self.stdout, stderr="boom" if rc else "")

    def matching(self, *prefix: str) -> List[List[str]]:
        return [c for c in self.calls if c[: len(prefix)] == list(prefix)]


class FakeSleep:
    def __init__(self) -> None:
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)

    @property
    def elapsed(self) -> float:
        return sum(self.calls)


@pytest.fixture
def out() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(out) -> StatusConsole:
    return StatusConsole(Console(file=out, theme=THEME, force_terminal=False, width=200))


@pytest.fixture
def executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture
def sleeper() -> FakeSleep:
    return FakeSleep()


@pytest.fixture
def cfg(tmp_path) -> SetupConfig:
    return SetupConfig(
        log_path=str(tmp_path / "setup.log"),
        use_sudo=False,
        keyring_dir=str(tmp_path / "keyrings"),
        sources_dir=str(tmp_path / "sources.list.d"),
        model_path=str(tmp_path / "model"),
    )


@pytest.fixture
def make_ctx(cfg, console, sleeper):
    def _make(executor: FakeExecutor, config: Optional[SetupConfig] = None) -> SetupCtx:
        return SetupCtx(cfg=config or cfg, runner=CommandRunner(console, executor=executor), sleep=sleeper)

    return _make


@pytest.fixture
def ctx(make_ctx, executor) -> SetupCtx:
    return make_ctx(executor)


@pytest.fixture(autouse=True)
def _clean_logging():
    yield
    reset_logging()
