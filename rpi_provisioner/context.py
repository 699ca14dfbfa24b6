from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable

from .config import SetupConfig
from .console import StatusConsole
from .lib.command import CommandRunner


@dataclass(frozen=True)
class SetupCtx:
    cfg: SetupConfig
    runner: CommandRunner
    sleep: Callable[[float], None] = field(default=time.sleep)

    @property
    def console(self) -> StatusConsole:
        return self.runner.console
