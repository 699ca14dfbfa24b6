from __future__ import annotations

import logging
import os
import shutil
from typing import Any, Callable, Optional

from .context import SetupCtx
from .errors import ExecutionError, PreconditionError
from .lib.hwdetect import is_raspberry_pi, read_board_model
from .lib.net import first_reachable
from .lib.pkg import apt_install, apt_update

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]

# Missing ones of these are installed; any other missing command is fatal.
INSTALLABLE_COMMANDS = {"curl", "wget"}


def check_board(ctx: SetupCtx) -> str:
    model = read_board_model(ctx.cfg.model_path)
    if not is_raspberry_pi(model):
        logger.error("Unsupported board: %s", model)
        raise PreconditionError("This tool is designed for Raspberry Pi devices only!")
    ctx.console.success(f"Detected: {model}")
    logger.info("Detected board: %s", model)
    return str(model)


def check_root(ctx: SetupCtx, euid: Optional[int] = None) -> None:
    if euid is None:
        euid = os.geteuid()
    if euid == 0:
        logger.warning("Running as root")
        ctx.console.warning("Running as root. Some operations may not work as expected.")
        ctx.console.info("Consider running as regular user with sudo privileges.")


def _confirm_or_abort(confirm: Confirm, question: str, reason: str) -> None:
    if not confirm(question):
        logger.error("User declined to continue: %s", reason)
        raise PreconditionError(reason)


def check_network(ctx: SetupCtx, confirm: Confirm) -> bool:
    ctx.console.info("Checking network connectivity...")
    host = first_reachable(ctx, ctx.cfg.network_hosts, timeout=ctx.cfg.ping_timeout)
    if host:
        ctx.console.success(f"Network connectivity confirmed via {host}")
        logger.info("Network reachable via %s", host)
        return True

    logger.warning("No network connectivity detected")
    ctx.console.error("No network connectivity detected!")
    ctx.console.warning("Some installations may fail without internet access.")
    _confirm_or_abort(confirm, "Continue anyway?", "no network connectivity")
    return False


def check_prerequisites(ctx: SetupCtx, which: Callable[[str], Optional[str]] = shutil.which) -> None:
    ctx.console.header("Checking Prerequisites")
    missing = [c for c in ctx.cfg.required_commands if which(c) is None]
    if not missing:
        ctx.console.success("All prerequisites are available")
        return

    ctx.console.warning(f"Missing required commands: {' '.join(missing)}")
    fatal = [c for c in missing if c not in INSTALLABLE_COMMANDS]
    if fatal:
        raise PreconditionError(f"{', '.join(fatal)} required but not available; install it manually")

    ctx.console.info("Installing missing prerequisites...")
    for cmd in missing:
        try:
            apt_update(ctx)
            apt_install(ctx, [cmd], f"Installing {cmd}")
            ctx.console.success(f"{cmd} installed")
        except ExecutionError as e:
            logger.warning("Could not install prerequisite %s: %s", cmd, e)


def check_disk_space(
    ctx: SetupCtx,
    confirm: Confirm,
    disk_usage: Callable[[str], Any] = shutil.disk_usage,
) -> int:
    ctx.console.info("Checking available disk space...")
    free_kb = disk_usage("/").free // 1024
    free_gb = free_kb / 1024 / 1024
    if free_kb < ctx.cfg.min_free_kb:
        logger.warning("Low disk space: %s KiB free", free_kb)
        ctx.console.warning(f"Low disk space detected: {free_gb:.1f}GB available")
        ctx.console.warning(f"Recommended: At least {ctx.cfg.min_free_kb / 1024 / 1024:.0f}GB free space")
        _confirm_or_abort(confirm, "Continue anyway?", "insufficient disk space")
    else:
        ctx.console.success(f"Sufficient disk space available: {free_gb:.1f}GB")
    return free_kb


def run_preflight(ctx: SetupCtx, confirm: Confirm) -> str:
    """Run every precondition check; PreconditionError means stop now."""

    model = check_board(ctx)
    check_root(ctx)
    check_network(ctx, confirm)
    check_prerequisites(ctx)
    check_disk_space(ctx, confirm)
    return model
