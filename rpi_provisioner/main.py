from __future__ import annotations

import argparse
import logging
import time
from functools import partial
from typing import Callable, Optional, TextIO

from .config import SetupConfig, config_path_from_env, load_config
from .console import StatusConsole
from .context import SetupCtx
from .errors import ExecutionError, PreconditionError
from .groups import build_groups
from .lib.command import CommandRunner, Executor
from .lib.hwdetect import system_summary
from .lib.manifests import load_groups_manifest
from .logging_utils import configure_logging, reset_logging
from .menu import confirm, prompt_main_menu
from .pipeline import run_selection
from .preflight import run_preflight

logger = logging.getLogger(__name__)


def show_system_info(ctx: SetupCtx) -> None:
    ctx.console.header("System Information")
    for title, rows in system_summary(ctx).items():
        ctx.console.panel(title, rows)


def offer_reboot(ctx: SetupCtx, ask: Callable[[str], bool]) -> None:
    if not ask("Would you like to reboot now?"):
        return
    ctx.console.info(f"Rebooting in {ctx.cfg.reboot_delay:g} seconds...")
    ctx.sleep(ctx.cfg.reboot_delay)
    try:
        ctx.runner.run(ctx.cfg.privileged(["reboot"]), "Rebooting")
    except ExecutionError as e:
        logger.error("Reboot failed: %s", e)


def run(
    cfg: SetupConfig,
    *,
    console: Optional[StatusConsole] = None,
    executor: Optional[Executor] = None,
    sleep: Callable[[float], None] = time.sleep,
    stream: Optional[TextIO] = None,
) -> int:
    """Interactive provisioning session. Returns the process exit code."""

    console = console or StatusConsole()
    log_path = configure_logging(log_path=cfg.log_path)
    ctx = SetupCtx(cfg=cfg, runner=CommandRunner(console, executor=executor), sleep=sleep)
    try:
        return _session(ctx, log_path, stream)
    finally:
        reset_logging()


def _session(ctx: SetupCtx, log_path: str, stream: Optional[TextIO]) -> int:
    console = ctx.console
    cfg = ctx.cfg
    ask = partial(confirm, console, stream=stream)

    console.header("Raspberry Pi 5 Automated Setup Script")
    console.info("Starting setup process...")
    logger.info("Starting Raspberry Pi setup")

    try:
        run_preflight(ctx, ask)
    except PreconditionError as e:
        console.error(str(e))
        logger.error("Precondition failed: %s", e)
        return 1

    show_system_info(ctx)
    console.console.input("Press Enter to continue to the main menu...", stream=stream)

    selection = prompt_main_menu(console, stream=stream)
    if selection is None:
        console.info("Exiting...")
        logger.info("User exited from the menu")
        return 0

    if not selection.is_all and not selection.group_ids:
        console.info("No components selected.")
    else:
        groups = build_groups(ctx, load_groups_manifest(cfg.manifest_path))
        run_selection(selection, groups, console)
        if selection.is_all:
            console.success("Complete installation finished!")
        else:
            console.success("Installation of selected components finished!")

    console.success("Setup process completed!")
    console.info(f"Log file saved to: {log_path}")
    console.info("You may need to reboot for some changes to take effect.")
    console.header("Installation Summary")
    console.info("Check the log file for detailed information about what succeeded and what failed.")

    offer_reboot(ctx, ask)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(
        prog="rpi-provisioner",
        description="Interactive Raspberry Pi setup. Options are chosen from a menu; "
        "settings are read from $RPI_PROVISIONER_CONFIG (default /etc/rpi-provisioner.yaml).",
    )
    p.parse_args(argv)

    path = config_path_from_env()
    try:
        cfg = load_config(path)
    except ValueError as e:
        StatusConsole().error(f"Invalid configuration: {e}")
        return 1
    return run(cfg)
