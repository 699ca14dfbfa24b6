from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from ..context import SetupCtx

logger = logging.getLogger(__name__)


def sources_line(keyring: str, repo_url: str, suite: str, component: str = "main") -> str:
    return f"deb [signed-by={keyring}] {repo_url} {suite} {component}\n"


def add_repository(
    ctx: SetupCtx,
    *,
    name: str,
    key_url: str,
    repo_url: str,
    suite: str,
    component: str = "main",
) -> None:
    """Register a signed third-party apt repository.

    The armored key is downloaded into a scratch directory, dearmored, then
    installed to keyring_dir/<name>.gpg and referenced via signed-by from
    sources_dir/<name>.list. Any failing step raises ExecutionError.
    """

    cfg = ctx.cfg
    ctx.console.info(f"Adding {name} repository...")
    keyring = str(Path(cfg.keyring_dir) / f"{name}.gpg")
    list_path = str(Path(cfg.sources_dir) / f"{name}.list")

    with tempfile.TemporaryDirectory(prefix=f"{name}-key-") as tmp:
        armored = str(Path(tmp) / f"{name}.asc")
        dearmored = str(Path(tmp) / f"{name}.gpg")
        ctx.runner.run(["wget", "-qO", armored, key_url], f"Downloading {name} GPG key")
        ctx.runner.run(["gpg", "--batch", "--yes", "--dearmor", "-o", dearmored, armored], f"Dearmoring {name} GPG key")
        ctx.runner.run(
            cfg.privileged(["install", "-D", "-m", "0644", dearmored, keyring]),
            f"Installing {name} GPG key",
        )

    ctx.runner.run(
        cfg.privileged(["tee", list_path]),
        f"Adding {name} repository",
        input_text=sources_line(keyring, repo_url, suite, component),
    )
    logger.info("Configured apt repo %s: %s %s %s", name, repo_url, suite, component)
    ctx.console.success(f"{name} repository added successfully")
