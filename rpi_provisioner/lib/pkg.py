from __future__ import annotations

import logging
from typing import Sequence

from ..context import SetupCtx
from ..errors import ExecutionError, PackageInstallFailed, PackageNotFound

logger = logging.getLogger(__name__)


def apt_has_package(ctx: SetupCtx, package: str) -> bool:
    """Return True if apt knows about a package name.

    Packages get renamed or dropped between OS releases, so this is checked
    before every install.
    """
    try:
        r = ctx.runner.query(["apt-cache", "show", package])
    except ExecutionError:
        return False
    return r.ok


def install_package(ctx: SetupCtx, package: str) -> None:
    """Install one package; raise PackageNotFound without touching apt-get if it is unknown."""

    if not apt_has_package(ctx, package):
        logger.warning("Package %s not found in repositories", package)
        ctx.console.warning(f"Package {package} not found in repositories")
        raise PackageNotFound(package)

    try:
        ctx.runner.run(
            ctx.cfg.privileged(["apt-get", "install", "-y", package]),
            f"Installing {package}",
        )
    except ExecutionError as e:
        ctx.console.warning(f"Failed to install {package}, continuing with other packages...")
        raise PackageInstallFailed(package, e) from e


def apt_install(ctx: SetupCtx, packages: Sequence[str], description: str) -> None:
    """Install several packages in one apt-get transaction."""
    if not packages:
        return
    ctx.runner.run(ctx.cfg.privileged(["apt-get", "install", "-y", *packages]), description)


def apt_update(ctx: SetupCtx, description: str = "Updating package lists") -> None:
    ctx.runner.run(ctx.cfg.privileged(["apt-get", "update"]), description)
