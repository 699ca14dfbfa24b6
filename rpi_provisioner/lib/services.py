from __future__ import annotations

import logging

from ..context import SetupCtx
from ..errors import ExecutionError, ProbeTimeout

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_INTERVAL = 2.0


def is_active(ctx: SetupCtx, service: str) -> bool:
    """Ask systemd whether a unit is active.

    A query that cannot even start is reported as "not active".
    """
    try:
        r = ctx.runner.query(["systemctl", "is-active", "--quiet", service])
    except ExecutionError as e:
        logger.debug("is-active query for %s failed: %s", service, e)
        return False
    return r.ok


def wait_until_active(
    ctx: SetupCtx,
    service: str,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    interval: float = DEFAULT_INTERVAL,
) -> bool:
    """Poll a service until it is active, at most max_attempts times.

    Sleeps interval seconds after every attempt that finds it inactive.
    Returns False instead of raising when the service never comes up.
    """

    for attempt in range(1, max_attempts + 1):
        if is_active(ctx, service):
            logger.info("SUCCESS: %s is running", service)
            ctx.console.success(f"{service} is running")
            return True
        ctx.console.info(f"Waiting for {service} to start... (attempt {attempt}/{max_attempts})")
        ctx.sleep(interval)

    logger.warning("%s failed to start after %s attempts", service, max_attempts)
    ctx.console.warning(f"{service} failed to start after {max_attempts} attempts")
    return False


def require_active(ctx: SetupCtx, service: str) -> None:
    """wait_until_active() with the configured bounds, raising ProbeTimeout on failure."""
    attempts = ctx.cfg.probe_attempts
    if not wait_until_active(ctx, service, max_attempts=attempts, interval=ctx.cfg.probe_interval):
        raise ProbeTimeout(service, attempts)


def enable_and_start(ctx: SetupCtx, service: str, description: str) -> None:
    ctx.runner.run(ctx.cfg.privileged(["systemctl", "enable", service]), f"{description} (enable)")
    ctx.runner.run(ctx.cfg.privileged(["systemctl", "start", service]), description)
