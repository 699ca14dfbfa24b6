from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..context import SetupCtx
from ..errors import ExecutionError

logger = logging.getLogger(__name__)


def first_reachable(ctx: SetupCtx, hosts: Sequence[str], *, timeout: int = 5) -> Optional[str]:
    """Best-effort online check: return the first host answering one ICMP echo."""

    for host in hosts:
        try:
            r = ctx.runner.query(["ping", "-c", "1", "-W", str(timeout), host])
        except ExecutionError:
            logger.debug("ping unavailable, treating %s as unreachable", host)
            continue
        if r.ok:
            return host
    return None
