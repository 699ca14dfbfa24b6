from __future__ import annotations

import logging
import os
import platform
import shutil
import socket
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ..context import SetupCtx
from ..errors import ExecutionError

logger = logging.getLogger(__name__)

DEFAULT_CODENAME = "bullseye"


def _read_text(path: Path) -> Optional[str]:
    try:
        # device-tree strings are NUL terminated
        txt = path.read_text(encoding="utf-8", errors="ignore").replace("\x00", "").strip()
        return txt or None
    except OSError:
        return None


def read_board_model(model_path: str) -> Optional[str]:
    return _read_text(Path(model_path))


def is_raspberry_pi(model: Optional[str]) -> bool:
    return bool(model) and "Raspberry Pi" in str(model)


def read_os_release(path: str = "/etc/os-release") -> Dict[str, str]:
    info: Dict[str, str] = {}
    txt = _read_text(Path(path)) or ""
    for line in txt.splitlines():
        if "=" not in line:
            continue
        key, _, value = line.partition("=")
        info[key.strip()] = value.strip().strip('"')
    return info


def debian_codename(os_release_path: str = "/etc/os-release") -> str:
    """Codename used for third-party apt suites (bookworm, bullseye, ...)."""
    info = read_os_release(os_release_path)
    return info.get("VERSION_CODENAME") or DEFAULT_CODENAME


def _cpuinfo_field(name: str, cpuinfo: str) -> Optional[str]:
    for line in cpuinfo.splitlines():
        key, sep, value = line.partition(":")
        if sep and key.strip() == name:
            return value.strip() or None
    return None


def _meminfo_mb() -> Tuple[Optional[int], Optional[int]]:
    total = available = None
    txt = _read_text(Path("/proc/meminfo")) or ""
    for line in txt.splitlines():
        parts = line.split()
        if len(parts) < 2:
            continue
        if parts[0] == "MemTotal:":
            total = int(parts[1]) // 1024
        elif parts[0] == "MemAvailable:":
            available = int(parts[1]) // 1024
    return total, available


def _query_stdout(ctx: SetupCtx, argv: List[str]) -> Optional[str]:
    try:
        r = ctx.runner.query(argv)
    except ExecutionError:
        return None
    if not r.ok:
        return None
    return r.stdout.strip() or None


def primary_ip(ctx: SetupCtx) -> Optional[str]:
    out = _query_stdout(ctx, ["ip", "route", "get", "1.1.1.1"])
    if not out:
        return None
    tokens = out.split()
    if "src" in tokens:
        idx = tokens.index("src")
        if idx + 1 < len(tokens):
            return tokens[idx + 1]
    return None


def system_summary(ctx: SetupCtx) -> Dict[str, List[Tuple[str, str]]]:
    """Collect display-only facts about the host, section by section.

    Every value is best-effort; anything unreadable shows as "Unknown".
    """

    unknown = "Unknown"
    os_info = read_os_release()
    cpuinfo = _read_text(Path("/proc/cpuinfo")) or ""
    total_mb, avail_mb = _meminfo_mb()

    try:
        du = shutil.disk_usage("/")
        disk = f"{du.used // 2**30}G/{du.total // 2**30}G ({du.used * 100 // max(du.total, 1)}% used)"
    except OSError:
        disk = unknown

    temp = _query_stdout(ctx, ["vcgencmd", "measure_temp"])
    if temp and "=" in temp:
        temp = temp.split("=", 1)[1]

    summary = {
        "System Overview": [
            ("Hostname", socket.gethostname() or unknown),
            ("OS", os_info.get("PRETTY_NAME") or unknown),
            ("Kernel", platform.release() or unknown),
            ("Architecture", platform.machine() or unknown),
        ],
        "Raspberry Pi Hardware": [
            ("Model", read_board_model(ctx.cfg.model_path) or unknown),
            ("Revision", _cpuinfo_field("Revision", cpuinfo) or unknown),
            ("Serial", _cpuinfo_field("Serial", cpuinfo) or unknown),
            ("CPU", f"{_cpuinfo_field('model name', cpuinfo) or 'ARM Processor'} ({os.cpu_count() or unknown} cores)"),
            ("Temperature", temp or "N/A"),
        ],
        "Network Information": [
            ("Primary IP", primary_ip(ctx) or "Not connected"),
        ],
        "System Resources": [
            (
                "Memory",
                f"{avail_mb} MB available of {total_mb} MB" if total_mb else unknown,
            ),
            ("Disk Usage", disk),
        ],
    }
    logger.info("System summary: %s", summary)
    return summary
