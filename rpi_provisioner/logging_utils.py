from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from .config import DEFAULT_LOG_PATH

LOG_FORMAT = "%(asctime)s - %(levelname)s %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.DEBUG,
    also_console: bool = False,
) -> str:
    """Configure logging.

    Every event goes to an append-only plain-text file, one line each:
    ``YYYY-MM-DD HH:MM:SS - LEVEL message``.

    Notes:
    - If the requested directory is not writable we fall back to a file in
      the current working directory and keep going.
    - Console status lines are rendered separately (see console.py), so the
      log is not echoed to the terminal unless also_console is set.

    Returns the actual file path being used.
    """

    logger = logging.getLogger()
    logger.setLevel(level)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_rpi_provisioner_configured", False):
        return getattr(logger, "_rpi_provisioner_log_path", log_path)

    handlers: list[logging.Handler] = []
    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    file_handler: Optional[logging.Handler] = None
    try:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
        chosen_path = log_path
    except OSError:
        fallback = str(Path.cwd() / Path(log_path).name)
        file_handler = logging.FileHandler(fallback, mode="a", encoding="utf-8")
        chosen_path = fallback
    file_handler.setFormatter(fmt)
    handlers.append(file_handler)

    if also_console:
        console = logging.StreamHandler()
        console.setFormatter(fmt)
        handlers.append(console)

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_rpi_provisioner_configured", True)
    setattr(logger, "_rpi_provisioner_handlers", handlers)
    setattr(logger, "_rpi_provisioner_log_path", chosen_path)

    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path


def reset_logging() -> None:
    """Drop handlers installed by configure_logging()."""

    logger = logging.getLogger()
    if not getattr(logger, "_rpi_provisioner_configured", False):
        return
    for h in getattr(logger, "_rpi_provisioner_handlers", []):
        logger.removeHandler(h)
        h.close()
    setattr(logger, "_rpi_provisioner_handlers", [])
    setattr(logger, "_rpi_provisioner_configured", False)
