from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional, Tuple

from .lib.env import PATHS

DEFAULT_LOG_PATH = PATHS.log_default

# Records kept in memory until the log file may be written.
_BUFFER_CAPACITY = 10_000

_FORMATTER = logging.Formatter(
    fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S%z",
)


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = False,
) -> None:
    """Configure logging without touching the filesystem.

    Notes:
    - The console belongs to the colored status lines and to the installer
      itself, so log records only go to stderr when also_console is set.
    - File records are buffered in memory; open_log_file() creates the log
      file and replays them. Until then nothing is written to disk, so an
      unsupported host leaves no log behind.
    """

    logger = logging.getLogger()
    logger.setLevel(level)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_geode_configured", False):
        return

    if also_console:
        console = logging.StreamHandler()
        console.setFormatter(_FORMATTER)
        logger.addHandler(console)

    buffer = logging.handlers.MemoryHandler(
        capacity=_BUFFER_CAPACITY,
        flushLevel=logging.CRITICAL + 1,
        target=None,
        flushOnClose=False,
    )
    logger.addHandler(buffer)

    setattr(logger, "_geode_configured", True)
    setattr(logger, "_geode_buffer", buffer)
    setattr(logger, "_geode_log_path", log_path)
    setattr(logger, "_geode_log_path_actual", None)


def _open_file_handler(log_path: str) -> Tuple[Optional[logging.Handler], Optional[str]]:
    """Requested path first, then the working directory, then no file at all."""

    try:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(log_path), log_path
    except OSError:
        pass

    fallback = str(Path.cwd() / "geode-bootstrap.log")
    try:
        return logging.FileHandler(fallback), fallback
    except OSError:
        return None, None


def open_log_file() -> Optional[str]:
    """Attach the log file and replay buffered records into it.

    Returns the actual file path being used, or None when no location was
    writable (records then only reach the console handler, if any).
    """

    logger = logging.getLogger()
    buffer = getattr(logger, "_geode_buffer", None)
    if buffer is None:
        return getattr(logger, "_geode_log_path_actual", None)

    log_path = getattr(logger, "_geode_log_path", DEFAULT_LOG_PATH)
    file_handler, chosen_path = _open_file_handler(log_path)

    logger.removeHandler(buffer)
    if file_handler is not None:
        file_handler.setFormatter(_FORMATTER)
        logger.addHandler(file_handler)
        buffer.setTarget(file_handler)
        buffer.flush()
    buffer.close()

    setattr(logger, "_geode_buffer", None)
    setattr(logger, "_geode_log_path_actual", chosen_path)

    if chosen_path is None:
        logging.getLogger(__name__).warning("No writable log location (requested=%s)", log_path)
    else:
        logging.getLogger(__name__).info(
            "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
        )
    return chosen_path
