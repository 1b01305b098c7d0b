from __future__ import annotations

import contextlib
import logging
import signal
import threading
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)

_CLEANUP_SIGNALS = tuple(
    s for s in (getattr(signal, "SIGTERM", None), getattr(signal, "SIGHUP", None)) if s is not None
)


def remove_quietly(path: str | Path) -> bool:
    """Remove a file, tolerating its absence. Returns True if something was removed."""

    p = Path(path)
    try:
        p.unlink()
    except FileNotFoundError:
        return False
    logger.info("Removed staged artifact %s", str(p))
    return True


def _raise_exit(signum, frame) -> None:
    raise SystemExit(128 + signum)


@contextlib.contextmanager
def staged_artifact(path: str | Path, *, dry_run: bool = False) -> Iterator[Path]:
    """Own the staging path for the duration of the block.

    The path is removed when the block exits, whichever way it exits.
    While active, SIGTERM/SIGHUP are turned into SystemExit so the removal
    still runs; SIGINT already surfaces as KeyboardInterrupt.
    """

    p = Path(path)
    previous = {}
    if threading.current_thread() is threading.main_thread():
        for sig in _CLEANUP_SIGNALS:
            previous[sig] = signal.signal(sig, _raise_exit)

    logger.info("Staging path registered for removal: %s", str(p))
    try:
        yield p
    finally:
        try:
            if dry_run:
                logger.info("Would remove %s", str(p))
            else:
                try:
                    remove_quietly(p)
                except OSError as e:
                    logger.warning("Could not remove staged artifact %s: %s", str(p), e)
        finally:
            for sig, handler in previous.items():
                signal.signal(sig, handler)
