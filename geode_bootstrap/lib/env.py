from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    install_dir: str = "/tmp"
    log_default: str = "/tmp/geode-bootstrap.log"


PATHS = Paths()
