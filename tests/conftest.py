"""Pytest configuration applied to the entire test suite."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
for p in (ROOT, ROOT / "tests"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from geode_bootstrap.bootstrap_config import BootstrapConfig  # noqa: E402


@pytest.fixture
def cfg(tmp_path: Path) -> BootstrapConfig:
    return BootstrapConfig(raw={"install_dir": str(tmp_path)})


@pytest.fixture(autouse=True)
def fresh_logging():
    """Each test starts with unconfigured root logging."""

    root = logging.getLogger()
    before = list(root.handlers)
    yield
    for h in list(root.handlers):
        if h not in before:
            root.removeHandler(h)
            h.close()
    for attr in ("_geode_configured", "_geode_buffer", "_geode_log_path", "_geode_log_path_actual"):
        if hasattr(root, attr):
            delattr(root, attr)
