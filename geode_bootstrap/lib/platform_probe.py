from __future__ import annotations

import logging
import platform
import shutil
from typing import Optional, Protocol, Sequence, Tuple

from .transfer import DEFAULT_TOOL_ORDER, TransferTool

logger = logging.getLogger(__name__)


class PlatformProvider(Protocol):
    """Host capabilities the bootstrap depends on."""

    def current_platform(self) -> Tuple[str, str]:
        ...

    def find_transfer_tool(self) -> Optional[TransferTool]:
        ...


class HostPlatform:
    """Reads the running host: uname-style OS/arch and PATH lookups."""

    def __init__(self, tool_order: Sequence[str] = DEFAULT_TOOL_ORDER) -> None:
        self.tool_order = tuple(tool_order)

    def current_platform(self) -> Tuple[str, str]:
        os_name, arch = platform.system(), platform.machine()
        logger.info("Host platform: os=%s arch=%s", os_name, arch)
        return os_name, arch

    def find_transfer_tool(self) -> Optional[TransferTool]:
        for name in self.tool_order:
            path = shutil.which(name)
            logger.debug("Probe %s -> %s", name, path)
            if path:
                return TransferTool(name=name, path=path)
        return None
