from __future__ import annotations

import logging
from typing import Any, Dict

from ..bootstrap_config import SUPPORTED_PLATFORM
from ..errors import UnsupportedPlatformError
from ..pipeline import BootstrapCtx, StepOutcome

logger = logging.getLogger(__name__)


class CheckPlatformStep:
    step_id = "10_check_platform"
    announce = None

    def run(self, ctx: BootstrapCtx, state: Dict[str, Any]) -> StepOutcome:
        os_name, arch = ctx.provider.current_platform()
        state["platform"] = {"os": os_name, "arch": arch}

        want_os, want_arch = SUPPORTED_PLATFORM
        # Exact match only: "amd64", "linux" etc. are not accepted.
        if (os_name, arch) != (want_os, want_arch):
            return StepOutcome.failure(
                UnsupportedPlatformError(
                    f"This installer only supports {want_os} {want_arch} (detected {os_name} {arch})"
                )
            )

        logger.info("Platform %s %s is supported", os_name, arch)
        return StepOutcome.success()
