from __future__ import annotations

import logging
import stat
from typing import Any, Dict

from ..errors import PermissionGrantError
from ..pipeline import BootstrapCtx, StepOutcome

logger = logging.getLogger(__name__)

_EXEC_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


class GrantExecuteStep:
    step_id = "40_grant_execute"
    announce = None

    def run(self, ctx: BootstrapCtx, state: Dict[str, Any]) -> StepOutcome:
        p = ctx.staging_path
        if ctx.dry_run:
            logger.info("Would chmod +x %s", str(p))
            return StepOutcome.success()

        try:
            mode = p.stat().st_mode | _EXEC_BITS
            p.chmod(mode)
        except OSError as e:
            return StepOutcome.failure(PermissionGrantError(f"Could not make {p} executable: {e}"))

        state.setdefault("artifact", {})["mode"] = oct(stat.S_IMODE(mode))
        logger.info("Marked %s executable (%s)", str(p), oct(stat.S_IMODE(mode)))
        return StepOutcome.success()
