from __future__ import annotations

import logging
from typing import Any, Dict

from ..errors import InstallerExecutionError
from ..lib.command import shell_status
from ..pipeline import BootstrapCtx, StepOutcome

logger = logging.getLogger(__name__)


class RunInstallerStep:
    step_id = "50_run_installer"
    announce = "Running installer..."

    def run(self, ctx: BootstrapCtx, state: Dict[str, Any]) -> StepOutcome:
        p = ctx.staging_path
        # No arguments; the installer talks to the user on our stdio.
        try:
            r = ctx.runner([str(p)], check=False, capture=False, dry_run=ctx.dry_run)
        except OSError as e:
            return StepOutcome.failure(InstallerExecutionError(f"Could not run {p}: {e}", exit_code=126))

        rc = shell_status(r.returncode)
        state["installer_returncode"] = rc

        if rc != 0:
            return StepOutcome.failure(InstallerExecutionError(f"Installer exited with status {rc}", exit_code=rc))

        logger.info("Installer finished successfully")
        return StepOutcome.success()
