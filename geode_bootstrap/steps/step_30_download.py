from __future__ import annotations

import logging
from typing import Any, Dict

from ..errors import DownloadError
from ..lib.command import shell_status
from ..pipeline import BootstrapCtx, StepOutcome

logger = logging.getLogger(__name__)


class DownloadStep:
    step_id = "30_download"
    announce = "Downloading installer..."

    def run(self, ctx: BootstrapCtx, state: Dict[str, Any]) -> StepOutcome:
        tool = state.get("transfer_tool")
        if tool is None:
            raise RuntimeError("transfer_tool missing from state")

        url = ctx.cfg.download_url
        dest = str(ctx.staging_path)
        state["artifact"] = {"url": url, "path": dest}

        # Single attempt, no checksum, no timeout.
        try:
            r = ctx.runner(tool.download_argv(url, dest), check=False, dry_run=ctx.dry_run)
        except OSError as e:
            return StepOutcome.failure(DownloadError(f"Could not start {tool.name}: {e}", exit_code=127))

        rc = shell_status(r.returncode)
        if rc != 0:
            detail = f": {r.stderr.strip()}" if r.stderr and r.stderr.strip() else ""
            return StepOutcome.failure(
                DownloadError(
                    f"Downloading {url} with {tool.name} failed (exit {rc}){detail}",
                    exit_code=rc,
                )
            )

        logger.info("Downloaded %s -> %s", url, dest)
        return StepOutcome.success()
