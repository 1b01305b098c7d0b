from __future__ import annotations

import logging
from typing import Any, Dict, Sequence

from ..errors import TransferToolMissingError
from ..pipeline import BootstrapCtx, StepOutcome

logger = logging.getLogger(__name__)


def _missing_message(names: Sequence[str]) -> str:
    if len(names) == 1:
        return f"{names[0]} not found. Please install it."
    return f"Neither {' nor '.join(names)} found. Please install one of them."


class SelectTransferToolStep:
    step_id = "20_select_transfer"
    announce = None

    def run(self, ctx: BootstrapCtx, state: Dict[str, Any]) -> StepOutcome:
        tool = ctx.provider.find_transfer_tool()
        if tool is None:
            return StepOutcome.failure(TransferToolMissingError(_missing_message(ctx.cfg.transfer_tools)))

        logger.info("Using transfer tool %s (%s)", tool.name, tool.path)
        state["transfer_tool"] = tool
        return StepOutcome.success()
