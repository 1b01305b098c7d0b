from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence

from .bootstrap_config import BootstrapConfig
from .errors import BootstrapError
from .lib.command import CmdResult, run_cmd
from .lib.platform_probe import PlatformProvider

logger = logging.getLogger(__name__)

Runner = Callable[..., CmdResult]


@dataclass(frozen=True)
class BootstrapCtx:
    cfg: BootstrapConfig
    provider: PlatformProvider
    staging_path: Path
    dry_run: bool = False
    runner: Runner = run_cmd


@dataclass(frozen=True)
class StepOutcome:
    error: Optional[BootstrapError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls) -> "StepOutcome":
        return cls()

    @classmethod
    def failure(cls, error: BootstrapError) -> "StepOutcome":
        return cls(error=error)


class Step(Protocol):
    """A single bootstrap phase."""

    step_id: str

    def run(self, ctx: BootstrapCtx, state: Dict[str, Any]) -> StepOutcome:
        ...


@dataclass
class PipelineResult:
    state: Dict[str, Any]
    ran_steps: List[str] = field(default_factory=list)
    failed_step: Optional[str] = None
    error: Optional[BootstrapError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def exit_code(self) -> int:
        if self.error is not None:
            return self.error.exit_code
        return int(self.state.get("installer_returncode") or 0)


def run_pipeline(
    *,
    ctx: BootstrapCtx,
    state: Dict[str, Any],
    steps: Sequence[Step],
    before_step: Optional[Callable[[Step], None]] = None,
) -> PipelineResult:
    """Run steps in order, stopping at the first failed outcome."""

    result = PipelineResult(state=state)
    exe = state.setdefault("execution", {})

    for step in steps:
        exe["current_step"] = step.step_id
        if before_step is not None:
            before_step(step)

        logger.info("Running step %s", step.step_id)
        outcome = step.run(ctx, state)
        result.ran_steps.append(step.step_id)

        if not outcome.ok:
            logger.error(
                "Step %s failed (%s, exit %d): %s",
                step.step_id,
                outcome.error.category,
                outcome.error.exit_code,
                outcome.error.message,
            )
            result.failed_step = step.step_id
            result.error = outcome.error
            break

    exe["current_step"] = None
    exe["ran_steps"] = list(result.ran_steps)
    exe["failed_step"] = result.failed_step
    return result
