from __future__ import annotations

import argparse
import logging
from typing import Any, Dict, List, Optional

from . import console
from .bootstrap_config import BootstrapConfig, load_bootstrap_config
from .errors import ConfigError
from .lib.command import run_cmd
from .lib.platform_probe import HostPlatform, PlatformProvider
from .lib.staging import staged_artifact
from .logging_utils import DEFAULT_LOG_PATH, configure_logging, open_log_file
from .pipeline import BootstrapCtx, PipelineResult, Runner, Step, run_pipeline
from .steps import (
    CheckPlatformStep,
    DownloadStep,
    GrantExecuteStep,
    RunInstallerStep,
    SelectTransferToolStep,
)

logger = logging.getLogger(__name__)

TITLE = "Geode CLI Installer"


def build_preflight_steps() -> List[Step]:
    # Nothing here touches the network or the filesystem.
    return [
        CheckPlatformStep(),
        SelectTransferToolStep(),
    ]


def build_staged_steps() -> List[Step]:
    return [
        DownloadStep(),
        GrantExecuteStep(),
        RunInstallerStep(),
    ]


def _announce(step: Step) -> None:
    message = getattr(step, "announce", None)
    if not message:
        return
    if step.step_id == "50_run_installer":
        console.success(message)
        console.status("")
    else:
        console.status(message)


def run(
    *,
    cfg: Optional[BootstrapConfig] = None,
    provider: Optional[PlatformProvider] = None,
    runner: Runner = run_cmd,
    dry_run: bool = False,
) -> PipelineResult:
    """Check the host, then download, run and remove the installer."""

    cfg = cfg or BootstrapConfig()
    provider = provider or HostPlatform(tool_order=cfg.transfer_tools)
    ctx = BootstrapCtx(
        cfg=cfg,
        provider=provider,
        staging_path=cfg.staging_path,
        dry_run=dry_run,
        runner=runner,
    )
    state: Dict[str, Any] = {"execution": {"dry_run": dry_run}}

    console.banner(TITLE)

    result = run_pipeline(ctx=ctx, state=state, steps=build_preflight_steps(), before_step=_announce)
    if not result.ok:
        return result
    preflight_ran = list(result.ran_steps)

    # The host passed the gate: the log file may now be written.
    if not dry_run:
        open_log_file()

    # Registered before the download writes anything; removed on every exit path.
    with staged_artifact(ctx.staging_path, dry_run=dry_run):
        result = run_pipeline(ctx=ctx, state=state, steps=build_staged_steps(), before_step=_announce)

    result.ran_steps[:0] = preflight_ran
    state["execution"]["ran_steps"] = list(result.ran_steps)
    return result


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(
        prog="geode-bootstrap",
        description="Download the latest Geode CLI installer, run it and remove it.",
    )
    p.add_argument("--config", default=None, help="YAML file overriding repo/binary/install_dir")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to bootstrap log")
    p.add_argument("--dry-run", action="store_true", help="Check the host and log commands without running them")
    p.add_argument("--verbose", action="store_true", help="Also print log records to stderr")

    args = p.parse_args(argv)

    configure_logging(
        log_path=args.log,
        level=logging.DEBUG if args.verbose else logging.INFO,
        also_console=bool(args.verbose),
    )

    try:
        cfg = load_bootstrap_config(args.config)
    except ConfigError as e:
        logger.error("Config rejected: %s", e.message)
        console.error(e.message, category=e.category)
        return e.exit_code

    try:
        result = run(cfg=cfg, dry_run=bool(args.dry_run))
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        console.error("Interrupted", category="interrupted")
        return 130
    except Exception:
        logger.exception("Bootstrap failed")
        raise

    if result.error is not None:
        console.error(result.error.message, category=result.error.category)
        return result.exit_code

    if args.dry_run:
        console.warning("Dry run: nothing was downloaded or executed.")
    return 0
