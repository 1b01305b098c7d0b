from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Mapping, Sequence

logger = logging.getLogger(__name__)


class CommandError(RuntimeError):
    def __init__(self, result: "CmdResult") -> None:
        super().__init__(
            f"Command failed ({result.returncode}): {fmt_argv(result.argv)}\n{result.stderr}".rstrip()
        )
        self.result = result


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str


def fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def shell_status(returncode: int) -> int:
    """Map a subprocess return code to a shell-style exit status.

    A negative code means the child was killed by signal N; shells report 128+N.
    """
    if returncode < 0:
        return 128 - returncode
    return returncode


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    capture: bool = True,
    env: Mapping[str, str] | None = None,
    cwd: str | None = None,
    dry_run: bool = False,
) -> CmdResult:
    """Run a command with consistent logging.

    - Always logs the command.
    - capture=True records stdout/stderr; capture=False lets the child
      inherit this process's stdin/stdout/stderr.
    - dry_run logs but does not execute.
    - OSError (missing or non-executable program) propagates to the caller.
    """

    argv_list = list(argv)
    logger.info("CMD %s", fmt_argv(argv_list))

    if dry_run:
        return CmdResult(argv=argv_list, returncode=0, stdout="", stderr="")

    if capture:
        p = subprocess.run(
            argv_list,
            text=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            cwd=cwd,
            env=dict(os.environ, **(env or {})),
        )
        stdout, stderr = p.stdout or "", p.stderr or ""
    else:
        p = subprocess.run(argv_list, cwd=cwd, env=dict(os.environ, **(env or {})))
        stdout, stderr = "", ""

    if stdout:
        logger.debug("STDOUT %s", stdout.strip())
    if stderr:
        logger.debug("STDERR %s", stderr.strip())
    logger.info("EXIT %d %s", p.returncode, argv_list[0])

    result = CmdResult(argv=argv_list, returncode=p.returncode, stdout=stdout, stderr=stderr)
    if check and p.returncode != 0:
        raise CommandError(result)
    return result
