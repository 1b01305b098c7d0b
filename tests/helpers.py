"""Fakes for the host platform and the command runner."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from geode_bootstrap.lib.command import CmdResult
from geode_bootstrap.lib.transfer import TransferTool


class FakePlatform:
    def __init__(self, os_name: str = "Linux", arch: str = "x86_64", tools: Sequence[str] = ("curl", "wget")) -> None:
        self.os_name = os_name
        self.arch = arch
        self.tools = list(tools)
        self.tool_probes = 0

    def current_platform(self) -> Tuple[str, str]:
        return self.os_name, self.arch

    def find_transfer_tool(self) -> Optional[TransferTool]:
        self.tool_probes += 1
        for name in ("curl", "wget"):
            if name in self.tools:
                return TransferTool(name=name, path=f"/usr/bin/{name}")
        return None


class FakeRunner:
    """Stands in for run_cmd: 'downloads' by writing a file, 'runs' by returning a status."""

    def __init__(self, *, download_rc: int = 0, installer_rc: int = 0, payload: bytes = b"#!/bin/sh\nexit 0\n") -> None:
        self.download_rc = download_rc
        self.installer_rc = installer_rc
        self.payload = payload
        self.calls: List[List[str]] = []
        self.installer_saw: Optional[dict] = None

    @property
    def network_calls(self) -> List[List[str]]:
        return [c for c in self.calls if c[0].startswith("/usr/bin/")]

    def __call__(self, argv, *, check=True, capture=True, dry_run=False, **kwargs) -> CmdResult:
        argv = list(argv)
        self.calls.append(argv)
        if argv[0].startswith("/usr/bin/"):
            if self.download_rc != 0:
                return CmdResult(argv=argv, returncode=self.download_rc, stdout="", stderr="404 Not Found")
            dest = argv[argv.index("-o" if "-o" in argv else "-O") + 1]
            Path(dest).write_bytes(self.payload)
            return CmdResult(argv=argv, returncode=0, stdout="", stderr="")

        p = Path(argv[0])
        self.installer_saw = {
            "exists": p.exists(),
            "executable": p.exists() and os.access(p, os.X_OK),
            "argv": argv,
            "capture": capture,
        }
        return CmdResult(argv=argv, returncode=self.installer_rc, stdout="", stderr="")
