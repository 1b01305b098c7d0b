from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from geode_bootstrap import main as main_mod
from geode_bootstrap.lib import platform_probe


@pytest.fixture
def no_subprocess(monkeypatch):
    calls = []

    def record(*args, **kwargs):
        calls.append(args)
        raise AssertionError("no command may run here")

    monkeypatch.setattr(subprocess, "run", record)
    return calls


def test_darwin_arm64_host_exits_nonzero_without_network(monkeypatch, tmp_path: Path, capsys, no_subprocess) -> None:
    monkeypatch.setattr(platform_probe.platform, "system", lambda: "Darwin")
    monkeypatch.setattr(platform_probe.platform, "machine", lambda: "arm64")
    monkeypatch.setattr(platform_probe.shutil, "which", lambda name: pytest.fail("tool probe ran"))

    log_path = tmp_path / "sub" / "bootstrap.log"

    rc = main_mod.main(["--log", str(log_path)])

    out = capsys.readouterr()
    assert rc == 1
    assert not log_path.exists()
    assert not log_path.parent.exists()
    assert "Geode CLI Installer" in out.out
    assert "unsupported-platform" in out.err
    assert "only supports Linux x86_64" in out.err
    assert no_subprocess == []


def test_missing_tools_on_linux_host(monkeypatch, tmp_path: Path, capsys, no_subprocess) -> None:
    monkeypatch.setattr(platform_probe.platform, "system", lambda: "Linux")
    monkeypatch.setattr(platform_probe.platform, "machine", lambda: "x86_64")
    monkeypatch.setattr(platform_probe.shutil, "which", lambda name: None)

    rc = main_mod.main(["--log", str(tmp_path / "bootstrap.log")])

    assert rc == 1
    assert "Neither curl nor wget found" in capsys.readouterr().err
    assert not (tmp_path / "bootstrap.log").exists()
    assert no_subprocess == []


def test_bad_config_is_reported(tmp_path: Path, capsys) -> None:
    bad = tmp_path / "bootstrap.yaml"
    bad.write_text("- just\n- a list\n", encoding="utf-8")

    rc = main_mod.main(["--config", str(bad), "--log", str(tmp_path / "bootstrap.log")])

    assert rc == 1
    assert "invalid-config" in capsys.readouterr().err


def test_dry_run_from_command_line(monkeypatch, tmp_path: Path, capsys, no_subprocess) -> None:
    monkeypatch.setattr(platform_probe.platform, "system", lambda: "Linux")
    monkeypatch.setattr(platform_probe.platform, "machine", lambda: "x86_64")
    monkeypatch.setattr(platform_probe.shutil, "which", lambda name: f"/usr/bin/{name}")
    cfg = tmp_path / "bootstrap.yml"
    cfg.write_text(f"install_dir: {tmp_path}\n", encoding="utf-8")

    rc = main_mod.main(["--dry-run", "--config", str(cfg), "--log", str(tmp_path / "bootstrap.log")])

    out = capsys.readouterr().out
    assert rc == 0
    assert "Downloading installer..." in out
    assert "Running installer..." in out
    assert "Dry run" in out
    assert not (tmp_path / "geode-cli-installer").exists()
    assert not (tmp_path / "bootstrap.log").exists()
    assert no_subprocess == []


def test_installer_status_is_main_exit_code(monkeypatch, tmp_path: Path) -> None:
    from helpers import FakePlatform, FakeRunner

    real_run = main_mod.run

    def run_with_fakes(**kwargs):
        return real_run(cfg=kwargs["cfg"], provider=FakePlatform(), runner=FakeRunner(installer_rc=5))

    monkeypatch.setattr(main_mod, "run", run_with_fakes)
    cfg = tmp_path / "bootstrap.yaml"
    cfg.write_text(f"install_dir: {tmp_path}\n", encoding="utf-8")

    rc = main_mod.main(["--config", str(cfg), "--log", str(tmp_path / "bootstrap.log")])

    assert rc == 5
    assert not (tmp_path / "geode-cli-installer").exists()
    log_text = (tmp_path / "bootstrap.log").read_text(encoding="utf-8")
    assert "Running step 10_check_platform" in log_text
    assert "Running step 50_run_installer" in log_text


def test_keyboard_interrupt_exits_130(monkeypatch, tmp_path: Path, capsys) -> None:
    def interrupted(**kwargs):
        raise KeyboardInterrupt

    monkeypatch.setattr(main_mod, "run", interrupted)

    assert main_mod.main(["--log", str(tmp_path / "bootstrap.log")]) == 130
    assert "interrupted" in capsys.readouterr().err


def test_no_writable_log_location_does_not_stop_the_run(monkeypatch, tmp_path: Path) -> None:
    import logging

    from helpers import FakePlatform, FakeRunner

    def unwritable(*args, **kwargs):
        raise PermissionError("read-only")

    monkeypatch.setattr(logging, "FileHandler", unwritable)
    real_run = main_mod.run

    def run_with_fakes(**kwargs):
        return real_run(cfg=kwargs["cfg"], provider=FakePlatform(), runner=FakeRunner())

    monkeypatch.setattr(main_mod, "run", run_with_fakes)
    cfg = tmp_path / "bootstrap.yaml"
    cfg.write_text(f"install_dir: {tmp_path}\n", encoding="utf-8")

    rc = main_mod.main(["--config", str(cfg), "--log", str(tmp_path / "logs" / "bootstrap.log")])

    assert rc == 0
    assert not (tmp_path / "geode-cli-installer").exists()
