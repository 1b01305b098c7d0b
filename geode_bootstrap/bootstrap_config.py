from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

from .errors import ConfigError
from .lib.env import PATHS
from .lib.transfer import DEFAULT_TOOL_ORDER, validate_tool_order

DEFAULT_HOST = "github.com"
DEFAULT_REPO = "relativemodder/geode-cli-installer-rs"
DEFAULT_BINARY_NAME = "geode-cli-installer"
# Fixed: the prebuilt installer only exists for this pair.
SUPPORTED_PLATFORM = ("Linux", "x86_64")
KNOWN_KEYS = frozenset({"host", "repo", "binary_name", "install_dir", "transfer_tools"})


@dataclass(frozen=True)
class BootstrapConfig:
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def host(self) -> str:
        return str(self.raw.get("host") or DEFAULT_HOST)

    @property
    def repo(self) -> str:
        return str(self.raw.get("repo") or DEFAULT_REPO).strip("/")

    @property
    def binary_name(self) -> str:
        return str(self.raw.get("binary_name") or DEFAULT_BINARY_NAME)

    @property
    def install_dir(self) -> str:
        return str(self.raw.get("install_dir") or PATHS.install_dir)

    @property
    def transfer_tools(self) -> Tuple[str, ...]:
        tools = self.raw.get("transfer_tools")
        return DEFAULT_TOOL_ORDER if tools is None else tuple(tools)

    @property
    def download_url(self) -> str:
        # Always the newest published release; there is no version pin.
        return f"https://{self.host}/{self.repo}/releases/latest/download/{self.binary_name}"

    @property
    def staging_path(self) -> Path:
        return Path(self.install_dir) / self.binary_name


def load_bootstrap_config(path: Optional[str]) -> BootstrapConfig:
    """Load overrides from YAML; no path means the built-in defaults."""

    if not path:
        return BootstrapConfig()

    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Config file not found: {path}")

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ConfigError("bootstrap config must be YAML")

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"{path} must contain a mapping/object")

    unknown = sorted(str(k) for k in raw if k not in KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"Unknown config key(s): {', '.join(unknown)}")

    if "transfer_tools" in raw:
        tools = raw["transfer_tools"]
        if not isinstance(tools, list):
            raise ConfigError("transfer_tools must be a list, e.g. [curl, wget]")
        try:
            validate_tool_order(tools)
        except ValueError as e:
            raise ConfigError(str(e)) from e

    return BootstrapConfig(raw=raw)
