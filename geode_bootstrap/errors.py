from __future__ import annotations


class BootstrapError(Exception):
    """A failed bootstrap phase.

    Carries the failure category shown to the user and the exit code the
    process should terminate with.
    """

    category = "bootstrap-failed"
    default_exit_code = 1

    def __init__(self, message: str, *, exit_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.exit_code = self.default_exit_code if exit_code is None else exit_code


class UnsupportedPlatformError(BootstrapError):
    category = "unsupported-platform"


class TransferToolMissingError(BootstrapError):
    category = "missing-transfer-tool"


class DownloadError(BootstrapError):
    category = "download-failed"


class PermissionGrantError(BootstrapError):
    category = "permission-failed"


class InstallerExecutionError(BootstrapError):
    category = "installer-failed"


class ConfigError(BootstrapError):
    category = "invalid-config"
