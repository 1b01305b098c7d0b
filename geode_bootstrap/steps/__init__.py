from .step_10_check_platform import CheckPlatformStep
from .step_20_select_transfer import SelectTransferToolStep
from .step_30_download import DownloadStep
from .step_40_grant_execute import GrantExecuteStep
from .step_50_run_installer import RunInstallerStep

__all__ = [
    "CheckPlatformStep",
    "SelectTransferToolStep",
    "DownloadStep",
    "GrantExecuteStep",
    "RunInstallerStep",
]
