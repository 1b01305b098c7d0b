"""User-facing terminal output.

Logging goes to the log file; these lines are what the person running the
bootstrap actually reads.
"""

from __future__ import annotations

import sys

from colorama import Fore, Style, just_fix_windows_console

just_fix_windows_console()


def banner(title: str) -> None:
    print(f"{Fore.GREEN}{title}{Style.RESET_ALL}")
    print("Downloading and running installer...")
    print()


def status(message: str) -> None:
    print(message)


def success(message: str) -> None:
    print(f"{Fore.GREEN}{message}{Style.RESET_ALL}")


def warning(message: str) -> None:
    print(f"{Fore.YELLOW}{message}{Style.RESET_ALL}")


def error(message: str, *, category: str | None = None) -> None:
    label = f" [{category}]" if category else ""
    print(f"{Fore.RED}Error{label}: {message}{Style.RESET_ALL}", file=sys.stderr)
