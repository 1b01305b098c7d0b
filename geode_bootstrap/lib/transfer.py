from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple

# Probe order: the first tool found on PATH wins.
DEFAULT_TOOL_ORDER: Tuple[str, ...] = ("curl", "wget")


@dataclass(frozen=True)
class TransferTool:
    """An HTTP client executable able to fetch one URL into one file."""

    name: str
    path: str

    def download_argv(self, url: str, dest: str) -> List[str]:
        return [self.path, *_ARGS[self.name](url, dest)]


def _curl_args(url: str, dest: str) -> List[str]:
    # -f: fail on HTTP errors, -sS: quiet but still report errors, -L: follow redirects
    return ["-fsSL", url, "-o", dest]


def _wget_args(url: str, dest: str) -> List[str]:
    return ["-q", url, "-O", dest]


_ARGS: Dict[str, Callable[[str, str], List[str]]] = {
    "curl": _curl_args,
    "wget": _wget_args,
}


def known_tools() -> List[str]:
    return list(_ARGS)


def validate_tool_order(order) -> Tuple[str, ...]:
    names = tuple(str(n) for n in order)
    unknown = [n for n in names if n not in _ARGS]
    if unknown:
        raise ValueError(f"Unknown transfer tool(s): {', '.join(unknown)} (known: {', '.join(known_tools())})")
    if not names:
        raise ValueError("At least one transfer tool must be configured")
    return names
