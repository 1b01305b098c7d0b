"""Geode CLI installer bootstrap.

Fetches the latest prebuilt installer for Linux x86_64, runs it with the
caller's terminal and removes it again.

Core design goals:
- Fail fast, one phase at a time
- Injectable host probing (platform + transfer tool)
- Staged artifact removed on every exit path
- Centralized logging
"""

__all__ = []
