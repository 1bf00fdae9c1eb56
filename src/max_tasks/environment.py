"""Process environment queries used by discovery and the cache."""

from __future__ import annotations

import platform
from pathlib import Path
from typing import Protocol


class Environment(Protocol):
    """Home directory, working directory and OS name lookups."""

    def home_dir(self) -> Path:
        """Return a writable per-user root directory."""
        raise NotImplementedError

    def cwd(self) -> Path:
        """Return the directory default documents are searched in."""
        raise NotImplementedError

    def os_name(self) -> str:
        """Return the lowercase OS name used in ``max_<os>.yml``."""
        raise NotImplementedError


class SystemEnvironment:
    """Environment backed by the running process."""

    def home_dir(self) -> Path:
        return Path.home()

    def cwd(self) -> Path:
        return Path.cwd()

    def os_name(self) -> str:
        return platform.system().lower()
