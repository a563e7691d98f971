"""
Process environment lookups for zigup.

Everything zigup needs to know about the host (home directory, CPU
architecture, operating system, working directory and PATH) goes through an
Environment. The default HostEnvironment reads the real process; tests pass a
StaticEnvironment with fixed values instead.

Usage:
    from zigup.core.environment import HostEnvironment, StaticEnvironment

    env = HostEnvironment()
    print(env.machine(), env.system())

    fake = StaticEnvironment(home=Path("/tmp/home"), arch="x86_64", os_name="linux")
"""

import os
import platform
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


class Environment(ABC):
    """Abstract provider of process-wide environment values."""

    @abstractmethod
    def home_dir(self) -> Path:
        """Return the user's home directory."""
        pass

    @abstractmethod
    def machine(self) -> str:
        """Return the raw CPU architecture name (e.g. 'x86_64', 'AMD64')."""
        pass

    @abstractmethod
    def system(self) -> str:
        """Return the raw operating system name (e.g. 'Linux', 'Darwin')."""
        pass

    @abstractmethod
    def cwd(self) -> Path:
        """Return the current working directory."""
        pass

    @abstractmethod
    def search_path(self) -> List[Path]:
        """Return the directories on the executable search path."""
        pass


class HostEnvironment(Environment):
    """Environment backed by the running process."""

    def home_dir(self) -> Path:
        return Path.home()

    def machine(self) -> str:
        return platform.machine()

    def system(self) -> str:
        return platform.system()

    def cwd(self) -> Path:
        return Path.cwd()

    def search_path(self) -> List[Path]:
        path_env = os.environ.get("PATH", "")
        return [Path(p) for p in path_env.split(os.pathsep) if p]


@dataclass
class StaticEnvironment(Environment):
    """
    Environment with fixed values.

    Attributes:
        home: Home directory
        arch: Raw CPU architecture name
        os_name: Raw operating system name
        workdir: Working directory (defaults to home)
        paths: Search path entries
    """

    home: Path
    arch: str = "x86_64"
    os_name: str = "linux"
    workdir: Optional[Path] = None
    paths: List[Path] = field(default_factory=list)

    def home_dir(self) -> Path:
        return Path(self.home)

    def machine(self) -> str:
        return self.arch

    def system(self) -> str:
        return self.os_name

    def cwd(self) -> Path:
        return Path(self.workdir) if self.workdir is not None else Path(self.home)

    def search_path(self) -> List[Path]:
        return [Path(p) for p in self.paths]


__all__ = ["Environment", "HostEnvironment", "StaticEnvironment"]
