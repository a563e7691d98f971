"""
Wrapper scripts that put the installed zig on the search path.

A wrapper is a small launcher placed in a directory on PATH that forwards
every argument to the extracted zig binary. The flavour is picked once at
startup from the resolved OS:

- PosixWrapperWriter: ``zig`` shell script, mode 0o755
- WindowsWrapperWriter: ``zig.cmd`` batch launcher
"""

import logging
import os
import shlex
import stat
from abc import ABC, abstractmethod
from pathlib import Path

from zigup.core.exceptions import WrapperScriptError
from zigup.core.filesystem import atomic_write

logger = logging.getLogger(__name__)

# rwxr-xr-x
WRAPPER_MODE = (
    stat.S_IRWXU | stat.S_IRGRP | stat.S_IXGRP | stat.S_IROTH | stat.S_IXOTH
)


class WrapperWriter(ABC):
    """Writes a launcher script that forwards arguments to a binary."""

    script_name: str = ""

    @abstractmethod
    def render(self, binary_path: Path) -> str:
        """Return the script content for binary_path."""
        pass

    def write(self, binary_path: Path, wrapper_path: Path) -> Path:
        """
        Create or overwrite the wrapper script.

        Args:
            binary_path: Absolute path of the zig binary
            wrapper_path: Where to write the script

        Returns:
            The wrapper path

        Raises:
            WrapperScriptError: If the script cannot be written
        """
        wrapper_path = Path(wrapper_path)
        try:
            self._write(self.render(Path(binary_path)), wrapper_path)
        except OSError as e:
            raise WrapperScriptError(
                f"create zig wrapper script: {wrapper_path}"
            ) from e

        logger.info(f"Wrote zig wrapper: {wrapper_path}")
        return wrapper_path

    @abstractmethod
    def _write(self, content: str, wrapper_path: Path) -> None:
        pass


class PosixWrapperWriter(WrapperWriter):
    """Executable sh script for Linux and macOS."""

    script_name = "zig"

    def render(self, binary_path: Path) -> str:
        return f'#!/bin/sh\nexec {shlex.quote(str(binary_path))} "$@"\n'

    def _write(self, content: str, wrapper_path: Path) -> None:
        atomic_write(wrapper_path, content)
        os.chmod(wrapper_path, WRAPPER_MODE)

        if not os.access(wrapper_path, os.X_OK):
            raise WrapperScriptError(
                f"zig wrapper script {wrapper_path} is not executable "
                "after setting its mode"
            )


class WindowsWrapperWriter(WrapperWriter):
    """Batch launcher for Windows; cmd.exe runs .cmd files from PATH directly."""

    script_name = "zig.cmd"

    def render(self, binary_path: Path) -> str:
        return f'@echo off\n"{binary_path}" %*\n'

    def _write(self, content: str, wrapper_path: Path) -> None:
        atomic_write(wrapper_path, content, newline="\r\n")


def get_wrapper_writer(os_name: str) -> WrapperWriter:
    """
    Select the wrapper writer for an OS.

    Args:
        os_name: Resolved OS name ('linux', 'macos', 'windows')

    Example:
        >>> get_wrapper_writer("windows").script_name
        'zig.cmd'
    """
    if os_name == "windows":
        return WindowsWrapperWriter()
    return PosixWrapperWriter()


__all__ = [
    "WRAPPER_MODE",
    "WrapperWriter",
    "PosixWrapperWriter",
    "WindowsWrapperWriter",
    "get_wrapper_writer",
]
