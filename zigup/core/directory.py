"""
Directory layout for zigup.

Directory Structure:
    Install Root (~/.zigup/):
        - current/<archive stem>/ : Extracted zig toolchains, one per version
        - lock/                   : Install lock file
        - config.yaml             : Optional user configuration

    Wrapper directory:
        - Linux/macOS: ~/.local/bin/zig
        - Windows:     %USERPROFILE%\\.zigup\\bin\\zig.cmd
"""

import logging
import os
from pathlib import Path
from typing import Optional

from zigup.core.environment import Environment, HostEnvironment
from zigup.core.exceptions import DirectoryCreationError

logger = logging.getLogger(__name__)

INSTALL_DIR_NAME = ".zigup"
CURRENT_DIR_NAME = "current"
CONFIG_FILE_NAME = "config.yaml"


def get_install_root(env: Optional[Environment] = None) -> Path:
    """
    Get the default install root.

    Example:
        >>> get_install_root()
        PosixPath('/home/user/.zigup')
    """
    env = env or HostEnvironment()
    return env.home_dir() / INSTALL_DIR_NAME


def get_current_dir(install_root: Path) -> Path:
    """Directory that extracted toolchains are unpacked into."""
    return Path(install_root) / CURRENT_DIR_NAME


def get_default_config_path(env: Optional[Environment] = None) -> Path:
    """Path of the optional user configuration file."""
    return get_install_root(env) / CONFIG_FILE_NAME


def get_bin_dir(env: Optional[Environment] = None, os_name: str = "") -> Path:
    """
    Get the default directory for the wrapper script.

    Args:
        env: Environment provider
        os_name: Resolved OS name; 'windows' selects the Windows layout

    Returns:
        ~/.local/bin on Linux/macOS, ~/.zigup/bin on Windows
    """
    env = env or HostEnvironment()
    if os_name == "windows":
        return get_install_root(env) / "bin"
    return env.home_dir() / ".local" / "bin"


def get_wrapper_path(bin_dir: Path, script_name: str) -> Path:
    """
    Path of the wrapper script inside the wrapper directory.

    Example:
        >>> get_wrapper_path(Path("/home/user/.local/bin"), "zig")
        PosixPath('/home/user/.local/bin/zig')
    """
    return Path(bin_dir) / script_name


def ensure_directory(path: Path, description: str = "directory") -> Path:
    """
    Ensure directory exists, create if needed.

    Args:
        path: Directory path
        description: Description for error messages

    Raises:
        DirectoryCreationError: If directory cannot be created
    """
    path = Path(path)
    try:
        path.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Ensured {description} exists: {path}")
    except OSError as e:
        raise DirectoryCreationError(
            f"create {description} {path}"
        ) from e
    return path


def is_on_search_path(directory: Path, env: Optional[Environment] = None) -> bool:
    """
    Check whether a directory is on the executable search path.

    Example:
        >>> is_on_search_path(Path("/usr/bin"))
        True
    """
    env = env or HostEnvironment()
    target = os.path.normcase(os.path.abspath(directory))
    for entry in env.search_path():
        if os.path.normcase(os.path.abspath(entry)) == target:
            return True
    return False


__all__ = [
    "get_install_root",
    "get_current_dir",
    "get_default_config_path",
    "get_bin_dir",
    "get_wrapper_path",
    "ensure_directory",
    "is_on_search_path",
]
