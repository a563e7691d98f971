"""
Core functionality for zigup.

This package contains the foundational modules that other components depend on.
"""

from .environment import Environment, HostEnvironment, StaticEnvironment

from .platform import (
    PlatformInfo,
    resolve_platform,
    get_supported_platforms,
)

from .directory import (
    get_install_root,
    get_current_dir,
    get_bin_dir,
    ensure_directory,
    is_on_search_path,
)

from .locking import LockManager

from .exceptions import (
    ZigupError,
    NetworkError,
    ParseError,
    ConfigError,
    InstallLockTimeout,
    UnsupportedPlatformError,
    InvalidVersionError,
    VersionSelectionError,
    VersionNotFoundError,
    NoValidVersionError,
    DownloadUrlError,
    EntryNotFoundError,
    PlatformNotFoundError,
    MalformedUrlError,
    FilesystemError,
    DirectoryCreationError,
    ArchiveExtractionError,
    UnsupportedArchiveFormat,
    InsecureArchiveError,
    ToolchainLayoutError,
    WrapperScriptError,
)

__all__ = [
    "Environment",
    "HostEnvironment",
    "StaticEnvironment",
    "PlatformInfo",
    "resolve_platform",
    "get_supported_platforms",
    "get_install_root",
    "get_current_dir",
    "get_bin_dir",
    "ensure_directory",
    "is_on_search_path",
    "LockManager",
    "ZigupError",
    "NetworkError",
    "ParseError",
    "ConfigError",
    "InstallLockTimeout",
    "UnsupportedPlatformError",
    "InvalidVersionError",
    "VersionSelectionError",
    "VersionNotFoundError",
    "NoValidVersionError",
    "DownloadUrlError",
    "EntryNotFoundError",
    "PlatformNotFoundError",
    "MalformedUrlError",
    "FilesystemError",
    "DirectoryCreationError",
    "ArchiveExtractionError",
    "UnsupportedArchiveFormat",
    "InsecureArchiveError",
    "ToolchainLayoutError",
    "WrapperScriptError",
]
