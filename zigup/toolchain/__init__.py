"""
Zig toolchain resolution and installation.

This package fetches the version index, selects a version, and installs the
matching archive with a wrapper script. The install pipeline lives in
zigup.toolchain.manager.
"""

from .index import INDEX_URL, VersionIndex, fetch_index, parse_index
from .version import Version, parse_version, select_version, resolve_download_url
from .wrapper import (
    WrapperWriter,
    PosixWrapperWriter,
    WindowsWrapperWriter,
    get_wrapper_writer,
)
from .installer import InstallResult, ToolchainInstaller

__all__ = [
    "INDEX_URL",
    "VersionIndex",
    "fetch_index",
    "parse_index",
    "Version",
    "parse_version",
    "select_version",
    "resolve_download_url",
    "WrapperWriter",
    "PosixWrapperWriter",
    "WindowsWrapperWriter",
    "get_wrapper_writer",
    "InstallResult",
    "ToolchainInstaller",
]
