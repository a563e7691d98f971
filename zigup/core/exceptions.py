"""
Centralized exception hierarchy for zigup.

Every failure raised by zigup derives from ZigupError so the CLI can report
it uniformly. Lower layers chain the underlying cause with ``raise ... from``
and the CLI prints the whole chain.
"""

from typing import Iterable


# ============================================================================
# Base Exceptions
# ============================================================================


class ZigupError(Exception):
    """Base exception for all zigup errors."""

    pass


# ============================================================================
# Network / Index Exceptions
# ============================================================================


class NetworkError(ZigupError):
    """Raised when an HTTP request fails or returns a non-success status."""

    def __init__(self, message: str, url: str = ""):
        self.url = url
        super().__init__(message)


class ParseError(ZigupError):
    """Raised when the version index is not an object-shaped JSON document."""

    pass


class ConfigError(ZigupError):
    """Configuration parsing or validation error."""

    pass


class InstallLockTimeout(ZigupError):
    """Raised when the install lock cannot be acquired within timeout."""

    pass


# ============================================================================
# Platform Exceptions
# ============================================================================


class UnsupportedPlatformError(ZigupError):
    """Raised when the host CPU architecture or OS is not supported."""

    def __init__(self, kind: str, value: str):
        self.kind = kind
        self.value = value
        super().__init__(f"Your system {kind} {value} is not supported yet")


# ============================================================================
# Version Selection Exceptions
# ============================================================================


class InvalidVersionError(ZigupError):
    """Invalid semantic version string."""

    pass


class VersionSelectionError(ZigupError):
    """Base exception for version selection errors."""

    pass


class VersionNotFoundError(VersionSelectionError):
    """Raised when an explicitly requested version is not in the index."""

    def __init__(self, version: str, available: Iterable[str]):
        self.version = version
        self.available = list(available)
        super().__init__(
            f"provided version {version} is not found from existing versions: "
            f"{', '.join(self.available)}"
        )


class NoValidVersionError(VersionSelectionError):
    """Raised when no index key parses as a semantic version."""

    pass


class DownloadUrlError(ZigupError):
    """Base exception for download URL resolution errors."""

    pass


class EntryNotFoundError(DownloadUrlError):
    """Raised when the selected version has no entry in the index."""

    def __init__(self, version: str):
        self.version = version
        super().__init__(f"version {version} is not found in the version index")


class PlatformNotFoundError(DownloadUrlError):
    """Raised when a version has no archive for the platform key."""

    def __init__(self, version: str, platform_key: str, available: Iterable[str]):
        self.version = version
        self.platform_key = platform_key
        self.available = list(available)
        msg = f"no zig download for version {version} ({platform_key})"
        if self.available:
            msg += f"; available platforms: {', '.join(self.available)}"
        super().__init__(msg)


class MalformedUrlError(DownloadUrlError):
    """Raised when a download URL is missing, not a string, or has no file name."""

    pass


# ============================================================================
# Filesystem Exceptions
# ============================================================================


class FilesystemError(ZigupError):
    """Base exception for filesystem operations."""

    pass


class DirectoryCreationError(FilesystemError):
    """Raised when directory creation fails."""

    pass


class ArchiveExtractionError(FilesystemError):
    """Failed to extract an archive."""

    pass


class UnsupportedArchiveFormat(ArchiveExtractionError):
    """Archive format is not supported."""

    pass


class InsecureArchiveError(ArchiveExtractionError):
    """Archive contains insecure paths (directory traversal attempt)."""

    pass


class ToolchainLayoutError(FilesystemError):
    """Extracted archive does not contain the expected zig binary."""

    pass


class WrapperScriptError(FilesystemError):
    """Failed to create the zig wrapper script."""

    pass


__all__ = [
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
