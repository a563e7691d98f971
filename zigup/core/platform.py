"""
Platform detection for zigup.

Maps the running CPU architecture and operating system onto the names used
as platform keys in the Zig version index (e.g. 'x86_64-linux',
'aarch64-macos').

Usage:
    from zigup.core.platform import resolve_platform

    info = resolve_platform()
    print(f"Platform key: {info.platform_key()}")
"""

from dataclasses import dataclass
from typing import Optional

from zigup.core.environment import Environment, HostEnvironment
from zigup.core.exceptions import UnsupportedPlatformError

SUPPORTED_ARCHES = ("x86", "x86_64", "aarch64")
SUPPORTED_OSES = ("linux", "macos", "windows")

# Host spellings -> index spellings
_ARCH_ALIASES = {
    "x86_64": "x86_64",
    "amd64": "x86_64",
    "x64": "x86_64",
    "aarch64": "aarch64",
    "arm64": "aarch64",
    "x86": "x86",
    "i386": "x86",
    "i686": "x86",
}

_OS_ALIASES = {
    "linux": "linux",
    "darwin": "macos",
    "macos": "macos",
    "windows": "windows",
}


@dataclass(frozen=True)
class PlatformInfo:
    """
    Resolved platform.

    Attributes:
        arch: CPU architecture ('x86', 'x86_64', 'aarch64')
        os: Operating system ('linux', 'macos', 'windows')
    """

    arch: str
    os: str

    def platform_key(self) -> str:
        """
        Get the version index key for this platform.

        Example:
            >>> PlatformInfo("x86_64", "linux").platform_key()
            'x86_64-linux'
        """
        return f"{self.arch}-{self.os}"

    def binary_name(self) -> str:
        """Name of the zig executable inside an extracted archive."""
        return "zig.exe" if self.os == "windows" else "zig"

    def __str__(self) -> str:
        return self.platform_key()


def _normalize_arch(machine: str) -> str:
    arch = _ARCH_ALIASES.get(machine.lower())
    if arch is None:
        raise UnsupportedPlatformError("arch", machine)
    return arch


def _normalize_os(system: str) -> str:
    os_name = _OS_ALIASES.get(system.lower())
    if os_name is None:
        raise UnsupportedPlatformError("type of", system)
    return os_name


def resolve_platform(env: Optional[Environment] = None) -> PlatformInfo:
    """
    Resolve the running platform.

    Args:
        env: Environment provider (default: the host process)

    Returns:
        PlatformInfo with normalized arch and os

    Raises:
        UnsupportedPlatformError: If arch or OS is outside the supported set

    Example:
        >>> info = resolve_platform()
        >>> info.platform_key()
        'x86_64-linux'
    """
    env = env or HostEnvironment()
    return PlatformInfo(
        arch=_normalize_arch(env.machine()), os=_normalize_os(env.system())
    )


def get_supported_platforms() -> list[str]:
    """
    Get list of all supported platform keys.

    Example:
        >>> "aarch64-macos" in get_supported_platforms()
        True
    """
    return [f"{arch}-{os_name}" for os_name in SUPPORTED_OSES for arch in SUPPORTED_ARCHES]


__all__ = [
    "PlatformInfo",
    "resolve_platform",
    "get_supported_platforms",
    "SUPPORTED_ARCHES",
    "SUPPORTED_OSES",
]
