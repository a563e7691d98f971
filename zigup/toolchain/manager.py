"""
Install pipeline orchestration.

ZigupManager ties the pieces together for one invocation:

    Idle -> IndexFetched -> PlatformResolved -> VersionSelected
         -> DownloadComplete -> Installed

Resolution (index, platform, version, URL) and installation (download,
lock, extract, wrapper) are separate calls so the CLI can report the
selected version before the download starts. A failure at any stage aborts
the run; nothing is retried.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

from zigup.config.parser import ZigupConfig
from zigup.core.directory import (
    get_bin_dir,
    get_current_dir,
    get_install_root,
    get_wrapper_path,
    is_on_search_path,
)
from zigup.core.download import DownloadProgress, archive_name_from_url, download
from zigup.core.environment import Environment, HostEnvironment
from zigup.core.filesystem import strip_archive_suffix
from zigup.core.locking import LockManager
from zigup.core.platform import PlatformInfo, resolve_platform
from zigup.toolchain.index import VersionIndex, fetch_index
from zigup.toolchain.installer import InstallResult, ToolchainInstaller
from zigup.toolchain.version import resolve_download_url, select_version
from zigup.toolchain.wrapper import WrapperWriter, get_wrapper_writer

logger = logging.getLogger(__name__)


@dataclass
class InstallOptions:
    """Per-invocation install options."""

    version: Optional[str] = None
    """Explicit version label; None selects the latest release"""

    proxy: Optional[str] = None
    """Proxy URL; overrides the configured proxy"""


@dataclass
class InstallPlan:
    """Everything resolved before the download starts."""

    version: str
    platform_key: str
    url: str
    archive_name: str


class ZigupManager:
    """
    Resolves and installs zig toolchains.

    Example:
        >>> manager = ZigupManager(ZigupConfig())
        >>> plan = manager.resolve(InstallOptions())
        >>> result = manager.install(plan)
        >>> print(result.wrapper_path)
    """

    def __init__(self, config: ZigupConfig, env: Optional[Environment] = None):
        """
        Initialize manager.

        Args:
            config: User configuration
            env: Environment provider (default: the host process)
        """
        self.config = config
        self.env = env or HostEnvironment()
        self._platform: Optional[PlatformInfo] = None

    @property
    def platform(self) -> PlatformInfo:
        """Resolved platform, computed on first use."""
        if self._platform is None:
            self._platform = resolve_platform(self.env)
        return self._platform

    @property
    def install_root(self) -> Path:
        return self.config.install_root or get_install_root(self.env)

    @property
    def bin_dir(self) -> Path:
        return self.config.bin_dir or get_bin_dir(self.env, self.platform.os)

    @property
    def writer(self) -> WrapperWriter:
        return get_wrapper_writer(self.platform.os)

    @property
    def wrapper_path(self) -> Path:
        return get_wrapper_path(self.bin_dir, self.writer.script_name)

    def _proxy(self, proxy: Optional[str]) -> Optional[str]:
        return proxy or self.config.proxy

    def fetch_index(self, proxy: Optional[str] = None) -> VersionIndex:
        """Fetch the version index from the configured URL."""
        return fetch_index(
            proxy=self._proxy(proxy),
            url=self.config.index_url,
            timeout=self.config.timeout,
        )

    def resolve(
        self, options: InstallOptions, index: Optional[VersionIndex] = None
    ) -> InstallPlan:
        """
        Resolve which archive to install.

        Args:
            options: Install options
            index: Already fetched index (fetched when None)

        Raises:
            NetworkError, ParseError: If the index cannot be fetched
            UnsupportedPlatformError: If the host is not supported
            VersionSelectionError, DownloadUrlError: If no archive matches
            UnsupportedArchiveFormat: If the archive is not a .tar.xz file
        """
        if index is None:
            index = self.fetch_index(options.proxy)

        platform_key = self.platform.platform_key()
        version = select_version(index, options.version)
        url = resolve_download_url(index, version, platform_key)

        archive_name = archive_name_from_url(url)
        # Fail on unsupported formats before anything is downloaded
        strip_archive_suffix(archive_name)

        plan = InstallPlan(
            version=version,
            platform_key=platform_key,
            url=url,
            archive_name=archive_name,
        )
        logger.debug(f"Resolved {plan}")
        return plan

    def install(
        self,
        plan: InstallPlan,
        proxy: Optional[str] = None,
        progress_callback: Optional[Callable[[DownloadProgress], None]] = None,
    ) -> InstallResult:
        """
        Download and install a resolved plan.

        Raises:
            NetworkError: If the download fails
            InstallLockTimeout: If another install holds the lock
            FilesystemError: If extraction or the wrapper write fails
        """
        data = download(
            plan.url,
            proxy=self._proxy(proxy),
            progress_callback=progress_callback,
            timeout=self.config.timeout,
        )

        installer = ToolchainInstaller(
            install_root=self.install_root,
            wrapper_path=self.wrapper_path,
            writer=self.writer,
            work_dir=self.env.cwd(),
            binary_name=self.platform.binary_name(),
        )

        lock_manager = LockManager(self.install_root / "lock")
        with lock_manager.install_lock(timeout=self.config.lock_timeout):
            return installer.install(data, plan.archive_name, version=plan.version)

    def installed_versions(self) -> List[str]:
        """Names of the extracted toolchain directories, sorted."""
        current_dir = get_current_dir(self.install_root)
        if not current_dir.is_dir():
            return []
        return sorted(p.name for p in current_dir.iterdir() if p.is_dir())

    def wrapper_on_search_path(self) -> bool:
        """Whether the wrapper directory is on PATH."""
        return is_on_search_path(self.bin_dir, self.env)


__all__ = ["InstallOptions", "InstallPlan", "ZigupManager"]
