"""
Install locking for zigup.

Extraction and wrapper replacement are guarded by a file lock under the
install root so two zigup processes never rewrite the same installation at
the same time.

Usage:
    from zigup.core.locking import LockManager

    lock_manager = LockManager(install_root / "lock")
    with lock_manager.install_lock(timeout=300):
        installer.install(data, archive_name)
"""

import logging
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock, Timeout as LockTimeout

from zigup.core.directory import ensure_directory
from zigup.core.exceptions import InstallLockTimeout

logger = logging.getLogger(__name__)

DEFAULT_LOCK_TIMEOUT = 300


class LockManager:
    """
    Manages the cross-process install lock.

    Attributes:
        lock_dir: Directory where lock files are stored
    """

    def __init__(self, lock_dir: Path):
        """
        Initialize lock manager.

        Args:
            lock_dir: Directory for lock files (created if missing)
        """
        self.lock_dir = ensure_directory(Path(lock_dir), "lock directory")

    @contextmanager
    def install_lock(self, timeout: float = DEFAULT_LOCK_TIMEOUT):
        """
        Acquire the install lock.

        Args:
            timeout: Maximum wait time in seconds

        Raises:
            InstallLockTimeout: If lock can't be acquired within timeout
        """
        lock_path = self.lock_dir / "install.lock"
        lock = FileLock(lock_path, timeout=timeout)

        try:
            with lock:
                logger.debug(f"Acquired install lock: {lock_path}")
                yield
                logger.debug(f"Released install lock: {lock_path}")
        except LockTimeout as e:
            raise InstallLockTimeout(
                f"Could not acquire install lock after {timeout}s. "
                "Another zigup process may be running."
            ) from e


__all__ = ["LockManager", "DEFAULT_LOCK_TIMEOUT"]
