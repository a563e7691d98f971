"""
Toolchain installation.

Turns downloaded archive bytes into an installed toolchain:

1. Write the archive next to the working directory
2. Extract it under <install_root>/current/
3. Check the zig binary exists at <install_root>/current/<archive stem>/zig
4. Point the wrapper script at it
5. Remove the archive file (best-effort)

Extracted directories of earlier versions are left in place; only the
wrapper script is replaced.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from zigup.core.directory import ensure_directory, get_current_dir
from zigup.core.exceptions import FilesystemError, ToolchainLayoutError
from zigup.core.filesystem import (
    extract_tar_xz,
    remove_file_quietly,
    strip_archive_suffix,
)
from zigup.toolchain.wrapper import WrapperWriter

logger = logging.getLogger(__name__)


@dataclass
class InstallResult:
    """Result of a toolchain installation."""

    version: str
    """Installed version label"""

    toolchain_dir: Path
    """Extracted toolchain directory"""

    binary_path: Path
    """Path of the zig binary the wrapper points at"""

    wrapper_path: Path
    """Path of the wrapper script"""


class ToolchainInstaller:
    """
    Extracts a zig archive and wires up the wrapper script.

    Example:
        >>> installer = ToolchainInstaller(
        ...     install_root=Path.home() / ".zigup",
        ...     wrapper_path=Path.home() / ".local" / "bin" / "zig",
        ...     writer=PosixWrapperWriter(),
        ... )
        >>> result = installer.install(data, "zig-linux-x86_64-0.11.0.tar.xz")
    """

    def __init__(
        self,
        install_root: Path,
        wrapper_path: Path,
        writer: WrapperWriter,
        work_dir: Optional[Path] = None,
        binary_name: str = "zig",
    ):
        """
        Initialize installer.

        Args:
            install_root: Root directory for extracted toolchains
            wrapper_path: Where the wrapper script is written
            writer: Platform wrapper writer
            work_dir: Directory for the temporary archive file (default: cwd)
            binary_name: Name of the zig executable inside the archive
        """
        self.install_root = Path(install_root)
        self.current_dir = get_current_dir(self.install_root)
        self.wrapper_path = Path(wrapper_path)
        self.writer = writer
        self.work_dir = Path(work_dir) if work_dir is not None else Path.cwd()
        self.binary_name = binary_name

    def toolchain_dir_for(self, archive_name: str) -> Path:
        """Directory an archive is expected to extract into."""
        return self.current_dir / strip_archive_suffix(archive_name)

    def install(
        self, archive_bytes: bytes, archive_name: str, version: str = ""
    ) -> InstallResult:
        """
        Install a toolchain from archive bytes.

        Args:
            archive_bytes: Downloaded .tar.xz content
            archive_name: Archive file name (final URL segment)
            version: Version label, reported in the result

        Returns:
            InstallResult describing the installation

        Raises:
            UnsupportedArchiveFormat: If the archive is not .tar.xz
            ArchiveExtractionError: If extraction fails
            ToolchainLayoutError: If the zig binary is missing after extraction
            WrapperScriptError: If the wrapper cannot be written
            FilesystemError: For any other filesystem failure
        """
        toolchain_dir = self.toolchain_dir_for(archive_name)
        binary_path = toolchain_dir / self.binary_name
        archive_path = self.work_dir / archive_name

        try:
            try:
                archive_path.write_bytes(archive_bytes)
            except OSError as e:
                raise FilesystemError(
                    f"write zig package data to {archive_path}"
                ) from e

            ensure_directory(self.current_dir, "toolchain directory")
            extract_tar_xz(archive_path, self.current_dir)

            if not binary_path.is_file():
                raise ToolchainLayoutError(
                    f"zig binary not found at {binary_path} after extracting "
                    f"{archive_name}; expected the archive to contain "
                    f"{toolchain_dir.name}/{self.binary_name}"
                )

            ensure_directory(self.wrapper_path.parent, "wrapper directory")
            self.writer.write(binary_path, self.wrapper_path)
        finally:
            remove_file_quietly(archive_path)

        logger.info(f"Installed zig {version or toolchain_dir.name} to {toolchain_dir}")
        return InstallResult(
            version=version,
            toolchain_dir=toolchain_dir,
            binary_path=binary_path,
            wrapper_path=self.wrapper_path,
        )


__all__ = ["InstallResult", "ToolchainInstaller"]
