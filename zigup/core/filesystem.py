"""
File system utilities for zigup.

This module provides:
- Archive extraction (tar.xz) with directory traversal protection
- Atomic writes (temp file + rename)
- Best-effort file removal
"""

import logging
import os
import tarfile
import tempfile
from pathlib import Path
from typing import Union

from zigup.core.exceptions import (
    ArchiveExtractionError,
    InsecureArchiveError,
    UnsupportedArchiveFormat,
)

logger = logging.getLogger(__name__)

# Platform detection
IS_WINDOWS = os.name == "nt"

TAR_XZ_SUFFIX = ".tar.xz"


# ============================================================================
# Path Utilities
# ============================================================================


def is_relative_to(path: Path, parent: Path) -> bool:
    """
    Check if path is relative to (under) parent directory.

    Example:
        >>> is_relative_to(Path("/home/user/.zigup/current"), Path("/home/user"))
        True
    """
    try:
        path.relative_to(parent)
        return True
    except ValueError:
        return False


def strip_archive_suffix(archive_name: str) -> str:
    """
    Remove the .tar.xz suffix from an archive name.

    Raises:
        UnsupportedArchiveFormat: If the name does not end with .tar.xz

    Example:
        >>> strip_archive_suffix("zig-linux-x86_64-0.11.0.tar.xz")
        'zig-linux-x86_64-0.11.0'
    """
    if not archive_name.endswith(TAR_XZ_SUFFIX):
        raise UnsupportedArchiveFormat(
            f"Unsupported archive format: {archive_name}. Supported: {TAR_XZ_SUFFIX}"
        )
    return archive_name[: -len(TAR_XZ_SUFFIX)]


# ============================================================================
# Archive Extraction
# ============================================================================


def _validate_archive_path(path: str, destination: Path) -> None:
    """
    Validate that an archive member path is safe to extract.

    Raises:
        InsecureArchiveError: If path attempts directory traversal
    """
    member_path = (destination / path).resolve()

    if not is_relative_to(member_path, destination.resolve()):
        raise InsecureArchiveError(
            f"Archive member '{path}' attempts directory traversal. "
            "This is a security risk and extraction has been blocked."
        )


def extract_tar_xz(
    archive_path: Union[str, Path], destination: Union[str, Path]
) -> None:
    """
    Extract a .tar.xz archive into a destination directory.

    Args:
        archive_path: Path to the archive file
        destination: Directory to extract to (created if missing)

    Raises:
        UnsupportedArchiveFormat: If the archive is not a .tar.xz file
        InsecureArchiveError: If the archive contains malicious paths
        ArchiveExtractionError: If extraction fails

    Example:
        >>> extract_tar_xz("zig-linux-x86_64-0.11.0.tar.xz", Path.home() / ".zigup" / "current")
    """
    archive_path = Path(archive_path)
    destination = Path(destination)

    strip_archive_suffix(archive_path.name)

    if not archive_path.exists():
        raise ArchiveExtractionError(f"Archive not found: {archive_path}")

    try:
        destination.mkdir(parents=True, exist_ok=True)
        with tarfile.open(archive_path, "r:xz") as tar:
            for member in tar.getmembers():
                _validate_archive_path(member.name, destination)
                if member.issym():
                    # Symlink targets are relative to the link's own directory
                    link_target = os.path.join(
                        os.path.dirname(member.name), member.linkname
                    )
                    _validate_archive_path(link_target, destination)
                elif member.islnk():
                    _validate_archive_path(member.linkname, destination)

            # Also present on the 3.9-3.11 security backports
            if hasattr(tarfile, "data_filter"):
                tar.extractall(destination, filter="data")
            else:
                tar.extractall(destination)
    except InsecureArchiveError:
        raise
    except (OSError, tarfile.TarError, EOFError) as e:
        raise ArchiveExtractionError(
            f"decompress {archive_path.name} to {destination}"
        ) from e

    logger.debug(f"Extracted {archive_path} to {destination}")


# ============================================================================
# Safe File Operations
# ============================================================================


def atomic_write(
    file_path: Union[str, Path],
    content: str,
    encoding: str = "utf-8",
    newline: str = "\n",
) -> None:
    """
    Write a text file atomically using temp file + rename.

    The target is either left untouched or fully replaced.

    Args:
        file_path: Path to write to
        content: Text content
        encoding: Text encoding
        newline: Line ending written for each '\\n'

    Example:
        >>> atomic_write(Path.home() / ".local" / "bin" / "zig", "#!/bin/sh\\n")
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    # Same directory keeps the rename on one filesystem
    temp_fd, temp_path_str = tempfile.mkstemp(
        dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
    )
    temp_path = Path(temp_path_str)

    try:
        with open(temp_fd, "w", encoding=encoding, newline=newline) as f:
            f.write(content)
        temp_path.replace(file_path)
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise


def remove_file_quietly(path: Union[str, Path]) -> bool:
    """
    Delete a file, logging instead of raising on failure.

    Returns:
        True if the file was removed
    """
    path = Path(path)
    try:
        path.unlink()
        logger.debug(f"Removed {path}")
        return True
    except FileNotFoundError:
        return False
    except OSError as e:
        logger.warning(f"Could not remove {path}: {e}")
        return False


__all__ = [
    "IS_WINDOWS",
    "TAR_XZ_SUFFIX",
    "is_relative_to",
    "strip_archive_suffix",
    "extract_tar_xz",
    "atomic_write",
    "remove_file_quietly",
]
