"""
Version selection for zigup.

Picks which Zig release to install from the version index and resolves the
archive URL for the running platform. Only keys that are valid semantic
versions take part in "latest" selection; labels such as 'master' are
skipped.
"""

import logging
import re
from typing import Optional

from zigup.core.exceptions import (
    EntryNotFoundError,
    InvalidVersionError,
    MalformedUrlError,
    NoValidVersionError,
    PlatformNotFoundError,
    VersionNotFoundError,
)
from zigup.toolchain.index import VersionIndex, available_versions

logger = logging.getLogger(__name__)

# https://semver.org/#is-there-a-suggested-regular-expression-regex-to-check-a-semver-string
_SEMVER_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$",
    re.ASCII,
)


class Version:
    """
    Semantic version parser and comparator (SemVer 2.0.0).

    Precedence follows major.minor.patch, then pre-release identifiers.
    Build metadata is kept but ignored when comparing.

    Example:
        >>> Version("0.10.0") > Version("0.9.1")
        True
        >>> Version("0.12.0-dev.1+abc") < Version("0.12.0")
        True
    """

    def __init__(self, version_string: str):
        """
        Parse version string.

        Raises:
            InvalidVersionError: If the string is not a semantic version
        """
        match = _SEMVER_RE.fullmatch(version_string)
        if not match:
            raise InvalidVersionError(f"Invalid semantic version: {version_string}")

        self.original = version_string
        self.major = int(match.group(1))
        self.minor = int(match.group(2))
        self.patch = int(match.group(3))
        self.prerelease = tuple(match.group(4).split(".")) if match.group(4) else ()
        self.build = match.group(5) or ""

    def _key(self) -> tuple:
        # A release outranks any pre-release of the same version
        if not self.prerelease:
            pre = (1,)
        else:
            pre = (
                0,
                tuple(
                    (0, int(part), "") if part.isdigit() else (1, 0, part)
                    for part in self.prerelease
                ),
            )
        return (self.major, self.minor, self.patch, pre)

    def __lt__(self, other: "Version") -> bool:
        return self._key() < other._key()

    def __le__(self, other: "Version") -> bool:
        return self._key() <= other._key()

    def __gt__(self, other: "Version") -> bool:
        return self._key() > other._key()

    def __ge__(self, other: "Version") -> bool:
        return self._key() >= other._key()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() == other._key()

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return not self.__eq__(other)

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        return self.original

    def __repr__(self) -> str:
        return f"Version('{self}')"


def parse_version(text: str) -> Optional[Version]:
    """Parse a semantic version, returning None for anything else."""
    try:
        return Version(text)
    except InvalidVersionError:
        return None


def select_version(index: VersionIndex, requested: Optional[str] = None) -> str:
    """
    Select the version to install.

    Args:
        index: Version index
        requested: Explicit version label, or None for the latest release

    Returns:
        Selected version label

    Raises:
        VersionNotFoundError: If requested is not a key of the index
        NoValidVersionError: If no key is a semantic version

    Example:
        >>> select_version({"0.9.0": {}, "0.10.0": {}, "master": {}})
        '0.10.0'
    """
    versions = available_versions(index)

    if requested is not None:
        if requested not in index:
            raise VersionNotFoundError(requested, versions)
        logger.debug(f"Using requested version {requested}")
        return requested

    best_label = None
    best_version = None
    for label in versions:
        parsed = parse_version(label)
        if parsed is None:
            logger.debug(f"Skipping non-semver label {label}")
            continue
        # >= keeps the rightmost of equal-precedence keys
        if best_version is None or parsed >= best_version:
            best_label, best_version = label, parsed

    if best_label is None:
        raise NoValidVersionError(
            f"get latest zig version: none of {', '.join(versions) or '(empty index)'} "
            "is a semantic version"
        )

    logger.debug(f"Latest version is {best_label}")
    return best_label


def resolve_download_url(index: VersionIndex, version: str, platform_key: str) -> str:
    """
    Resolve the archive URL of a version for a platform.

    Args:
        index: Version index
        version: Version label
        platform_key: Platform key such as 'x86_64-linux'

    Returns:
        Download URL

    Raises:
        EntryNotFoundError: If the version is not in the index
        PlatformNotFoundError: If the version has no archive for platform_key
        MalformedUrlError: If the tarball field is missing or not a string
    """
    if version not in index:
        raise EntryNotFoundError(version)
    entry = index[version]

    if platform_key not in entry:
        platforms = [
            key for key, value in entry.items() if isinstance(value, dict) and key != "src"
        ]
        raise PlatformNotFoundError(version, platform_key, platforms)
    archive = entry[platform_key]

    url = archive.get("tarball") if isinstance(archive, dict) else archive
    if not isinstance(url, str):
        raise MalformedUrlError(
            f"zig download url for version {version} ({platform_key}) "
            f"is not a string: {url!r}"
        )
    return url


__all__ = [
    "Version",
    "parse_version",
    "select_version",
    "resolve_download_url",
]
