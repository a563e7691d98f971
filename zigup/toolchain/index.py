"""
Zig version index client.

The index at https://ziglang.org/download/index.json is a JSON object keyed
by version label ('0.11.0', 'master', ...). Each entry maps platform keys
such as 'x86_64-linux' to an object whose 'tarball' field is the download
URL, next to informational fields ('date', 'docs', 'src', ...).
"""

import logging
from typing import Any, Dict, List, Optional

from zigup.core.download import fetch
from zigup.core.exceptions import ParseError

logger = logging.getLogger(__name__)

INDEX_URL = "https://ziglang.org/download/index.json"

VersionEntry = Dict[str, Any]
VersionIndex = Dict[str, VersionEntry]


def fetch_index(
    proxy: Optional[str] = None,
    url: str = INDEX_URL,
    timeout: Optional[float] = None,
) -> VersionIndex:
    """
    Fetch and parse the version index.

    Args:
        proxy: Optional proxy URL
        url: Index URL
        timeout: Request timeout in seconds

    Returns:
        Mapping of version label to version entry

    Raises:
        NetworkError: If the request fails
        ParseError: If the body is not a JSON object
    """
    response = fetch(url, proxy=proxy, timeout=timeout)
    try:
        payload = response.json()
    except ValueError as e:
        raise ParseError(f"convert response from {url} to json") from e

    index = parse_index(payload, source=url)
    logger.debug(f"Fetched {len(index)} versions from {url}")
    return index


def parse_index(payload: Any, source: str = INDEX_URL) -> VersionIndex:
    """
    Validate a decoded index document.

    Raises:
        ParseError: If the document or any entry is not an object
    """
    if not isinstance(payload, dict):
        raise ParseError(
            f"convert zig version metadata from {source} into dict: "
            f"got {type(payload).__name__}"
        )

    for version, entry in payload.items():
        if not isinstance(entry, dict):
            raise ParseError(
                f"entry for version {version} in {source} is not an object"
            )
    return payload


def available_versions(index: VersionIndex) -> List[str]:
    """Version labels in index order."""
    return list(index.keys())


__all__ = [
    "INDEX_URL",
    "VersionEntry",
    "VersionIndex",
    "fetch_index",
    "parse_index",
    "available_versions",
]
