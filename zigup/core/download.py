"""
HTTP access for zigup.

All network traffic (the version index and the toolchain archive) goes
through a requests Session so a single proxy setting applies to both. Any
transport failure or non-success status is re-raised as NetworkError with
the URL in the message and the requests exception chained as the cause.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional
from urllib.parse import urlsplit

import requests
from requests.exceptions import RequestException

from zigup.core.exceptions import MalformedUrlError, NetworkError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192


@dataclass
class DownloadProgress:
    """Progress information for a download."""

    bytes_downloaded: int
    total_bytes: int
    percentage: float
    speed_bps: float  # bytes per second

    def __str__(self) -> str:
        return format_progress(self)


def create_session(proxy: Optional[str] = None) -> requests.Session:
    """
    Create an HTTP session, optionally routed through a proxy.

    Args:
        proxy: Proxy URL applied to both http and https requests
    """
    session = requests.Session()
    if proxy:
        session.proxies.update({"http": proxy, "https": proxy})
        logger.debug(f"Using proxy {proxy}")
    return session


def fetch(
    url: str,
    proxy: Optional[str] = None,
    timeout: Optional[float] = None,
    stream: bool = False,
    session: Optional[requests.Session] = None,
) -> requests.Response:
    """
    Perform a GET request and check its status.

    Args:
        url: URL to fetch
        proxy: Optional proxy URL (ignored when a session is given)
        timeout: Request timeout in seconds (None: no timeout)
        stream: Defer downloading the body
        session: Session owned by the caller; a streamed response must be
            read before that session is closed

    Returns:
        The successful response

    Raises:
        NetworkError: On transport failure or non-success status
    """
    if session is None:
        with create_session(proxy) as own_session:
            return fetch(url, timeout=timeout, stream=stream, session=own_session)

    logger.debug(f"GET {url}")
    response = None
    try:
        response = session.get(url, timeout=timeout, stream=stream)
        response.raise_for_status()
    except RequestException as e:
        if response is not None:
            response.close()
        raise NetworkError(f"GET {url}", url=url) from e
    return response


def download(
    url: str,
    proxy: Optional[str] = None,
    progress_callback: Optional[Callable[[DownloadProgress], None]] = None,
    timeout: Optional[float] = None,
) -> bytes:
    """
    Download the full body of a URL into memory.

    Args:
        url: URL to download from
        proxy: Optional proxy URL
        progress_callback: Optional callback for progress updates
        timeout: Request timeout in seconds

    Returns:
        Response body

    Raises:
        NetworkError: If the request or the body transfer fails

    Example:
        >>> data = download("https://ziglang.org/builds/zig-linux-x86_64-0.11.0.tar.xz")
    """
    logger.info(f"Downloading from {url}")
    with create_session(proxy) as session:
        response = fetch(url, timeout=timeout, stream=True, session=session)
        data = _read_body(response, url, progress_callback)

    logger.debug(f"Downloaded {len(data)} bytes from {url}")
    return data


def _read_body(
    response: requests.Response,
    url: str,
    progress_callback: Optional[Callable[[DownloadProgress], None]],
) -> bytes:
    """Read a streamed response in chunks, reporting progress; always closes it."""
    content_length = response.headers.get("content-length")
    total_size = int(content_length) if content_length else 0

    chunks = []
    downloaded = 0
    start_time = time.time()
    last_progress_time = start_time

    try:
        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
            if not chunk:
                continue
            chunks.append(chunk)
            downloaded += len(chunk)

            # Report at most twice per second
            current_time = time.time()
            if progress_callback and (
                current_time - last_progress_time >= 0.5 or downloaded == total_size
            ):
                elapsed = current_time - start_time
                progress_callback(
                    DownloadProgress(
                        bytes_downloaded=downloaded,
                        total_bytes=total_size if total_size > 0 else downloaded,
                        percentage=(downloaded / total_size * 100)
                        if total_size > 0
                        else 0,
                        speed_bps=downloaded / elapsed if elapsed > 0 else 0,
                    )
                )
                last_progress_time = current_time
    except RequestException as e:
        raise NetworkError(f"request data from {url}", url=url) from e
    finally:
        response.close()

    return b"".join(chunks)


def archive_name_from_url(url: str) -> str:
    """
    Derive the archive file name from the final path segment of a URL.

    Raises:
        MalformedUrlError: If the URL path has no final segment

    Example:
        >>> archive_name_from_url("https://ziglang.org/download/0.11.0/zig-linux-x86_64-0.11.0.tar.xz")
        'zig-linux-x86_64-0.11.0.tar.xz'
    """
    name = urlsplit(url).path.rsplit("/", 1)[-1]
    if not name:
        raise MalformedUrlError(f"get zig package name from {url}")
    return name


def format_progress(progress: DownloadProgress) -> str:
    """
    Format progress for display.

    Example:
        >>> progress = DownloadProgress(52428800, 104857600, 50.0, 1048576)
        >>> print(format_progress(progress))
        50.0/100.0 MB (50.0%) at 1.0 MB/s
    """
    mb_downloaded = progress.bytes_downloaded / 1024 / 1024
    mb_total = progress.total_bytes / 1024 / 1024
    speed_mbps = progress.speed_bps / 1024 / 1024

    if progress.percentage > 0:
        return (
            f"{mb_downloaded:.1f}/{mb_total:.1f} MB "
            f"({progress.percentage:.1f}%) "
            f"at {speed_mbps:.1f} MB/s"
        )
    return f"{mb_downloaded:.1f} MB at {speed_mbps:.1f} MB/s"


__all__ = [
    "DownloadProgress",
    "create_session",
    "fetch",
    "download",
    "archive_name_from_url",
    "format_progress",
]
