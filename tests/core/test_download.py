"""
Unit tests for the download module.

Tests HTTP access with mocked network requests.
"""

from unittest.mock import patch

import pytest
import requests
import responses

from zigup.core.download import (
    DownloadProgress,
    archive_name_from_url,
    create_session,
    download,
    fetch,
    format_progress,
)
from zigup.core.exceptions import MalformedUrlError, NetworkError


class TestCreateSession:
    """Test create_session function."""

    def test_without_proxy(self):
        """Test no proxy is configured by default."""
        session = create_session()
        assert "http" not in session.proxies
        assert "https" not in session.proxies

    def test_with_proxy(self):
        """Test proxy applies to both http and https."""
        session = create_session("http://127.0.0.1:8080")
        assert session.proxies["http"] == "http://127.0.0.1:8080"
        assert session.proxies["https"] == "http://127.0.0.1:8080"


class TestFetch:
    """Test fetch function."""

    @responses.activate
    def test_success(self):
        """Test a successful GET returns the response."""
        url = "https://example.com/index.json"
        responses.add(responses.GET, url, json={"ok": True}, status=200)

        response = fetch(url)

        assert response.json() == {"ok": True}

    @responses.activate
    def test_http_error_status(self):
        """Test non-success status raises NetworkError naming the URL."""
        url = "https://example.com/missing.json"
        responses.add(responses.GET, url, status=404)

        with pytest.raises(NetworkError, match="GET https://example.com/missing.json") as exc_info:
            fetch(url)

        assert exc_info.value.url == url
        assert isinstance(exc_info.value.__cause__, requests.HTTPError)

    @responses.activate
    def test_connection_error(self):
        """Test transport failures raise NetworkError with the cause chained."""
        url = "https://example.com/index.json"
        responses.add(
            responses.GET, url, body=requests.ConnectionError("connection refused")
        )

        with pytest.raises(NetworkError) as exc_info:
            fetch(url)

        assert "connection refused" in str(exc_info.value.__cause__)

    @responses.activate
    def test_fetch_through_proxy(self):
        """Test requests still succeed when a proxy is configured."""
        url = "https://example.com/index.json"
        responses.add(responses.GET, url, json={}, status=200)

        fetch(url, proxy="http://127.0.0.1:8080")

        assert len(responses.calls) == 1

    @responses.activate
    def test_own_session_closed(self):
        """Test the session created for a request is closed afterwards."""
        url = "https://example.com/index.json"
        responses.add(responses.GET, url, json={}, status=200)

        with patch.object(requests.Session, "close", autospec=True) as mock_close:
            fetch(url)

        mock_close.assert_called_once()

    @responses.activate
    def test_failed_stream_response_closed(self):
        """Test a streamed response with an error status is closed."""
        url = "https://example.com/zig-1.0.0.tar.xz"
        responses.add(responses.GET, url, status=404)

        with requests.Session() as session:
            with patch.object(requests.Response, "close", autospec=True) as mock_close:
                with pytest.raises(NetworkError):
                    fetch(url, stream=True, session=session)

        assert mock_close.called


class TestDownload:
    """Test download function."""

    @responses.activate
    def test_download_bytes(self):
        """Test the full body is returned."""
        url = "https://example.com/zig-1.0.0.tar.xz"
        content = b"x" * 20000
        responses.add(
            responses.GET,
            url,
            body=content,
            status=200,
            headers={"content-length": str(len(content))},
        )

        assert download(url) == content

    @responses.activate
    def test_download_reports_progress(self):
        """Test the callback receives the final progress."""
        url = "https://example.com/zig-1.0.0.tar.xz"
        content = b"y" * 10000
        responses.add(
            responses.GET,
            url,
            body=content,
            status=200,
            headers={"content-length": str(len(content))},
        )
        reports = []

        download(url, progress_callback=reports.append)

        assert reports
        assert reports[-1].bytes_downloaded == len(content)
        assert reports[-1].percentage == pytest.approx(100.0)

    @responses.activate
    def test_download_failure_names_url(self):
        """Test a failed download raises NetworkError including the URL."""
        url = "https://example.com/zig-1.0.0.tar.xz"
        responses.add(responses.GET, url, status=500)

        with pytest.raises(NetworkError, match="zig-1.0.0.tar.xz"):
            download(url)

    @responses.activate
    def test_download_closes_session(self):
        """Test the session is closed once the body has been read."""
        url = "https://example.com/zig-1.0.0.tar.xz"
        responses.add(responses.GET, url, body=b"z" * 100, status=200)

        with patch.object(requests.Session, "close", autospec=True) as mock_close:
            assert download(url) == b"z" * 100

        mock_close.assert_called_once()


class TestArchiveNameFromUrl:
    """Test archive_name_from_url function."""

    def test_final_segment(self):
        """Test the last path segment is used."""
        url = "https://ziglang.org/download/0.11.0/zig-linux-x86_64-0.11.0.tar.xz"
        assert archive_name_from_url(url) == "zig-linux-x86_64-0.11.0.tar.xz"

    def test_query_string_ignored(self):
        """Test query strings are not part of the name."""
        url = "https://example.com/zig-1.0.0.tar.xz?mirror=1"
        assert archive_name_from_url(url) == "zig-1.0.0.tar.xz"

    def test_trailing_slash(self):
        """Test a URL without a file name is rejected."""
        with pytest.raises(MalformedUrlError):
            archive_name_from_url("https://example.com/download/")


class TestFormatProgress:
    """Test format_progress function."""

    def test_known_size(self):
        """Test formatting with a known total size."""
        progress = DownloadProgress(
            bytes_downloaded=52428800,
            total_bytes=104857600,
            percentage=50.0,
            speed_bps=1048576,
        )

        result = format_progress(progress)

        assert "50.0/100.0 MB" in result
        assert "(50.0%)" in result
        assert "1.0 MB/s" in result

    def test_unknown_size(self):
        """Test formatting without a total size."""
        progress = DownloadProgress(
            bytes_downloaded=10485760,
            total_bytes=10485760,
            percentage=0.0,
            speed_bps=1048576,
        )

        result = str(progress)

        assert result == "10.0 MB at 1.0 MB/s"
