"""
Tests for the bounded HTTP fetcher.
"""

import pytest
from unittest.mock import Mock, patch
import requests
from urllib3.exceptions import ReadTimeoutError

from docgate.ingest.errors import (
    ErrorKind,
    FetchFailedError,
    FetchTimeoutError,
    SizeExceededError,
)
from docgate.ingest.fetch import HttpFetcher


def _response(chunks, status_code=200, headers=None):
    response = Mock()
    response.status_code = status_code
    response.headers = headers or {}
    response.iter_content.return_value = iter(chunks)
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(
            f"{status_code} Error"
        )
    return response


class TestHttpFetcher:
    """Tests for HttpFetcher."""

    @patch("requests.get")
    def test_fetch_returns_body(self, mock_get):
        response = _response([b"abc", b"", b"def"])
        mock_get.return_value = response

        fetcher = HttpFetcher(max_bytes=100, timeout=5)
        assert fetcher("https://example.com/a.jpg") == b"abcdef"

        mock_get.assert_called_once_with("https://example.com/a.jpg", stream=True, timeout=5)
        response.close.assert_called_once()

    @patch("requests.get")
    def test_fetch_uses_session_when_given(self, mock_get):
        session = Mock()
        session.get.return_value = _response([b"x"])

        fetcher = HttpFetcher(max_bytes=10, session=session)
        assert fetcher("https://example.com/a") == b"x"
        session.get.assert_called_once()
        mock_get.assert_not_called()

    @patch("requests.get")
    def test_declared_length_over_cap_is_rejected_early(self, mock_get):
        response = _response([b"x" * 10], headers={"Content-Length": "500"})
        mock_get.return_value = response

        with pytest.raises(SizeExceededError):
            HttpFetcher(max_bytes=100)("https://example.com/big.pdf")
        response.iter_content.assert_not_called()
        response.close.assert_called_once()

    @patch("requests.get")
    def test_streamed_body_over_cap_is_rejected(self, mock_get):
        mock_get.return_value = _response([b"x" * 60, b"x" * 60])

        with pytest.raises(SizeExceededError) as excinfo:
            HttpFetcher(max_bytes=100)("https://example.com/big.pdf")
        assert excinfo.value.kind is ErrorKind.SIZE_EXCEEDED

    @patch("requests.get")
    def test_body_exactly_at_cap_is_accepted(self, mock_get):
        mock_get.return_value = _response([b"x" * 100], headers={"Content-Length": "100"})
        assert len(HttpFetcher(max_bytes=100)("https://example.com/ok")) == 100

    @patch("requests.get")
    def test_connect_timeout_maps_to_fetch_timeout(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectTimeout("slow")

        with pytest.raises(FetchTimeoutError) as excinfo:
            HttpFetcher(max_bytes=100, timeout=30)("https://example.com/a.jpg")
        assert excinfo.value.kind is ErrorKind.FETCH_TIMEOUT
        assert "Timed out" in excinfo.value.message

    @patch("requests.get")
    def test_read_timeout_mid_stream_maps_to_fetch_timeout(self, mock_get):
        response = _response([])
        response.iter_content.side_effect = requests.exceptions.ConnectionError(
            ReadTimeoutError(None, "https://example.com", "Read timed out.")
        )
        mock_get.return_value = response

        with pytest.raises(FetchTimeoutError):
            HttpFetcher(max_bytes=100)("https://example.com/a.jpg")

    @patch("requests.get")
    def test_connection_error_maps_to_fetch_failed(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError("DNS failure")

        with pytest.raises(FetchFailedError) as excinfo:
            HttpFetcher(max_bytes=100)("https://nowhere.invalid/a.jpg")
        assert excinfo.value.kind is ErrorKind.FETCH_FAILED
        assert excinfo.value.message.startswith("Download failed")

    @patch("requests.get")
    def test_non_2xx_maps_to_fetch_failed(self, mock_get):
        response = _response([], status_code=404)
        mock_get.return_value = response

        with pytest.raises(FetchFailedError) as excinfo:
            HttpFetcher(max_bytes=100)("https://example.com/missing.jpg")
        assert "HTTP 404" in excinfo.value.message
        response.close.assert_called_once()

    @patch("requests.get")
    def test_slow_body_past_overall_deadline_times_out(self, mock_get):
        response = _response([b"a", b"b", b"c"])
        mock_get.return_value = response
        ticks = iter([0.0, 1.0, 10.0])

        with patch("docgate.ingest.fetch.time.monotonic", side_effect=lambda: next(ticks, 10.0)):
            with pytest.raises(FetchTimeoutError) as excinfo:
                HttpFetcher(max_bytes=100, timeout=5)("https://example.com/slow.pdf")
        assert excinfo.value.kind is ErrorKind.FETCH_TIMEOUT
        response.close.assert_called_once()
