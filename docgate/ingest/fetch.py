"""
Bounded remote downloads.

``HttpFetcher`` is the default transport behind
``DocumentIngestor.download_and_store``. Any callable taking a URL and
returning bytes can stand in for it; transport problems are reported as
``FetchTimeoutError``/``FetchFailedError`` and oversize bodies as
``SizeExceededError``.
"""

from __future__ import annotations

import time
from typing import Callable, Optional

import requests
from urllib3.exceptions import ReadTimeoutError

from docgate.config.models import DEFAULT_FETCH_TIMEOUT_SECONDS
from docgate.logging import format_exception_summary, get_logger

from .errors import FetchFailedError, FetchTimeoutError, SizeExceededError

logger = get_logger(__name__)

Fetcher = Callable[[str], bytes]

CHUNK_SIZE = 64 * 1024


def _content_length(response: requests.Response) -> Optional[int]:
    raw = response.headers.get("Content-Length")
    if raw is None:
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


class HttpFetcher:
    """
    GET a URL with a timeout and a hard cap on the body size.

    The body is streamed; the download is abandoned as soon as either the
    declared ``Content-Length`` or the bytes actually received exceed
    ``max_bytes``. ``timeout`` bounds each socket operation in requests and
    also the whole download: the first chunk arriving after the deadline
    ends it with ``FetchTimeoutError``.
    """

    def __init__(
        self,
        max_bytes: int,
        timeout: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.max_bytes = max_bytes
        self.timeout = timeout
        self.session = session

    def _get(self, url: str) -> requests.Response:
        if self.session is not None:
            return self.session.get(url, stream=True, timeout=self.timeout)
        return requests.get(url, stream=True, timeout=self.timeout)

    def __call__(self, url: str) -> bytes:
        deadline = time.monotonic() + self.timeout
        try:
            response = self._get(url)
        except requests.exceptions.Timeout as exc:
            raise FetchTimeoutError(self.timeout) from exc
        except requests.exceptions.RequestException as exc:
            raise FetchFailedError(format_exception_summary(exc)) from exc

        try:
            try:
                response.raise_for_status()
            except requests.exceptions.HTTPError as exc:
                raise FetchFailedError(f"HTTP {response.status_code}") from exc

            declared = _content_length(response)
            if declared is not None and declared > self.max_bytes:
                raise SizeExceededError(declared, self.max_bytes)

            return self._read_body(response, deadline)
        finally:
            response.close()

    def _read_body(self, response: requests.Response, deadline: float) -> bytes:
        received = bytearray()
        try:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if not chunk:
                    continue
                received.extend(chunk)
                if len(received) > self.max_bytes:
                    raise SizeExceededError(len(received), self.max_bytes)
                if time.monotonic() > deadline:
                    raise FetchTimeoutError(self.timeout)
        except requests.exceptions.Timeout as exc:
            raise FetchTimeoutError(self.timeout) from exc
        except requests.exceptions.ConnectionError as exc:
            # Read timeouts mid-stream surface as ConnectionError
            if exc.args and isinstance(exc.args[0], ReadTimeoutError):
                raise FetchTimeoutError(self.timeout) from exc
            raise FetchFailedError(format_exception_summary(exc)) from exc
        except requests.exceptions.RequestException as exc:
            raise FetchFailedError(format_exception_summary(exc)) from exc

        logger.debug("Fetched %d bytes", len(received))
        return bytes(received)
