"""
Health checks - Fetching and content validation for a single page.

This module provides the network fetch used by the live check and pure
functions for validating fetched HTML against required headings and
required element patterns.
"""

import logging
import re
import socket
import threading
import time
from dataclasses import dataclass, field
from typing import Dict, List, Pattern, Sequence

import requests  # type: ignore

from page_healthcheck.health.errors import (
    FetchTimeoutError,
    NetworkError,
    PatternError,
)

logger = logging.getLogger(__name__)

USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

_CHUNK_SIZE = 8192

# Characters that also match their common HTML entity encodings
_QUOTE_ALTERNATIVES = {
    "'": r"(?:'|&#x27;|&#39;)",
    '"': r'(?:"|&quot;)',
}


@dataclass(frozen=True)
class HttpResponse:
    """Result of a single fetch."""

    status_code: int
    status_message: str
    response_time_ms: int
    html: str
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass
class ValidationResult:
    """Outcome of validating HTML content structure."""

    headings: Dict[str, bool] = field(default_factory=dict)
    elements: Dict[str, int] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


def fetch(url: str, timeout_ms: int = 10000) -> HttpResponse:
    """
    Fetch a page and measure the time until the full body is received.

    A single attempt is made. The timeout bounds the whole request, body
    included: the body is streamed and the connection is closed as soon as
    the deadline passes.

    Args:
        url: URL to fetch
        timeout_ms: Total request timeout in milliseconds

    Returns:
        HttpResponse with status, timing, body text and headers

    Raises:
        NetworkError: If the connection fails or breaks mid-transfer
        FetchTimeoutError: If the response does not complete in time
    """
    timeout_sec = timeout_ms / 1000.0
    logger.info("Fetching %s (timeout %dms)", url, timeout_ms)

    start = time.monotonic()
    deadline = start + timeout_sec

    try:
        response = requests.get(
            url,
            headers={"User-Agent": USER_AGENT},
            timeout=timeout_sec,
            stream=True,
        )
    except requests.exceptions.Timeout as e:
        raise FetchTimeoutError(timeout_ms) from e
    except requests.exceptions.RequestException as e:
        raise NetworkError(f"Failed to fetch {url}: {e}") from e

    watchdog = None
    try:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise FetchTimeoutError(timeout_ms)

        # Socket read timeouts only bound the gap between reads
        watchdog = threading.Timer(remaining, _abort_transfer, args=(response,))
        watchdog.daemon = True
        watchdog.start()

        chunks: List[bytes] = []
        try:
            for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                chunks.append(chunk)
                if time.monotonic() > deadline:
                    raise FetchTimeoutError(timeout_ms)
        except requests.exceptions.RequestException as e:
            # Aborted or timed out reads surface as ConnectionError or
            # ChunkedEncodingError while streaming
            if time.monotonic() >= deadline:
                raise FetchTimeoutError(timeout_ms) from e
            raise NetworkError(f"Failed to read response from {url}: {e}") from e

        finished = time.monotonic()
        if finished > deadline:
            raise FetchTimeoutError(timeout_ms)

        response_time_ms = int(round((finished - start) * 1000))
        body = b"".join(chunks)
    finally:
        if watchdog is not None:
            watchdog.cancel()
        response.close()

    html = body.decode(_response_charset(response), errors="replace")

    logger.debug(
        "Fetched %s: %d %s, %d bytes in %dms",
        url,
        response.status_code,
        response.reason,
        len(body),
        response_time_ms,
    )

    return HttpResponse(
        status_code=int(response.status_code),
        status_message=response.reason or "",
        response_time_ms=response_time_ms,
        html=html,
        headers=dict(response.headers),
    )


def _abort_transfer(response: requests.Response) -> None:
    """Shut down the socket under a streaming response to unblock its reader."""
    connection = getattr(response.raw, "connection", None)
    sock = getattr(connection, "sock", None)
    if sock is None:
        logger.debug("No open socket to abort; closing response")
        response.close()
        return

    logger.debug("Deadline passed; aborting transfer")
    try:
        sock.shutdown(socket.SHUT_RDWR)
    except OSError as e:
        # Socket was already closed by the reader
        logger.debug("Socket shutdown failed: %s", e)


def _response_charset(response: requests.Response) -> str:
    # requests assumes ISO-8859-1 for text/* without a charset; pages are UTF-8
    content_type = response.headers.get("Content-Type", "").lower()
    if "charset=" in content_type and response.encoding:
        return response.encoding
    return "utf-8"


def check_status(status_code: int) -> bool:
    """
    Check if HTTP status code is the expected 200.

    Args:
        status_code: HTTP status code

    Returns:
        True only for 200
    """
    return status_code == 200


def check_response_time(response_time_ms: int, max_response_time_ms: int) -> bool:
    """
    Check if the response arrived within the warning threshold.

    Args:
        response_time_ms: Measured response time in milliseconds
        max_response_time_ms: Threshold in milliseconds

    Returns:
        True if response time is strictly below the threshold
    """
    return response_time_ms < max_response_time_ms


def heading_regex(heading: str) -> Pattern[str]:
    """
    Build the regex matching a heading tag (h1-h6) whose text is `heading`.

    Surrounding whitespace inside the tag is allowed, matching is
    case-insensitive and quote characters also match their HTML entities.
    """
    text = "".join(_QUOTE_ALTERNATIVES.get(ch, re.escape(ch)) for ch in heading)
    return re.compile(rf"<h[1-6][^>]*>\s*{text}\s*</h[1-6]>", re.IGNORECASE)


def count_matches(html: str, pattern: str) -> int:
    """
    Count non-overlapping matches of a regex source in the HTML.

    Raises:
        PatternError: If `pattern` is not a valid regular expression
    """
    try:
        compiled = re.compile(pattern)
    except re.error as e:
        raise PatternError(pattern, str(e)) from e
    return sum(1 for _ in compiled.finditer(html))


def validate_content(
    html: str,
    required_headings: Sequence[str],
    required_elements: Sequence[str],
) -> ValidationResult:
    """
    Validate HTML content structure.

    Pure function: results follow input order and the same inputs always
    produce the same result.

    Args:
        html: HTML content to validate
        required_headings: Heading texts that must appear in h1-h6 tags
        required_elements: Regex sources that must match the raw HTML

    Returns:
        ValidationResult with per-heading presence, per-pattern counts
        and collected error messages

    Raises:
        PatternError: If a required element pattern is malformed
    """
    result = ValidationResult()

    for heading in required_headings:
        found = heading_regex(heading).search(html) is not None
        result.headings[heading] = found
        if not found:
            result.errors.append(f'Missing heading: "{heading}"')

    for element in required_elements:
        count = count_matches(html, element)
        result.elements[element] = count
        if count == 0:
            result.errors.append(f"Missing required element: {element}")

    logger.debug(
        "Validated content: %d headings, %d elements, %d errors",
        len(result.headings),
        len(result.elements),
        len(result.errors),
    )

    return result
