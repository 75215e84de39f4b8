"""
HTTP feed fetching with httpx.

The fetcher downloads a feed and decodes its body with a layered fallback:
JSON when the response looks like JSON, XML otherwise, and finally the raw
text with neither payload set. Retries and timeouts live here; the feed
reader only sees the resulting FetchResult.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import json
import logging
from typing import Any

import httpx
from lxml import etree

from .logging_utils import log_event
from .xmlnode import parse_xml, qualified_name


logger = logging.getLogger(__name__)


@dataclass
class FetchResult:
    """Result of a feed fetch.

    At most one of response_json and response_xml is populated. Both are
    None when the body could not be decoded or the request failed, in which
    case error may describe what went wrong.

    Attributes:
        url: The URL that was fetched
        status_code: HTTP status code, or None if request failed before getting response
        response_json: Decoded JSON body, or None
        response_xml: Root element of the parsed XML body, or None
        text: The response body text, or None on error
        error: Error message if the fetch failed, None on success
    """

    url: str
    status_code: int | None = None
    response_json: Any = None
    response_xml: etree._Element | None = None
    text: str | None = None
    error: str | None = None


async def fetch_feed(
    url: str,
    timeout: float = 20.0,
    retries: int = 2,
    user_agent: str = "feedlist",
    trust_env: bool = True,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FetchResult:
    """Fetch a feed URL using httpx with retry logic.

    Args:
        url: The URL to fetch
        timeout: Request timeout in seconds
        retries: Number of retry attempts after initial failure
        user_agent: User-Agent header string
        trust_env: Whether to respect system proxy settings from environment
        transport: Optional httpx transport, e.g. httpx.MockTransport in tests

    Returns:
        FetchResult with a decoded payload on success or error message on failure
    """
    headers = {"User-Agent": user_agent}
    last_error: str | None = None

    # Attempt the request with linear backoff between retries
    for attempt in range(retries + 1):
        try:
            async with httpx.AsyncClient(
                timeout=timeout,
                headers=headers,
                follow_redirects=True,
                trust_env=trust_env,
                transport=transport,
            ) as client:
                resp = await client.get(url)
            return decode_response(url, resp)
        except Exception as exc:  # noqa: BLE001
            last_error = f"{type(exc).__name__}: {exc}"
            logger.debug("Fetch attempt %d for %s failed: %s", attempt + 1, url, last_error)
            if attempt < retries:
                # Backoff: 0.5s, 1.0s, 1.5s...
                await asyncio.sleep(0.5 * (attempt + 1))

    logger.warning("Giving up on %s after %d attempts: %s", url, retries + 1, last_error)
    return FetchResult(url=url, error=last_error)


def decode_response(url: str, resp: httpx.Response) -> FetchResult:
    """Decode an HTTP response into JSON or XML, keeping the raw text.

    Non-2xx responses are not decoded: error pages are reported as errors,
    not as feeds.
    """
    result = FetchResult(url=url, status_code=resp.status_code, text=resp.text)
    if not resp.is_success:
        result.error = f"HTTP {resp.status_code}"
        log_event(logger, "fetch_http_error", logging.WARNING, url=url, status_code=resp.status_code)
        return result
    content_type = resp.headers.get("content-type", "").lower()
    result.response_json, result.response_xml = decode_payload(resp.content, resp.text, content_type)
    return result


def decode_payload(content: bytes, text: str, content_type: str = "") -> tuple[Any, etree._Element | None]:
    """Return ``(json_payload, xml_root)``; at most one is not None.

    JSON is attempted when the content type mentions json or the body starts
    with ``{`` or ``[``. If that fails, or was not attempted, XML parsing is
    tried on the raw bytes so the document's own encoding declaration applies.
    HTML bodies, whether declared as text/html or recovered into an
    ``<html>`` root, are not feeds and yield no payload.
    """
    stripped = text.lstrip()
    if "json" in content_type or stripped.startswith(("{", "[")):
        try:
            return json.loads(text), None
        except ValueError:
            logger.debug("Body is not valid JSON, trying XML")

    if "text/html" in content_type:
        logger.debug("Body is HTML, not decoding it as a feed")
        return None, None

    root = parse_xml(content)
    if root is not None and qualified_name(root).lower() == "html":
        logger.debug("Parsed root is <html>, not a feed")
        return None, None
    return None, root
