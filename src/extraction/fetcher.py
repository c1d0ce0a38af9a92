"""Guarded HTML download: protocol and SSRF checks, size cap, redirect cap, hard timeout."""

from __future__ import annotations

import asyncio
import codecs
import logging
import time
from urllib.parse import urlparse

import httpx
from bs4.dammit import EncodingDetector

from src.config import Settings

from .errors import FetchFailed, FetchTimeout, HtmlTooLarge, InvalidProtocol, InvalidUrl, SSRFBlocked

logger = logging.getLogger(__name__)

_VALID_SCHEMES = {"http", "https"}
_BLOCKED_HOSTS = {"localhost", "127.0.0.1"}
_BLOCKED_PREFIXES = ("10.", "172.", "192.168.")


def is_blocked_host(hostname: str) -> bool:
    """Literal hostname match against loopback and private ranges (no DNS lookup)."""
    hostname = hostname.lower()
    return hostname in _BLOCKED_HOSTS or hostname.startswith(_BLOCKED_PREFIXES)


def validate_url(url: str) -> None:
    """Raise an :class:`~.errors.InputError` for URLs that must not be fetched.

    Enforces:
    - http or https scheme
    - Non-empty hostname
    - Hostname outside loopback / private prefixes
    """
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
    except ValueError as exc:
        raise InvalidUrl(url, f"Invalid URL: {exc}") from exc

    if parsed.scheme not in _VALID_SCHEMES:
        raise InvalidProtocol(url, "Invalid protocol. Only HTTP and HTTPS are allowed.")
    if not hostname:
        raise InvalidUrl(url, "Invalid URL: missing hostname.")
    if is_blocked_host(hostname):
        raise SSRFBlocked(url, "Access to internal IPs is not allowed.")


async def _guard_request(request: httpx.Request) -> None:
    # Runs for the initial request and for every redirect hop.
    validate_url(str(request.url))


def _decode(body: bytes, charset: str | None) -> str:
    encoding = charset or EncodingDetector.find_declared_encoding(body, is_html=True) or "utf-8"
    try:
        codecs.lookup(encoding)
    except LookupError:
        encoding = "utf-8"
    return body.decode(encoding, errors="replace")


class PageFetcher:
    """Fetches a single page per call. No retries: one failed attempt is final."""

    def __init__(
        self,
        *,
        timeout: float = 5.0,
        max_bytes: int = 500_000,
        max_redirects: int = 3,
        user_agent: str = "",
        accept_language: str = "ja,en;q=0.9",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._timeout = timeout
        self._max_bytes = max_bytes
        self._max_redirects = max_redirects
        self._transport = transport
        self._headers = {
            "Accept": "text/html,application/xhtml+xml",
            "Accept-Encoding": "gzip, deflate",
            "Accept-Language": accept_language,
            "Cache-Control": "no-cache",
        }
        if user_agent:
            self._headers["User-Agent"] = user_agent

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> PageFetcher:
        return cls(
            timeout=settings.fetch_timeout_seconds,
            max_bytes=settings.max_html_bytes,
            max_redirects=settings.max_redirects,
            user_agent=settings.user_agent,
            accept_language=settings.accept_language,
            transport=transport,
        )

    async def fetch(self, url: str) -> str:
        """Return the page HTML or raise an :class:`~.errors.ExtractionError`."""
        validate_url(url)

        start = time.perf_counter()
        try:
            html = await asyncio.wait_for(self._download(url), timeout=self._timeout)
        except (TimeoutError, httpx.TimeoutException) as exc:
            logger.warning("fetch timed out", extra={"url": url, "timeout": self._timeout})
            raise FetchTimeout(url, f"Timed out after {self._timeout:g}s.") from exc
        except httpx.HTTPError as exc:
            logger.warning("fetch failed", extra={"url": url, "error": str(exc)})
            raise FetchFailed(url, f"Failed to fetch URL: {exc}") from exc

        logger.debug(
            "fetch completed",
            extra={
                "url": url,
                "length": len(html),
                "elapsed_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return html

    async def _download(self, url: str) -> str:
        async with httpx.AsyncClient(
            follow_redirects=True,
            max_redirects=self._max_redirects,
            headers=self._headers,
            timeout=self._timeout,
            transport=self._transport,
            event_hooks={"request": [_guard_request]},
        ) as client:
            async with client.stream("GET", url) as response:
                response.raise_for_status()

                declared = response.headers.get("content-length", "")
                if declared.isdigit() and int(declared) > self._max_bytes:
                    raise HtmlTooLarge(
                        url,
                        f"Response of {declared} bytes exceeds the {self._max_bytes} byte limit.",
                    )

                body = bytearray()
                async for chunk in response.aiter_bytes():
                    body.extend(chunk)
                    if len(body) > self._max_bytes:
                        logger.warning(
                            "html truncated",
                            extra={"url": url, "max_bytes": self._max_bytes},
                        )
                        del body[self._max_bytes :]
                        break

                return _decode(bytes(body), response.charset_encoding)
