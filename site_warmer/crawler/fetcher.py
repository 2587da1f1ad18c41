# site_warmer/crawler/fetcher.py
"""
Fetcher module: issues timed warm-up requests through the shared HTTP session.
"""
from __future__ import annotations

import asyncio
import time

from aiohttp import ClientError, ClientSession, ClientTimeout, TCPConnector

from site_warmer.config import HttpSettings
from site_warmer.crawler.models import FetchResult
from site_warmer.logger import logger


def create_session(settings: HttpSettings) -> ClientSession:
    """
    Build the HTTP session shared by every request of a run.

    The connector pool is unlimited: the crawler's gate decides how many
    requests are in flight. Must be called with a running event loop.
    """
    return ClientSession(
        timeout=ClientTimeout(total=settings.timeout),
        headers={"User-Agent": settings.user_agent},
        connector=TCPConnector(limit=0),
        raise_for_status=False,
    )


def describe_error(exc: BaseException) -> str:
    """Readable text for *exc*; timeouts carry no message of their own."""
    if isinstance(exc, asyncio.TimeoutError):
        return "request timed out"
    return str(exc) or type(exc).__name__


class Fetcher:
    """Performs single GET requests and logs their latency or failure."""

    def __init__(self, session: ClientSession) -> None:
        self.session = session

    async def fetch(self, url: str) -> FetchResult:
        """
        GET *url* and time it up to the response headers; the body is not read.

        Any HTTP status counts as a response. Only transport errors
        (connection, DNS, invalid URL, timeout) are failures, and they are
        logged and returned, never raised.
        """
        start = time.perf_counter()
        try:
            async with self.session.get(url) as resp:
                elapsed = time.perf_counter() - start
                status = resp.status
        except (ClientError, asyncio.TimeoutError) as exc:
            logger.error("[ERROR] could not crawl URL '%s': %s", url, describe_error(exc))
            return FetchResult(url, time.perf_counter() - start, error=exc)

        result = FetchResult(url, elapsed, status=status)
        logger.info("response time: %d ms for requesting %s", result.elapsed_ms, url)
        logger.debug("HTTP %s for %s", status, url)
        return result


__all__ = ["Fetcher", "create_session", "describe_error"]
