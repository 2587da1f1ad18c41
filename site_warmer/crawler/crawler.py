# === FILE: site_warmer/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Awaitable, Optional, Set
from urllib.parse import urlsplit

import soupsieve
from aiohttp import ClientError, ClientSession

from site_warmer.config import HttpSettings
from site_warmer.crawler.fetcher import Fetcher, create_session, describe_error
from site_warmer.crawler.gate import ConcurrencyGate
from site_warmer.crawler.models import CrawlSummary, CrawlTarget, FetchResult
from site_warmer.crawler.resolver import resolve
from site_warmer.errors import SeedPageError
from site_warmer.parser.html_parser import extract_links
from site_warmer.parser.sitemap_parser import iter_sitemap_urls

__all__ = ("AsyncCrawler", "Dispatcher")

logger = logging.getLogger("SiteWarmer")


class Dispatcher:
    """
    Dispatch state of one crawl invocation.

    Every target passes the gate before its task is created, and every task
    is kept until :meth:`drain` has awaited it. The gate token is returned
    from the task's done-callback, so it comes back on success, error and
    cancellation alike.
    """

    def __init__(self, fetcher: Fetcher, concurrency: int, summary: CrawlSummary) -> None:
        self.gate = ConcurrencyGate(concurrency)
        self.summary = summary
        self._fetcher = fetcher
        self._pending: Set[asyncio.Task[FetchResult]] = set()
        self._seen: Set[str] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def dispatch(self, target: CrawlTarget) -> None:
        if target.url in self._seen:
            self.summary.duplicates += 1
            return
        self._seen.add(target.url)

        await self.gate.acquire()
        task = asyncio.create_task(self._fetcher.fetch(target.url), name=target.url)
        self._pending.add(task)
        task.add_done_callback(self._finished)
        self.summary.dispatched += 1

    def _finished(self, task: asyncio.Task[FetchResult]) -> None:
        self._pending.discard(task)
        self.gate.release()
        self.summary.peak_in_flight = self.gate.peak
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self.summary.failed += 1
            logger.error("[ERROR] could not crawl URL '%s': %s", task.get_name(), describe_error(exc))
        elif not task.result().ok:
            self.summary.failed += 1

    def cancel(self) -> None:
        for task in self._pending:
            task.cancel()

    async def drain(self) -> None:
        """Wait until every dispatched task has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)


class AsyncCrawler:
    """Warms the pages of a site, found either in its sitemap or on a seed page.

    One instance serves any number of sites one after another; all of them
    share the HTTP session opened in ``__aenter__`` (or the one passed in).
    """

    def __init__(
        self,
        settings: HttpSettings,
        concurrency: int,
        session: Optional[ClientSession] = None,
    ) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self.settings = settings
        self.concurrency = concurrency
        self.session = session
        self._own_session = session is None

    async def __aenter__(self) -> AsyncCrawler:
        if self.session is None:
            self.session = create_session(self.settings)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._own_session and self.session and not self.session.closed:
            await self.session.close()

    def _fetcher(self) -> Fetcher:
        if not self.session:
            raise RuntimeError("Session not initialized")
        return Fetcher(self.session)

    async def crawl_sitemap(self, sitemap_url: str, origin: Optional[str] = None) -> CrawlSummary:
        """Request every page listed in the sitemap (or sitemap index) at *sitemap_url*.

        *origin* is the site root the sitemap belongs to; it defaults to the
        scheme and host of *sitemap_url*. Raises SitemapError if the sitemap
        itself cannot be used; failed page requests are only logged.
        """
        if origin is None:
            parts = urlsplit(sitemap_url)
            origin = f"{parts.scheme}://{parts.netloc}"
        logger.info("crawling sitemap index '%s'", sitemap_url)
        summary = CrawlSummary(origin=origin, mode="sitemap")
        dispatcher = Dispatcher(self._fetcher(), self.concurrency, summary)

        async def enumerate_targets() -> None:
            entries = iter_sitemap_urls(self.session, sitemap_url)
            async with contextlib.aclosing(entries):
                async for location in entries:
                    await dispatcher.dispatch(CrawlTarget(location, origin))

        await self._run(dispatcher, enumerate_targets())
        return summary

    async def crawl_links(self, start_url: str, selector: soupsieve.SoupSieve) -> CrawlSummary:
        """Request every same-origin link that *selector* matches on the page at *start_url*.

        Raises SeedPageError if the seed page cannot be fetched; failed link
        requests are only logged.
        """
        logger.info("crawling links on '%s'", start_url)
        summary = CrawlSummary(origin=start_url, mode="links")
        dispatcher = Dispatcher(self._fetcher(), self.concurrency, summary)

        async def enumerate_targets() -> None:
            html = await self._fetch_seed(start_url)
            for ref in extract_links(html, selector):
                url, in_scope = resolve(ref, start_url)
                if not in_scope:
                    summary.skipped += 1
                    logger.debug("skipping out-of-scope link %r on %s", ref, start_url)
                    continue
                await dispatcher.dispatch(CrawlTarget(url, start_url))

        await self._run(dispatcher, enumerate_targets())
        return summary

    async def _run(self, dispatcher: Dispatcher, enumeration: Awaitable[None]) -> None:
        try:
            await enumeration
        except asyncio.CancelledError:
            dispatcher.cancel()
            raise
        finally:
            await dispatcher.drain()
        summary = dispatcher.summary
        logger.info("finished %s crawl of %s: %s", summary.mode, summary.origin, summary)

    async def _fetch_seed(self, url: str) -> str:
        if not self.session:
            raise RuntimeError("Session not initialized")
        try:
            async with self.session.get(url) as resp:
                if resp.status >= 400:
                    logger.warning("seed page %s returned HTTP %s, parsing it anyway", url, resp.status)
                return await resp.text(errors="replace")
        except (ClientError, asyncio.TimeoutError) as exc:
            raise SeedPageError(f"could not fetch seed page {url!r}: {describe_error(exc)}") from exc
