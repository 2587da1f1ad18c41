# File: site_warmer/engine.py
"""site_warmer.engine: runs the configured crawl over every site, one after another."""

from __future__ import annotations

from typing import List

from site_warmer.config import CrawlConfig
from site_warmer.crawler.crawler import AsyncCrawler
from site_warmer.crawler.models import CrawlSummary
from site_warmer.logger import logger
from site_warmer.parser.html_parser import compile_selector

__all__ = ["sitemap_url_for", "start_crawl"]


def sitemap_url_for(site: str, sitemap_path: str = "/sitemap.xml") -> str:
    """Location of the sitemap of *site*."""
    return site.rstrip("/") + "/" + sitemap_path.lstrip("/")


async def start_crawl(cfg: CrawlConfig) -> List[CrawlSummary]:
    """
    Crawl every site of *cfg* in order and return one summary per site.

    The selector is compiled before the first request, so a malformed one
    aborts the run without touching the network. A fatal error on one site
    (CrawlError) propagates and the remaining sites are not crawled.
    """
    selector = compile_selector(cfg.css3selector) if cfg.mode == "links" else None

    summaries: List[CrawlSummary] = []
    async with AsyncCrawler(cfg.http, cfg.concurrency) as crawler:
        for site in cfg.sites:
            if selector is not None:
                summary = await crawler.crawl_links(site, selector)
            else:
                summary = await crawler.crawl_sitemap(sitemap_url_for(site, cfg.sitemap_path), origin=site)
            summaries.append(summary)

    logger.debug("crawled %d site(s)", len(summaries))
    return summaries
