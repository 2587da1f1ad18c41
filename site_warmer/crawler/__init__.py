# File: site_warmer/crawler/__init__.py
"""site_warmer.crawler: resolution, admission control and fetching of warm-up targets."""

from .crawler import AsyncCrawler, Dispatcher
from .fetcher import Fetcher, create_session
from .gate import ConcurrencyGate
from .models import CrawlSummary, CrawlTarget, FetchResult
from .resolver import is_same_origin, origin_of, resolve

__all__ = [
    "AsyncCrawler",
    "ConcurrencyGate",
    "CrawlSummary",
    "CrawlTarget",
    "Dispatcher",
    "FetchResult",
    "Fetcher",
    "create_session",
    "is_same_origin",
    "origin_of",
    "resolve",
]
