# site_warmer/crawler/models.py
"""
Data models for the SiteWarmer crawler.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True, frozen=True)
class CrawlTarget:
    """A resolved URL to warm and the site root it belongs to."""

    url: str
    origin: str


@dataclass(slots=True)
class FetchResult:
    """Outcome of one warm-up request; *error* is set for transport failures only."""

    url: str
    elapsed: float
    status: Optional[int] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def elapsed_ms(self) -> int:
        return int(self.elapsed * 1000)


@dataclass(slots=True)
class CrawlSummary:
    """Counters of one crawl invocation, logged when it finishes."""

    origin: str
    mode: str
    dispatched: int = 0
    failed: int = 0
    skipped: int = 0
    duplicates: int = 0
    peak_in_flight: int = 0

    def __str__(self) -> str:
        return (
            f"{self.dispatched} dispatched, {self.failed} failed, {self.skipped} skipped, "
            f"{self.duplicates} duplicates, peak {self.peak_in_flight} in flight"
        )
