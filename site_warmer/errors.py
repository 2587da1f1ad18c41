# File: site_warmer/errors.py
"""site_warmer.errors: fatal errors that abort a crawl.

Per-target fetch failures are never raised; they end up in the log.
"""

from __future__ import annotations

__all__ = ["CrawlError", "InvalidSelectorError", "SitemapError", "SeedPageError"]


class CrawlError(Exception):
    """Base class for errors that abort the crawl of a site."""


class InvalidSelectorError(CrawlError, ValueError):
    """The CSS selector given for link mode could not be compiled."""


class SitemapError(CrawlError):
    """The root sitemap could not be fetched or is not a sitemap document."""


class SeedPageError(CrawlError):
    """The seed page of a link-mode crawl could not be fetched."""
