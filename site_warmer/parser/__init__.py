# File: site_warmer/parser/__init__.py
"""site_warmer.parser: sitemap and HTML parsing used to discover targets."""

from .html_parser import compile_selector, extract_links
from .sitemap_parser import SitemapDocument, fetch_sitemap, iter_sitemap_urls, parse_sitemap

__all__ = [
    "SitemapDocument",
    "compile_selector",
    "extract_links",
    "fetch_sitemap",
    "iter_sitemap_urls",
    "parse_sitemap",
]
