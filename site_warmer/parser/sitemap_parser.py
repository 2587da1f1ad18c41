# File: site_warmer/parser/sitemap_parser.py
"""site_warmer.parser.sitemap_parser: parsing of sitemap.xml and streaming of its URLs.

Both ``<urlset>`` and ``<sitemapindex>`` documents are understood; an index
is followed into its child sitemaps, so callers only ever see page URLs.

Example:
```python
async with create_session(HttpSettings()) as session:
    async for url in iter_sitemap_urls(session, "https://example.com/sitemap.xml"):
        print(url)
```
"""

from __future__ import annotations

import asyncio
import gzip
import zlib
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import List, Optional, Set, Union

from aiohttp import ClientError, ClientSession
from lxml import etree

from site_warmer.crawler.fetcher import describe_error
from site_warmer.errors import SitemapError
from site_warmer.logger import logger

_GZIP_MAGIC = b"\x1f\x8b"


@dataclass(slots=True)
class SitemapDocument:
    """One parsed sitemap file."""

    url: str
    is_index: bool
    locations: List[str] = field(default_factory=list)


def _local_name(tag: object) -> str:
    if not isinstance(tag, str):
        return ""
    return etree.QName(tag).localname


def parse_sitemap(content: Union[str, bytes], url: str = "") -> SitemapDocument:
    """Parse a sitemap body and return its ``<loc>`` values.

    Args:
        content: body of the sitemap; gzip-compressed bytes are accepted.
        url: where the body came from, used in error messages.

    Raises:
        SitemapError: the body is neither a ``<urlset>`` nor a ``<sitemapindex>``.
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    if content[:2] == _GZIP_MAGIC:
        try:
            content = gzip.decompress(content)
        except (OSError, EOFError, zlib.error) as exc:
            raise SitemapError(f"sitemap {url!r} is not valid gzip: {exc}") from exc
    if not content.strip():
        raise SitemapError(f"sitemap {url!r} is empty")

    parser = etree.XMLParser(ns_clean=True, recover=True, resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(content, parser=parser)
    except etree.XMLSyntaxError as exc:
        raise SitemapError(f"sitemap {url!r} is not valid XML: {exc}") from exc
    if root is None:
        raise SitemapError(f"sitemap {url!r} is empty or not XML")

    kind = _local_name(root.tag)
    if kind == "urlset":
        entries = root.findall("{*}url/{*}loc")
    elif kind == "sitemapindex":
        entries = root.findall("{*}sitemap/{*}loc")
    else:
        raise SitemapError(f"{url!r} is not a sitemap (root element <{kind or root.tag}>)")

    locations = [loc.text.strip() for loc in entries if loc.text and loc.text.strip()]
    return SitemapDocument(url=url, is_index=kind == "sitemapindex", locations=locations)


async def fetch_sitemap(session: ClientSession, url: str) -> SitemapDocument:
    """Download and parse the sitemap at *url*; any failure is a SitemapError."""
    try:
        async with session.get(url) as resp:
            if resp.status >= 400:
                raise SitemapError(f"sitemap {url!r} returned HTTP {resp.status}")
            body = await resp.read()
    except (ClientError, asyncio.TimeoutError) as exc:
        raise SitemapError(f"could not fetch sitemap {url!r}: {describe_error(exc)}") from exc
    return parse_sitemap(body, url)


async def iter_sitemap_urls(
    session: ClientSession, url: str, *, _seen: Optional[Set[str]] = None
) -> AsyncIterator[str]:
    """Yield every page URL reachable from the sitemap at *url*.

    Entries are yielded as soon as their document is parsed, so a consumer
    that stops pulling also stops further sitemap downloads. Failure of the
    sitemap at *url* raises SitemapError; a broken child of an index is
    logged and skipped. A sitemap already visited in this walk is not
    fetched again.
    """
    seen = _seen if _seen is not None else {url}
    document = await fetch_sitemap(session, url)

    if not document.is_index:
        for location in document.locations:
            yield location
        return

    logger.debug("sitemap index %s lists %d sitemaps", url, len(document.locations))
    for child in document.locations:
        if child in seen:
            logger.debug("sitemap %s already visited, skipping", child)
            continue
        seen.add(child)
        try:
            async for location in iter_sitemap_urls(session, child, _seen=seen):
                yield location
        except SitemapError as exc:
            logger.warning("skipping nested sitemap %s: %s", child, exc)


__all__ = ["SitemapDocument", "fetch_sitemap", "iter_sitemap_urls", "parse_sitemap"]
