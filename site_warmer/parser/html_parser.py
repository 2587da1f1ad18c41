# === FILE: site_warmer/parser/html_parser.py ===
"""HTML parsing utilities for SiteWarmer.

Link mode needs two things from a seed page: a compiled CSS selector and
the ``href`` values of the elements it matches. Selectors are compiled with
soupsieve once per run, so a malformed selector is reported before any
request is made; pages are parsed with BeautifulSoup's ``html.parser``.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Union

import soupsieve
from bs4 import BeautifulSoup
from bs4.element import Tag

from site_warmer.errors import InvalidSelectorError

__all__: Sequence[str] = ("compile_selector", "extract_links")


def compile_selector(css: str) -> soupsieve.SoupSieve:
    """Compile *css* or raise :class:`InvalidSelectorError`."""
    try:
        return soupsieve.compile(css)
    except soupsieve.SelectorSyntaxError as exc:
        raise InvalidSelectorError(f"invalid CSS selector {css!r}: {exc}") from exc


def extract_links(html: Union[str, bytes], selector: soupsieve.SoupSieve) -> list[str]:
    """Return the ``href`` of every element matched by *selector*, in document order.

    Matched elements without an ``href`` are ignored. Values are stripped but
    otherwise left as written; resolving them is the caller's job.
    """
    soup = BeautifulSoup(html, "html.parser")
    links: list[str] = []
    for tag in selector.select(soup):
        if not isinstance(tag, Tag):
            continue
        href = tag.get("href")
        if isinstance(href, str):
            links.append(href.strip())
    return links
