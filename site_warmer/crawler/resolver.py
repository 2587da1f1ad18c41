# site_warmer/crawler/resolver.py
"""
Resolution of discovered references against a site origin, and same-origin
scope checks.
"""
from __future__ import annotations

from typing import Optional, Tuple
from urllib.parse import urlsplit

_DEFAULT_PORTS = {"http": 80, "https": 443}
_HTTP_PREFIXES = ("http://", "https://")

OriginKey = Tuple[str, str, Optional[int]]


def origin_of(url: str) -> OriginKey:
    """Return the normalized ``(scheme, host, port)`` of *url*.

    The port is the effective one, so ``https://a.com`` and ``https://a.com:443``
    share an origin. A URL that cannot be split (``http://[oops``) has an empty
    key and matches no origin.
    """
    try:
        parts = urlsplit(url.strip())
    except ValueError:
        return "", "", None
    scheme = parts.scheme.lower()
    try:
        port = parts.port
    except ValueError:
        port = None
    if port is None:
        port = _DEFAULT_PORTS.get(scheme)
    return scheme, (parts.hostname or "").lower(), port


def is_same_origin(url: str, origin: str) -> bool:
    """True when *url* and *origin* have the same scheme, host and port."""
    key = origin_of(url)
    return bool(key[1]) and key == origin_of(origin)


def _has_scheme(ref: str) -> bool:
    head, sep, _ = ref.partition(":")
    if not sep or not head or "/" in head:
        return False
    return head[0].isalpha() and all(c.isalnum() or c in "+-." for c in head)


def resolve(ref: str, origin: str) -> Tuple[str, bool]:
    """
    Resolve *ref* against *origin*; return ``(url, in_scope)``.

    * ``http(s)://…`` references are returned unchanged and are in scope only
      when they share the origin's scheme, host and port.
    * ``//host/path`` takes the origin's scheme, then is checked the same way.
    * Empty and fragment-only references, and any other URI scheme
      (``mailto:``, ``javascript:``…), are out of scope.
    * Anything else is a path under the origin: one leading slash is ensured
      and the result is in scope.
    """
    ref = ref.strip()
    if not ref or ref.startswith("#"):
        return ref, False

    if ref.lower().startswith(_HTTP_PREFIXES):
        return ref, is_same_origin(ref, origin)

    if ref.startswith("//"):
        url = f"{urlsplit(origin).scheme}:{ref}"
        return url, is_same_origin(url, origin)

    if _has_scheme(ref):
        return ref, False

    if not ref.startswith("/"):
        ref = "/" + ref
    return origin.rstrip("/") + ref, True


__all__ = ["OriginKey", "is_same_origin", "origin_of", "resolve"]
