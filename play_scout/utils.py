# File: play_scout/utils.py
"""play_scout.utils: URL helpers shared by the fetcher and the page extractors."""

from __future__ import annotations

import re
from typing import Optional, Sequence
from urllib.parse import parse_qs, urljoin, urlparse, urlunparse

from play_scout.config import DEFAULT_BASE_URL

__all__: Sequence[str] = (
    "resolve_url",
    "unwrap_redirect",
    "parse_float",
    "parse_count",
    "REDIRECT_PREFIX",
)

#: Outbound links in descriptions are wrapped by this redirect endpoint.
REDIRECT_PREFIX = "https://www.google.com/url?q="

_NUMBER_RE = re.compile(r"\d+(?:[.,]\d+)?")


def resolve_url(url: Optional[str], base_url: str = DEFAULT_BASE_URL) -> Optional[str]:
    """Resolve a possibly relative *url* against the store origin.

    Absolute URLs come back unchanged, protocol-relative ones get the base
    scheme and an empty path becomes ``/``.
    """
    if url is None:
        return None
    parsed = urlparse(urljoin(base_url, url.strip()))
    if not parsed.path:
        parsed = parsed._replace(path="/")
    return urlunparse(parsed)


def unwrap_redirect(href: str) -> str:
    """Strip (possibly chained) redirect wrappers and return the final target."""
    while href.startswith(REDIRECT_PREFIX):
        targets = parse_qs(urlparse(href).query).get("q")
        if not targets:
            break
        href = targets[0]
    return href


def parse_float(text: Optional[str]) -> Optional[float]:
    """First number in *text* as float; a decimal comma is accepted."""
    if not text:
        return None
    match = _NUMBER_RE.search(text)
    if match is None:
        return None
    return float(match.group(0).replace(",", "."))


def parse_count(text: Optional[str]) -> Optional[int]:
    """All digits of a localized count (``1,234,567`` or ``1 234 567``) as int."""
    if not text:
        return None
    digits = re.sub(r"\D", "", text)
    return int(digits) if digits else None
