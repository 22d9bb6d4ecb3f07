# play_scout/crawler/paginator.py
"""
Pagination loops over listing and search pages.

* :class:`ListPaginator` walks collection/category pages by ``start``/``num``
  offsets until a short page or the store's deep-pagination ceiling.
* :class:`SearchPaginator` follows the continuation token the search page
  embeds in its scripts, bounded by a maximum page count.

Both depend only on an object with an async ``fetch(path, params)`` returning
a parsed document, so tests can drive them with a fake.
"""
from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Union

from bs4 import BeautifulSoup

from play_scout.config import DEFAULT_BASE_URL
from play_scout.exceptions import ValidationError
from play_scout.logger import LOGGER_NAME
from play_scout.models import AppSummary
from play_scout.parser.listing import extract_listing

__all__ = (
    "ListPaginator",
    "SearchPaginator",
    "find_continuation_token",
    "validate_chunk_args",
    "MAX_START",
    "MAX_NUM",
    "PAGE_SIZE",
    "PRICE_FILTERS",
    "RATING_FILTERS",
)

MAX_START = 500
MAX_NUM = 120
PAGE_SIZE = 60

PRICE_FILTERS: Mapping[str, Optional[int]] = {"all": None, "free": 1, "paid": 2}
RATING_FILTERS: Mapping[str, Optional[int]] = {"all": None, "4+": 1}

# \x22GAE...\x22 inside an escaped JS string literal
_TOKEN_RE = re.compile(r"\\x22(GAE.+?)\\x22")
_ESCAPED_EQUALS_RE = re.compile(r"\\+u003d")

logger = logging.getLogger(LOGGER_NAME)


class DocumentSource(Protocol):
    async def fetch(
        self, path: Union[str, Sequence[str]], params: Mapping[str, Any] | None = None
    ) -> BeautifulSoup: ...


def validate_chunk_args(start: Any, num: Any) -> None:
    """Reject offsets the store refuses to serve."""
    if not isinstance(start, int) or isinstance(start, bool):
        raise ValidationError('"start" must be an integer')
    if start < 0 or start > MAX_START:
        raise ValidationError(f'"start" must be a number between 0 and {MAX_START}')
    if not isinstance(num, int) or isinstance(num, bool):
        raise ValidationError('"num" must be an integer')
    if num < 0 or num > MAX_NUM:
        raise ValidationError(f'"num" must be a number between 0 and {MAX_NUM}')


def find_continuation_token(doc: BeautifulSoup) -> Optional[str]:
    """Search-page token from the first script that carries one, ``=`` unescaped."""
    for script in doc.find_all("script"):
        match = _TOKEN_RE.search("".join(str(part) for part in script.contents))
        if match:
            return _ESCAPED_EQUALS_RE.sub("=", match.group(1))
    return None


class ListPaginator:
    """Offset pagination over ``/store/apps[/category/<c>]/collection/<name>``."""

    def __init__(self, source: DocumentSource, base_url: str = DEFAULT_BASE_URL) -> None:
        self.source = source
        self.base_url = base_url

    async def chunk(
        self,
        collection: str,
        category: Optional[str],
        start: int,
        num: int,
        lang: str,
        country: str,
    ) -> List[AppSummary]:
        validate_chunk_args(start, num)
        path = ["apps"]
        if category:
            path += ["category", category]
        path += ["collection", collection]
        params = {"hl": lang, "gl": country, "start": start, "num": num}
        doc = await self.source.fetch(path, params)
        return extract_listing(doc, self.base_url)

    async def all(
        self,
        collection: str,
        category: Optional[str],
        lang: str,
        country: str,
        num: int = PAGE_SIZE,
    ) -> List[AppSummary]:
        """Concatenate chunks until a short page or ``start`` passes the ceiling."""
        validate_chunk_args(0, num)
        if num < 1:
            raise ValidationError('"num" must be at least 1 to walk a whole list')
        apps: List[AppSummary] = []
        start = 0
        while True:
            chunk = await self.chunk(collection, category, start, num, lang, country)
            apps.extend(chunk)
            logger.debug("List %s/%s: start=%d got %d", category, collection, start, len(chunk))
            start += num
            if len(chunk) != num or start > MAX_START:
                break
        return apps


class SearchPaginator:
    """Token-driven pagination over ``/store/search``."""

    def __init__(self, source: DocumentSource, base_url: str = DEFAULT_BASE_URL, max_pages: int = 50) -> None:
        if max_pages < 1:
            raise ValidationError('"max_pages" must be at least 1')
        self.source = source
        self.base_url = base_url
        self.max_pages = max_pages

    @staticmethod
    def build_params(query: Any, price: str, rating: str, lang: str, country: str) -> Dict[str, Any]:
        if not isinstance(query, str) or not query:
            raise ValidationError('"query" must be a non empty string')
        if price not in PRICE_FILTERS:
            raise ValidationError(
                '"price" must contain one of the following values: ' + ", ".join(PRICE_FILTERS)
            )
        if rating not in RATING_FILTERS:
            raise ValidationError(
                '"rating" must contain one of the following values: ' + ", ".join(RATING_FILTERS)
            )
        params: Dict[str, Any] = {"q": query, "c": "apps", "hl": lang, "gl": country}
        if PRICE_FILTERS[price] is not None:
            params["price"] = PRICE_FILTERS[price]
        if RATING_FILTERS[rating] is not None:
            params["rating"] = RATING_FILTERS[rating]
        return params

    async def search(
        self,
        query: str,
        price: str = "all",
        rating: str = "all",
        *,
        lang: str,
        country: str,
    ) -> List[AppSummary]:
        params = self.build_params(query, price, rating, lang, country)
        apps: List[AppSummary] = []
        for page in range(1, self.max_pages + 1):
            doc = await self.source.fetch("search", params)
            chunk = extract_listing(doc, self.base_url)
            apps.extend(chunk)
            logger.debug("Search %r: page %d got %d", query, page, len(chunk))
            token = find_continuation_token(doc)
            if token is None:
                break
            params = {**params, "pagTok": token}
        else:
            logger.warning("Search %r stopped after %d pages", query, self.max_pages)
        return apps
