# File: play_scout/parser/listing.py
"""play_scout.parser.listing: cards of collection, category and search pages → AppSummary."""

from __future__ import annotations

import re
from typing import List, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from play_scout.config import DEFAULT_BASE_URL
from play_scout.exceptions import ExtractionStructureError
from play_scout.models import AppSummary
from play_scout.parser.html_parser import text_of
from play_scout.utils import resolve_url

__all__ = ["extract_categories", "extract_listing", "parse_card", "RATING_SCALE"]

#: Width percentage of the star bar → 0..5 stars.
RATING_SCALE = 0.05

_RATING_RE = re.compile(r"\d+(\.\d+)?")
_DIGIT_RE = re.compile(r"\d")


def _attr(node: Optional[Tag], name: str) -> Optional[str]:
    if node is None:
        return None
    value = node.get(name)
    if isinstance(value, list):
        return " ".join(value)
    return value


def _card_rating(card: Tag) -> float:
    indicator = card.select_one(".current-rating")
    if indicator is None:
        return 0.0
    match = _RATING_RE.search(_attr(indicator, "style") or "")
    if match is None:
        raise ExtractionStructureError(
            f"Error parsing rating of card {card.get('data-docid')!r}"
        )
    return float(match.group(0)) * RATING_SCALE


def _card_price(card: Tag) -> Optional[str]:
    node = card.select_one(".display-price")
    if node is None:
        return None
    text = text_of(node)
    # "Free" and its translations carry no digit
    return text if _DIGIT_RE.search(text) else None


def parse_card(card: Tag, base_url: str = DEFAULT_BASE_URL) -> AppSummary:
    """Build one AppSummary; a malformed rating raises ExtractionStructureError."""
    link = card.select_one("a[href]")
    title = card.select_one("a.title")
    cover = card.select_one("img.cover-image")
    subtitle = card.select_one("a.subtitle")
    return AppSummary(
        id=_attr(card, "data-docid"),
        url=resolve_url(_attr(link, "href"), base_url),
        title=_attr(title, "title"),
        image_url=resolve_url(_attr(cover, "data-cover-large"), base_url),
        author=_attr(subtitle, "title"),
        rating=_card_rating(card),
        price=_card_price(card),
    )


def extract_listing(doc: BeautifulSoup, base_url: str = DEFAULT_BASE_URL) -> List[AppSummary]:
    """All cards of a listing document, in page order."""
    return [parse_card(card, base_url) for card in doc.select(".card")]


def extract_categories(doc: BeautifulSoup) -> List[str]:
    """Category slugs from the store menu, de-duplicated in page order."""
    categories: List[str] = []
    for node in doc.select(".child-submenu-link"):
        href = _attr(node, "href") or ""
        if not href.startswith("/store/apps"):
            continue
        slug = href.split("?", 1)[0].rstrip("/").split("/")[-1]
        if slug and slug not in categories:
            categories.append(slug)
    return categories
