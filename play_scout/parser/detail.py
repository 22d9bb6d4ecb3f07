# File: play_scout/parser/detail.py
"""play_scout.parser.detail: app detail page → AppDetail.

Two page templates are in circulation:

* the *microdata* template tags every field with a schema.org ``itemprop``;
* the *info block* template keeps only a few ``itemprop`` attributes and lists
  version, size, installs, etc. as anonymous rows recognised by their
  localized label (see :mod:`play_scout.parser.anchors`).

:func:`extract_detail` picks the strategy from the markers present in the
document.  Missing nodes always produce ``None``.
"""

from __future__ import annotations

from typing import List, Optional, Type

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag

from play_scout.config import DEFAULT_BASE_URL
from play_scout.models import AppDetail
from play_scout.parser.anchors import ANCHORS, MORE_INFO_FIELDS, LocaleAnchorTable
from play_scout.parser.html_parser import clean_description, text_of
from play_scout.utils import parse_count, parse_float, resolve_url

__all__ = [
    "DetailStrategy",
    "MicrodataDetailStrategy",
    "InfoBlockDetailStrategy",
    "extract_detail",
    "select_strategy",
]

_INFO_ROW = "div.hAyfc"
_MICRODATA_MARKERS = (
    '[itemprop="softwareVersion"]',
    '[itemprop="datePublished"]',
    '[itemprop="numDownloads"]',
)


def _attr(node: Optional[Tag], name: str) -> Optional[str]:
    if node is None:
        return None
    value = node.get(name)
    if isinstance(value, list):
        return " ".join(value)
    return value or None


class DetailStrategy:
    """Fields both templates expose the same way."""

    name = "base"

    def __init__(self, base_url: str = DEFAULT_BASE_URL, anchors: LocaleAnchorTable = ANCHORS) -> None:
        self.base_url = base_url
        self.anchors = anchors

    def extract(self, doc: BeautifulSoup, app_id: str, locale: str) -> AppDetail:
        raise NotImplementedError

    def _absolute(self, url: Optional[str]) -> Optional[str]:
        return resolve_url(url, self.base_url)

    def _safe_text(self, doc: Tag, selector: str) -> Optional[str]:
        return text_of(doc.select_one(selector))

    def _common(self, doc: BeautifulSoup, app_id: str) -> AppDetail:
        price = _attr(doc.select_one('[itemprop="offers"] > [itemprop="price"]'), "content")
        return AppDetail(
            id=app_id,
            image_url=self._absolute(_attr(doc.select_one('[itemprop="image"]'), "src")),
            categories=[text_of(node) for node in doc.select('[itemprop="genre"]')],
            price=None if price == "0" else price,
            full_price=self._safe_text(doc, "jsl > .full-price") or None,
        )


class MicrodataDetailStrategy(DetailStrategy):
    """Older template: every field carries an ``itemprop``."""

    name = "microdata"

    _TEXT_FIELDS = {
        "last_updated": '[itemprop="datePublished"]',
        "size": '[itemprop="fileSize"]',
        "downloads": '[itemprop="numDownloads"]',
        "version": '[itemprop="softwareVersion"]',
        "supported_os": '[itemprop="operatingSystems"]',
        "content_rating": '[itemprop="contentRating"]',
    }

    def extract(self, doc: BeautifulSoup, app_id: str, locale: str) -> AppDetail:
        info = self._common(doc, app_id)
        info.url = _attr(doc.select_one('[itemprop="url"]'), "content")
        info.title = self._safe_text(doc, '[itemprop="name"] > div')
        info.author = self._safe_text(doc, '[itemprop="author"] [itemprop="name"]')
        info.author_link = self._absolute(
            _attr(doc.select_one('[itemprop="author"] > [itemprop="url"]'), "content")
        )
        info.screenshots = [
            url
            for url in (
                self._absolute(_attr(img, "data-src"))
                for img in doc.select('[itemprop="screenshot"] img')
            )
            if url
        ]

        desc = clean_description(doc.select_one('[itemprop="description"] > div'))
        info.description_html, info.description_text = desc.html, desc.text

        rating = doc.select_one('[itemprop="aggregateRating"] > [itemprop="ratingValue"]')
        votes = doc.select_one('[itemprop="aggregateRating"] > [itemprop="ratingCount"]')
        info.rating = parse_float(_attr(rating, "content"))
        info.votes = parse_count(_attr(votes, "content"))

        for field_name, selector in self._TEXT_FIELDS.items():
            setattr(info, field_name, self._safe_text(doc, selector))

        changes = doc.select(".recent-change")
        info.whatsnew = "\n".join(node.get_text() for node in changes) if changes else None

        trailer = doc.select_one(".details-trailer")
        if trailer is not None:
            info.video_link = self._absolute(
                _attr(trailer.select_one(".play-action-container"), "data-video-url")
            )
            info.video_image = self._absolute(_attr(trailer.select_one(".video-image"), "src"))
        return info


class InfoBlockDetailStrategy(DetailStrategy):
    """Newer template: "more info" rows located by localized label."""

    name = "info_block"

    def extract(self, doc: BeautifulSoup, app_id: str, locale: str) -> AppDetail:
        info = self._common(doc, app_id)
        info.url = _attr(doc.select_one('[property="og:url"]'), "content")
        info.title = self._safe_text(doc, '[itemprop="name"] > span')
        info.screenshots = [
            url
            for url in (
                self._absolute(_attr(img, "data-src") or _attr(img, "src"))
                for img in doc.select('img.T75of.lxGQyd[itemprop="image"][alt]')
            )
            if url
        ]

        desc = clean_description(doc.select_one('[itemprop="description"] > content > div'))
        info.description_html, info.description_text = desc.html, desc.text

        rating_box = doc.select_one("div.K9wGie")
        if rating_box is not None:
            info.rating = parse_float(text_of(rating_box.select_one("div.BHMmbe")))
            info.votes = parse_count(text_of(rating_box.select_one("span.EymY4b > span[aria-label]")))

        rows = doc.select(_INFO_ROW)
        for field_name in MORE_INFO_FIELDS:
            setattr(info, field_name, self.more_info(rows, field_name, locale))

        info.author_link = self._author_link(doc, locale)
        info.whatsnew = self._whatsnew(doc, locale)

        button = doc.select_one("button[data-trailer-url]")
        if button is not None:
            info.video_link = self._absolute(_attr(button, "data-trailer-url"))
            grandparent = button.parent.parent if button.parent is not None else None
            image = grandparent.find("img", recursive=False) if grandparent is not None else None
            info.video_image = self._absolute(_attr(image, "src"))
        return info

    def find_row(self, rows: List[Tag], field_name: str, locale: str) -> Optional[Tag]:
        """First row whose label contains the localized anchor of *field_name*."""
        label = self.anchors.label_for(field_name, locale)
        if label is None:
            return None
        for row in rows:
            label_node = row.select_one(":scope > div")
            if label_node is not None and label in label_node.get_text():
                return row
        return None

    def more_info(self, rows: List[Tag], field_name: str, locale: str) -> Optional[str]:
        row = self.find_row(rows, field_name, locale)
        if row is None:
            return None
        value = row.select_one(":scope > span > div > span.htlgb")
        if value is None:
            return None
        return _shallow_text(value)

    def _author_link(self, doc: BeautifulSoup, locale: str) -> Optional[str]:
        label = self.anchors.label_for("author_link", locale)
        if label is None:
            return None
        for link in doc.select("a.hrTbp"):
            if label in link.get_text():
                return _attr(link, "href")
        return None

    def _whatsnew(self, doc: BeautifulSoup, locale: str) -> Optional[str]:
        label = self.anchors.label_for("whatsnew", locale)
        if label is None:
            return None
        blocks = []
        for section in doc.select("div.W4P4ne"):
            heading = section.select_one(":scope > div.wSaTQd")
            if heading is None or label not in heading.get_text():
                continue
            blocks.extend(
                node.get_text()
                for node in section.select(':scope > div > div[itemprop="description"] > content')
            )
        return "\n".join(blocks) if blocks else None


def _shallow_text(node: Tag) -> Optional[str]:
    """Text of *node* and of its direct children, space-joined and trimmed."""
    parts: List[str] = []
    for child in node.children:
        if isinstance(child, PreformattedString):
            continue
        if isinstance(child, NavigableString):
            parts.append(str(child))
        elif isinstance(child, Tag):
            parts.extend(
                str(grand)
                for grand in child.children
                if isinstance(grand, NavigableString) and not isinstance(grand, PreformattedString)
            )
    text = " ".join(part.strip() for part in parts if part.strip())
    return text or None


def select_strategy(doc: BeautifulSoup) -> Type[DetailStrategy]:
    """Info block rows win; microdata-only markers select the older template."""
    if doc.select_one(_INFO_ROW) is not None:
        return InfoBlockDetailStrategy
    if any(doc.select_one(marker) is not None for marker in _MICRODATA_MARKERS):
        return MicrodataDetailStrategy
    return InfoBlockDetailStrategy


def extract_detail(
    doc: BeautifulSoup,
    app_id: str,
    locale: str,
    *,
    base_url: str = DEFAULT_BASE_URL,
    anchors: LocaleAnchorTable = ANCHORS,
) -> AppDetail:
    strategy = select_strategy(doc)(base_url=base_url, anchors=anchors)
    return strategy.extract(doc, app_id, locale)
