# File: play_scout/scraper.py
"""play_scout.scraper: public operations over the store.

Usage::

    async with PlayScraper() as scraper:
        app = await scraper.get_app("com.example.app", lang="ja_JP")
        top = await scraper.get_list("topselling_free", "GAME")

Every request of one instance goes through the same :class:`Fetcher`, so the
configured delay holds across all operations sharing the instance.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Union

from aiohttp import ClientSession, ClientTimeout
from bs4 import BeautifulSoup

from play_scout.config import ScraperConfig
from play_scout.crawler.fetcher import Clock, Fetcher, Sleep, check_delay
from play_scout.crawler.models import ParamValue
from play_scout.crawler.paginator import PAGE_SIZE, ListPaginator, SearchPaginator
from play_scout.logger import LOGGER_NAME
from play_scout.models import AppDetail, AppSummary
from play_scout.parser.anchors import ANCHORS, LocaleAnchorTable
from play_scout.parser.detail import extract_detail
from play_scout.parser.listing import extract_categories

__all__ = ["PlayScraper", "COLLECTIONS"]

COLLECTIONS = (
    "topselling_free",
    "topselling_paid",
    "topselling_new_free",
    "topselling_new_paid",
    "topgrossing",
    "movers_shakers",
)


class PlayScraper:
    """Facade for CLI and library callers: apps, lists, search, categories."""

    def __init__(
        self,
        config: Optional[ScraperConfig] = None,
        *,
        session: Optional[ClientSession] = None,
        anchors: LocaleAnchorTable = ANCHORS,
        clock: Optional[Clock] = None,
        sleep: Optional[Sleep] = None,
    ) -> None:
        self.config = config or ScraperConfig()
        self.anchors = anchors
        self.logger = logging.getLogger(LOGGER_NAME)
        self.session: Optional[ClientSession] = session
        self._owns_session = session is None
        self._clock = clock
        self._sleep = sleep
        self._delay_ms = self.config.delay_ms
        self._lang = self.config.default_lang
        self._country = self.config.default_country
        self._fetcher: Optional[Fetcher] = None
        if session is not None:
            self._fetcher = self._make_fetcher(session)

    async def __aenter__(self) -> PlayScraper:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
            self._owns_session = True
            self._fetcher = self._make_fetcher(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()
            self.session = None
            self._fetcher = None

    def _make_fetcher(self, session: ClientSession) -> Fetcher:
        kwargs = {}
        if self._clock is not None:
            kwargs["clock"] = self._clock
        if self._sleep is not None:
            kwargs["sleep"] = self._sleep
        fetcher = Fetcher(session, self.config, **kwargs)
        fetcher.delay = self._delay_ms
        return fetcher

    @property
    def fetcher(self) -> Fetcher:
        if self._fetcher is None:
            raise RuntimeError("Session not initialized; use 'async with PlayScraper()'")
        return self._fetcher

    # ------------------------------------------------------------------ #
    # Instance configuration                                             #
    # ------------------------------------------------------------------ #

    @property
    def delay(self) -> int:
        return self._delay_ms

    @delay.setter
    def delay(self, value: int) -> None:
        self._delay_ms = check_delay(value)
        if self._fetcher is not None:
            self._fetcher.delay = self._delay_ms

    @property
    def default_lang(self) -> str:
        return self._lang

    @default_lang.setter
    def default_lang(self, value: str) -> None:
        self._lang = value

    @property
    def default_country(self) -> str:
        return self._country

    @default_country.setter
    def default_country(self, value: str) -> None:
        self._country = value

    async def fetch(
        self, path: Union[str, Sequence[str]], params: Optional[Mapping[str, ParamValue]] = None
    ) -> BeautifulSoup:
        """Rate-limited GET through the instance fetcher."""
        return await self.fetcher.fetch(path, params)

    def _locale(self, lang: Optional[str], country: Optional[str]) -> tuple[str, str]:
        return (self._lang if lang is None else lang, self._country if country is None else country)

    # ------------------------------------------------------------------ #
    # Operations                                                         #
    # ------------------------------------------------------------------ #

    async def get_categories(self) -> List[str]:
        doc = await self.fetch("apps", {"hl": "en", "gl": "us"})
        return extract_categories(doc)

    def get_collections(self) -> List[str]:
        return list(COLLECTIONS)

    async def get_app(self, app_id: str, lang: Optional[str] = None, country: Optional[str] = None) -> AppDetail:
        lang, country = self._locale(lang, country)
        self.logger.debug("App %s (hl=%s, gl=%s)", app_id, lang, country)
        doc = await self.fetch(["apps", "details"], {"id": app_id, "hl": lang, "gl": country})
        return extract_detail(doc, app_id, lang, base_url=self.config.origin, anchors=self.anchors)

    async def get_apps(
        self,
        ids: Union[str, Iterable[str]],
        lang: Optional[str] = None,
        country: Optional[str] = None,
    ) -> Dict[str, AppDetail]:
        """Details keyed by id, fetched one after another in input order."""
        if isinstance(ids, str):
            ids = [ids]
        apps: Dict[str, AppDetail] = {}
        for app_id in ids:
            apps[app_id] = await self.get_app(app_id, lang, country)
        return apps

    async def get_list_chunk(
        self,
        collection: str,
        category: Optional[str] = None,
        start: int = 0,
        num: int = PAGE_SIZE,
        lang: Optional[str] = None,
        country: Optional[str] = None,
    ) -> List[AppSummary]:
        lang, country = self._locale(lang, country)
        return await self._lists().chunk(collection, category, start, num, lang, country)

    async def get_list(
        self,
        collection: str,
        category: Optional[str] = None,
        lang: Optional[str] = None,
        country: Optional[str] = None,
    ) -> List[AppSummary]:
        lang, country = self._locale(lang, country)
        return await self._lists().all(collection, category, lang, country)

    async def get_detail_list_chunk(
        self,
        collection: str,
        category: Optional[str] = None,
        start: int = 0,
        num: int = PAGE_SIZE,
        lang: Optional[str] = None,
        country: Optional[str] = None,
    ) -> Dict[str, AppDetail]:
        apps = await self.get_list_chunk(collection, category, start, num, lang, country)
        return await self.get_apps(_ids(apps), lang, country)

    async def get_detail_list(
        self,
        collection: str,
        category: Optional[str] = None,
        lang: Optional[str] = None,
        country: Optional[str] = None,
    ) -> Dict[str, AppDetail]:
        apps = await self.get_list(collection, category, lang, country)
        return await self.get_apps(_ids(apps), lang, country)

    async def get_search(
        self,
        query: str,
        price: str = "all",
        rating: str = "all",
        lang: Optional[str] = None,
        country: Optional[str] = None,
    ) -> List[AppSummary]:
        lang, country = self._locale(lang, country)
        paginator = SearchPaginator(self, self.config.origin, self.config.search_max_pages)
        return await paginator.search(query, price, rating, lang=lang, country=country)

    async def get_detail_search(
        self,
        query: str,
        price: str = "all",
        rating: str = "all",
        lang: Optional[str] = None,
        country: Optional[str] = None,
    ) -> Dict[str, AppDetail]:
        apps = await self.get_search(query, price, rating, lang, country)
        return await self.get_apps(_ids(apps), lang, country)

    def _lists(self) -> ListPaginator:
        return ListPaginator(self, self.config.origin)


def _ids(apps: Iterable[AppSummary]) -> List[str]:
    return [app.id for app in apps if app.id]
