# play_scout/crawler/fetcher.py
"""
Fetcher module: the single gate every store request goes through.

Keeps a minimum delay between request starts, builds the store URL, issues
the GET and maps the status code to an outcome.  Transport errors
(:class:`aiohttp.ClientError`, timeouts) are not retried here.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable, Mapping, Optional, Sequence, Union

from aiohttp import ClientSession
from bs4 import BeautifulSoup

from play_scout.config import ScraperConfig
from play_scout.crawler.models import ParamValue, RequestDescriptor
from play_scout.exceptions import NotFoundError, RequestFailureError, ValidationError
from play_scout.logger import LOGGER_NAME
from play_scout.parser.html_parser import parse_html

__all__ = ("Fetcher", "check_delay")

Clock = Callable[[], float]
Sleep = Callable[[float], Awaitable[None]]


def check_delay(value: int) -> int:
    """Validate a delay in milliseconds."""
    value = int(value)
    if value < 0:
        raise ValidationError('"delay" must be a non-negative number of milliseconds')
    return value


class Fetcher:
    """Rate-limited GET + parse, shared by every operation of one scraper."""

    def __init__(
        self,
        session: ClientSession,
        config: ScraperConfig,
        *,
        clock: Clock = time.monotonic,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.session = session
        self.config = config
        self.logger = logging.getLogger(LOGGER_NAME)
        self._clock = clock
        self._sleep = sleep
        self._delay_ms = config.delay_ms
        self._rate_lock = asyncio.Lock()
        self._last_request_ts: Optional[float] = None

    @property
    def delay(self) -> int:
        """Minimum delay between two requests, in milliseconds."""
        return self._delay_ms

    @delay.setter
    def delay(self, value: int) -> None:
        self._delay_ms = check_delay(value)

    @property
    def last_request_time(self) -> Optional[float]:
        return self._last_request_ts

    def build_url(self, path: Union[str, Sequence[str]], params: Mapping[str, ParamValue] | None = None) -> str:
        return RequestDescriptor.of(path, params).url(self.config.origin, self.config.root_path)

    async def fetch(
        self, path: Union[str, Sequence[str]], params: Mapping[str, ParamValue] | None = None
    ) -> BeautifulSoup:
        """GET ``<origin>/store/<path>?<params>`` and return the parsed document.

        Raises NotFoundError on 404 and RequestFailureError on any other
        non-200 status.
        """
        await self._wait_for_rate_limit()
        url = self.build_url(path, params)
        self.logger.debug("GET %s", url)
        async with self.session.get(url) as resp:
            if resp.status == 404:
                self.logger.warning("Not found: %s", url)
                raise NotFoundError(url=url)
            if resp.status != 200:
                self.logger.warning("HTTP %s for %s", resp.status, url)
                raise RequestFailureError(resp.status, url)
            body = await resp.text()
        return parse_html(body)

    async def _wait_for_rate_limit(self) -> None:
        interval = self._delay_ms / 1000
        async with self._rate_lock:
            if interval and self._last_request_ts is not None:
                wait = max(0.0, interval - (self._clock() - self._last_request_ts))
                if wait > 0:
                    self.logger.debug("Rate limit: sleeping %.3f s", wait)
                    await self._sleep(wait)
            # stamped before the request goes out
            self._last_request_ts = self._clock()
