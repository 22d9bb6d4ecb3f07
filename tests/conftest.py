# File: tests/conftest.py
from typing import Callable, List

import pytest
import pytest_asyncio
from aiohttp import web

from play_scout.config import ScraperConfig
from play_scout.parser.html_parser import parse_html


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line("markers", "slow: marks tests as slow")


CARD_TEMPLATE = (
    '<div class="card" data-docid="{id}">'
    '<a class="card-click-target" href="/store/apps/details?id={id}"></a>'
    '<img class="cover-image" data-cover-large="//lh3.googleusercontent.com/{id}=w340">'
    '<a class="title" title="{title}" href="/store/apps/details?id={id}">{title}</a>'
    '<a class="subtitle" title="Example Inc" href="/store/apps/developer?id=Example">Example Inc</a>'
    '<div class="current-rating" style="width: 80%;"></div>'
    '<span class="display-price">$1.99</span>'
    "</div>"
)


@pytest.fixture()
def listing_html() -> Callable[..., str]:
    """Return a factory of listing markup with *count* cards numbered from *offset*."""

    def _build(count: int, offset: int = 0, extra: str = "") -> str:
        cards = "".join(
            CARD_TEMPLATE.format(id=f"com.example.app{i}", title=f"App {i}")
            for i in range(offset, offset + count)
        )
        return f"<html><body><div class='cluster'>{cards}</div>{extra}</body></html>"

    return _build


@pytest.fixture()
def listing_page(listing_html):
    """Same as listing_html, parsed."""
    return lambda count, offset=0, extra="": parse_html(listing_html(count, offset, extra))


def token_script(token: str) -> str:
    return (
        "<script>AF_initDataCallback({key: 'ds:3', data:function(){return "
        f"[null,[null,\\x22{token}\\x22]]}}}});</script>"
    )


@pytest.fixture()
def make_token_script() -> Callable[[str], str]:
    """Script tag embedding an escaped search continuation token."""
    return token_script


INFO_BLOCK_HTML = """<html><head>
<meta property="og:url" content="https://play.google.com/store/apps/details?id=com.example.one">
</head><body>
<img class="T75of sHb2Xb" itemprop="image" src="//lh3.googleusercontent.com/icon" alt="Cover art">
<h1 class="AHFaub" itemprop="name"><span>Example One</span></h1>
<a itemprop="genre" href="/store/apps/category/TOOLS">Tools</a>
<a itemprop="genre" href="/store/apps/category/PRODUCTIVITY">Productivity</a>
<div itemprop="offers"><span itemprop="price" content="$2.99"></span></div>
<jsl><span class="full-price">$4.99</span></jsl>
<div class="K9wGie"><div class="BHMmbe" aria-label="Rated 4.5 stars out of five stars">4.5</div><span class="EymY4b"><span class="O3QoBc"></span><span aria-label="1,234 ratings">1,234</span></span></div>
<div class="MSLVtf"><img class="T75of" src="https://i.ytimg.com/vi/abc/hqdefault.jpg"><div class="TdqJUe"><button data-trailer-url="https://www.youtube.com/embed/abc?ps=play"></button></div></div>
<img class="T75of lxGQyd" itemprop="image" alt="Screenshot Image" data-src="https://lh3.googleusercontent.com/shot1">
<img class="T75of lxGQyd" itemprop="image" alt="Screenshot Image" src="https://lh3.googleusercontent.com/shot2">
<div itemprop="description"><content><div>Great app.<br>Second line <a href="https://www.google.com/url?q=https%3A%2F%2Fexample.com&amp;sa=D">site</a></div></content></div>
<div class="W4P4ne "><div class="wSaTQd"><h2 class="Rm6Gwb">What's New</h2></div><div class="PHBdkd"><div itemprop="description"><content>Bug fixes.</content></div></div></div>
<div class="IxB2fe">
<div class="hAyfc"><div class="BgcNfc">Updated</div><span class="htlgb"><div class="IQ1z0d"><span class="htlgb">May 1, 2020</span></div></span></div>
<div class="hAyfc"><div class="BgcNfc">Size</div><span class="htlgb"><div class="IQ1z0d"><span class="htlgb">12M</span></div></span></div>
<div class="hAyfc"><div class="BgcNfc">Installs</div><span class="htlgb"><div class="IQ1z0d"><span class="htlgb">1,000,000+</span></div></span></div>
<div class="hAyfc"><div class="BgcNfc">Current Version</div><span class="htlgb"><div class="IQ1z0d"><span class="htlgb">2.3.4</span></div></span></div>
<div class="hAyfc"><div class="BgcNfc">Requires Android</div><span class="htlgb"><div class="IQ1z0d"><span class="htlgb">5.0 and up</span></div></span></div>
<div class="hAyfc"><div class="BgcNfc">Content Rating</div><span class="htlgb"><div class="IQ1z0d"><span class="htlgb"><div>Everyone</div>Learn more</span></div></span></div>
<div class="hAyfc"><div class="BgcNfc">Offered By</div><span class="htlgb"><div class="IQ1z0d"><span class="htlgb">Example <b>Inc</b></span></div></span></div>
<div class="hAyfc"><div class="BgcNfc">Developer</div><span class="htlgb"><div class="IQ1z0d"><span class="htlgb"><div><a class="hrTbp " href="https://example.com">Visit website</a></div></span></div></span></div>
</div>
</body></html>"""


MICRODATA_HTML = """<html><body>
<div class="details-wrapper" itemscope itemtype="https://schema.org/MobileApplication">
<meta itemprop="url" content="https://play.google.com/store/apps/details?id=com.example.old">
<img class="cover-image" itemprop="image" src="//lh3.googleusercontent.com/old">
<div class="id-app-title" itemprop="name"><div>Old App</div></div>
<div itemprop="author"><meta itemprop="url" content="/store/apps/developer?id=Old+Co"><a class="document-subtitle"><span itemprop="name">Old Co</span></a></div>
<span itemprop="genre">Puzzle</span>
<div itemprop="offers"><meta itemprop="price" content="0"></div>
<div class="thumbnails"><span itemprop="screenshot"><img data-src="//lh3.googleusercontent.com/shot-a"></span><span itemprop="screenshot"><img data-src="//lh3.googleusercontent.com/shot-b"></span></div>
<div itemprop="description"><div><p>Hello <b>world</b></p><ul><li>One</li><li>Two</li></ul></div></div>
<div itemprop="aggregateRating"><meta itemprop="ratingValue" content="4.2"><meta itemprop="ratingCount" content="321"></div>
<div itemprop="datePublished">March 3, 2017</div>
<div itemprop="fileSize">5.1M</div>
<div itemprop="numDownloads">1,000 - 5,000</div>
<div itemprop="softwareVersion"> 1.2.3 </div>
<div itemprop="operatingSystems">4.0 and up</div>
<div itemprop="contentRating">Everyone</div>
<div class="recent-change">Fixed crash</div><div class="recent-change">Faster start</div>
<div class="details-trailer"><span class="play-action-container" data-video-url="https://www.youtube.com/embed/old"></span><img class="video-image" src="//i.ytimg.com/old.jpg"></div>
</div>
</body></html>"""


@pytest.fixture()
def info_block_html() -> str:
    return INFO_BLOCK_HTML


@pytest.fixture()
def microdata_html() -> str:
    return MICRODATA_HTML


@pytest.fixture()
def base_config() -> ScraperConfig:
    """Defaults with the delay switched off."""
    return ScraperConfig(delay_ms=0)


class FakeSource:
    """Stand-in for the fetcher: records calls and answers from *responder*."""

    def __init__(self, responder):
        self.responder = responder
        self.calls: List[tuple] = []

    async def fetch(self, path, params=None):
        params = dict(params or {})
        self.calls.append((path, params))
        return self.responder(path, params)


@pytest.fixture()
def fake_source():
    return FakeSource


@pytest_asyncio.fixture
async def serve(unused_tcp_port_factory):
    """Start aiohttp applications on free ports; yields a starter returning the base URL."""
    runners: List[web.AppRunner] = []

    async def _serve(app: web.Application) -> str:
        runner = web.AppRunner(app)
        await runner.setup()
        port = unused_tcp_port_factory()
        site = web.TCPSite(runner, "127.0.0.1", port)
        await site.start()
        runners.append(runner)
        return f"http://127.0.0.1:{port}"

    try:
        yield _serve
    finally:
        for runner in runners:
            await runner.cleanup()
