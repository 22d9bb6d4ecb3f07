# File: tests/test_cli.py
"""CLI tests with click.testing.CliRunner.

The scraper is replaced by a fake that records calls, so no command touches
the network.
"""
import json

import pytest
from click.testing import CliRunner

import play_scout.cli as cli_module
from play_scout.cli import cli
from play_scout.exceptions import NotFoundError
from play_scout.logger import init_logging
from play_scout.models import AppDetail, AppSummary


class FakeScraper:
    calls: list = []
    settings: dict = {}
    fail_with = None

    def __init__(self, config=None):
        self.config = config
        self.delay = None
        self.default_lang = None
        self.default_country = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        FakeScraper.settings = {
            "delay": self.delay,
            "lang": self.default_lang,
            "country": self.default_country,
        }

    def _record(self, name, *args):
        FakeScraper.calls.append((name, args))
        if FakeScraper.fail_with is not None:
            raise FakeScraper.fail_with

    async def get_categories(self):
        self._record("get_categories")
        return ["GAME", "TOOLS"]

    def get_collections(self):
        return ["topselling_free", "topgrossing"]

    async def get_apps(self, ids):
        self._record("get_apps", ids)
        return {app_id: AppDetail(id=app_id, title=app_id.upper()) for app_id in ids}

    async def get_list_chunk(self, collection, category, start, num):
        self._record("get_list_chunk", collection, category, start, num)
        return [AppSummary("a", None, "A", None, None)]

    async def get_list(self, collection, category):
        self._record("get_list", collection, category)
        return []

    async def get_detail_list_chunk(self, collection, category, start, num):
        self._record("get_detail_list_chunk", collection, category, start, num)
        return {}

    async def get_detail_list(self, collection, category):
        self._record("get_detail_list", collection, category)
        return {}

    async def get_search(self, query, price, rating):
        self._record("get_search", query, price, rating)
        return [AppSummary("s", None, "S", None, None, 4.5, "$1")]

    async def get_detail_search(self, query, price, rating):
        self._record("get_detail_search", query, price, rating)
        return {}


@pytest.fixture(autouse=True)
def fake_scraper(monkeypatch):
    FakeScraper.calls = []
    FakeScraper.settings = {}
    FakeScraper.fail_with = None
    monkeypatch.setattr(cli_module, "PlayScraper", FakeScraper)
    yield FakeScraper
    # the CLI binds the log handler to the runner's stream
    init_logging(level="WARNING")


@pytest.fixture()
def runner():
    return CliRunner()


def test_version_option(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "PlayScout" in result.output


def test_show_config(runner, tmp_path):
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text("base_url: https://example.com\ndelay_ms: 10\n", encoding="utf-8")
    result = runner.invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["base_url"].rstrip("/") == "https://example.com"
    assert data["delay_ms"] == 10


def test_bad_config_exits_with_error(runner, tmp_path):
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text("delay_ms: -3\n", encoding="utf-8")
    result = runner.invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 1
    assert "Error loading config" in result.output


def test_categories(runner, fake_scraper):
    result = runner.invoke(cli, ["categories"])
    assert result.exit_code == 0
    assert json.loads(result.output) == ["GAME", "TOOLS"]
    assert fake_scraper.calls == [("get_categories", ())]


def test_collections(runner):
    result = runner.invoke(cli, ["collections", "--pretty"])
    assert result.exit_code == 0
    assert json.loads(result.output) == ["topselling_free", "topgrossing"]
    assert "\n  " in result.output


def test_app_with_global_settings(runner, fake_scraper):
    result = runner.invoke(
        cli, ["--delay", "0", "--lang", "ja_JP", "--country", "jp", "app", "com.a", "com.b"]
    )
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert list(data) == ["com.a", "com.b"]
    assert data["com.a"]["title"] == "COM.A"
    assert data["com.a"]["votes"] is None
    assert fake_scraper.calls == [("get_apps", (["com.a", "com.b"],))]
    assert fake_scraper.settings == {"delay": 0, "lang": "ja_JP", "country": "jp"}


def test_app_requires_an_id(runner):
    result = runner.invoke(cli, ["app"])
    assert result.exit_code != 0


@pytest.mark.parametrize(
    "args,expected",
    [
        (["list", "topselling_free"], ("get_list_chunk", ("topselling_free", None, 0, 60))),
        (
            ["list", "topselling_paid", "--category", "GAME", "--start", "120", "--num", "30"],
            ("get_list_chunk", ("topselling_paid", "GAME", 120, 30)),
        ),
        (["list", "topgrossing", "--all"], ("get_list", ("topgrossing", None))),
        (["list", "topgrossing", "--details"], ("get_detail_list_chunk", ("topgrossing", None, 0, 60))),
        (["list", "topgrossing", "--all", "--details"], ("get_detail_list", ("topgrossing", None))),
        (["search", "notes"], ("get_search", ("notes", "all", "all"))),
        (["search", "notes", "--price", "paid", "--rating", "4+"], ("get_search", ("notes", "paid", "4+"))),
        (["search", "notes", "--details"], ("get_detail_search", ("notes", "all", "all"))),
    ],
)
def test_command_dispatch(runner, fake_scraper, args, expected):
    result = runner.invoke(cli, args)
    assert result.exit_code == 0, result.output
    assert fake_scraper.calls == [expected]


@pytest.mark.parametrize(
    "args",
    [
        ["list", "topselling_free", "--start", "501"],
        ["list", "topselling_free", "--num", "121"],
        ["search", "notes", "--price", "cheap"],
        ["--delay", "-1", "categories"],
    ],
)
def test_out_of_range_options_rejected(runner, fake_scraper, args):
    result = runner.invoke(cli, args)
    assert result.exit_code == 2
    assert fake_scraper.calls == []


def test_search_json_file(runner, tmp_path):
    out = tmp_path / "reports" / "search.json"
    result = runner.invoke(cli, ["search", "notes", "--json", str(out)])
    assert result.exit_code == 0
    assert "JSON saved" in result.output
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data == [
        {"id": "s", "url": None, "title": "S", "image_url": None, "author": None, "rating": 4.5, "price": "$1"}
    ]


def test_scraper_error_exits_1(runner, fake_scraper):
    fake_scraper.fail_with = NotFoundError(url="https://play.google.com/store/apps/details?id=x")
    result = runner.invoke(cli, ["app", "x"])
    assert result.exit_code == 1
    assert "Error:" in result.output
