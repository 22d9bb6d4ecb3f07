#!/usr/bin/env python3
"""
Command line entry point of play_scout.

Commands:
  categories    List category slugs
  collections   List collection names
  app           Details of one or more apps
  list          Apps of a collection (optionally inside a category)
  search        Free-text search
  config        Show the effective configuration

Common options:
  --config PATH       YAML/JSON config (built-in defaults when omitted)
  --delay MS          Minimum delay between requests
  --lang / --country  Default hl / gl values
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stderr only when omitted)

Output is JSON on stdout (``--pretty`` indents it) or a file via ``--json``.

Example:
  play-scout --lang ja_JP app com.example.app --pretty
  play-scout list topselling_free --category GAME --all --json top.json
"""
import asyncio
import sys
from pathlib import Path
from typing import Any, Awaitable, Callable

import click

from play_scout import __version__
from play_scout.config import load_config
from play_scout.crawler.paginator import MAX_NUM, MAX_START, PAGE_SIZE, PRICE_FILTERS, RATING_FILTERS
from play_scout.exceptions import ScraperError
from play_scout.logger import init_logging
from play_scout.report.json_report import dumps, render_json
from play_scout.scraper import PlayScraper

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def output_options(func):
    func = click.option('--pretty', is_flag=True, help='Indent JSON output (2 spaces)')(func)
    func = click.option(
        '--json', '-j', 'json_output',
        default=None,
        type=click.Path(writable=True, dir_okay=False, path_type=Path),
        help='Save JSON to a file instead of stdout'
    )(func)
    return func


def run_operation(ctx, operation: Callable[[PlayScraper], Awaitable[Any]]) -> Any:
    """Open a scraper from the context settings and await *operation* on it."""
    opts = ctx.obj

    async def _runner():
        async with PlayScraper(opts['config']) as scraper:
            if opts['delay'] is not None:
                scraper.delay = opts['delay']
            if opts['lang']:
                scraper.default_lang = opts['lang']
            if opts['country']:
                scraper.default_country = opts['country']
            return await operation(scraper)

    try:
        return asyncio.run(_runner())
    except ScraperError as e:
        print_error(f'Error: {e}')
    except Exception as e:
        print_error(f'Request failed: {e}')


def emit(data: Any, json_output, pretty: bool) -> None:
    if json_output:
        try:
            saved = render_json(data, json_output)
        except OSError as e:
            print_error(f'Error saving JSON: {e}')
        click.echo(f'JSON saved: {saved}')
        return
    click.echo(dumps(data, pretty=pretty))


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='PlayScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON config file.'
)
@click.option('--delay', type=click.IntRange(min=0), default=None, help='Delay between requests (ms)')
@click.option('--lang', default=None, help='Default locale (hl), e.g. en or ja_JP')
@click.option('--country', default=None, help='Default region (gl), e.g. us')
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (stderr only when omitted)'
)
@click.pass_context
def cli(ctx, config_path, delay, lang, country, log_level, log_file):
    """PlayScout command group."""
    init_logging(level=log_level, log_file=str(log_file) if log_file else None)
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Error loading config: {e}')
    ctx.ensure_object(dict)
    ctx.obj.update(config=cfg, delay=delay, lang=lang, country=country)


@cli.command('categories', context_settings=CONTEXT_SETTINGS)
@output_options
@click.pass_context
def categories(ctx, json_output, pretty):
    """Category slugs of the store menu."""
    emit(run_operation(ctx, lambda s: s.get_categories()), json_output, pretty)


@cli.command('collections', context_settings=CONTEXT_SETTINGS)
@output_options
def collections(json_output, pretty):
    """Known collection names (no request is made)."""
    emit(PlayScraper().get_collections(), json_output, pretty)


@cli.command('app', context_settings=CONTEXT_SETTINGS)
@click.argument('app_ids', nargs=-1, required=True)
@output_options
@click.pass_context
def app(ctx, app_ids, json_output, pretty):
    """Details of one or more apps, keyed by id."""
    emit(run_operation(ctx, lambda s: s.get_apps(list(app_ids))), json_output, pretty)


@cli.command('list', context_settings=CONTEXT_SETTINGS)
@click.argument('collection')
@click.option('--category', default=None, help='Category slug, e.g. GAME')
@click.option('--start', type=click.IntRange(0, MAX_START), default=0, show_default=True)
@click.option('--num', type=click.IntRange(0, MAX_NUM), default=PAGE_SIZE, show_default=True)
@click.option('--all', 'fetch_all', is_flag=True, help='Follow pages until the end')
@click.option('--details', is_flag=True, help='Resolve every entry to full details')
@output_options
@click.pass_context
def list_apps(ctx, collection, category, start, num, fetch_all, details, json_output, pretty):
    """Apps of COLLECTION."""
    if fetch_all:
        op = (lambda s: s.get_detail_list(collection, category)) if details else (
            lambda s: s.get_list(collection, category))
    else:
        op = (lambda s: s.get_detail_list_chunk(collection, category, start, num)) if details else (
            lambda s: s.get_list_chunk(collection, category, start, num))
    emit(run_operation(ctx, op), json_output, pretty)


@cli.command('search', context_settings=CONTEXT_SETTINGS)
@click.argument('query')
@click.option('--price', type=click.Choice(list(PRICE_FILTERS)), default='all', show_default=True)
@click.option('--rating', type=click.Choice(list(RATING_FILTERS)), default='all', show_default=True)
@click.option('--details', is_flag=True, help='Resolve every result to full details')
@output_options
@click.pass_context
def search(ctx, query, price, rating, details, json_output, pretty):
    """Search apps matching QUERY."""
    if details:
        op = lambda s: s.get_detail_search(query, price, rating)  # noqa: E731
    else:
        op = lambda s: s.get_search(query, price, rating)  # noqa: E731
    emit(run_operation(ctx, op), json_output, pretty)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the effective configuration as JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
