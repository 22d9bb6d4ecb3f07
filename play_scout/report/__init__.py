# File: play_scout/report/__init__.py
"""play_scout.report: serialisation of scraped records used by the CLI."""

from .json_report import dumps, render_json, to_jsonable

__all__ = ["dumps", "render_json", "to_jsonable"]
