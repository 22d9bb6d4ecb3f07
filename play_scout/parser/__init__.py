"""play_scout.parser: turning store pages into records."""

from .anchors import ANCHORS, LocaleAnchorTable
from .detail import extract_detail
from .html_parser import TextRenderer, clean_description, html_to_text, parse_html
from .listing import extract_categories, extract_listing

__all__ = [
    "ANCHORS",
    "LocaleAnchorTable",
    "TextRenderer",
    "clean_description",
    "extract_categories",
    "extract_detail",
    "extract_listing",
    "html_to_text",
    "parse_html",
]
