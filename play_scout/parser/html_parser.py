# === FILE: play_scout/parser/html_parser.py ===
"""HTML helpers for play_scout.

* :func:`parse_html` turns a response body into a queryable
  :class:`~bs4.BeautifulSoup` document (CSS selectors via soupsieve).
* :class:`TextRenderer` converts a node tree into plain text that keeps
  paragraph and list structure.
* :func:`clean_description` unwraps redirect links in place and returns both
  the cleaned HTML fragment and its plain-text rendering.

Text nodes and element nodes are the two node kinds the renderer visits; any
other node (comments, doctype, CDATA) renders as an empty string.
"""
from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

from play_scout.utils import unwrap_redirect

__all__: Sequence[str] = (
    "Description",
    "TextRenderer",
    "clean_description",
    "html_to_text",
    "normalize_paragraphs",
    "parse_html",
    "text_of",
)

# ASCII whitespace only: NBSP and U+3000 are content
_WHITESPACE_RE = re.compile(r"[ \t\n\r\f\v]+")
_PARAGRAPH_RE = re.compile(r"\n{3,}")

_BLOCK_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6", "p", "ul", "div"})


def parse_html(markup: str | bytes) -> BeautifulSoup:
    """Parse a response body; html.parser keeps the markup nesting as served."""
    return BeautifulSoup(markup, "html.parser")


def text_of(node: Optional[Tag]) -> Optional[str]:
    """Text content of *node* with whitespace runs collapsed, or None when the node is missing.

    Inline markup keeps the spaces around it: ``Super <b>Cool</b> App`` reads
    ``Super Cool App``.
    """
    if node is None:
        return None
    return _WHITESPACE_RE.sub(" ", node.get_text()).strip(" ")


def normalize_paragraphs(text: str) -> str:
    """Collapse three or more consecutive newlines into one blank line."""
    return _PARAGRAPH_RE.sub("\n\n", text)


class TextRenderer:
    """Recursive HTML → plain text visitor."""

    def render(self, node: PageElement) -> str:
        if isinstance(node, PreformattedString):
            return ""
        if isinstance(node, NavigableString):
            return self.visit_text(node)
        if isinstance(node, Tag):
            return self.visit_element(node)
        return ""

    def visit_text(self, node: NavigableString) -> str:
        return _WHITESPACE_RE.sub(" ", str(node))

    def visit_element(self, node: Tag) -> str:
        text = "".join(self.render(child) for child in node.children)
        name = (node.name or "").lower()
        if name in _BLOCK_TAGS:
            text = f"\n\n{text}\n\n"
        elif name == "li":
            text = f"- {text}\n"
        elif name == "br":
            text = f"{text}\n"
        return normalize_paragraphs(text)


_renderer = TextRenderer()


def html_to_text(node: Optional[PageElement]) -> Optional[str]:
    """Render *node* and trim the result; None stays None."""
    if node is None:
        return None
    return _renderer.render(node).strip(" \n")


@dataclass(slots=True)
class Description:
    html: Optional[str]
    text: Optional[str]


def clean_description(node: Optional[Tag]) -> Description:
    """Rewrite redirect-wrapped links of *node* and capture html + text.

    The node is modified in place, so the captured HTML already holds the
    unwrapped targets.
    """
    if node is None:
        return Description(html=None, text=None)
    for link in node.find_all("a", href=True):
        link["href"] = unwrap_redirect(str(link["href"]))
    return Description(html=node.decode_contents(), text=html_to_text(node))
