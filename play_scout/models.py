# File: play_scout/models.py
"""play_scout.models: value objects produced by the page extractors."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(slots=True)
class AppSummary:
    """One card of a listing or search result page."""

    id: Optional[str]
    url: Optional[str]
    title: Optional[str]
    image_url: Optional[str]
    author: Optional[str]
    rating: float = 0.0
    price: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class AppDetail:
    """Everything the detail page tells about one app; unknown fields stay None."""

    id: str
    url: Optional[str] = None
    title: Optional[str] = None
    image_url: Optional[str] = None
    author: Optional[str] = None
    rating: Optional[float] = None
    price: Optional[str] = None
    categories: List[str] = field(default_factory=list)
    full_price: Optional[str] = None
    screenshots: List[str] = field(default_factory=list)
    description_text: Optional[str] = None
    description_html: Optional[str] = None
    votes: Optional[int] = None
    last_updated: Optional[str] = None
    size: Optional[str] = None
    downloads: Optional[str] = None
    version: Optional[str] = None
    supported_os: Optional[str] = None
    content_rating: Optional[str] = None
    author_link: Optional[str] = None
    whatsnew: Optional[str] = None
    video_link: Optional[str] = None
    video_image: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["AppSummary", "AppDetail"]
