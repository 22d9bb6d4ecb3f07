# File: play_scout/parser/anchors.py
"""play_scout.parser.anchors: localized labels that mark fields of the "more info" block.

The detail page does not tag version, size, installs, etc. with stable
attributes; each row is recognised by its localized label instead.  Adding a
locale means adding one entry per field to :data:`DEFAULT_ANCHORS`.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Mapping, Optional

from play_scout.logger import LOGGER_NAME

__all__ = ["LocaleAnchorTable", "DEFAULT_ANCHORS", "ANCHORS", "MORE_INFO_FIELDS"]

logger = logging.getLogger(LOGGER_NAME)

DEFAULT_ANCHORS: Mapping[str, Mapping[str, str]] = {
    "last_updated": {
        "en_US": "Updated",
        "zh_CN": "更新日期",
        "zh_TW": "更新日期",
        "ja_JP": "更新日",
        "ko_KR": "업데이트 날짜",
    },
    "size": {
        "en_US": "Size",
        "zh_CN": "大小",
        "zh_TW": "大小",
        "ja_JP": "サイズ",
        "ko_KR": "크기",
    },
    "downloads": {
        "en_US": "Installs",
        "zh_CN": "安装次数",
        "zh_TW": "安裝次數",
        "ja_JP": "インストール",
        "ko_KR": "설치 수",
    },
    "version": {
        "en_US": "Current Version",
        "zh_CN": "当前版本",
        "zh_TW": "目前版本",
        "ja_JP": "現在のバージョン",
        "ko_KR": "현재 버전",
    },
    "supported_os": {
        "en_US": "Requires Android",
        "zh_CN": "Android 系统版本要求",
        "zh_TW": "Android 最低版本需求",
        "ja_JP": "Android 要件",
        "ko_KR": "필요한 Android 버전",
    },
    "content_rating": {
        "en_US": "Content Rating",
        "zh_CN": "内容分级",
        "zh_TW": "內容分級",
        "ja_JP": "コンテンツのレーティング",
        "ko_KR": "콘텐츠 등급",
    },
    "author": {
        "en_US": "Offered By",
        "zh_CN": "提供者",
        "zh_TW": "提供者",
        "ja_JP": "提供元",
        "ko_KR": "제공",
    },
    "author_link": {
        "en_US": "Visit website",
        "zh_CN": "访问网站",
        "zh_TW": "造訪網站",
        "ja_JP": "ウェブサイトにアクセス",
        "ko_KR": "웹사이트 방문",
    },
    "whatsnew": {
        "en_US": "What's New",
        "zh_CN": "新变化",
        "zh_TW": "最新異動",
        "ja_JP": "新機能",
        "ko_KR": "변경사항",
    },
}

#: Fields read from label-matched rows, in page order.
MORE_INFO_FIELDS = (
    "last_updated",
    "size",
    "downloads",
    "version",
    "supported_os",
    "content_rating",
    "author",
)


class LocaleAnchorTable:
    """Immutable ``field → locale → label`` lookup."""

    def __init__(self, anchors: Mapping[str, Mapping[str, str]] = DEFAULT_ANCHORS) -> None:
        self._anchors = MappingProxyType(
            {name: MappingProxyType(dict(labels)) for name, labels in anchors.items()}
        )

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(self._anchors)

    def locales(self, field: str) -> tuple[str, ...]:
        return tuple(self._anchors.get(field, {}))

    def resolve_locale(self, field: str, locale: str) -> Optional[str]:
        """Map *locale* to a key of the table for *field*.

        ``ja_JP`` matches itself, ``zh-tw`` becomes ``zh_TW`` and a bare
        language such as ``en`` picks the first table locale of that language.
        """
        labels = self._anchors.get(field)
        if not labels or not locale:
            return None
        if locale in labels:
            return locale
        lang, _, region = locale.replace("-", "_").partition("_")
        normalized = f"{lang.lower()}_{region.upper()}" if region else lang.lower()
        if normalized in labels:
            return normalized
        if region:
            return None
        for key in labels:
            if key.split("_", 1)[0] == normalized:
                return key
        return None

    def label_for(self, field: str, locale: str) -> Optional[str]:
        """Localized label of *field*, or None when field or locale is unknown."""
        key = self.resolve_locale(field, locale)
        if key is None:
            logger.debug("No anchor for field %r in locale %r", field, locale)
            return None
        return self._anchors[field][key]


ANCHORS = LocaleAnchorTable()
