# play_scout/crawler/models.py
"""
Request description used by the fetcher.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Sequence, Tuple, Union
from urllib.parse import urlencode

ParamValue = Union[str, int]


@dataclass(frozen=True, slots=True)
class RequestDescriptor:
    """Path segments below the store root plus query parameters of one GET."""

    path: Tuple[str, ...]
    params: Mapping[str, ParamValue] = field(default_factory=dict)

    @classmethod
    def of(cls, path: Union[str, Sequence[str]], params: Mapping[str, ParamValue] | None = None) -> RequestDescriptor:
        segments = (path,) if isinstance(path, str) else tuple(path)
        return cls(segments, dict(params or {}))

    def url(self, origin: str, root_path: str = "/store") -> str:
        """``origin + root_path + '/' + path`` with slashes trimmed, then the query."""
        path = "/".join(self.path).strip("/")
        url = origin.rstrip("/") + (root_path + "/" + path).rstrip("/")
        query = urlencode({k: v for k, v in self.params.items() if v is not None})
        return f"{url}?{query}" if query else url
