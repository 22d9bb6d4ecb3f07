# === FILE: play_scout/config.py ===
"""
Loading and validation of the scraper configuration.
Pydantic describes the schema; YAML or JSON files feed it.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

__all__ = ["ScraperConfig", "load_config", "DEFAULT_BASE_URL"]

DEFAULT_BASE_URL = "https://play.google.com"


class ScraperConfig(BaseModel):
    """Settings for one scraper instance."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: HttpUrl = Field(DEFAULT_BASE_URL, description="Store origin.")
    root_path: str = Field("/store", description="Fixed path prefix of every store page.")
    delay_ms: int = Field(1000, ge=0, description="Minimum delay between two requests (ms).")
    default_lang: str = Field("en", min_length=1, description="Value of the hl parameter.")
    default_country: str = Field("us", min_length=1, description="Value of the gl parameter.")
    timeout: float = Field(30.0, gt=0, description="Timeout of a single request (seconds).")
    user_agent: str = Field("PlayScout/1.0", min_length=1, description="User-Agent header.")
    search_max_pages: int = Field(50, ge=1, description="Upper bound of search result pages.")

    @field_validator("base_url", mode="before")
    def _strip_trailing_slash(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    @field_validator("root_path")
    def _normalize_root_path(cls, v: str) -> str:
        return "/" + v.strip("/") if v.strip("/") else ""

    @property
    def origin(self) -> str:
        """Base URL without the trailing slash pydantic adds to bare hosts."""
        return str(self.base_url).rstrip("/")


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None] = None) -> ScraperConfig:
    """
    Read YAML or JSON and return a validated ScraperConfig.

    Without *path* the optional ``configs/default.yaml`` is used; when that
    file does not exist either, the built-in defaults are returned.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return ScraperConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return ScraperConfig(**data)
