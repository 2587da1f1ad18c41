# === FILE: site_warmer/config.py ===
"""
Loading and validation of the SiteWarmer crawl configuration.

Pydantic describes the schema; values come from an optional YAML/JSON file
and are overridden by command-line options.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Literal, Union
from urllib.parse import urlparse

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from site_warmer import __version__

CrawlMode = Literal["sitemap", "links"]

DEFAULT_USER_AGENT = f"SiteWarmer/{__version__}"


class HttpSettings(BaseModel):
    """Options of the single HTTP session shared by every request of a run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    timeout: float = Field(10.0, gt=0, description="Per-request timeout (seconds).")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="User-Agent header.")


class CrawlConfig(BaseModel):
    """Configuration of one invocation: which sites, how, and how wide."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    mode: CrawlMode = Field("sitemap", description="Where targets come from.")
    sites: list[str] = Field(..., min_length=1, description="Site roots, crawled in order.")
    css3selector: str = Field("a", min_length=1, description="Selector used in links mode.")
    concurrency: int = Field(10, ge=1, description="Maximum requests in flight per site.")
    sitemap_path: str = Field("/sitemap.xml", description="Sitemap location relative to a site.")
    http: HttpSettings = Field(default_factory=HttpSettings)

    @field_validator("sites", mode="before")
    def _check_sites(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = [v]
        if not isinstance(v, (list, tuple)):
            return v
        sites = []
        for raw in v:
            if not isinstance(raw, str):
                raise ValueError(f"site must be a string, got {type(raw).__name__}")
            site = raw.strip().rstrip("/")
            parsed = urlparse(site)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                raise ValueError(f"site must be an absolute http(s) URL: {raw!r}")
            sites.append(site)
        return sites

    @field_validator("sitemap_path")
    def _leading_slash(cls, v: str) -> str:
        v = v.strip()
        return v if v.startswith("/") else "/" + v


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of the YAML config must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of the JSON config must be a mapping, got {type(data).__name__}")
    return data


def read_config_file(path: Union[str, Path]) -> dict[str, Any]:
    """Read a YAML or JSON config file into a plain mapping (not validated)."""
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> CrawlConfig:
    """
    Build a validated CrawlConfig.

    Values are taken from *path* (YAML or JSON, optional) and then from
    *overrides*; an override of ``None`` means "not given". ``timeout`` and
    ``user_agent`` are HTTP settings and land in the ``http`` section.
    """
    data = read_config_file(path) if path is not None else {}

    http = dict(data.get("http") or {})
    for key in ("timeout", "user_agent"):
        if key in data:
            http[key] = data.pop(key)
        if overrides.get(key) is not None:
            http[key] = overrides.pop(key)
        overrides.pop(key, None)
    if http:
        data["http"] = http

    for key, value in overrides.items():
        if value is not None:
            data[key] = value

    return CrawlConfig(**data)


__all__ = ["CrawlConfig", "CrawlMode", "HttpSettings", "load_config", "read_config_file"]
