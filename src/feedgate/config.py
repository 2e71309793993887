"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (FEEDGATE__SERVER__PORT=8080)
  2. feedgate.yaml          (searched in cwd, then platform config dir)
  3. Hardcoded defaults

The config file is optional; all fields have sensible defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)


def _find_config_file() -> str | None:
    """Return the path of the first feedgate.yaml found, or None."""
    candidates = [
        Path("feedgate.yaml"),
        Path(platformdirs.user_config_dir("feedgate")) / "feedgate.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = ["*"]


class CacheSettings(BaseModel):
    default_ttl_seconds: int = 300
    # Interval of the background sweep; expiry is enforced on read regardless
    check_period_seconds: int = 60


class FetcherSettings(BaseModel):
    timeout_seconds: float = 30.0
    max_connections: int = 20
    max_keepalive_connections: int = 10


class NewsSourceSettings(BaseModel):
    top_stories_url: str = "https://hacker-news.firebaseio.com/v0/topstories.json"
    item_url: str = "https://hacker-news.firebaseio.com/v0/item/{id}.json"
    max_story_ids: int = 100
    max_items: int = 100
    ttl_seconds: int | None = None  # None falls back to cache.default_ttl_seconds


class GithubSourceSettings(BaseModel):
    search_url: str = "https://api.github.com/search/repositories"
    lookback_days: int = 7
    per_page: int = 100
    max_items: int = 100
    ttl_seconds: int | None = 900


class RedditSourceSettings(BaseModel):
    base_url: str = "https://www.reddit.com"
    channels: list[str] = [
        "programming",
        "technology",
        "webdev",
        "javascript",
        "python",
        "machinelearning",
    ]
    per_channel_limit: int = 20
    max_items: int = 100
    ttl_seconds: int | None = 600


class ResearchSourceSettings(BaseModel):
    query_url: str = "https://export.arxiv.org/api/query"
    categories: list[str] = ["cs.AI", "cs.LG", "cs.CV", "cs.CL", "cs.CR"]
    per_category_limit: int = 20
    max_items: int = 100
    ttl_seconds: int | None = 1800


class SourcesSettings(BaseModel):
    news: NewsSourceSettings = NewsSourceSettings()
    github: GithubSourceSettings = GithubSourceSettings()
    reddit: RedditSourceSettings = RedditSourceSettings()
    research: ResearchSourceSettings = ResearchSourceSettings()


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: FEEDGATE__CACHE__DEFAULT_TTL_SECONDS=60
        env_prefix="FEEDGATE__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    server: ServerSettings = ServerSettings()
    cache: CacheSettings = CacheSettings()
    fetcher: FetcherSettings = FetcherSettings()
    sources: SourcesSettings = SourcesSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
