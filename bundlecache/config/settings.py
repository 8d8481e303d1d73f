"""Process settings read from the environment."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class BundleCacheSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="BUNDLECACHE_", case_sensitive=False)

    config_file: Path = Path("bundlecache.yaml")
    log_level: str = "INFO"
    encoding: str = "utf-8"
