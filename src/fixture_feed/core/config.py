from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # HTTP
    user_agent: str = "FixtureFusion/1.0 (+github.com)"
    http_timeout_s: float = 30.0
    http_connect_timeout_s: float = 10.0

    # espn
    espn_base_url: str = "https://site.api.espn.com/apis/site/v2/sports"

    # liquipedia
    liquipedia_api_url: str = "https://liquipedia.net/counterstrike/api.php"
    liquipedia_base_url: str = "https://liquipedia.net"
    liquipedia_page: str = "Legacy"

    # feed
    feed_cache_ttl_s: float = Field(default=60.0 * 60.0, gt=0)
    feed_require_all_sources: bool = False

    log_level: str = "INFO"


settings = Settings()
