from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

_PROJECT_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _PROJECT_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Blog Search"
    app_version: str = "0.1.0"
    app_env: str = "development"

    # Elasticsearch connection
    elasticsearch_url: str = "http://localhost:9200"
    elasticsearch_index: str = "blog"
    elasticsearch_username: str = ""
    elasticsearch_password: str = ""
    elasticsearch_timeout: float = 10.0
    # Refresh the index after every write so reads in the same session see it
    elasticsearch_refresh: bool = True

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_http: str = "WARNING"          # httpx / httpcore outbound HTTP
    log_level_search: str = "INFO"           # Elasticsearch adapter

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance, reads .env once."""
    return Settings()
