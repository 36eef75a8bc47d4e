# portal/config.py
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing_extensions import Literal


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="RICKMORTY_", extra="ignore"
    )

    api_base_url: str = "https://rickandmortyapi.com/api"
    # Seconds per outbound request. The upstream pages have no timeout of their own.
    request_timeout: float = 10.0
    user_agent: str = "rickmorty-portal/1.0 (+https://rickandmortyapi.com)"
    # Treat any relation URL containing "null" as absent, as the old pages did.
    legacy_null_substring_check: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.strip().upper() if isinstance(value, str) else value


@lru_cache
def get_settings() -> Settings:
    return Settings()
