from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_COUNTRY_ENDPOINTS: List[str] = [
    "https://restcountries.com/v3.1/all?fields=name,flags,currencies,region,subregion,population,capital,languages,cca2",
    "https://restcountries.com/v3.1/all",
    "https://restcountries.com/v2/all?fields=name,flags,currencies,region,subregion,population,capital,languages,alpha2Code",
]


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG,
    RATES_CACHE_TTL_SECONDS, COUNTRY_API_ENDPOINTS as a JSON list).
    """

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Basic app metadata
    app_name: str = "Wealth Ranker API"
    debug: bool = False
    version: str = "1.0.0"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: List[str] = ["*"]

    # Upstream APIs
    exchange_api_base_url: str = "https://api.exchangerate-api.com/v4/latest"
    country_api_endpoints: List[str] = Field(
        default_factory=lambda: list(DEFAULT_COUNTRY_ENDPOINTS)
    )
    http_timeout_seconds: float = 10.0
    user_agent: str = "WealthRanker/1.0"

    # Caching
    rates_cache_ttl_seconds: int = 3600  # 1 hour
    countries_cache_ttl_seconds: int = 86400  # 24 hours

    @field_validator(
        "http_timeout_seconds", "rates_cache_ttl_seconds", "countries_cache_ttl_seconds"
    )
    @classmethod
    def positive(cls, v):
        if v <= 0:
            raise ValueError("must be positive")
        return v

    @field_validator("country_api_endpoints")
    @classmethod
    def at_least_one_endpoint(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("at least one country endpoint is required")
        return v

    @field_validator("exchange_api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    return Settings()
