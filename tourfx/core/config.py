from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

RATE_PROVIDERS = {"open-exchange-rates", "static"}


class Settings(BaseSettings):
    """Application settings loaded from environment with defaults.

    Environment variable mapping follows pydantic's rules (e.g., APP_NAME, DEBUG,
    OPEN_EXCHANGE_RATES_API_KEY, RATES_CACHE_TTL_SECONDS). The API key may also be
    supplied under the storefront's NEXT_PUBLIC_OPEN_EXCHANGE_RATES_API_KEY name.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # Basic app metadata
    app_name: str = "Tour Rates Service"
    debug: bool = False
    version: str = "0.1.0"

    # Exchange rates / caching
    # Missing key is a supported mode: fallback rates only, no network.
    open_exchange_rates_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(
            "open_exchange_rates_api_key",
            "next_public_open_exchange_rates_api_key",
        ),
    )
    exchange_rates_url: str = "https://openexchangerates.org/api/latest.json"
    rates_cache_ttl_seconds: int = Field(default=3600, gt=0)  # 1 hour
    http_timeout_seconds: float = 10.0

    # Allowed: 'open-exchange-rates' (live with fallback), 'static' (fallback table only)
    exchange_rate_provider: str = "open-exchange-rates"

    @property
    def api_enabled(self) -> bool:
        return bool(self.open_exchange_rates_api_key)

    def init_post_load(self) -> None:
        """Validate derived configuration after loading."""
        if self.exchange_rate_provider not in RATE_PROVIDERS:
            raise ValueError(
                f"Unsupported exchange_rate_provider '{self.exchange_rate_provider}'. Allowed: {RATE_PROVIDERS}"
            )


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.init_post_load()
    return settings
