"""Application settings loaded from environment variables and ``.env``."""

from __future__ import annotations

import json
from functools import lru_cache
from typing import Annotated, Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from horizon.domain.models.fees import FeeConfig, LecapFeeConfig
from horizon.domain.models.settings import DEFAULT_FAVORITES, ComparisonSettings, FavoriteSet


class Settings(BaseSettings):
    """Horizon settings. Every field can be set as ``HORIZON_<FIELD_NAME>``."""

    model_config = SettingsConfigDict(
        env_prefix="HORIZON_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Feeds
    byma_cauciones_url: str = (
        "https://open.bymadata.com.ar/vanoms-be-core/rest/api/bymadata/free/cauciones"
    )
    dolar_oficial_url: str = "https://dolarapi.com/v1/dolares/oficial"
    lecaps_prices_url: str = "https://www.acuantoesta.com.ar/api/lecaps-prices"
    lecaps_table_url: str | None = Field(
        default=None, description="JSON endpoint of the scraped LECAP table, if deployed"
    )
    http_timeout_seconds: float = 30.0
    user_agent: str = "horizon/0.1"

    # Comparison defaults
    capital: float = 1_000_000.0
    days: int = 14
    mm_rate_pct: float = 22.1
    caucion_rate_pct: float = 40.0
    extra_min_profit: float | None = None
    caucion_broker_pct: float = 0.15
    caucion_iva_pct: float = 21.0
    caucion_other_costs_pct: float = 0.0
    lecap_broker_pct: float = 0.15
    favorites: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_FAVORITES),
        description="Comma-separated tickers, or a JSON array",
    )
    base_days: Literal[360, 365] = 365

    @field_validator("favorites", mode="before")
    @classmethod
    def _split_favorites(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value
        text = value.strip()
        if text.startswith("["):
            return json.loads(text)
        return [part.strip() for part in text.split(",") if part.strip()]

    def default_comparison(self) -> ComparisonSettings:
        """Comparison settings seeded from the environment."""
        return ComparisonSettings(
            capital=self.capital,
            days=self.days,
            mm_rate_pct=self.mm_rate_pct,
            caucion_rate_pct=self.caucion_rate_pct,
            extra_min_profit=self.extra_min_profit,
            caucion_fees=FeeConfig(
                broker_commission_pct=self.caucion_broker_pct,
                iva_pct=self.caucion_iva_pct,
                other_costs_pct=self.caucion_other_costs_pct,
            ),
            lecap_fees=LecapFeeConfig(broker_pct=self.lecap_broker_pct),
            favorites=FavoriteSet.of(self.favorites),
            base_days=self.base_days,
        )


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
