"""User-editable comparison settings.

Settings are an explicit, versioned value passed into every comparison call. The
surrounding application owns persistence; nothing in the core reads ambient state.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Literal

from pydantic import Field, field_validator

from horizon.domain.models.base import ValueObject, non_negative
from horizon.domain.models.fees import FeeConfig, LecapFeeConfig
from horizon.domain.models.market import clean_ticker

SETTINGS_SCHEMA_VERSION = 1

DEFAULT_FAVORITES = ("S16E6", "S17A6", "S27F6", "S29Y6", "S30A6", "S30O6", "S31G6")


class FavoriteSet(ValueObject):
    """De-duplicated favorite tickers, kept in insertion order."""

    tickers: tuple[str, ...] = ()

    @field_validator("tickers", mode="before")
    @classmethod
    def _dedupe(cls, value: Any) -> tuple[str, ...]:
        # Older payloads stored favorites as {ticker: true}
        if isinstance(value, Mapping):
            value = list(value.keys())
        if value is None or isinstance(value, str):
            value = [value] if value else []
        seen: dict[str, None] = {}
        for raw in value:
            ticker = clean_ticker(raw)
            if ticker:
                seen.setdefault(ticker, None)
        return tuple(seen)

    @classmethod
    def of(cls, tickers: Iterable[str] | Mapping[str, Any] | None) -> FavoriteSet:
        return cls(tickers=tickers)  # type: ignore[arg-type]

    def sorted(self) -> list[str]:
        """Tickers in display order."""
        return sorted(self.tickers)

    def toggle(self, ticker: str) -> FavoriteSet:
        """Return a new set with the ticker added, or removed if already present."""
        normalized = clean_ticker(ticker)
        if normalized in self.tickers:
            return FavoriteSet(tickers=tuple(t for t in self.tickers if t != normalized))
        return FavoriteSet(tickers=(*self.tickers, normalized))

    def __contains__(self, ticker: object) -> bool:
        return isinstance(ticker, str) and clean_ticker(ticker) in self.tickers

    def __len__(self) -> int:
        return len(self.tickers)


class ComparisonSettings(ValueObject):
    """Inputs of one comparison pass. Numeric values are clamped to be non-negative."""

    schema_version: int = Field(default=SETTINGS_SCHEMA_VERSION)
    capital: float = Field(default=1_000_000.0, description="Capital in ARS")
    days: int = Field(default=14, description="Comparison horizon in days")
    mm_rate_pct: float = Field(default=22.1, description="Money market TNA (%)")
    caucion_rate_pct: float = Field(default=40.0, description="Caución TNA (%)")
    extra_min_profit: float | None = Field(
        default=None, description="Minimum extra profit in ARS; None derives it from the horizon"
    )
    caucion_fees: FeeConfig = Field(
        default_factory=lambda: FeeConfig(
            broker_commission_pct=0.15, iva_pct=21.0, other_costs_pct=0.0
        )
    )
    lecap_fees: LecapFeeConfig = Field(default_factory=lambda: LecapFeeConfig(broker_pct=0.15))
    favorites: FavoriteSet = Field(default_factory=lambda: FavoriteSet.of(DEFAULT_FAVORITES))
    show_usd: bool = False
    base_days: Literal[360, 365] = 365

    @field_validator("capital", "mm_rate_pct", "caucion_rate_pct", mode="before")
    @classmethod
    def _clamp(cls, value: Any) -> float:
        return non_negative(value)

    @field_validator("days", mode="before")
    @classmethod
    def _clamp_days(cls, value: Any) -> int:
        return int(non_negative(value))

    @field_validator("extra_min_profit", mode="before")
    @classmethod
    def _clamp_extra(cls, value: Any) -> float | None:
        return None if value is None else non_negative(value)

    @field_validator("favorites", mode="before")
    @classmethod
    def _coerce_favorites(cls, value: Any) -> Any:
        if isinstance(value, FavoriteSet):
            return value
        if isinstance(value, Mapping) and "tickers" in value:
            return value
        return {"tickers": value}

    def with_market_pick(self, days: int, rate_pct: float) -> ComparisonSettings:
        """Adopt a quoted caución bucket as the horizon and caución rate."""
        return self.model_copy(
            update={"days": int(non_negative(days)), "caucion_rate_pct": non_negative(rate_pct)}
        )
