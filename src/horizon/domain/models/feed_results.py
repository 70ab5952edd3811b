"""Per-source feed results and the market snapshot they make up."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

from horizon.domain.models.market import BondRow, ExchangeRateQuote, MarketOffer

T = TypeVar("T")


# Tagged result so that one failing source never aborts the whole comparison
class FeedResult(BaseModel, Generic[T]):
    """Result from fetching one feed with success/error handling."""

    success: bool = Field(..., description="Whether the fetch succeeded")
    data: T | None = Field(default=None, description="Parsed feed payload")
    error: str | None = Field(default=None, description="Error message if the fetch failed")
    metadata: Any = Field(default_factory=dict, description="Additional metadata")

    @classmethod
    def ok(cls, data: T, **metadata: Any) -> FeedResult[T]:
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def failed(cls, error: str, **metadata: Any) -> FeedResult[T]:
        return cls(success=False, data=None, error=error, metadata=metadata)

    @classmethod
    def absent(cls) -> FeedResult[T]:
        return cls(success=False, data=None, error=None, metadata={"reason": "not_fetched"})


OfferFeed = FeedResult[list[MarketOffer]]
ExchangeRateFeed = FeedResult[ExchangeRateQuote]
BondFeed = FeedResult[list[BondRow]]


class MarketSnapshot(BaseModel):
    """Point-in-time snapshot of the three feeds; any of them may be missing."""

    caucion: OfferFeed = Field(default_factory=OfferFeed.absent)
    exchange_rate: ExchangeRateFeed = Field(default_factory=ExchangeRateFeed.absent)
    bonds: BondFeed = Field(default_factory=BondFeed.absent)
    fetched_at: datetime | None = None

    @property
    def offers(self) -> list[MarketOffer]:
        return list(self.caucion.data or [])

    @property
    def bond_rows(self) -> list[BondRow]:
        return list(self.bonds.data or [])

    @property
    def quote(self) -> ExchangeRateQuote | None:
        return self.exchange_rate.data

    @property
    def errors(self) -> dict[str, str]:
        """Error message per failed source."""
        out: dict[str, str] = {}
        for name in ("caucion", "exchange_rate", "bonds"):
            result: FeedResult[Any] = getattr(self, name)
            if result.error:
                out[name] = result.error
        return out
