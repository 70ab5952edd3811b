"""Market snapshot domain models."""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import Field

from horizon.domain.models.base import ValueObject, coerce_float

# A bond-table row keyed by (drifting) header text, plus the distinguished "_ticker" key.
BondRow = dict[str, str]

TICKER_KEY = "_ticker"

_TICKER_SUFFIX = re.compile(r"(LECAP|BONCAP|BONODUAL|BONODUALES)$", re.IGNORECASE)
_SPACES = re.compile(r"\s+")


def clean_ticker(raw: Any) -> str:
    """Upper-case a ticker, drop spaces and any instrument-type suffix glued to it."""
    text = "" if raw is None else str(raw)
    ticker = _SPACES.sub("", text).upper()
    return _TICKER_SUFFIX.sub("", ticker)


class MarketOffer(ValueObject):
    """A caución order-book row. Every field may be missing in the feed."""

    currency: str | None = Field(default=None, alias="denominationCcy")
    days_to_maturity: float | None = Field(default=None, alias="daysToMaturity")
    maturity_date: str | None = Field(
        default=None, alias="maturityDate", description="Maturity date as YYYY-MM-DD"
    )
    settlement_rate: float | None = Field(
        default=None, alias="settlementPrice", description="Settlement rate (TNA %)"
    )
    traded_qty: float | None = Field(default=None, alias="tradedQty")

    @classmethod
    def from_raw(cls, row: Mapping[str, Any]) -> MarketOffer:
        """Build an offer from a raw feed row, turning unusable values into None."""
        currency = row.get("denominationCcy", row.get("currency"))
        maturity = row.get("maturityDate", row.get("maturity_date"))
        return cls(
            currency=str(currency) if currency is not None else None,
            days_to_maturity=coerce_float(row.get("daysToMaturity", row.get("days_to_maturity"))),
            maturity_date=str(maturity) if maturity is not None else None,
            settlement_rate=coerce_float(row.get("settlementPrice", row.get("settlement_rate"))),
            traded_qty=coerce_float(row.get("tradedQty", row.get("traded_qty"))),
        )


class ExchangeRateQuote(ValueObject):
    """Official USD/ARS quote, used only to display amounts in dollars."""

    buy: float | None = Field(default=None, description="Buy (compra) rate")
    sell: float | None = Field(default=None, description="Sell (venta) rate")
    updated_at: datetime | None = Field(default=None, description="Last update timestamp")


class PriceQuote(ValueObject):
    """Live LECAP quote from the price map."""

    price: float | None = Field(default=None, description="Last price as quoted by the feed")
    change: float | None = Field(default=None, description="Daily change (%)")
