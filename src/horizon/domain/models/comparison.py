"""Comparison results: profits, per-bond metrics and the recommendation."""

from __future__ import annotations

from datetime import date
from enum import Enum

from pydantic import Field

from horizon.domain.models.base import ValueObject
from horizon.domain.models.market import ExchangeRateQuote, MarketOffer


class InstrumentKind(str, Enum):
    """Placements the engine can recommend."""

    MONEY_MARKET = "money_market"
    CAUCION = "caucion"
    LECAP = "lecap"


class CaucionProfit(ValueObject):
    """Simple-interest caución result with a flat cost on capital."""

    gross: float
    cost: float
    net: float


class CompoundProfit(ValueObject):
    """Daily-compounding result."""

    gain: float
    final: float


class OfferBucketView(ValueObject):
    """One row of the best-offer table, compared against the money market."""

    days: int
    rate: float | None = Field(default=None, description="Best settlement rate (TNA %)")
    maturity_date: date | None = None
    caucion_net: float | None = None
    extra_vs_money_market: float | None = None
    is_hot: bool = False


class DerivedBondMetrics(ValueObject):
    """Return metrics for one favorite LECAP. None marks a metric that is not computable."""

    ticker: str
    maturity_label: str = ""
    maturity_days: float | None = None
    price: float | None = None
    price_change_pct: float | None = None
    redemption_value: float | None = None
    price_with_fee: float | None = None
    direct_return: float | None = None
    annualized_rate_pct: float | None = None
    periodic_rate_pct: float | None = None
    units_bought: int = 0
    invested_amount: float = 0.0
    leftover_capital: float = 0.0
    payout_at_maturity: float | None = None
    gain_amount: float | None = None
    horizon_eligible: bool = False
    horizon_adjusted_gain: float | None = None


class Recommendation(ValueObject):
    """Winner among the three placements plus the extras that decided it."""

    winner: InstrumentKind
    label: str
    detail: str | None = None
    supporting_ticker: str | None = None
    supporting_days: float | None = None
    caucion_extra: float
    lecap_extra: float | None = None


class ComparisonResult(ValueObject):
    """Everything the presentation layer needs from one comparison pass."""

    best_offers: dict[int, MarketOffer] = Field(default_factory=dict)
    offer_table: list[OfferBucketView] = Field(default_factory=list)
    caucion: CaucionProfit
    money_market: CompoundProfit
    caucion_vs_money_market: float
    breakeven_rate_pct: float = Field(..., description="TNA the caución needs; inf if none")
    caucion_worth_it: bool
    extra_min_profit: float
    bonds: list[DerivedBondMetrics] = Field(default_factory=list)
    best_bond: DerivedBondMetrics | None = None
    recommendation: Recommendation
    usd_rate: float | None = Field(default=None, description="ARS per USD when shown in USD")
    usd_quote: ExchangeRateQuote | None = Field(
        default=None, description="Official quote used for USD display, when enabled"
    )
