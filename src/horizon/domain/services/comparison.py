"""One synchronous comparison pass from settings and a market snapshot."""

from __future__ import annotations

import structlog

from horizon.domain.models.comparison import ComparisonResult
from horizon.domain.models.feed_results import MarketSnapshot
from horizon.domain.models.fees import Position
from horizon.domain.models.settings import ComparisonSettings
from horizon.domain.services.lecaps import best_bond_for_horizon, derive_metrics
from horizon.domain.services.offers import best_offers_by_day, offer_table
from horizon.domain.services.rates import (
    breakeven_rate,
    compound_profit,
    net_caucion_profit,
)
from horizon.domain.services.recommendation import auto_min_extra_profit, recommend

logger = structlog.get_logger(__name__)


def resolve_extra_min_profit(settings: ComparisonSettings) -> float:
    """The configured hurdle, or the automatic one for the capital and horizon."""
    if settings.extra_min_profit is not None:
        return settings.extra_min_profit
    return auto_min_extra_profit(settings.capital, settings.days)


def compare(
    settings: ComparisonSettings,
    snapshot: MarketSnapshot | None = None,
    currency: str = "ARS",
) -> ComparisonResult:
    """Run the full comparison.

    Feeds missing from the snapshot are treated as empty, so the caución versus
    money market figures are always produced and only the feed-dependent parts
    (best-offer table, LECAP metrics, USD rate) come back empty.

    Args:
        settings: Capital, horizon, rates, fees and favorites
        snapshot: Market data; None means no feed has been fetched yet
        currency: Caución denomination to select offers for

    Returns:
        The comparison result
    """
    snapshot = snapshot or MarketSnapshot()
    base_days = settings.base_days
    hurdle = resolve_extra_min_profit(settings)
    fees = settings.caucion_fees

    caucion = net_caucion_profit(
        settings.capital, settings.days, settings.caucion_rate_pct, fees, base_days
    )
    money_market = compound_profit(settings.capital, settings.days, settings.mm_rate_pct, base_days)
    diff = caucion.net - money_market.gain
    breakeven = breakeven_rate(
        settings.capital,
        settings.days,
        settings.mm_rate_pct,
        fees,
        hurdle,
        base_days,
        reference_compounds=True,
    )

    best = best_offers_by_day(snapshot.offers, currency)
    table = offer_table(best, settings.capital, settings.mm_rate_pct, fees, hurdle, base_days)

    position = Position(
        capital=settings.capital, days=settings.days, instrument_rate_pct=settings.mm_rate_pct
    )
    bonds = derive_metrics(
        settings.favorites,
        snapshot.bond_rows,
        position,
        settings.lecap_fees.broker_pct,
        reinvest_rate_pct=settings.mm_rate_pct,
        base_days=base_days,
    )
    recommendation = recommend(money_market.gain, caucion.net, bonds, hurdle)

    usd_quote = snapshot.quote if settings.show_usd else None
    if usd_quote is not None and not usd_quote.sell:
        usd_quote = None

    logger.debug(
        "Comparison computed",
        winner=recommendation.winner.value,
        offers=len(best),
        bonds=len(bonds),
        failed_feeds=sorted(snapshot.errors),
    )

    return ComparisonResult(
        best_offers=best,
        offer_table=table,
        caucion=caucion,
        money_market=money_market,
        caucion_vs_money_market=diff,
        breakeven_rate_pct=breakeven,
        caucion_worth_it=diff >= hurdle,
        extra_min_profit=hurdle,
        bonds=bonds,
        best_bond=best_bond_for_horizon(bonds),
        recommendation=recommendation,
        usd_rate=usd_quote.sell if usd_quote is not None else None,
        usd_quote=usd_quote,
    )
