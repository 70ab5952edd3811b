"""Caución order-book selection: the best quoted rate per day-to-maturity bucket."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import structlog

from horizon.domain.models.comparison import OfferBucketView
from horizon.domain.models.fees import FeeConfig
from horizon.domain.models.market import MarketOffer
from horizon.domain.services.numbers import parse_iso_date
from horizon.domain.services.rates import DEFAULT_BASE_DAYS, compound_profit, net_caucion_profit

logger = structlog.get_logger(__name__)

MIN_BUCKET_DAYS = 1
MAX_BUCKET_DAYS = 30


def parse_offers(rows: Iterable[Any]) -> list[MarketOffer]:
    """Convert raw feed rows into offers, skipping anything that is not a mapping."""
    offers: list[MarketOffer] = []
    skipped = 0
    for row in rows:
        if isinstance(row, MarketOffer):
            offers.append(row)
        elif isinstance(row, Mapping):
            offers.append(MarketOffer.from_raw(row))
        else:
            skipped += 1
    if skipped:
        logger.debug("Skipped non-mapping caución rows", skipped=skipped)
    return offers


def _bucket(offer: MarketOffer) -> int | None:
    days = offer.days_to_maturity
    if days is None or not float(days).is_integer():
        return None
    bucket = int(days)
    if bucket < MIN_BUCKET_DAYS or bucket > MAX_BUCKET_DAYS:
        return None
    return bucket


def best_offers_by_day(
    offers: Iterable[MarketOffer | Mapping[str, Any]], currency: str = "ARS"
) -> dict[int, MarketOffer]:
    """Keep the highest settlement rate per day bucket (1..30) for one currency.

    Offers with a missing rate compare as 0; on equal rates the first offer seen
    stays. Offers with malformed or out-of-range days are discarded silently.

    Args:
        offers: Order-book rows, as offers or raw feed mappings
        currency: Denomination to keep (e.g. "ARS")

    Returns:
        Mapping of day bucket to its best offer, ordered by day
    """
    best: dict[int, MarketOffer] = {}
    discarded = 0
    for offer in parse_offers(offers):
        if offer.currency != currency:
            continue
        bucket = _bucket(offer)
        if bucket is None:
            discarded += 1
            continue
        rate = offer.settlement_rate or 0.0
        current = best.get(bucket)
        if current is None or rate > (current.settlement_rate or 0.0):
            best[bucket] = offer

    if discarded:
        logger.debug("Discarded caución offers outside day buckets", discarded=discarded)
    return dict(sorted(best.items()))


def offer_table(
    best: Mapping[int, MarketOffer],
    capital: float,
    mm_rate_pct: float,
    fee: FeeConfig,
    extra_min_profit: float,
    base_days: int = DEFAULT_BASE_DAYS,
) -> list[OfferBucketView]:
    """Rows of the best-offer table, each compared with the money market for its days.

    A bucket is "hot" when placing the capital at its rate beats the money market
    by at least ``extra_min_profit`` after fees.
    """
    rows: list[OfferBucketView] = []
    for days in sorted(best):
        offer = best[days]
        rate = offer.settlement_rate
        net: float | None = None
        extra: float | None = None
        if rate is not None:
            net = net_caucion_profit(capital, days, rate, fee, base_days).net
            extra = net - compound_profit(capital, days, mm_rate_pct, base_days).gain
        rows.append(
            OfferBucketView(
                days=days,
                rate=rate,
                maturity_date=parse_iso_date(offer.maturity_date),
                caucion_net=net,
                extra_vs_money_market=extra,
                is_hot=extra is not None and extra >= extra_min_profit,
            )
        )
    return rows
