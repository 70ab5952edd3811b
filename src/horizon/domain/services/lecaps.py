"""LECAP table reconciliation and per-ticker return metrics.

Bond rows arrive keyed by whatever headers the scraped table had that day, merged
with a live price map. Every numeric field is looked up through
:func:`~horizon.domain.services.fields.resolve_field` and parsed leniently, so a
missing or garbled column only blanks the metrics that depend on it.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import structlog

from horizon.domain.models.base import coerce_float, non_negative
from horizon.domain.models.comparison import DerivedBondMetrics
from horizon.domain.models.fees import Position
from horizon.domain.models.market import TICKER_KEY, BondRow, PriceQuote, clean_ticker
from horizon.domain.models.settings import FavoriteSet
from horizon.domain.services.fields import resolve_field
from horizon.domain.services.numbers import (
    format_decimal_comma,
    parse_locale_number,
    parse_signed_number,
)
from horizon.domain.services.rates import (
    DEFAULT_BASE_DAYS,
    bond_annualized_rate,
    bond_periodic_rate,
    compound_profit,
)

logger = structlog.get_logger(__name__)

TICKER_HEADER = "Ticker"
PRICE_HEADER = "Precio (1VN)"
CHANGE_HEADER = "Cambio"

# Semantic field -> header candidates, highest priority first
TICKER_FIELDS = ("Ticker",)
MATURITY_FIELDS = ("Vencimiento", "Vto")
DAYS_FIELDS = ("Días", "Dias")
PRICE_FIELDS = ("Precio (1VN)", "Precio")
CHANGE_FIELDS = ("Cambio", "Var.", "Var")
REDEMPTION_FIELDS = ("A recibir al vto. (1VN)", "A recibir al vto", "A recibir")

# Section header rows the table interleaves with real tickers
_NON_TICKERS = frozenset({"BONOSDUALES"})
_SPACES = re.compile(r"\s+")


def _clean_cell(value: Any) -> str:
    text = "" if value is None else str(value)
    return _SPACES.sub(" ", text.replace("\u00a0", " ")).strip()


def price_to_face_value(raw: float) -> float | None:
    """Express a live price per 1 VN.

    LECAP/BONCAP prices are quoted per 100 VN (118.05 means 1.1805 per VN); small
    values are already per VN.
    """
    if not math.isfinite(raw):
        return None
    if 10 <= raw < 1000:
        return raw / 100
    return raw


def _as_quote(value: Any) -> PriceQuote | None:
    if isinstance(value, PriceQuote):
        return value
    if isinstance(value, Mapping):
        return PriceQuote(
            price=coerce_float(value.get("price")),
            change=coerce_float(value.get("change")),
        )
    return None


def _apply_quote(row: BondRow, quote: PriceQuote | None) -> BondRow:
    if quote is None:
        return row
    merged = dict(row)
    face_value = price_to_face_value(quote.price) if quote.price is not None else None
    if face_value is not None:
        merged[PRICE_HEADER] = format_decimal_comma(face_value, 4)
    else:
        merged.setdefault(PRICE_HEADER, "")
    if quote.change is not None:
        merged[CHANGE_HEADER] = f"{quote.change:.2f}%"
    else:
        merged.setdefault(CHANGE_HEADER, "")
    return merged


def row_ticker(row: Mapping[str, Any]) -> str:
    """Ticker of a bond row, from the distinguished key or the ticker column."""
    return clean_ticker(row.get(TICKER_KEY) or resolve_field(row, TICKER_FIELDS))


def reconcile_bond_rows(
    table_rows: Iterable[Mapping[str, Any]] | None,
    price_map: Mapping[str, Any] | None,
) -> list[BondRow]:
    """Merge scraped table rows with the live price map.

    Table rows keep all their columns; price and change are overwritten from the
    price map when it quotes the ticker. Without table rows the result falls back
    to minimal rows carrying only ticker, price and change.

    Args:
        table_rows: Rows keyed by header text (may be empty or None)
        price_map: Ticker -> ``PriceQuote`` or ``{"price": ..., "change": ...}``

    Returns:
        Bond rows, each with a cleaned ``_ticker``
    """
    quotes: dict[str, PriceQuote] = {}
    for raw_ticker, raw_quote in (price_map or {}).items():
        quote = _as_quote(raw_quote)
        ticker = clean_ticker(raw_ticker)
        if quote is not None and ticker:
            quotes[ticker] = quote

    rows: list[BondRow] = []
    for table_row in table_rows or []:
        if not isinstance(table_row, Mapping):
            continue
        ticker = row_ticker(table_row)
        if not ticker or ticker in _NON_TICKERS:
            continue
        row: BondRow = {str(key): _clean_cell(value) for key, value in table_row.items()}
        row[TICKER_KEY] = ticker
        if TICKER_HEADER in row:
            row[TICKER_HEADER] = ticker
        rows.append(_apply_quote(row, quotes.get(ticker)))

    if rows:
        return rows

    if quotes:
        logger.info("Bond table unavailable; using price-map fallback rows", tickers=len(quotes))
    return [
        _apply_quote({TICKER_KEY: ticker, TICKER_HEADER: ticker}, quote)
        for ticker, quote in quotes.items()
    ]


def available_tickers(rows: Iterable[Mapping[str, Any]]) -> list[str]:
    """Distinct tickers present in the rows, sorted."""
    return sorted({ticker for ticker in (row_ticker(row) for row in rows) if ticker})


def search_tickers(tickers: Sequence[str], query: str) -> list[str]:
    """Tickers containing ``query`` (case-insensitive); all of them for an empty query."""
    needle = query.strip().upper()
    if not needle:
        return list(tickers)
    return [ticker for ticker in tickers if needle in ticker.upper()]


def _index_by_ticker(rows: Iterable[Mapping[str, Any]]) -> dict[str, Mapping[str, Any]]:
    index: dict[str, Mapping[str, Any]] = {}
    for row in rows:
        ticker = row_ticker(row)
        if ticker:
            index[ticker] = row
    return index


def _units_for(capital: float, price_with_fee: float | None) -> int:
    if price_with_fee is None or price_with_fee <= 0:
        return 0
    units = math.floor(capital / price_with_fee)
    # floor() of a rounded quotient can overshoot by one unit
    while units > 0 and units * price_with_fee > capital:
        units -= 1
    return max(0, units)


def derive_metrics(
    favorites: FavoriteSet | Iterable[str],
    bond_rows: Iterable[Mapping[str, Any]],
    position: Position,
    broker_fee_pct: float,
    *,
    reinvest_rate_pct: float,
    base_days: int = DEFAULT_BASE_DAYS,
) -> list[DerivedBondMetrics]:
    """Compute return metrics for every favorite ticker present in the bond rows.

    Favorites without a matching row are dropped. Within a row, each missing or
    unparseable field blanks only the metrics that depend on it.

    Args:
        favorites: Tickers to evaluate, in output order
        bond_rows: Reconciled bond-table rows
        position: Capital and horizon (``days``) of the comparison
        broker_fee_pct: Purchase commission in percent of price
        reinvest_rate_pct: TNA of the compounding instrument that receives the
            payout of bonds maturing before the horizon
        base_days: Year length for the compounding instrument

    Returns:
        One metrics object per matched favorite
    """
    if not isinstance(favorites, FavoriteSet):
        favorites = FavoriteSet.of(favorites)
    index = _index_by_ticker(bond_rows)
    broker = non_negative(broker_fee_pct)
    capital = position.capital
    horizon_days = position.days

    results: list[DerivedBondMetrics] = []
    for ticker in favorites.tickers:
        row = index.get(ticker)
        if row is None:
            logger.debug("Favorite ticker not in bond table", ticker=ticker)
            continue

        maturity_days = parse_locale_number(resolve_field(row, DAYS_FIELDS))
        price = parse_locale_number(resolve_field(row, PRICE_FIELDS))
        change = parse_signed_number(resolve_field(row, CHANGE_FIELDS))
        redemption = parse_locale_number(resolve_field(row, REDEMPTION_FIELDS))

        price_with_fee = price * (1 + broker / 100) if price is not None else None

        growth: float | None = None
        if redemption is not None and price_with_fee is not None and price_with_fee > 0:
            growth = redemption / price_with_fee

        units = _units_for(capital, price_with_fee)
        invested = units * price_with_fee if units > 0 and price_with_fee is not None else 0.0
        leftover = max(0.0, capital - invested)

        payout = units * redemption + leftover if units > 0 and redemption is not None else None
        gain = payout - capital if payout is not None else None

        eligible = (
            payout is not None
            and maturity_days is not None
            and 0 < maturity_days <= horizon_days
        )
        horizon_gain: float | None = None
        if eligible and payout is not None and maturity_days is not None:
            remaining = max(0.0, horizon_days - maturity_days)
            reinvested = compound_profit(payout, remaining, reinvest_rate_pct, base_days)
            horizon_gain = reinvested.final - capital

        results.append(
            DerivedBondMetrics(
                ticker=ticker,
                maturity_label=resolve_field(row, MATURITY_FIELDS) or "",
                maturity_days=maturity_days,
                price=price,
                price_change_pct=change,
                redemption_value=redemption,
                price_with_fee=price_with_fee,
                direct_return=growth - 1 if growth is not None else None,
                annualized_rate_pct=(
                    bond_annualized_rate(growth, maturity_days) if growth is not None else None
                ),
                periodic_rate_pct=(
                    bond_periodic_rate(growth, maturity_days) if growth is not None else None
                ),
                units_bought=units,
                invested_amount=invested,
                leftover_capital=leftover,
                payout_at_maturity=payout,
                gain_amount=gain,
                horizon_eligible=eligible,
                horizon_adjusted_gain=horizon_gain,
            )
        )

    return results


def best_bond_for_horizon(metrics: Iterable[DerivedBondMetrics]) -> DerivedBondMetrics | None:
    """Eligible bond with the highest horizon-adjusted gain; the first one wins ties."""
    best: DerivedBondMetrics | None = None
    best_gain = -math.inf
    for item in metrics:
        if not item.horizon_eligible or item.horizon_adjusted_gain is None:
            continue
        if item.horizon_adjusted_gain > best_gain:
            best, best_gain = item, item.horizon_adjusted_gain
    return best
