"""Pure comparison services: parsing, rate formulas, selection and recommendation."""

from horizon.domain.services.comparison import compare, resolve_extra_min_profit
from horizon.domain.services.fields import normalize_key, resolve_field
from horizon.domain.services.lecaps import (
    available_tickers,
    best_bond_for_horizon,
    clean_ticker,
    derive_metrics,
    reconcile_bond_rows,
    search_tickers,
)
from horizon.domain.services.numbers import (
    format_decimal_comma,
    parse_iso_date,
    parse_locale_number,
    parse_signed_number,
    parse_whole_number,
)
from horizon.domain.services.offers import best_offers_by_day, offer_table, parse_offers
from horizon.domain.services.rates import (
    bond_annualized_rate,
    bond_periodic_rate,
    breakeven_rate,
    compound_profit,
    effective_cost_rate,
    gross_interest,
    net_caucion_profit,
    to_usd,
)
from horizon.domain.services.recommendation import auto_min_extra_profit, recommend

__all__ = [
    "parse_locale_number",
    "parse_signed_number",
    "parse_whole_number",
    "parse_iso_date",
    "format_decimal_comma",
    "normalize_key",
    "resolve_field",
    "effective_cost_rate",
    "gross_interest",
    "net_caucion_profit",
    "compound_profit",
    "breakeven_rate",
    "bond_annualized_rate",
    "bond_periodic_rate",
    "to_usd",
    "parse_offers",
    "best_offers_by_day",
    "offer_table",
    "clean_ticker",
    "reconcile_bond_rows",
    "available_tickers",
    "search_tickers",
    "derive_metrics",
    "best_bond_for_horizon",
    "recommend",
    "auto_min_extra_profit",
    "compare",
    "resolve_extra_min_profit",
]
