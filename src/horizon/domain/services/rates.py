"""Pure rate formulas for caución, money market and LECAP comparisons.

Conventions:
    - Annual rates are nominal (TNA) percentages: 40.0 means 40% per year.
    - Caución interest is simple on a configurable year length (360 or 365 days).
    - The money market compounds daily at TNA / base_days.
    - Fees are percentages of capital charged once per placement, regardless of
      the days actually held, which is how brokers bill cauciones.

Nothing here raises on degenerate input. Rates that have no meaning for a
non-positive duration come back as ``None``; the breakeven rate comes back as
``math.inf`` because "no rate is high enough" is a meaningful threshold.
"""

from __future__ import annotations

import math

from horizon.domain.models.comparison import CaucionProfit, CompoundProfit
from horizon.domain.models.fees import FeeConfig
from horizon.domain.models.market import ExchangeRateQuote

DEFAULT_BASE_DAYS = 365
PERIOD_DAYS = 30


def effective_cost_rate(fee: FeeConfig) -> float:
    """Cost of one placement as a fraction of capital (0.001815 for 0.15% + 21% VAT)."""
    broker = (fee.broker_commission_pct / 100) * (1 + fee.iva_pct / 100)
    other = fee.other_costs_pct / 100
    return broker + other


def gross_interest(
    capital: float, days: float, annual_rate_pct: float, base_days: int = DEFAULT_BASE_DAYS
) -> float:
    """Simple interest earned over ``days``."""
    return capital * (annual_rate_pct / 100) * (days / base_days)


def net_caucion_profit(
    capital: float,
    days: float,
    annual_rate_pct: float,
    fee: FeeConfig,
    base_days: int = DEFAULT_BASE_DAYS,
) -> CaucionProfit:
    """Gross interest, flat cost and net result of a caución placement."""
    gross = gross_interest(capital, days, annual_rate_pct, base_days)
    cost = capital * effective_cost_rate(fee)
    return CaucionProfit(gross=gross, cost=cost, net=gross - cost)


def compound_profit(
    capital: float, days: float, annual_rate_pct: float, base_days: int = DEFAULT_BASE_DAYS
) -> CompoundProfit:
    """Daily-compounded result; negative ``days`` are treated as zero."""
    daily_rate = (annual_rate_pct / 100) / base_days
    try:
        final = capital * (1 + daily_rate) ** max(0.0, days)
    except OverflowError:
        final = math.inf if capital > 0 else 0.0
    return CompoundProfit(gain=final - capital, final=final)


def breakeven_rate(
    capital: float,
    days: float,
    reference_rate_pct: float,
    fee: FeeConfig,
    extra_min_profit: float,
    base_days: int = DEFAULT_BASE_DAYS,
    *,
    reference_compounds: bool = False,
) -> float:
    """Caución TNA at which the net profit equals the reference gain plus ``extra_min_profit``.

    Solves ``capital * tna/100 * frac - capital * cost_rate = reference_gain + extra`` for
    ``tna`` with ``frac = days / base_days``.

    Args:
        capital: Capital placed
        days: Horizon in days
        reference_rate_pct: TNA of the instrument to beat
        fee: Caución fee schedule
        extra_min_profit: Required margin over the reference gain, in currency
        base_days: Year length for the simple-interest convention
        reference_compounds: If True, the reference gain is the daily-compounded gain
            (money market) instead of simple interest at ``reference_rate_pct``

    Returns:
        The breakeven TNA in percent, or ``math.inf`` when no rate can reach it
    """
    frac = days / base_days
    if frac <= 0:
        return math.inf

    if reference_compounds and capital > 0:
        # Simple-interest rate that earns the compounded gain over the same horizon
        gain = compound_profit(capital, days, reference_rate_pct, base_days).gain
        reference_rate_pct = 100 * gain / (capital * frac)

    cost_term = 100 * effective_cost_rate(fee) / frac
    if capital <= 0:
        return math.inf if extra_min_profit > 0 else reference_rate_pct + cost_term
    return reference_rate_pct + cost_term + (100 * extra_min_profit) / (capital * frac)


def bond_annualized_rate(growth_factor: float, days: float | None) -> float | None:
    """Simple annualized rate (TNA %) of a growth factor realized over ``days``."""
    if days is None or days <= 0 or not math.isfinite(growth_factor):
        return None
    return (growth_factor - 1) * (365 / days) * 100


def bond_periodic_rate(growth_factor: float, days: float | None) -> float | None:
    """Effective 30-day rate (TEM %) equivalent to a growth factor over ``days``."""
    if days is None or days <= 0 or not math.isfinite(growth_factor) or growth_factor < 0:
        return None
    try:
        return (growth_factor ** (PERIOD_DAYS / days) - 1) * 100
    except OverflowError:
        return None


def to_usd(amount_ars: float, quote: ExchangeRateQuote | None) -> float | None:
    """Convert an ARS amount at the official sell rate, for display only."""
    if quote is None or quote.sell is None or quote.sell <= 0:
        return None
    return amount_ars / quote.sell
