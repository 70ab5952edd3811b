"""Recommendation between money market, caución and the best LECAP for the horizon."""

from __future__ import annotations

import math
from collections.abc import Iterable

from horizon.domain.models.base import non_negative
from horizon.domain.models.comparison import DerivedBondMetrics, InstrumentKind, Recommendation
from horizon.domain.services.lecaps import best_bond_for_horizon

# Minimum extra profit as % of capital, by horizon tier (days, pct)
MIN_PROFIT_TIERS: tuple[tuple[int, float], ...] = (
    (7, 0.4),
    (14, 0.5),
    (30, 0.7),
    (60, 1.2),
    (90, 1.8),
    (180, 2.5),
    (365, 4.0),
)


def min_profit_pct_for_days(days: float) -> float:
    """Hurdle percentage of the longest tier not exceeding ``days``."""
    pct = MIN_PROFIT_TIERS[0][1]
    if days <= 0:
        return pct
    for tier_days, tier_pct in MIN_PROFIT_TIERS:
        if days < tier_days:
            break
        pct = tier_pct
    return pct


def auto_min_extra_profit(capital: float, days: float) -> float:
    """Default minimum extra profit for a capital and horizon, rounded to whole pesos."""
    amount = non_negative(capital) * min_profit_pct_for_days(non_negative(days)) / 100
    return float(math.floor(amount + 0.5))


def _lecap(
    candidate: DerivedBondMetrics, caucion_extra: float, lecap_extra: float
) -> Recommendation:
    detail = None
    if candidate.maturity_days is not None:
        detail = f"Matures in {candidate.maturity_days:g} days"
    return Recommendation(
        winner=InstrumentKind.LECAP,
        label=f"Recommendation: LECAP {candidate.ticker}".strip(),
        detail=detail,
        supporting_ticker=candidate.ticker,
        supporting_days=candidate.maturity_days,
        caucion_extra=caucion_extra,
        lecap_extra=lecap_extra,
    )


def recommend(
    compound_gain: float,
    caucion_net_gain: float,
    bonds: Iterable[DerivedBondMetrics],
    min_extra_profit: float,
) -> Recommendation:
    """Pick the placement that clears the minimum extra profit over the money market.

    Rules, in order:
        1. Neither caución nor the best eligible LECAP clears the hurdle: money market.
        2. Only caución clears it: caución.
        3. Only the LECAP clears it: that LECAP.
        4. Both clear it: the higher absolute gain; the LECAP wins ties.

    Args:
        compound_gain: Money market gain over the horizon
        caucion_net_gain: Caución gain after fees
        bonds: Derived LECAP metrics; only horizon-eligible ones compete
        min_extra_profit: Hurdle over the money market gain (clamped to >= 0)

    Returns:
        The recommendation with both extras for display
    """
    hurdle = non_negative(min_extra_profit)
    candidate = best_bond_for_horizon(bonds)
    lecap_gain = candidate.horizon_adjusted_gain if candidate is not None else None

    caucion_extra = caucion_net_gain - compound_gain
    lecap_extra = lecap_gain - compound_gain if lecap_gain is not None else None

    caucion_clears = caucion_extra >= hurdle
    lecap_clears = lecap_extra is not None and lecap_extra >= hurdle

    if candidate is not None and lecap_extra is not None and lecap_gain is not None:
        if lecap_clears and (not caucion_clears or lecap_gain >= caucion_net_gain):
            return _lecap(candidate, caucion_extra, lecap_extra)

    if caucion_clears:
        return Recommendation(
            winner=InstrumentKind.CAUCION,
            label="Recommendation: Caución",
            caucion_extra=caucion_extra,
            lecap_extra=lecap_extra,
        )

    return Recommendation(
        winner=InstrumentKind.MONEY_MARKET,
        label="Recommendation: Money Market",
        caucion_extra=caucion_extra,
        lecap_extra=lecap_extra,
    )
