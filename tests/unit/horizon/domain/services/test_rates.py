"""Unit tests for rate formulas."""

from __future__ import annotations

import math

import pytest

from horizon.domain.models.fees import FeeConfig
from horizon.domain.models.market import ExchangeRateQuote
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

DEFAULT_FEE = FeeConfig(broker_commission_pct=0.15, iva_pct=21.0, other_costs_pct=0.0)


@pytest.mark.unit
class TestCaucionProfit:
    def test_effective_cost_rate(self) -> None:
        assert effective_cost_rate(DEFAULT_FEE) == pytest.approx(0.001815)

    def test_effective_cost_rate_adds_other_costs(self) -> None:
        fee = FeeConfig(broker_commission_pct=0.1, iva_pct=0.0, other_costs_pct=0.05)
        assert effective_cost_rate(fee) == pytest.approx(0.0015)

    @pytest.mark.parametrize("field", ["broker_commission_pct", "iva_pct", "other_costs_pct"])
    def test_cost_rate_is_monotonic_in_each_input(self, field: str) -> None:
        base = DEFAULT_FEE.model_dump()
        previous = effective_cost_rate(FeeConfig(**base))
        for value in (0.5, 1.0, 25.0, 50.0):
            current = effective_cost_rate(FeeConfig(**{**base, field: value}))
            assert current >= previous
            previous = current

    def test_reference_scenario(self) -> None:
        result = net_caucion_profit(1_000_000, 14, 40.0, DEFAULT_FEE)
        assert result.gross == pytest.approx(15342.47, abs=0.01)
        assert result.cost == pytest.approx(1815.0)
        assert result.net == pytest.approx(13527.47, abs=0.01)

    def test_base_days_360(self) -> None:
        assert gross_interest(360_000, 36, 10.0, base_days=360) == pytest.approx(3600.0)

    def test_fee_is_charged_even_for_zero_days(self) -> None:
        result = net_caucion_profit(1_000_000, 0, 40.0, DEFAULT_FEE)
        assert result.gross == 0
        assert result.net == pytest.approx(-1815.0)

    @pytest.mark.parametrize("rates", [(10.0, 20.0), (20.0, 40.0), (39.9, 40.0)])
    def test_net_is_monotonic_in_rate(self, rates: tuple[float, float]) -> None:
        low, high = rates
        assert (
            net_caucion_profit(1_000_000, 14, low, DEFAULT_FEE).net
            < net_caucion_profit(1_000_000, 14, high, DEFAULT_FEE).net
        )


@pytest.mark.unit
class TestCompoundProfit:
    def test_reference_scenario(self) -> None:
        result = compound_profit(1_000_000, 14, 22.1)
        expected = 1_000_000 * ((1 + 0.221 / 365) ** 14 - 1)
        assert result.gain == pytest.approx(expected)
        assert 8500 < result.gain < 8520
        assert result.final == pytest.approx(1_000_000 + result.gain)

    @pytest.mark.parametrize(
        ("capital", "days", "rate"),
        [(0, 14, 22.1), (1_000_000, 0, 22.1), (1_000_000, 14, 0), (500, 365, 150.0)],
    )
    def test_final_never_below_capital(self, capital: float, days: float, rate: float) -> None:
        assert compound_profit(capital, days, rate).final >= capital

    def test_compounding_beats_simple_interest(self) -> None:
        for days in (2, 14, 90, 365):
            assert compound_profit(1_000_000, days, 22.1).gain > gross_interest(
                1_000_000, days, 22.1
            )

    def test_single_day_equals_simple_interest(self) -> None:
        assert compound_profit(1_000_000, 1, 22.1).gain == pytest.approx(
            gross_interest(1_000_000, 1, 22.1)
        )

    def test_zero_and_negative_days(self) -> None:
        assert compound_profit(1_000_000, 0, 22.1).gain == 0
        assert compound_profit(1_000_000, -5, 22.1).gain == 0

    def test_overflow_is_infinite(self) -> None:
        result = compound_profit(1_000_000, 10**9, 1000.0)
        assert math.isinf(result.final)


@pytest.mark.unit
class TestBreakevenRate:
    def test_closed_form_with_simple_reference(self) -> None:
        rate = breakeven_rate(1_000_000, 14, 22.1, DEFAULT_FEE, 5000)
        frac = 14 / 365
        expected = 22.1 + 100 * 0.001815 / frac + 100 * 5000 / (1_000_000 * frac)
        assert rate == pytest.approx(expected)

    def test_compounded_reference_is_exact_inverse(self) -> None:
        capital, days, hurdle = 1_000_000, 14, 5000.0
        rate = breakeven_rate(
            capital, days, 22.1, DEFAULT_FEE, hurdle, reference_compounds=True
        )
        net = net_caucion_profit(capital, days, rate, DEFAULT_FEE).net
        mm = compound_profit(capital, days, 22.1).gain
        assert net - mm == pytest.approx(hurdle)

    def test_zero_days_is_unattainable(self) -> None:
        assert math.isinf(breakeven_rate(1_000_000, 0, 22.1, DEFAULT_FEE, 5000))

    def test_zero_capital_with_hurdle_is_unattainable(self) -> None:
        assert math.isinf(breakeven_rate(0, 14, 22.1, DEFAULT_FEE, 5000))

    def test_zero_capital_without_hurdle_is_finite(self) -> None:
        rate = breakeven_rate(0, 14, 22.1, DEFAULT_FEE, 0)
        assert math.isfinite(rate)


@pytest.mark.unit
class TestBondRates:
    def test_annualized_scenario(self) -> None:
        growth = 119.06 / 118.05
        assert bond_annualized_rate(growth, 10) == pytest.approx(31.23, abs=0.01)

    def test_periodic_is_compound_equivalent(self) -> None:
        growth = 1.01
        rate = bond_periodic_rate(growth, 15)
        assert rate is not None
        assert rate == pytest.approx((1.01**2 - 1) * 100)

    @pytest.mark.parametrize("days", [None, 0, -3])
    def test_undefined_without_positive_days(self, days: float | None) -> None:
        assert bond_annualized_rate(1.01, days) is None
        assert bond_periodic_rate(1.01, days) is None

    def test_periodic_overflow_is_none(self) -> None:
        assert bond_periodic_rate(1e10, 0.0001) is None


@pytest.mark.unit
class TestToUsd:
    def test_converts_at_sell_rate(self) -> None:
        assert to_usd(1_450_000, ExchangeRateQuote(buy=1400, sell=1450)) == pytest.approx(1000)

    def test_missing_quote(self) -> None:
        assert to_usd(1000, None) is None
        assert to_usd(1000, ExchangeRateQuote(buy=1400)) is None
