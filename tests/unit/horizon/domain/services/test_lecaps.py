"""Unit tests for LECAP reconciliation and metrics."""

from __future__ import annotations

from typing import Any

import pytest

from horizon.domain.models.fees import Position
from horizon.domain.models.market import TICKER_KEY
from horizon.domain.services.lecaps import (
    available_tickers,
    best_bond_for_horizon,
    clean_ticker,
    derive_metrics,
    price_to_face_value,
    reconcile_bond_rows,
    search_tickers,
)


def _table_row(ticker: str, days: str, price: str, redemption: str, **extra: str) -> dict[str, Any]:
    row = {
        "Ticker": ticker,
        "Vencimiento": extra.get("maturity", "16/01/2026"),
        "Días": days,
        "Precio (1VN)": price,
        "Cambio": extra.get("change", "0,10%"),
        "A recibir al vto. (1VN)": redemption,
    }
    return row


@pytest.mark.unit
class TestTickers:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("s16e6", "S16E6"),
            (" S16E6 LECAP", "S16E6"),
            ("T15E7BONCAP", "T15E7"),
            ("TTM26 BONO DUAL", "TTM26"),
            ("S 16E6", "S16E6"),
            (None, ""),
        ],
    )
    def test_clean_ticker(self, raw: Any, expected: str) -> None:
        assert clean_ticker(raw) == expected

    def test_available_and_search(self) -> None:
        rows = [{TICKER_KEY: "S31G6"}, {"Ticker": "s16e6"}, {"Ticker": ""}, {TICKER_KEY: "S16E6"}]
        tickers = available_tickers(rows)
        assert tickers == ["S16E6", "S31G6"]
        assert search_tickers(tickers, "g6") == ["S31G6"]
        assert search_tickers(tickers, "  ") == tickers


@pytest.mark.unit
class TestPriceToFaceValue:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(118.05, 1.1805), (10.0, 0.1), (999.0, 9.99), (1.18, 1.18), (1000.0, 1000.0)],
    )
    def test_scaling(self, raw: float, expected: float) -> None:
        assert price_to_face_value(raw) == pytest.approx(expected)

    def test_non_finite(self) -> None:
        assert price_to_face_value(float("nan")) is None


@pytest.mark.unit
class TestReconcileBondRows:
    def test_overwrites_price_and_change_from_price_map(self) -> None:
        table = [_table_row("S16E6", "10", "1,1700", "1,1906", change="0,00%")]
        rows = reconcile_bond_rows(table, {"S16E6": {"price": 118.05, "change": -0.25}})

        assert len(rows) == 1
        assert rows[0][TICKER_KEY] == "S16E6"
        assert rows[0]["Precio (1VN)"] == "1,1805"
        assert rows[0]["Cambio"] == "-0.25%"
        assert rows[0]["Días"] == "10"

    def test_keeps_table_values_without_quote(self) -> None:
        rows = reconcile_bond_rows([_table_row("S17A6", "90", "1,0500", "1,1000")], {})
        assert rows[0]["Precio (1VN)"] == "1,0500"

    def test_skips_section_headers_and_blank_tickers(self) -> None:
        table = [
            {"Ticker": "BONOS DUALES"},
            {"Ticker": ""},
            _table_row("S16E6", "10", "1,18", "1,19"),
        ]
        rows = reconcile_bond_rows(table, None)
        assert [row[TICKER_KEY] for row in rows] == ["S16E6"]

    def test_falls_back_to_price_map_rows(self) -> None:
        rows = reconcile_bond_rows([], {"s16e6": {"price": 118.05, "change": 0.1}, "bad": None})
        assert rows == [
            {
                TICKER_KEY: "S16E6",
                "Ticker": "S16E6",
                "Precio (1VN)": "1,1805",
                "Cambio": "0.10%",
            }
        ]

    def test_nothing_available(self) -> None:
        assert reconcile_bond_rows(None, None) == []

    def test_idempotent_over_its_output(self) -> None:
        prices = {"S16E6": {"price": 118.05, "change": 0.1}}
        once = reconcile_bond_rows([_table_row("S16E6 LECAP", "10", "1,17", "1,19")], prices)
        twice = reconcile_bond_rows(once, prices)
        assert twice == once


@pytest.mark.unit
class TestDeriveMetrics:
    def _rows(self) -> list[dict[str, Any]]:
        return reconcile_bond_rows(
            [
                _table_row("S16E6", "10", "118,05", "119,06", change="-0,35%"),
                _table_row("S30A6", "60", "110,00", "115,00"),
            ],
            {},
        )

    def test_reference_scenario(self) -> None:
        position = Position(capital=1_000_000, days=14, instrument_rate_pct=22.1)
        [metrics] = derive_metrics(
            ["S16E6"], self._rows(), position, 0.0, reinvest_rate_pct=22.1
        )

        assert metrics.price_with_fee == pytest.approx(118.05)
        assert metrics.direct_return == pytest.approx(0.008556, abs=1e-6)
        assert metrics.annualized_rate_pct == pytest.approx(31.23, abs=0.01)
        assert metrics.price_change_pct == pytest.approx(-0.35)
        assert metrics.maturity_label == "16/01/2026"
        assert metrics.units_bought == 8470
        assert metrics.units_bought * 118.05 <= 1_000_000
        assert metrics.invested_amount + metrics.leftover_capital == pytest.approx(1_000_000)
        assert metrics.payout_at_maturity == pytest.approx(8470 * 119.06 + metrics.leftover_capital)
        assert metrics.horizon_eligible is True
        assert metrics.horizon_adjusted_gain is not None
        assert metrics.gain_amount is not None
        assert metrics.horizon_adjusted_gain > metrics.gain_amount

    def test_idempotent(self) -> None:
        position = Position(capital=1_000_000, days=14)
        rows = self._rows()
        first = derive_metrics(["S16E6", "S30A6"], rows, position, 0.15, reinvest_rate_pct=22.1)
        second = derive_metrics(["S16E6", "S30A6"], rows, position, 0.15, reinvest_rate_pct=22.1)
        assert first == second

    def test_favorite_with_instrument_suffix_matches_row(self) -> None:
        position = Position(capital=1_000_000, days=14)
        metrics = derive_metrics(
            ["S16E6 LECAP"], self._rows(), position, 0.0, reinvest_rate_pct=22.1
        )
        assert [m.ticker for m in metrics] == ["S16E6"]

    def test_broker_fee_raises_entry_price(self) -> None:
        position = Position(capital=1_000_000, days=14)
        [metrics] = derive_metrics(["S16E6"], self._rows(), position, 0.5, reinvest_rate_pct=0)
        assert metrics.price_with_fee == pytest.approx(118.05 * 1.005)

    def test_bond_maturing_after_horizon_is_not_eligible(self) -> None:
        position = Position(capital=1_000_000, days=14)
        [metrics] = derive_metrics(["S30A6"], self._rows(), position, 0.0, reinvest_rate_pct=22.1)
        assert metrics.horizon_eligible is False
        assert metrics.horizon_adjusted_gain is None
        assert metrics.gain_amount is not None

    def test_horizon_gain_without_reinvestment_time(self) -> None:
        position = Position(capital=1_000_000, days=10)
        [metrics] = derive_metrics(["S16E6"], self._rows(), position, 0.0, reinvest_rate_pct=22.1)
        assert metrics.horizon_adjusted_gain == pytest.approx(metrics.gain_amount)

    def test_drops_favorites_without_row_and_keeps_order(self) -> None:
        position = Position(capital=1_000_000, days=14)
        metrics = derive_metrics(
            ["S30A6", "S99Z9", "S16E6"], self._rows(), position, 0.0, reinvest_rate_pct=0
        )
        assert [m.ticker for m in metrics] == ["S30A6", "S16E6"]

    def test_missing_fields_blank_dependent_metrics(self) -> None:
        rows = reconcile_bond_rows([], {"S16E6": {"price": 118.05, "change": 0.1}})
        position = Position(capital=1_000_000, days=14)
        [metrics] = derive_metrics(["S16E6"], rows, position, 0.0, reinvest_rate_pct=22.1)

        assert metrics.price == pytest.approx(1.1805)
        assert metrics.price_with_fee == pytest.approx(1.1805)
        assert metrics.maturity_days is None
        assert metrics.redemption_value is None
        assert metrics.direct_return is None
        assert metrics.annualized_rate_pct is None
        assert metrics.payout_at_maturity is None
        assert metrics.horizon_eligible is False

    def test_zero_capital_buys_nothing(self) -> None:
        position = Position(capital=0, days=14)
        [metrics] = derive_metrics(["S16E6"], self._rows(), position, 0.0, reinvest_rate_pct=0)
        assert metrics.units_bought == 0
        assert metrics.payout_at_maturity is None

    @pytest.mark.parametrize("capital", [1.0, 118.04, 118.05, 236.1, 999_999.99, 1e9])
    def test_units_never_exceed_capital(self, capital: float) -> None:
        position = Position(capital=capital, days=14)
        [metrics] = derive_metrics(["S16E6"], self._rows(), position, 0.15, reinvest_rate_pct=0)
        assert metrics.price_with_fee is not None
        assert metrics.units_bought * metrics.price_with_fee <= capital
        assert (metrics.units_bought + 1) * metrics.price_with_fee > capital


@pytest.mark.unit
class TestBestBondForHorizon:
    def test_picks_highest_eligible_gain(self) -> None:
        rows = reconcile_bond_rows(
            [
                _table_row("S16E6", "10", "118,05", "119,06"),
                _table_row("S17E6", "12", "118,05", "119,50"),
                _table_row("S30A6", "60", "110,00", "125,00"),
            ],
            {},
        )
        position = Position(capital=1_000_000, days=14)
        metrics = derive_metrics(
            ["S16E6", "S17E6", "S30A6"], rows, position, 0.0, reinvest_rate_pct=22.1
        )
        best = best_bond_for_horizon(metrics)
        assert best is not None
        assert best.ticker == "S17E6"

    def test_first_wins_ties(self) -> None:
        rows = reconcile_bond_rows(
            [
                _table_row("S16E6", "10", "118,05", "119,06"),
                _table_row("S16E7", "10", "118,05", "119,06"),
            ],
            {},
        )
        position = Position(capital=1_000_000, days=14)
        metrics = derive_metrics(["S16E7", "S16E6"], rows, position, 0.0, reinvest_rate_pct=22.1)
        best = best_bond_for_horizon(metrics)
        assert best is not None and best.ticker == "S16E7"

    def test_none_without_eligible_bonds(self) -> None:
        assert best_bond_for_horizon([]) is None
