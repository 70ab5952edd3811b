"""Unit tests for settings loading and the DI container."""

from __future__ import annotations

import pytest
from dependency_injector import providers

from horizon.infrastructure.config import Settings, get_settings
from horizon.infrastructure.containers import (
    Container,
    get_container,
    reset_container,
    set_container,
)
from horizon.infrastructure.data_providers import (
    BymaCaucionProvider,
    DolarApiExchangeRateProvider,
    LecapsBondProvider,
)


@pytest.mark.unit
class TestSettings:
    def test_reads_prefixed_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HORIZON_CAPITAL", "250000")
        monkeypatch.setenv("HORIZON_DAYS", "7")
        monkeypatch.setenv("HORIZON_CAUCION_BROKER_PCT", "0.25")
        monkeypatch.setenv("HORIZON_FAVORITES", '["s16e6", "S31G6"]')

        settings = Settings(_env_file=None)
        comparison = settings.default_comparison()

        assert comparison.capital == 250_000
        assert comparison.days == 7
        assert comparison.caucion_fees.broker_commission_pct == 0.25
        assert comparison.favorites.tickers == ("S16E6", "S31G6")

    @pytest.mark.parametrize("raw", ["S16E6,s17a6", " S16E6 , S17A6 ,", '["S16E6", "S17A6"]'])
    def test_favorites_accept_comma_list_or_json(
        self, monkeypatch: pytest.MonkeyPatch, raw: str
    ) -> None:
        monkeypatch.setenv("HORIZON_FAVORITES", raw)
        comparison = Settings(_env_file=None).default_comparison()
        assert comparison.favorites.tickers == ("S16E6", "S17A6")

    def test_defaults_match_comparison_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("CAPITAL", "DAYS", "MM_RATE_PCT", "CAUCION_RATE_PCT", "FAVORITES"):
            monkeypatch.delenv(f"HORIZON_{name}", raising=False)
        comparison = Settings(_env_file=None).default_comparison()
        assert comparison.capital == 1_000_000
        assert comparison.mm_rate_pct == 22.1
        assert comparison.caucion_rate_pct == 40.0
        assert comparison.extra_min_profit is None

    def test_get_settings_is_cached(self) -> None:
        assert get_settings() is get_settings()


@pytest.mark.unit
class TestContainer:
    def test_builds_feed_providers(self) -> None:
        container = Container()
        assert isinstance(container.caucion_provider(), BymaCaucionProvider)
        assert isinstance(container.exchange_rate_provider(), DolarApiExchangeRateProvider)
        assert isinstance(container.bond_provider(), LecapsBondProvider)
        assert container.caucion_provider() is container.caucion_provider()

    def test_global_container_can_be_replaced(self) -> None:
        custom = Container()
        stub = object()
        custom.bond_provider.override(providers.Object(stub))
        try:
            set_container(custom)
            assert get_container().bond_provider() is stub
        finally:
            reset_container()
        assert get_container() is not custom
        reset_container()
