"""Data provider container configuration."""

from dependency_injector import providers

from horizon.infrastructure.config import Settings, get_settings
from horizon.infrastructure.data_providers import (
    BymaCaucionProvider,
    DolarApiExchangeRateProvider,
    LecapsBondProvider,
)


def configure_data_providers(settings: Settings | None = None) -> dict[str, providers.Provider]:
    """Configure feed provider providers.

    Args:
        settings: Optional settings. If None, uses the cached environment settings.

    Returns:
        Dictionary of data provider providers
    """
    settings = settings or get_settings()
    common = {
        "timeout_seconds": settings.http_timeout_seconds,
        "user_agent": settings.user_agent,
    }

    return {
        "caucion_provider": providers.Singleton(
            BymaCaucionProvider, url=settings.byma_cauciones_url, **common
        ),
        "exchange_rate_provider": providers.Singleton(
            DolarApiExchangeRateProvider, url=settings.dolar_oficial_url, **common
        ),
        "bond_provider": providers.Singleton(
            LecapsBondProvider,
            prices_url=settings.lecaps_prices_url,
            table_url=settings.lecaps_table_url,
            **common,
        ),
    }
