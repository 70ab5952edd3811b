"""Ports implemented by infrastructure adapters."""

from horizon.domain.ports.data_providers import (
    BondDataProvider,
    CaucionDataProvider,
    DataProvider,
    ExchangeRateProvider,
)

__all__ = [
    "DataProvider",
    "CaucionDataProvider",
    "ExchangeRateProvider",
    "BondDataProvider",
]
