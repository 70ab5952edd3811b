"""HTTP adapters for the caución, exchange-rate and LECAP feeds."""

from horizon.infrastructure.data_providers.byma import BymaCaucionProvider
from horizon.infrastructure.data_providers.dolar import DolarApiExchangeRateProvider
from horizon.infrastructure.data_providers.lecaps import LecapsBondProvider

__all__ = [
    "BymaCaucionProvider",
    "DolarApiExchangeRateProvider",
    "LecapsBondProvider",
]
