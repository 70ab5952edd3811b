"""Data provider interfaces for the three market feeds."""

from abc import ABC, abstractmethod

from horizon.domain.models.market import BondRow, ExchangeRateQuote, MarketOffer


class DataProvider(ABC):
    """Common provider surface."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Short identifier used in logs and feed metadata."""

    async def close(self) -> None:  # noqa: B027
        """Release network resources. Providers without any may keep the default."""


class CaucionDataProvider(DataProvider):
    """Source of the caución order book."""

    @abstractmethod
    async def get_offers(self) -> list[MarketOffer]:
        """Fetch every caución row currently quoted.

        Raises:
            httpx.HTTPError: On transport or HTTP status failures
            FeedFormatError: If the payload shape is not recognized
        """


class ExchangeRateProvider(DataProvider):
    """Source of the official USD/ARS quote."""

    @abstractmethod
    async def get_official_rate(self) -> ExchangeRateQuote:
        """Fetch the latest official quote."""


class BondDataProvider(DataProvider):
    """Source of reconciled LECAP rows (scraped table merged with live prices)."""

    @abstractmethod
    async def get_bond_rows(self) -> list[BondRow]:
        """Fetch bond rows; may fall back to price-only rows when the table is down."""
