"""BYMA open-data caución order book."""

from __future__ import annotations

from typing import Any

import structlog

from horizon.domain.models.market import MarketOffer
from horizon.domain.ports.data_providers import CaucionDataProvider
from horizon.domain.services.offers import parse_offers
from horizon.exceptions import FeedFormatError
from horizon.infrastructure.data_providers.http_client import HttpClientMixin

logger = structlog.get_logger(__name__)

BYMA_CAUCIONES_URL = (
    "https://open.bymadata.com.ar/vanoms-be-core/rest/api/bymadata/free/cauciones"
)


def _unwrap_rows(payload: Any) -> list[Any] | None:
    # The gateway answers with a bare array or wraps it in "data"/"results"
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        for key in ("data", "results"):
            if isinstance(payload.get(key), list):
                return payload[key]
    return None


class BymaCaucionProvider(HttpClientMixin, CaucionDataProvider):
    """BYMA implementation of CaucionDataProvider."""

    def __init__(
        self,
        url: str = BYMA_CAUCIONES_URL,
        timeout_seconds: float = 30.0,
        user_agent: str = "horizon/0.1",
    ) -> None:
        self._url = url
        self._timeout_seconds = timeout_seconds
        self._user_agent = user_agent
        self._client = None

    def get_provider_name(self) -> str:
        return "byma"

    async def get_offers(self) -> list[MarketOffer]:
        client = await self._get_client()
        resp = await client.post(self._url, json={"excludeZeroPxAndQty": True})
        resp.raise_for_status()

        rows = _unwrap_rows(resp.json())
        if rows is None:
            raise FeedFormatError(self.get_provider_name(), "unexpected caución payload")

        offers = parse_offers(rows)
        logger.debug("Fetched caución offers", provider=self.get_provider_name(), rows=len(offers))
        return offers
