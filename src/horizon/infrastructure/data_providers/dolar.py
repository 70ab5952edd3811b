"""Official USD/ARS quote from dolarapi.com."""

from __future__ import annotations

from datetime import datetime
from typing import Any

import structlog

from horizon.domain.models.base import coerce_float
from horizon.domain.models.market import ExchangeRateQuote
from horizon.domain.ports.data_providers import ExchangeRateProvider
from horizon.exceptions import FeedFormatError
from horizon.infrastructure.data_providers.http_client import HttpClientMixin

logger = structlog.get_logger(__name__)

DOLAR_OFICIAL_URL = "https://dolarapi.com/v1/dolares/oficial"


def _parse_timestamp(value: Any) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


class DolarApiExchangeRateProvider(HttpClientMixin, ExchangeRateProvider):
    """dolarapi.com implementation of ExchangeRateProvider."""

    def __init__(
        self,
        url: str = DOLAR_OFICIAL_URL,
        timeout_seconds: float = 30.0,
        user_agent: str = "horizon/0.1",
    ) -> None:
        self._url = url
        self._timeout_seconds = timeout_seconds
        self._user_agent = user_agent
        self._client = None

    def get_provider_name(self) -> str:
        return "dolarapi"

    async def get_official_rate(self) -> ExchangeRateQuote:
        client = await self._get_client()
        resp = await client.get(self._url)
        resp.raise_for_status()
        payload = resp.json()
        if not isinstance(payload, dict):
            raise FeedFormatError(self.get_provider_name(), "expected a JSON object")

        quote = ExchangeRateQuote(
            buy=coerce_float(payload.get("compra")),
            sell=coerce_float(payload.get("venta")),
            updated_at=_parse_timestamp(payload.get("fechaActualizacion")),
        )
        if quote.sell is None:
            logger.warning("Official quote without a sell rate", provider=self.get_provider_name())
        return quote
