"""LECAP rows: optional scraped-table endpoint merged with the live price map."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from horizon.domain.models.market import BondRow
from horizon.domain.ports.data_providers import BondDataProvider
from horizon.domain.services.lecaps import reconcile_bond_rows
from horizon.exceptions import FeedFormatError
from horizon.infrastructure.data_providers.http_client import HttpClientMixin

logger = structlog.get_logger(__name__)

LECAPS_PRICES_URL = "https://www.acuantoesta.com.ar/api/lecaps-prices"


class LecapsBondProvider(HttpClientMixin, BondDataProvider):
    """BondDataProvider backed by the acuantoesta price map.

    The price map only carries price and daily change. Maturity days and redemption
    value come from the scraped table, which is published by a separate scrape
    service at ``table_url``. When that endpoint is not configured or fails, rows
    degrade to the price-only shape.
    """

    def __init__(
        self,
        prices_url: str = LECAPS_PRICES_URL,
        table_url: str | None = None,
        timeout_seconds: float = 30.0,
        user_agent: str = "horizon/0.1",
    ) -> None:
        self._prices_url = prices_url
        self._table_url = table_url
        self._timeout_seconds = timeout_seconds
        self._user_agent = user_agent
        self._client = None

    def get_provider_name(self) -> str:
        return "acuantoesta"

    async def get_price_map(self) -> dict[str, Any]:
        client = await self._get_client()
        resp = await client.get(self._prices_url)
        resp.raise_for_status()
        payload = resp.json()
        if not isinstance(payload, dict):
            raise FeedFormatError(self.get_provider_name(), "price map is not a JSON object")
        return payload

    async def get_table_rows(self) -> list[dict[str, Any]]:
        if not self._table_url:
            return []
        client = await self._get_client()
        try:
            resp = await client.get(self._table_url)
            resp.raise_for_status()
            payload = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(
                "LECAP table fetch failed; continuing with price map only",
                error=str(e),
                error_type=type(e).__name__,
            )
            return []

        items = payload.get("items") if isinstance(payload, dict) else payload
        if not isinstance(items, list):
            logger.warning("LECAP table payload has no items list", url=self._table_url)
            return []
        return [item for item in items if isinstance(item, dict)]

    async def get_bond_rows(self) -> list[BondRow]:
        table_rows = await self.get_table_rows()
        try:
            prices = await self.get_price_map()
        except (httpx.HTTPError, FeedFormatError) as e:
            if not table_rows:
                raise
            logger.warning(
                "LECAP price map unavailable; using table prices",
                error=str(e),
                error_type=type(e).__name__,
            )
            prices = {}

        rows = reconcile_bond_rows(table_rows, prices)
        logger.debug(
            "Fetched LECAP rows",
            provider=self.get_provider_name(),
            rows=len(rows),
            from_table=bool(table_rows),
        )
        return rows
