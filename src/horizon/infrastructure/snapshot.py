"""Concurrent fetch of the three feeds into a partial-failure-tolerant snapshot."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from datetime import UTC, datetime
from typing import Any, TypeVar

import structlog

from horizon.domain.models.feed_results import (
    BondFeed,
    ExchangeRateFeed,
    FeedResult,
    MarketSnapshot,
    OfferFeed,
)
from horizon.domain.ports.data_providers import (
    BondDataProvider,
    CaucionDataProvider,
    DataProvider,
    ExchangeRateProvider,
)

logger = structlog.get_logger(__name__)

R = TypeVar("R", bound=FeedResult[Any])


async def _capture(
    result_type: type[R],
    source: str,
    provider: DataProvider | None,
    fetch: Awaitable[Any] | None,
) -> R:
    if provider is None or fetch is None:
        return result_type.absent()  # type: ignore[return-value]
    provider_name = provider.get_provider_name()
    try:
        data = await fetch
    except Exception as e:
        logger.warning(
            "Feed fetch failed",
            source=source,
            provider=provider_name,
            error=str(e),
            error_type=type(e).__name__,
        )
        return result_type.failed(  # type: ignore[return-value]
            f"{source} feed failed: {e}",
            provider=provider_name,
            error_type=type(e).__name__,
        )
    return result_type.ok(data, provider=provider_name)  # type: ignore[return-value]


async def fetch_market_snapshot(
    caucion_provider: CaucionDataProvider | None,
    exchange_rate_provider: ExchangeRateProvider | None,
    bond_provider: BondDataProvider | None,
) -> MarketSnapshot:
    """Fetch all feeds concurrently; a failing feed is recorded, never raised.

    Args:
        caucion_provider: Caución order-book source, or None to skip it
        exchange_rate_provider: Official quote source, or None to skip it
        bond_provider: LECAP rows source, or None to skip it

    Returns:
        Snapshot with one FeedResult per source
    """
    caucion, exchange_rate, bonds = await asyncio.gather(
        _capture(
            OfferFeed,
            "caucion",
            caucion_provider,
            caucion_provider.get_offers() if caucion_provider else None,
        ),
        _capture(
            ExchangeRateFeed,
            "exchange_rate",
            exchange_rate_provider,
            exchange_rate_provider.get_official_rate() if exchange_rate_provider else None,
        ),
        _capture(
            BondFeed,
            "bonds",
            bond_provider,
            bond_provider.get_bond_rows() if bond_provider else None,
        ),
    )
    snapshot = MarketSnapshot(
        caucion=caucion,
        exchange_rate=exchange_rate,
        bonds=bonds,
        fetched_at=datetime.now(UTC),
    )
    if snapshot.errors:
        logger.info("Market snapshot is partial", failed=sorted(snapshot.errors))
    return snapshot
