"""Shared lazily-created ``httpx.AsyncClient`` handling for feed adapters."""

from __future__ import annotations

import httpx


class HttpClientMixin:
    """Owns one ``httpx.AsyncClient``, created on first use and closed by ``close()``."""

    _timeout_seconds: float
    _user_agent: str
    _client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout_seconds,
                follow_redirects=True,
                headers={
                    "User-Agent": self._user_agent,
                    "Accept": "application/json, text/plain, */*",
                },
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
