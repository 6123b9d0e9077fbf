from __future__ import annotations

import logging
from collections.abc import Sequence

import httpx

from .config import Settings
from .fetcher import TickerFetcher
from .payload import build_payload
from .push_client import PushClient
from .ranking import rank_ideas
from .sources import SourceAdapter, select_sources
from .types import IdeasPayload

logger = logging.getLogger(__name__)


class IdeasPusherService:
    """One fetch, one ranking pass and one push."""

    def __init__(
        self,
        settings: Settings,
        sources: Sequence[SourceAdapter] | None = None,
        http_client: httpx.AsyncClient | None = None,
        push_client: PushClient | None = None,
    ) -> None:
        self.settings = settings
        if sources is None:
            sources = select_sources(settings.sources)
        self.http_client = http_client or httpx.AsyncClient(timeout=settings.request_timeout)
        self._owns_http_client = http_client is None
        self.fetcher = TickerFetcher(sources, self.http_client)
        self.pusher = push_client or PushClient(
            settings.push_url,
            token=settings.push_token,
            timeout=settings.request_timeout,
        )

    async def close(self) -> None:
        await self.pusher.close()
        if self._owns_http_client:
            await self.http_client.aclose()

    async def run(self) -> IdeasPayload:
        try:
            source_name, rows = await self.fetcher.fetch()
            ideas = rank_ideas(
                rows,
                min_liquidity=self.settings.min_quote_volume,
                top_n=self.settings.top_n,
                ttl_sec=self.settings.ttl_sec,
            )
            logger.info(
                "Ranked %d ideas from %d %s tickers (min_quote_volume=%.0f)",
                len(ideas),
                len(rows),
                source_name,
                self.settings.min_quote_volume,
            )
            payload = build_payload(ideas, origin=self.settings.origin)
            await self.pusher.push(payload)
        finally:
            await self.close()

        logger.info("Pushed %d ideas at %s", payload.top_n, payload.ts)
        return payload
