from __future__ import annotations

import logging
from collections.abc import Sequence

import httpx

from .errors import AggregateFetchFailure, SourceFetchError
from .sources import SourceAdapter
from .types import NormalizedRow

logger = logging.getLogger(__name__)


class TickerFetcher:
    """Tries each source in priority order until one yields USDT tickers.

    Sources are contacted one at a time; the first non-empty normalized
    result wins and later sources are never called.
    """

    def __init__(self, sources: Sequence[SourceAdapter], client: httpx.AsyncClient) -> None:
        self.sources = list(sources)
        self._client = client

    async def get_tickers(self) -> list[NormalizedRow]:
        _, rows = await self.fetch()
        return rows

    async def fetch(self) -> tuple[str, list[NormalizedRow]]:
        failures: list[tuple[str, Exception]] = []

        for source in self.sources:
            try:
                raw = await source.fetch(self._client)
                rows = source.normalize(raw)
            except Exception as exc:
                logger.warning("Ticker source %s failed: %s", source.name, exc)
                failures.append((source.name, exc))
                continue

            if not rows:
                exc = SourceFetchError(
                    source.name, f"returned no {source.schema.quote_suffix} tickers ({len(raw)} raw)"
                )
                logger.warning("Ticker source %s yielded nothing usable", source.name)
                failures.append((source.name, exc))
                continue

            logger.info("Using ticker source %s (%d rows)", source.name, len(rows))
            return source.name, rows

        raise AggregateFetchFailure(failures)
