from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

import httpx

from .errors import ConfigurationError, SourceFetchError
from .normalize import TickerSchema, normalize_tickers
from .types import NormalizedRow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceAdapter:
    name: str
    url: str
    schema: TickerSchema
    params: dict[str, str] = field(default_factory=dict)
    # Keys (or dotted paths) that may wrap the ticker array in the response.
    unwrap_keys: tuple[str, ...] = ()

    async def fetch(self, client: httpx.AsyncClient) -> list[Any]:
        try:
            resp = await client.get(self.url, params=self.params or None)
        except httpx.HTTPError as exc:
            raise SourceFetchError(self.name, f"request failed: {exc!r}") from exc

        if not resp.is_success:
            raise SourceFetchError(
                self.name, "non-success response", status=resp.status_code, body=resp.text
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise SourceFetchError(
                self.name, "response is not valid JSON", status=resp.status_code, body=resp.text
            ) from exc

        return unwrap_tickers(data, self.unwrap_keys, source=self.name)

    def normalize(self, raw: Iterable[Any]) -> list[NormalizedRow]:
        return normalize_tickers(raw, self.schema)


def unwrap_tickers(data: Any, keys: Iterable[str] = (), source: str = "unknown") -> list[Any]:
    if isinstance(data, list):
        return data

    if isinstance(data, dict):
        for key in keys:
            node = _lookup(data, key)
            if isinstance(node, list):
                return node

    raise SourceFetchError(source, f"unexpected response shape ({type(data).__name__})")


def _lookup(data: dict[str, Any], path: str) -> Any:
    node: Any = data
    for part in path.split("."):
        if not isinstance(node, dict):
            return None
        node = node.get(part)
    return node


DEFAULT_SOURCES: tuple[SourceAdapter, ...] = (
    SourceAdapter(
        name="binance",
        url="https://api.binance.com/api/v3/ticker/24hr",
        schema=TickerSchema(
            symbol_keys=("symbol",),
            volume_keys=("quoteVolume",),
            change_keys=("priceChangePercent",),
        ),
    ),
    SourceAdapter(
        name="bybit",
        url="https://api.bybit.com/v5/market/tickers",
        params={"category": "spot"},
        unwrap_keys=("result.list", "list"),
        schema=TickerSchema(
            symbol_keys=("symbol",),
            volume_keys=("turnover24h", "quoteVolume"),
            change_keys=("price24hPcnt",),
            change_scale=100.0,
        ),
    ),
    SourceAdapter(
        name="gateio",
        url="https://api.gateio.ws/api/v4/spot/tickers",
        unwrap_keys=("data",),
        schema=TickerSchema(
            symbol_keys=("currency_pair",),
            volume_keys=("quote_volume",),
            change_keys=("change_percentage",),
            quote_suffix="_USDT",
        ),
    ),
    SourceAdapter(
        name="mexc",
        url="https://api.mexc.com/api/v3/ticker/24hr",
        unwrap_keys=("data",),
        schema=TickerSchema(
            symbol_keys=("symbol",),
            volume_keys=("quoteVolume",),
            change_keys=("priceChangePercent",),
            change_scale=100.0,
        ),
    ),
)


def source_names(sources: Iterable[SourceAdapter] = DEFAULT_SOURCES) -> tuple[str, ...]:
    return tuple(s.name for s in sources)


def select_sources(
    names: Iterable[str], registry: Iterable[SourceAdapter] = DEFAULT_SOURCES
) -> list[SourceAdapter]:
    by_name = {s.name: s for s in registry}
    selected: list[SourceAdapter] = []
    for name in names:
        key = name.strip().lower()
        if not key:
            continue
        if key not in by_name:
            known = ", ".join(sorted(by_name))
            raise ConfigurationError(f"Unknown ticker source {name!r} (known: {known})")
        selected.append(by_name[key])
    return selected
