import asyncio

import httpx
import pytest

from ideas_pusher.errors import ConfigurationError, SourceFetchError
from ideas_pusher.sources import DEFAULT_SOURCES, select_sources, source_names, unwrap_tickers

from fakes import FakeExchange


def test_unwrap_accepts_bare_list_and_wrapped_keys() -> None:
    assert unwrap_tickers([1, 2]) == [1, 2]
    assert unwrap_tickers({"data": [1]}, ("data",)) == [1]
    assert unwrap_tickers({"result": {"list": [3]}}, ("result.list",)) == [3]
    assert unwrap_tickers({"tickers": {}, "rows": [4]}, ("tickers", "rows")) == [4]


def test_unwrap_rejects_unknown_shapes() -> None:
    with pytest.raises(SourceFetchError):
        unwrap_tickers({"data": [1]}, ("items",), source="x")
    with pytest.raises(SourceFetchError):
        unwrap_tickers("nope")


def test_registry_order_and_selection() -> None:
    assert source_names() == ("binance", "bybit", "gateio", "mexc")
    picked = select_sources(["gateio", " Binance "])
    assert [s.name for s in picked] == ["gateio", "binance"]
    with pytest.raises(ConfigurationError):
        select_sources(["kraken"])


def test_bybit_adapter_unwraps_and_scales() -> None:
    bybit = select_sources(["bybit"])[0]
    fake = FakeExchange(
        {
            "api.bybit.com": {
                "retCode": 0,
                "result": {
                    "category": "spot",
                    "list": [
                        {"symbol": "BTCUSDT", "turnover24h": "3000000000", "price24hPcnt": "0.021"},
                        {"symbol": "BTCUSDC", "turnover24h": "100", "price24hPcnt": "0.01"},
                    ],
                },
            }
        }
    )

    async def run():
        async with fake.client() as client:
            return bybit.normalize(await bybit.fetch(client))

    rows = asyncio.run(run())
    assert len(rows) == 1
    assert rows[0].symbol == "BTC"
    assert rows[0].pct_change == pytest.approx(2.1)
    assert fake.requests[0].url.params["category"] == "spot"


def test_fetch_error_carries_status_and_truncated_body() -> None:
    binance = DEFAULT_SOURCES[0]

    fake = FakeExchange({"api.binance.com": httpx.Response(451, text="x" * 1000)})

    async def run():
        async with fake.client() as client:
            await binance.fetch(client)

    with pytest.raises(SourceFetchError) as info:
        asyncio.run(run())
    assert info.value.status == 451
    assert info.value.source == "binance"
    assert len(info.value.body) <= 203
