from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from .types import NormalizedRow


@dataclass(frozen=True)
class TickerSchema:
    """Where one exchange keeps the symbol, 24h quote volume and 24h change.

    Exchanges name the same concept differently, so each field is a tuple of
    candidate keys tried in order. ``change_scale`` converts fractional
    changes (``0.05``) into percent (``5.0``).
    """

    symbol_keys: tuple[str, ...]
    volume_keys: tuple[str, ...]
    change_keys: tuple[str, ...]
    quote_suffix: str = "USDT"
    change_scale: float = 1.0


def normalize_tickers(raw: Iterable[Any], schema: TickerSchema) -> list[NormalizedRow]:
    rows: list[NormalizedRow] = []
    for record in raw:
        row = normalize_ticker(record, schema)
        if row is not None:
            rows.append(row)
    return rows


def normalize_ticker(record: Any, schema: TickerSchema) -> NormalizedRow | None:
    if not isinstance(record, dict):
        return None

    instrument = str(_first_present(record, schema.symbol_keys) or "").strip()
    if not instrument.endswith(schema.quote_suffix):
        return None

    symbol = strip_quote_suffix(instrument, schema.quote_suffix)
    if not symbol:
        return None

    pct_change = parse_float(_first_present(record, schema.change_keys))
    return NormalizedRow(
        symbol=symbol,
        quote_volume=parse_float(_first_present(record, schema.volume_keys)),
        pct_change=pct_change * schema.change_scale,
    )


def strip_quote_suffix(instrument: str, suffix: str) -> str:
    if suffix and instrument.endswith(suffix):
        return instrument[: -len(suffix)]
    return instrument


def parse_float(value: Any) -> float:
    if value is None or isinstance(value, bool):
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _first_present(record: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = record.get(key)
        if value is not None and value != "":
            return value
    return None
