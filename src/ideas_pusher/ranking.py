from __future__ import annotations

import math
from collections.abc import Iterable

from .types import NormalizedRow, RankedIdea

VOLUME_WEIGHT = 0.7
CHANGE_WEIGHT = 0.3
# Brings a percent move (single/double digits) to the scale of quote volumes.
CHANGE_SCALE = 1_000_000

MIN_SCORE = 60.0
MAX_SCORE = 100.0

DEFAULT_MIN_LIQUIDITY = 10_000_000.0
DEFAULT_TOP_N = 10
DEFAULT_TTL_SEC = 900


def blend_key(row: NormalizedRow) -> float:
    return row.quote_volume * VOLUME_WEIGHT + abs(row.pct_change) * CHANGE_SCALE * CHANGE_WEIGHT


def idea_score(pct_change: float) -> float:
    # Crude confidence proxy: bigger absolute moves score higher, capped at 100.
    score = MIN_SCORE + min(MAX_SCORE - MIN_SCORE, abs(pct_change))
    return max(MIN_SCORE, min(MAX_SCORE, score))


def idea_side(pct_change: float) -> str:
    return "long" if pct_change >= 0 else "short"


def is_liquid(row: NormalizedRow, min_liquidity: float) -> bool:
    return (
        math.isfinite(row.quote_volume)
        and row.quote_volume >= min_liquidity
        and math.isfinite(row.pct_change)
    )


def rank_ideas(
    rows: Iterable[NormalizedRow],
    min_liquidity: float = DEFAULT_MIN_LIQUIDITY,
    top_n: int = DEFAULT_TOP_N,
    ttl_sec: int = DEFAULT_TTL_SEC,
) -> list[RankedIdea]:
    if top_n <= 0:
        return []

    liquid = [row for row in rows if is_liquid(row, min_liquidity)]
    liquid.sort(key=blend_key, reverse=True)

    return [
        RankedIdea(
            symbol=row.symbol,
            side=idea_side(row.pct_change),
            score=idea_score(row.pct_change),
            rank=i + 1,
            ttl_sec=ttl_sec,
        )
        for i, row in enumerate(liquid[:top_n])
    ]
